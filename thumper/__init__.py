"""thumper - sync a local directory to a bunny.net storage zone.

Makes a path inside a storage zone an exact mirror of a local directory:
new files are uploaded, changed files replaced, and files missing locally
deleted. HTML pages are uploaded after every other asset.
"""

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "StorageZoneClient",
    "SyncJob",
    "SyncResult",
    "SyncConfig",
    "RemoteLock",
    "plan_sync",
    "scan_local_tree",
]


def __getattr__(name: str):
    """Lazy import to avoid loading dependencies during setup."""
    if name == "StorageZoneClient":
        from thumper.api.client import StorageZoneClient

        return StorageZoneClient
    if name == "SyncConfig":
        from thumper.config.schema import SyncConfig

        return SyncConfig
    if name in ("SyncJob", "SyncResult", "RemoteLock", "plan_sync", "scan_local_tree"):
        from thumper import sync

        return getattr(sync, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
