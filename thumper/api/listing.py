# Thumper Remote Listing
# Concurrent enumeration of a storage zone subtree

from __future__ import annotations

from typing import Protocol

from thumper.api.models import RemoteEntry
from thumper.utils.hashing import decode_checksum
from thumper.utils.paths import join_remote, matches_any_prefix
from thumper.utils.workers import WorkerPool


class DirectoryLister(Protocol):
    """Anything that can list one directory of a storage zone."""

    storage_zone: str

    def ls_dir(self, path: str) -> list[RemoteEntry]: ...


def _parent_path(entry: RemoteEntry, zone_prefix: str) -> str:
    return entry.path.removeprefix(zone_prefix).strip("/")


def subtree_path(entry: RemoteEntry, zone_prefix: str) -> str:
    """
    Get the listing path for a directory entry.

    Args:
        entry: Directory entry from a listing.
        zone_prefix: "/{zone}/" prefix to strip from entry.path.

    Returns:
        Zone-relative path with a trailing slash and no leading slash,
        e.g. "assets/img/".
    """
    return join_remote(_parent_path(entry, zone_prefix), entry.object_name) + "/"


def remote_name(entry: RemoteEntry, zone_prefix: str) -> str:
    """Get the zone-relative name of a file entry."""
    return join_remote(_parent_path(entry, zone_prefix), entry.object_name)


def discover_files(
    client: DirectoryLister,
    path: str,
    skip: list[str] | tuple[str, ...],
    concurrency: int,
) -> list[RemoteEntry]:
    """
    Enumerate every file below path, listing directories concurrently.

    The coordinator keeps a count of directories that were submitted but
    whose listing has not been processed yet. Enumeration is complete
    exactly when that count drops to zero.

    Args:
        client: Storage client used by the workers.
        path: Zone-relative directory to start from ("" for the root).
        skip: Prefixes of subtrees that are not listed at all.
        concurrency: Number of listing requests in flight at most.

    Returns:
        File entries, in no particular order.

    Raises:
        NetworkError: The first listing failure; remaining listings are abandoned.
    """
    zone_prefix = f"/{client.storage_zone}/"
    files: list[RemoteEntry] = []

    with WorkerPool(client.ls_dir, concurrency, name="thumper-ls") as pool:
        pool.submit(path)
        outstanding = 1

        while outstanding > 0:
            entries = pool.next_result()
            outstanding -= 1

            for entry in entries:
                if not entry.is_directory:
                    files.append(entry)
                    continue

                subtree = subtree_path(entry, zone_prefix)
                if matches_any_prefix(subtree, skip):
                    continue

                outstanding += 1
                pool.submit(subtree)

    return files


def list_files(
    client: DirectoryLister,
    path: str,
    skip: list[str] | tuple[str, ...],
    concurrency: int,
) -> dict[str, bytes | None]:
    """
    Build the remote map for a subtree.

    Args:
        client: Storage client.
        path: Zone-relative directory to start from.
        skip: Prefixes of subtrees that are not listed.
        concurrency: Number of listing requests in flight at most.

    Returns:
        Dict of zone-relative file name to raw SHA-256 checksum (None if
        the store reported none).

    Raises:
        NetworkError: If any listing fails.
        EncodingError: If a reported checksum is malformed.
    """
    zone_prefix = f"/{client.storage_zone}/"
    files = discover_files(client, path, skip, concurrency)

    return {remote_name(entry, zone_prefix): decode_checksum(entry.checksum) for entry in files}
