# Thumper Utilities Module
# Path normalization, content hashing and the worker pool

from thumper.utils.hashing import content_digest, decode_checksum
from thumper.utils.paths import (
    is_html,
    join_remote,
    matches_any_prefix,
    normalize_remote_root,
    remote_dir,
)
from thumper.utils.workers import WorkerPool

__all__ = [
    # Paths
    "normalize_remote_root",
    "remote_dir",
    "join_remote",
    "matches_any_prefix",
    "is_html",
    # Hashing
    "content_digest",
    "decode_checksum",
    # Workers
    "WorkerPool",
]
