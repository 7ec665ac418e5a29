# Thumper Local Scanner
# Map the local tree into the remote name space

import os
from pathlib import Path

from thumper.errors import ConfigurationError, EncodingError, FilesystemError
from thumper.utils.paths import join_remote, normalize_remote_root


def _raise_walk_error(error: OSError) -> None:
    raise FilesystemError(f"Unable to scan {error.filename}: {error.strerror}") from error


def _ensure_text(relative_path: str) -> str:
    try:
        relative_path.encode("utf-8")
    except UnicodeEncodeError as e:
        raise EncodingError(f"Path is not valid UTF-8: {relative_path!r}") from e
    return relative_path


def scan_local_tree(local_root: str | Path, remote_root: str = "") -> dict[str, Path]:
    """
    Map every regular file below local_root to its remote name.

    Symbolic links are never followed or included, whether they point
    at files or directories.

    Args:
        local_root: Directory to scan.
        remote_root: Remote path prefix the tree is synced to ("" or "/"
            for the zone root).

    Returns:
        Dict of remote name ("<remote_root>/<relative path>") to local path.

    Raises:
        ConfigurationError: If local_root is not a directory.
        EncodingError: If a path cannot be represented as UTF-8 text.
        FilesystemError: If a directory cannot be read.
    """
    root = Path(local_root)
    if not root.is_dir():
        raise ConfigurationError(f"{local_root} is not a directory")

    prefix = normalize_remote_root(remote_root)
    files: dict[str, Path] = {}

    for dirpath, _dirnames, filenames in os.walk(root, onerror=_raise_walk_error, followlinks=False):
        current = Path(dirpath)
        for filename in filenames:
            path = current / filename
            if path.is_symlink() or not path.is_file():
                continue

            relative = _ensure_text(path.relative_to(root).as_posix())
            files[join_remote(prefix, relative)] = path

    return files
