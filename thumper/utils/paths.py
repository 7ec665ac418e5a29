# Thumper Path Utilities
# Remote name normalization and matching

HTML_SUFFIXES = (".html", ".htm")


def normalize_remote_root(path: str) -> str:
    """
    Normalize a remote path prefix to its slash-free form.

    "/" and "" both denote the zone root and normalize to "".

    Args:
        path: Remote path as given by the user.

    Returns:
        Path without leading or trailing slashes.
    """
    return path.strip("/")


def remote_dir(path: str) -> str:
    """
    Get the listing path for a remote directory.

    Args:
        path: Remote directory path, with or without slashes.

    Returns:
        "" for the zone root, otherwise the path with one trailing slash.
    """
    root = normalize_remote_root(path)
    return f"{root}/" if root else ""


def join_remote(prefix: str, name: str) -> str:
    """
    Join a remote prefix and a relative name.

    An empty prefix omits the joining slash.

    Args:
        prefix: Normalized remote prefix (may be empty).
        name: Relative name.

    Returns:
        Joined remote name.
    """
    if not prefix:
        return name
    return f"{prefix}/{name}"


def matches_any_prefix(name: str, prefixes: list[str] | tuple[str, ...]) -> bool:
    """
    Check if a remote name starts with any of the given prefixes.

    This is a plain string-prefix test: "assets" protects "assets/x.css"
    and "assets-old/y.css" alike.

    Args:
        name: Remote name to check.
        prefixes: Protected prefixes.

    Returns:
        True if name starts with any prefix.
    """
    return any(name.startswith(prefix) for prefix in prefixes)


def is_html(name: str) -> bool:
    """Check if a remote name looks like an HTML page."""
    return name.endswith(HTML_SUFFIXES)
