# Thumper Errors
# Exception hierarchy shared by the sync core and the CLI


class ThumperError(Exception):
    """Base class for all errors raised by thumper."""


class NetworkError(ThumperError):
    """
    An HTTP call failed to reach the server or returned a non-2xx status.

    Attributes:
        status: HTTP status code, or None if no response was received.
    """

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class FilesystemError(ThumperError):
    """Reading or scanning the local tree failed."""


class EncodingError(ThumperError):
    """A path is not representable as text or a checksum is malformed."""


class ConfigurationError(ThumperError):
    """Missing credential, invalid option or unusable local root."""


class LockHeld(ThumperError):
    """The remote lock marker exists and force was not requested."""

    def __init__(self, lockfile: str, locked_since: str):
        super().__init__(f"Dangling lock in {lockfile} prevents sync (locked since {locked_since})")
        self.lockfile = lockfile
        self.locked_since = locked_since


def format_error_chain(error: BaseException) -> list[str]:
    """
    Render an exception and its causes as human-readable lines.

    Args:
        error: The outermost exception.

    Returns:
        One line per exception, outermost first.
    """
    lines: list[str] = []
    seen: set[int] = set()
    current: BaseException | None = error

    while current is not None and id(current) not in seen:
        seen.add(id(current))
        message = str(current) or type(current).__name__
        lines.append(message)
        current = current.__cause__ or current.__context__

    return lines
