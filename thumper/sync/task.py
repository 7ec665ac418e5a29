# Thumper Sync Tasks
# Resolve planned tasks into concrete remote actions

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import magic

from thumper.errors import FilesystemError
from thumper.sync.plan import DeleteTask, PlannedTask, PutTask, ReplaceTask
from thumper.utils.hashing import content_digest

Reader = Callable[[Path], bytes]


class OutcomeType(str, Enum):
    """What happened (or would happen) to a remote file."""

    PUT = "put"
    UNCHANGED = "unchanged"
    DELETE = "delete"


@dataclass(frozen=True)
class Upload:
    """Write content to the remote file."""

    content: bytes
    mime_type: str | None = None


@dataclass(frozen=True)
class Skip:
    """Remote content already matches."""


@dataclass(frozen=True)
class Remove:
    """Delete the remote file."""


ResolvedAction = Upload | Skip | Remove


@dataclass(frozen=True)
class TaskOutcome:
    """Per-task result reported by the execution engine."""

    remote: str
    event: OutcomeType


def read_local_file(path: Path) -> bytes:
    """Read a local file's bytes."""
    return path.read_bytes()


# libmagic answers for content it cannot classify
_UNKNOWN_MIME_TYPES = frozenset({"application/octet-stream", "application/x-empty", "inode/x-empty"})


def sniff_mime_type(content: bytes) -> str | None:
    """
    Infer a MIME type from file content with libmagic.

    Markup (HTML, XML, SVG) is recognized from its text as well as binary
    formats from their magic numbers. Other text comes back as text/plain.

    Args:
        content: File content.

    Returns:
        MIME type, or None if not recognized.
    """
    mime_type = magic.from_buffer(content, mime=True)
    return None if mime_type in _UNKNOWN_MIME_TYPES else mime_type


def _read(read: Reader, path: Path) -> bytes:
    try:
        return read(path)
    except OSError as e:
        raise FilesystemError(f"Unable to read {path}") from e


def resolve_task(task: PlannedTask, read: Reader = read_local_file) -> ResolvedAction:
    """
    Resolve a planned task into the action to perform.

    A replace task whose remote checksum is unknown is always uploaded.

    Args:
        task: Planned task.
        read: Callable returning the bytes of a local file.

    Returns:
        Upload, Skip or Remove.

    Raises:
        FilesystemError: If the local file cannot be read.
    """
    if isinstance(task, PutTask):
        content = _read(read, task.local)
        return Upload(content=content, mime_type=sniff_mime_type(content))

    if isinstance(task, ReplaceTask):
        content = _read(read, task.local)
        if task.remote_checksum is not None and content_digest(content) == task.remote_checksum:
            return Skip()
        return Upload(content=content, mime_type=sniff_mime_type(content))

    if isinstance(task, DeleteTask):
        return Remove()

    raise TypeError(f"Unknown task type: {type(task).__name__}")


def outcome_type(action: ResolvedAction) -> OutcomeType:
    """Get the reported outcome for a resolved action."""
    if isinstance(action, Upload):
        return OutcomeType.PUT
    if isinstance(action, Skip):
        return OutcomeType.UNCHANGED
    return OutcomeType.DELETE
