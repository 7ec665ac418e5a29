# Thumper Sync Plan
# Diff the local and remote maps into an ordered task list

from dataclasses import dataclass
from pathlib import Path

from thumper.utils.paths import is_html, matches_any_prefix


@dataclass(frozen=True)
class PutTask:
    """Upload a file that does not exist remotely."""

    local: Path
    remote: str


@dataclass(frozen=True)
class ReplaceTask:
    """Upload a file that exists remotely, unless its checksum matches."""

    local: Path
    remote: str
    remote_checksum: bytes | None = None


@dataclass(frozen=True)
class DeleteTask:
    """Remove a remote file that no longer exists locally."""

    remote: str


PlannedTask = PutTask | ReplaceTask | DeleteTask


def upload_order(remote: str) -> tuple[bool, str]:
    """Sort key placing HTML pages after every other file."""
    return (is_html(remote), remote)


def must_remove(
    local: dict[str, Path],
    remote: dict[str, bytes | None],
    ignore: list[str] | tuple[str, ...],
) -> set[str]:
    """
    Find remote files to delete.

    Args:
        local: Remote name to local path.
        remote: Remote name to checksum.
        ignore: Protected prefixes; matching remote files are kept.

    Returns:
        Remote names absent locally and not protected.
    """
    return {name for name in remote if name not in local and not matches_any_prefix(name, ignore)}


def plan_sync(
    local: dict[str, Path],
    remote: dict[str, bytes | None],
    ignore: list[str] | tuple[str, ...] = (),
) -> list[PlannedTask]:
    """
    Plan the tasks that make remote mirror local.

    Uploads come first, with non-HTML files before HTML pages so that
    assets are submitted before the pages referencing them. Deletes
    follow all uploads.

    Args:
        local: Remote name to local path.
        remote: Remote name to checksum (None if unknown).
        ignore: Protected prefixes never planned for deletion.

    Returns:
        Ordered list of tasks, one per name.
    """
    tasks: list[PlannedTask] = []

    for name in sorted(local, key=upload_order):
        if name in remote:
            tasks.append(ReplaceTask(local=local[name], remote=name, remote_checksum=remote[name]))
        else:
            tasks.append(PutTask(local=local[name], remote=name))

    # Delete order carries no meaning; sorted for stable output
    tasks.extend(DeleteTask(remote=name) for name in sorted(must_remove(local, remote, ignore)))

    return tasks
