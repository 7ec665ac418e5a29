# Thumper Sync Engine
# Execute planned tasks on a worker pool and run complete sync jobs

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from functools import partial

from thumper.api.client import StorageZoneClient
from thumper.api.listing import list_files
from thumper.config.schema import DEFAULT_LOCKFILE, SyncConfig
from thumper.output.console import Console, create_console
from thumper.sync.lock import RemoteLock
from thumper.sync.plan import DeleteTask, PlannedTask, plan_sync
from thumper.sync.scanner import scan_local_tree
from thumper.sync.task import (
    OutcomeType,
    Reader,
    Remove,
    TaskOutcome,
    Upload,
    outcome_type,
    read_local_file,
    resolve_task,
)
from thumper.utils.paths import is_html
from thumper.utils.workers import WorkerPool


@dataclass
class SyncResult:
    """Result of executing a task list."""

    planned: int = 0
    dry_run: bool = False
    uploaded_paths: list[str] = field(default_factory=list)
    unchanged_paths: list[str] = field(default_factory=list)
    deleted_paths: list[str] = field(default_factory=list)

    def record(self, outcome: TaskOutcome) -> None:
        """Add one task outcome."""
        if outcome.event == OutcomeType.PUT:
            self.uploaded_paths.append(outcome.remote)
        elif outcome.event == OutcomeType.UNCHANGED:
            self.unchanged_paths.append(outcome.remote)
        else:
            self.deleted_paths.append(outcome.remote)

    @property
    def completed(self) -> int:
        """Number of tasks that reported an outcome."""
        return len(self.uploaded_paths) + len(self.unchanged_paths) + len(self.deleted_paths)

    @property
    def changed(self) -> int:
        """Number of remote files written or deleted."""
        return len(self.uploaded_paths) + len(self.deleted_paths)


def apply_task(
    client: StorageZoneClient,
    task: PlannedTask,
    *,
    dry_run: bool = False,
    lockfile: str = DEFAULT_LOCKFILE,
    read: Reader = read_local_file,
) -> TaskOutcome:
    """
    Resolve a task and perform the resulting remote call.

    The lock marker is never deleted, even when planned for deletion.

    Args:
        client: Storage client.
        task: Planned task.
        dry_run: Resolve only; make no remote calls.
        lockfile: Name of the active lock marker.
        read: Callable returning the bytes of a local file.

    Returns:
        Outcome for the task, the same with or without dry_run.
    """
    action = resolve_task(task, read)

    if not dry_run:
        if isinstance(action, Upload):
            client.put_file(task.remote, action.content, action.mime_type)
        elif isinstance(action, Remove) and task.remote != lockfile:
            client.delete_file(task.remote)

    return TaskOutcome(remote=task.remote, event=outcome_type(action))


def html_barrier_phases(tasks: list[PlannedTask]) -> list[list[PlannedTask]]:
    """
    Split tasks into non-HTML uploads and everything else.

    Args:
        tasks: Planned tasks.

    Returns:
        [asset uploads, HTML uploads and deletes]; each keeps the planned order.
    """
    assets: list[PlannedTask] = []
    rest: list[PlannedTask] = []
    for task in tasks:
        if isinstance(task, DeleteTask) or is_html(task.remote):
            rest.append(task)
        else:
            assets.append(task)
    return [assets, rest]


def execute_tasks(
    client: StorageZoneClient,
    tasks: list[PlannedTask],
    *,
    concurrency: int,
    dry_run: bool = False,
    lockfile: str = DEFAULT_LOCKFILE,
    read: Reader = read_local_file,
    on_outcome: Callable[[TaskOutcome], None] | None = None,
    html_barrier: bool = False,
) -> SyncResult:
    """
    Execute planned tasks on a worker pool.

    Tasks are submitted in planned order, but with more than one worker
    they can complete in any order. With html_barrier, every non-HTML
    upload finishes before the first HTML upload is submitted.

    Args:
        client: Storage client shared by all workers.
        tasks: Planned tasks.
        concurrency: Number of worker threads.
        dry_run: Resolve only; make no remote calls.
        lockfile: Name of the active lock marker, never deleted.
        read: Callable returning the bytes of a local file.
        on_outcome: Called by the coordinator for every completed task.
        html_barrier: Wait for asset uploads before HTML uploads.

    Returns:
        SyncResult with every outcome.

    Raises:
        ThumperError: The first task failure. Tasks already applied stay
            applied; queued tasks are not started.
    """
    result = SyncResult(planned=len(tasks), dry_run=dry_run)
    phases = html_barrier_phases(tasks) if html_barrier else [list(tasks)]
    handler = partial(apply_task, client, dry_run=dry_run, lockfile=lockfile, read=read)

    for phase in phases:
        if not phase:
            continue

        with WorkerPool(handler, concurrency, name="thumper-sync") as pool:
            for task in phase:
                pool.submit(task)

            for _ in range(len(phase)):
                outcome = pool.next_result()
                result.record(outcome)
                if on_outcome is not None:
                    on_outcome(outcome)

    return result


class SyncJob:
    """
    One complete sync of a local directory to a storage zone path.

    Holds the lock (unless dry-running) while scanning, listing,
    planning and executing.
    """

    def __init__(self, client: StorageZoneClient, config: SyncConfig, console: Console | None = None):
        """
        Initialize sync job.

        Args:
            client: Storage client for config.storage_zone.
            config: Job configuration.
            console: Console for warnings and per-task output.
        """
        self.client = client
        self.config = config
        self.console = console or create_console()

    @classmethod
    def from_config(cls, api_key: str, config: SyncConfig, console: Console | None = None) -> SyncJob:
        """Create a job with a new storage client."""
        client = StorageZoneClient(
            access_key=api_key,
            storage_zone=config.storage_zone,
            endpoint=config.endpoint,
        )
        return cls(client, config, console)

    def plan(self) -> list[PlannedTask]:
        """
        Scan both trees and plan the sync.

        Returns:
            Ordered task list.

        Raises:
            ConfigurationError: If the local path is not a directory.
            NetworkError: If listing the remote tree fails.
        """
        local = scan_local_tree(self.config.local_path, self.config.remote_root)
        remote = list_files(self.client, self.config.remote_dir, self.config.ignore, self.config.worker_count)
        # Our own lock marker shows up when syncing to the zone root
        remote.pop(self.config.lockfile, None)
        return plan_sync(local, remote, self.config.ignore)

    def execute(self) -> SyncResult:
        """
        Run the sync.

        Returns:
            SyncResult with every outcome.

        Raises:
            LockHeld: If another sync appears to be running.
            ThumperError: On the first failure.
        """
        if self.config.dry_run:
            return self._run()

        with RemoteLock(self.client, self.config.lockfile, force=self.config.force, console=self.console):
            return self._run()

    def _run(self) -> SyncResult:
        tasks = self.plan()
        return execute_tasks(
            self.client,
            tasks,
            concurrency=self.config.worker_count,
            dry_run=self.config.dry_run,
            lockfile=self.config.lockfile,
            on_outcome=self._report,
            html_barrier=self.config.html_barrier,
        )

    def _report(self, outcome: TaskOutcome) -> None:
        if self.config.verbose or self.config.dry_run:
            self.console.print_outcome(outcome)
