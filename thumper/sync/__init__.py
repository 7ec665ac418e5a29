# Thumper Sync Module
# Scanning, planning, task resolution, locking and execution

from thumper.sync.engine import SyncJob, SyncResult, apply_task, execute_tasks
from thumper.sync.lock import LockState, RemoteLock
from thumper.sync.plan import DeleteTask, PlannedTask, PutTask, ReplaceTask, must_remove, plan_sync
from thumper.sync.scanner import scan_local_tree
from thumper.sync.task import (
    OutcomeType,
    Remove,
    ResolvedAction,
    Skip,
    TaskOutcome,
    Upload,
    resolve_task,
)

__all__ = [
    # Scanner
    "scan_local_tree",
    # Plan
    "PutTask",
    "ReplaceTask",
    "DeleteTask",
    "PlannedTask",
    "plan_sync",
    "must_remove",
    # Tasks
    "Upload",
    "Skip",
    "Remove",
    "ResolvedAction",
    "OutcomeType",
    "TaskOutcome",
    "resolve_task",
    # Lock
    "LockState",
    "RemoteLock",
    # Engine
    "SyncJob",
    "SyncResult",
    "apply_task",
    "execute_tasks",
]
