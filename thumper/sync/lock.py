# Thumper Remote Lock
# Advisory lock marker guarding a storage zone during a sync

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

from thumper.config.schema import DEFAULT_LOCKFILE
from thumper.errors import LockHeld, NetworkError, ThumperError
from thumper.output.console import Console, create_console

if TYPE_CHECKING:
    from thumper.api.client import StorageZoneClient


class LockState(str, Enum):
    """Lifecycle of a RemoteLock."""

    UNLOCKED = "unlocked"
    ACQUIRING = "acquiring"
    HELD = "held"
    RELEASED = "released"


class RemoteLock:
    """
    Advisory lock stored as a timestamp object in the zone.

    Acquisition reads the marker and then writes it; the two steps are
    not atomic, so two runs starting at the same moment can both hold
    the lock. The marker carries no owner, so any run with the access key
    can remove or overwrite it.

    Use as a context manager to release the lock on every exit path:

        with RemoteLock(client, ".thumper.lock", force=False):
            ...
    """

    def __init__(
        self,
        client: StorageZoneClient,
        lockfile: str = DEFAULT_LOCKFILE,
        *,
        force: bool = False,
        console: Console | None = None,
    ):
        """
        Initialize lock.

        Args:
            client: Storage client.
            lockfile: Zone-relative name of the lock marker.
            force: Take the lock even if a marker already exists.
            console: Console for warnings.
        """
        self.client = client
        self.lockfile = lockfile
        self.force = force
        self.console = console or create_console()
        self.locked_at: str | None = None
        self._state = LockState.UNLOCKED

    @property
    def state(self) -> LockState:
        """Current lifecycle state."""
        return self._state

    def __enter__(self) -> RemoteLock:
        return self.acquire()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def read_marker(self) -> str | None:
        """
        Read the existing lock marker.

        Returns:
            The marker's timestamp, or None if no marker could be read.
        """
        try:
            return self.client.read_file(self.lockfile).strip()
        except NetworkError:
            return None

    def acquire(self) -> RemoteLock:
        """
        Acquire the lock by writing the current time into the marker.

        Returns:
            self

        Raises:
            LockHeld: If a marker exists and force is not set. The marker
                is left untouched.
            NetworkError: If the marker cannot be written.
        """
        if self._state is not LockState.UNLOCKED:
            raise RuntimeError(f"Lock {self.lockfile} cannot be acquired in state {self._state.value}")

        self._state = LockState.ACQUIRING

        locked_since = self.read_marker()
        if locked_since is not None:
            self.console.print_warning(f"Remote is locked since {locked_since}")
            if not self.force:
                self._state = LockState.UNLOCKED
                raise LockHeld(self.lockfile, locked_since)

        timestamp = datetime.now().astimezone().isoformat()
        try:
            self.client.put_file(self.lockfile, timestamp.encode("utf-8"), "text/plain")
        except ThumperError:
            self._state = LockState.UNLOCKED
            raise

        self.locked_at = timestamp
        self._state = LockState.HELD
        return self

    def release(self) -> None:
        """
        Remove the marker.

        Failures are reported as warnings and never raised. Does nothing
        unless the lock is held.
        """
        if self._state is not LockState.HELD:
            return

        try:
            self.client.delete_file(self.lockfile)
        except ThumperError as e:
            self.console.print_warning(f"Unable to remove lockfile {self.lockfile}: {e}")

        self._state = LockState.RELEASED
