# Thumper Configuration Schema
# Pydantic models for the YAML configuration file and the sync job

import os
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from thumper.api.client import DEFAULT_ENDPOINT
from thumper.utils.paths import normalize_remote_root, remote_dir

DEFAULT_LOCKFILE = ".thumper.lock"


class OutputConfig(BaseModel):
    """Output configuration."""

    colored: bool | None = Field(default=None, description="Force colored output on or off. None = auto-detect.")


class ThumperConfig(BaseModel):
    """Root model of the configuration file: defaults for every sync."""

    endpoint: str = Field(default=DEFAULT_ENDPOINT, description="Storage API endpoint host")
    lockfile: str = Field(default=DEFAULT_LOCKFILE, description="Name of the lock marker object")
    concurrency: int | None = Field(default=None, ge=1, description="Worker threads. None = CPU count.")
    ignore: list[str] = Field(default_factory=list, description="Remote prefixes never deleted")
    verbose: bool = Field(default=False, description="Print every task outcome")
    html_barrier: bool = Field(
        default=False,
        description="Finish all non-HTML uploads before starting HTML uploads",
    )
    output: OutputConfig = Field(default_factory=OutputConfig, description="Output settings")


class SyncConfig(BaseModel):
    """Everything a single sync run needs, credentials aside."""

    local_path: str = Field(description="Local directory to mirror")
    storage_zone: str = Field(min_length=1, description="Storage zone to sync to")
    remote_path: str = Field(default="/", description="Directory inside the zone")
    endpoint: str = Field(default=DEFAULT_ENDPOINT, description="Storage API endpoint host")
    lockfile: str = Field(default=DEFAULT_LOCKFILE, description="Name of the lock marker object")
    force: bool = Field(default=False, description="Sync despite an existing lock marker")
    dry_run: bool = Field(default=False, description="Plan and resolve, but change nothing remotely")
    verbose: bool = Field(default=False, description="Print every task outcome")
    ignore: list[str] = Field(default_factory=list, description="Remote prefixes never deleted")
    concurrency: int | None = Field(default=None, ge=1, description="Worker threads. None = CPU count.")
    html_barrier: bool = Field(default=False, description="Finish non-HTML uploads before HTML uploads")

    @field_validator("local_path")
    @classmethod
    def expand_local_path(cls, v: str) -> str:
        """Expand ~ in path."""
        return str(Path(v).expanduser())

    @property
    def remote_root(self) -> str:
        """Remote prefix without slashes ("" for the zone root)."""
        return normalize_remote_root(self.remote_path)

    @property
    def remote_dir(self) -> str:
        """Listing path of the remote directory."""
        return remote_dir(self.remote_path)

    @property
    def worker_count(self) -> int:
        """Configured concurrency, or the number of CPUs."""
        return self.concurrency or os.cpu_count() or 1
