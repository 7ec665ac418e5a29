# Thumper API Models
# Pydantic models for storage API responses

from pydantic import BaseModel, ConfigDict, Field


class RemoteEntry(BaseModel):
    """One entry of a storage zone directory listing."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    path: str = Field(alias="Path", description="Zone-rooted parent path, e.g. /zone/assets/")
    object_name: str = Field(alias="ObjectName", description="File or directory name")
    checksum: str | None = Field(default=None, alias="Checksum", description="Hex SHA-256 of the content")
    is_directory: bool = Field(default=False, alias="IsDirectory", description="Whether the entry is a directory")
