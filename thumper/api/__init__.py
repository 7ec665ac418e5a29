# Thumper API Module
# Storage zone client, concurrent listing and cache purge calls

from thumper.api.client import DEFAULT_CONTENT_TYPE, DEFAULT_ENDPOINT, StorageZoneClient
from thumper.api.listing import discover_files, list_files
from thumper.api.models import RemoteEntry
from thumper.api.purge import purge_url, purge_zone

__all__ = [
    # Client
    "StorageZoneClient",
    "RemoteEntry",
    "DEFAULT_ENDPOINT",
    "DEFAULT_CONTENT_TYPE",
    # Listing
    "discover_files",
    "list_files",
    # Purge
    "purge_url",
    "purge_zone",
]
