# Thumper Storage Client
# Blocking client for a bunny.net storage zone

from __future__ import annotations

from dataclasses import dataclass, field
from urllib.parse import quote

import requests
from pydantic import TypeAdapter, ValidationError

from thumper.api.models import RemoteEntry
from thumper.errors import NetworkError

DEFAULT_ENDPOINT = "storage.bunnycdn.com"
DEFAULT_CONTENT_TYPE = "application/octet-stream"

_LISTING = TypeAdapter(list[RemoteEntry])


@dataclass(frozen=True)
class StorageZoneClient:
    """
    Client for one storage zone.

    Constructed once per run and shared by every worker thread; nothing
    on it is mutated after construction. Credentials travel as a
    per-request header, never as session state.
    """

    access_key: str = field(repr=False)
    storage_zone: str
    endpoint: str = DEFAULT_ENDPOINT
    session: requests.Session = field(default_factory=requests.Session, repr=False, compare=False)

    @property
    def zone_prefix(self) -> str:
        """Prefix the API puts in front of every listed path."""
        return f"/{self.storage_zone}/"

    def url_for(self, path: str) -> str:
        """Build the object URL for a zone-relative path."""
        return f"https://{self.endpoint}/{self.storage_zone}/{quote(path.lstrip('/'), safe='/')}"

    def ls_dir(self, path: str) -> list[RemoteEntry]:
        """
        List one directory.

        Args:
            path: Zone-relative directory path ending in "/" ("" for the root).

        Returns:
            Entries for the files and directories directly inside path.

        Raises:
            NetworkError: If the request fails or the body is not a listing.
        """
        response = self._request("GET", path)
        try:
            return _LISTING.validate_python(response.json())
        except (ValueError, ValidationError) as e:
            raise NetworkError(f"Unexpected listing response for '{path}'", status=response.status_code) from e

    def read_file(self, path: str) -> str:
        """Read a file's content as text."""
        return self._request("GET", path).text

    def put_file(self, path: str, content: bytes, content_type: str | None = None) -> None:
        """
        Upload a file, replacing any existing object.

        Args:
            path: Zone-relative file path.
            content: Raw body.
            content_type: MIME type, application/octet-stream if None.
        """
        self._request(
            "PUT",
            path,
            headers={"Content-Type": content_type or DEFAULT_CONTENT_TYPE},
            data=content,
        )

    def delete_file(self, path: str) -> None:
        """Delete a file."""
        self._request("DELETE", path)

    def _request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        data: bytes | None = None,
    ) -> requests.Response:
        url = self.url_for(path)
        request_headers = {"AccessKey": self.access_key}
        if headers:
            request_headers.update(headers)

        try:
            response = self.session.request(method, url, headers=request_headers, data=data)
        except requests.RequestException as e:
            raise NetworkError(f"{method} {url} failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise NetworkError(
                f"{method} {url} returned {response.status_code} {response.reason}",
                status=response.status_code,
            )

        return response
