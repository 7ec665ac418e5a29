# Thumper Test Fixtures
# Pytest fixtures for thumper tests

import hashlib
import tempfile
import threading
from collections.abc import Generator
from io import StringIO
from pathlib import Path

import pytest

from thumper.api.models import RemoteEntry
from thumper.errors import NetworkError
from thumper.output.console import Console


class FakeStorageZone:
    """
    In-memory storage zone speaking the StorageZoneClient interface.

    Objects are keyed by zone-relative name. Listings report directories
    and files the way the storage API does, with upper-case hex checksums.
    """

    def __init__(self, storage_zone: str = "zone", objects: dict[str, bytes] | None = None):
        self.storage_zone = storage_zone
        self.objects: dict[str, bytes] = dict(objects or {})
        self.missing_checksums: set[str] = set()
        self.fail_on: set[tuple[str, str]] = set()
        self.puts: list[tuple[str, bytes, str | None]] = []
        self.deletes: list[str] = []
        self.listed: list[str] = []
        self._lock = threading.Lock()

    def _check(self, method: str, path: str) -> None:
        if (method, path) in self.fail_on:
            raise NetworkError(f"{method} {path} returned 500 Internal Server Error", status=500)

    def ls_dir(self, path: str) -> list[RemoteEntry]:
        with self._lock:
            self.listed.append(path)
        self._check("GET", path)

        prefix = path.strip("/")
        prefix = f"{prefix}/" if prefix else ""
        parent = f"/{self.storage_zone}/{prefix}"

        entries: dict[str, RemoteEntry] = {}
        with self._lock:
            items = list(self.objects.items())

        for name, content in items:
            if not name.startswith(prefix):
                continue
            rest = name[len(prefix) :]
            head, sep, _tail = rest.partition("/")
            if sep:
                entries[head] = RemoteEntry(Path=parent, ObjectName=head, IsDirectory=True)
            else:
                checksum = None if name in self.missing_checksums else hashlib.sha256(content).hexdigest().upper()
                entries[head] = RemoteEntry(Path=parent, ObjectName=head, Checksum=checksum)

        return list(entries.values())

    def read_file(self, path: str) -> str:
        self._check("GET", path)
        with self._lock:
            if path not in self.objects:
                raise NetworkError(f"GET {path} returned 404 Not Found", status=404)
            return self.objects[path].decode("utf-8")

    def put_file(self, path: str, content: bytes, content_type: str | None = None) -> None:
        self._check("PUT", path)
        with self._lock:
            self.puts.append((path, content, content_type))
            self.objects[path] = content

    def delete_file(self, path: str) -> None:
        self._check("DELETE", path)
        with self._lock:
            self.deletes.append(path)
            if path not in self.objects:
                raise NetworkError(f"DELETE {path} returned 404 Not Found", status=404)
            del self.objects[path]


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_home(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a temporary home directory."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("THUMPER_CONFIG", raising=False)
    monkeypatch.delenv("THUMPER_API_KEY", raising=False)
    return home


@pytest.fixture
def site_dir(temp_dir: Path) -> Path:
    """Create a small static site."""
    site = temp_dir / "site"
    (site / "css").mkdir(parents=True)
    (site / "index.html").write_text("<html>home</html>", encoding="utf-8")
    (site / "about.html").write_text("<html>about</html>", encoding="utf-8")
    (site / "css" / "style.css").write_text("body { color: red; }", encoding="utf-8")
    return site


@pytest.fixture
def zone() -> FakeStorageZone:
    """Create an empty in-memory storage zone."""
    return FakeStorageZone()


@pytest.fixture
def console() -> Console:
    """Create a console writing to a buffer."""
    return Console(colored=False, file=StringIO())
