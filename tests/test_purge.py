# Tests for thumper.api.purge
# Edge cache purge calls

from unittest.mock import MagicMock, patch

import pytest

from thumper.api.purge import API_BASE, purge_url, purge_zone
from thumper.errors import NetworkError


def _session(status: int = 204) -> MagicMock:
    session = MagicMock()
    session.post.return_value.status_code = status
    session.post.return_value.reason = "Unauthorized" if status == 401 else "No Content"
    return session


class TestPurgeUrl:
    """Tests for purge_url."""

    def test_request(self):
        session = _session()
        purge_url("key", "https://cdn.example.com/*", session=session)

        session.post.assert_called_once_with(
            f"{API_BASE}/purge",
            params={"url": "https://cdn.example.com/*"},
            data=None,
            headers={"AccessKey": "key"},
        )

    def test_failure(self):
        with pytest.raises(NetworkError) as exc_info:
            purge_url("bad", "https://cdn.example.com/", session=_session(401))
        assert exc_info.value.status == 401

    @patch("thumper.api.purge.requests.Session")
    def test_own_session_closed(self, mock_session_cls):
        session = mock_session_cls.return_value.__enter__.return_value
        session.post.return_value.status_code = 204

        purge_url("key", "https://cdn.example.com/")

        session.post.assert_called_once()
        mock_session_cls.return_value.__exit__.assert_called_once()


class TestPurgeZone:
    """Tests for purge_zone."""

    def test_whole_zone(self):
        session = _session()
        purge_zone("key", 42, session=session)

        args, kwargs = session.post.call_args
        assert args == (f"{API_BASE}/pullzone/42/purgeCache",)
        assert kwargs["data"] is None

    def test_cache_tag(self):
        session = _session()
        purge_zone("key", 42, "blog", session=session)

        _, kwargs = session.post.call_args
        assert kwargs["data"] == {"CacheTag": "blog"}
