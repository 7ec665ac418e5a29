# Thumper Cache Purge
# Single-call edge cache maintenance endpoints

import requests

from thumper.errors import NetworkError

API_BASE = "https://api.bunny.net"


def _post(
    url: str,
    api_key: str,
    *,
    params: dict[str, str] | None = None,
    data: dict[str, str] | None = None,
    session: requests.Session | None = None,
) -> None:
    if session is None:
        with requests.Session() as own_session:
            return _post(url, api_key, params=params, data=data, session=own_session)

    try:
        response = session.post(url, params=params, data=data, headers={"AccessKey": api_key})
    except requests.RequestException as e:
        raise NetworkError(f"POST {url} failed: {e}") from e

    if not 200 <= response.status_code < 300:
        raise NetworkError(
            f"POST {url} returned {response.status_code} {response.reason}",
            status=response.status_code,
        )


def purge_url(api_key: str, url: str, *, session: requests.Session | None = None) -> None:
    """
    Purge a single URL from the edge cache.

    Args:
        api_key: Account API key.
        url: URL to purge; a trailing * purges everything below it.
        session: Optional requests session.

    Raises:
        NetworkError: If the call fails.
    """
    _post(f"{API_BASE}/purge", api_key, params={"url": url}, session=session)


def purge_zone(
    api_key: str,
    pullzone: int,
    cache_tag: str | None = None,
    *,
    session: requests.Session | None = None,
) -> None:
    """
    Purge an entire pull zone, or only objects carrying a cache tag.

    Args:
        api_key: Account API key.
        pullzone: Numeric pull zone ID.
        cache_tag: Optional cache tag to restrict the purge to.
        session: Optional requests session.

    Raises:
        NetworkError: If the call fails.
    """
    data = {"CacheTag": cache_tag} if cache_tag else None
    _post(f"{API_BASE}/pullzone/{pullzone}/purgeCache", api_key, data=data, session=session)
