"""Single-shot GET with the scanner's fixed browser identity."""

from typing import Dict, Mapping, Optional

import httpx

from checkoutscan.core.config import PAGE_HEADERS
from checkoutscan.core.errors import FetchError


def build_headers(overrides: Optional[Mapping[str, Optional[str]]] = None) -> Dict[str, str]:
    """
    Identity headers with *overrides* merged on top.

    Keys are compared case-insensitively. An override with an empty
    value is skipped so callers cannot blank out the identity.
    """
    headers = dict(PAGE_HEADERS)
    for k, v in (overrides or {}).items():
        if v is None or not str(v).strip():
            continue
        headers[k.lower()] = str(v)
    return headers


async def fetch(client: httpx.AsyncClient, url: str,
                overrides: Optional[Mapping[str, Optional[str]]] = None) -> httpx.Response:
    """GET *url* once. Raises FetchError on transport errors, unusable URLs or non-2xx."""
    try:
        resp = await client.get(url, headers=build_headers(overrides),
                                follow_redirects=True)
    except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
        # ValueError covers IDNA failures on hosts like xn--a.example
        raise FetchError(url, None, str(exc) or f"Failed to fetch {url}") from exc
    if not 200 <= resp.status_code < 300:
        raise FetchError(url, resp.status_code)
    return resp


async def fetch_text(client: httpx.AsyncClient, url: str,
                     overrides: Optional[Mapping[str, Optional[str]]] = None) -> str:
    resp = await fetch(client, url, overrides)
    return resp.text
