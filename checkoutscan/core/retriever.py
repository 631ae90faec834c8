"""Concurrent retrieval of external scripts."""

import asyncio
from typing import List, Optional, Sequence

import httpx

from checkoutscan.core.config import MAX_SCRIPTS, SCRIPT_ACCEPT
from checkoutscan.core.errors import FetchError
from checkoutscan.core.fetcher import fetch
from checkoutscan.core.models import ScriptFetchResult


def _declared_size(resp: httpx.Response) -> Optional[int]:
    raw = resp.headers.get("content-length")
    if raw is None:
        return None
    try:
        size = int(raw.strip())
    except ValueError:
        return None
    return size if size >= 0 else None


async def retrieve_script(client: httpx.AsyncClient, url: str,
                          referer: str) -> ScriptFetchResult:
    """GET one script. Never raises; failures land in ``error``."""
    try:
        resp = await fetch(client, url, {"accept": SCRIPT_ACCEPT,
                                         "referer": referer})
    except FetchError as exc:
        msg = f"Fetch {exc.status}" if exc.status is not None else (exc.message or "fetch error")
        return ScriptFetchResult(url=url, error=msg)
    text = resp.text
    size = _declared_size(resp)
    if size is None:
        size = len(resp.content)
    return ScriptFetchResult(url=url, content=text, size=size)


async def retrieve_all(client: httpx.AsyncClient, urls: Sequence[str],
                       referer: str, limit: int = MAX_SCRIPTS,
                       logger=None) -> List[ScriptFetchResult]:
    """
    Retrieve the first *limit* scripts concurrently.

    URLs past the limit are dropped without a request. Results follow
    input order, not completion order.
    """
    targets = list(urls)[:limit]
    if logger and len(urls) > limit:
        logger.debug(f"Script cap reached: {len(urls) - limit} scripts skipped")
    if not targets:
        return []

    sem = asyncio.Semaphore(limit)

    async def _one(u: str) -> ScriptFetchResult:
        async with sem:
            if logger:
                logger.debug(f"→ GET {u}")
            return await retrieve_script(client, u, referer)

    return list(await asyncio.gather(*(_one(u) for u in targets)))
