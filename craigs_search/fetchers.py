from __future__ import annotations
import urllib.parse
from dataclasses import dataclass, field

import httpx

from .interfaces import MarkupFetcher
from .models import SearchRequest

from logging import getLogger

logger = getLogger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/91.0.4472.124",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "Accept-Encoding": "gzip, deflate, br",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
}


@dataclass(frozen=True)
class FetchPolicy:
    timeout_s: float = 20.0
    headers: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_HEADERS))


class HttpxMarkupFetcher(MarkupFetcher):
    """
    検索ページのHTMLを取ってくるだけ。リトライはしない。
    200系以外は raise_for_status でそのまま例外にする。
    """

    def __init__(
        self, client: httpx.AsyncClient, policy: FetchPolicy = FetchPolicy()
    ) -> None:
        self._client = client
        self._policy = policy
        # ページ送りの相対リンクを解決するための基準
        self._last_url: str | None = None

    async def _get(self, url: str, params: dict | None = None) -> str:
        r = await self._client.get(
            url,
            params=params,
            follow_redirects=True,
            timeout=self._policy.timeout_s,
            headers=self._policy.headers,
        )
        r.raise_for_status()
        self._last_url = str(r.url)
        logger.debug(f"fetched {r.url} ({r.status_code}, {len(r.text)} chars)")
        return r.text

    async def fetch(self, request: SearchRequest) -> str:
        return await self._get(request.url, params=request.params)

    async def fetch_url(self, url: str) -> str:
        if self._last_url:
            url = urllib.parse.urljoin(self._last_url, url)
        return await self._get(url)
