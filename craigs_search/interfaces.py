from __future__ import annotations
from typing import Optional, Protocol, Sequence
from .models import SearchRequest, SearchResults


class MarkupFetcher(Protocol):
    async def fetch(self, request: SearchRequest) -> str: ...
    async def fetch_url(self, url: str) -> str: ...


class DocumentNode(Protocol):
    """
    抽出側が必要とする最小限のクエリ能力。
    bs4以外（テスト用のfake等）にも差し替えられるようにここで定義。
    """

    def select(self, selector: str) -> Sequence["DocumentNode"]: ...
    def select_one(self, selector: str) -> Optional["DocumentNode"]: ...
    def text(self) -> str: ...
    def attr(self, name: str) -> Optional[str]: ...


class ResultRenderer(Protocol):
    def render(self, results: SearchResults) -> str: ...
