from __future__ import annotations

import os
from typing import Optional, List

import httpx
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from craigs_search.fetchers import FetchPolicy, HttpxMarkupFetcher
from craigs_search.filters import FilterPatternError
from craigs_search.models import SearchOptions, SortType
from craigs_search.pipeline import ClassifiedsSearchPipeline, PipelineConfig
from craigs_search.query_builder import map_category

from logging import getLogger

logger = getLogger("craigs_search.server")


# -----------------------
# Request / Response
# -----------------------


class SearchRequest(BaseModel):
    query: str = Field(default="", description="Free-text query")
    region: str = Field(default="sfbay")
    subregion: Optional[str] = Field(default=None, description="sfa, eby, ...")
    category: str = Field(default="sss", description="Category code or alias")
    sort: Optional[SortType] = None
    search_distance: int = Field(default=0, ge=0)
    postal_code: str = ""
    min_price: int = Field(default=0, ge=0)
    max_price: int = Field(default=0, ge=0)

    # behavior flags
    has_pictures: bool = True
    posted_today: bool = False
    dedup: bool = Field(default=True, description="Bundle duplicates")
    title_only: bool = False

    filter: str = Field(default="", description="Title filter (^neg, a|b, a&b)")
    pages: int = Field(default=1, ge=1, le=10)


class EntryOut(BaseModel):
    title: str
    href: str
    image: str
    datetime: str
    neighborhood: str
    nearby_loc: str
    nearby_desc: str
    price: str


class SearchResponse(BaseModel):
    query: str
    entries: List[EntryOut]
    prev: str
    next: str


# -----------------------
# App + Lifespan
# -----------------------

app = FastAPI(title="craigs-search-server")

# shared singletons
_http_client: httpx.AsyncClient | None = None
_policy: FetchPolicy | None = None


@app.on_event("startup")
async def startup() -> None:
    global _http_client, _policy

    _http_client = httpx.AsyncClient()
    _policy = FetchPolicy(timeout_s=float(os.getenv("FETCH_TIMEOUT_S", "20.0")))


@app.on_event("shutdown")
async def shutdown() -> None:
    global _http_client
    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None


def to_options(req: SearchRequest) -> SearchOptions:
    return SearchOptions(
        region=req.region,
        subregion=req.subregion,
        category=map_category(req.category),
        query=req.query,
        sort=req.sort.value if req.sort else None,
        search_distance=req.search_distance,
        postal_code=req.postal_code,
        min_price=req.min_price,
        max_price=req.max_price,
        has_pictures=req.has_pictures,
        posted_today=req.posted_today,
        bundle_duplicates=req.dedup,
        title_only=req.title_only,
    )


@app.post("/search", response_model=SearchResponse)
async def search(req: SearchRequest) -> SearchResponse:
    """
    POST /search
    body: { "query": "...", "category": "bikes", "filter": "road|gravel", ... }
    """
    assert _http_client is not None
    assert _policy is not None

    # fetcherはページ送りの基準URLを持つのでリクエストごとに作る
    pipeline = ClassifiedsSearchPipeline(
        fetcher=HttpxMarkupFetcher(_http_client, policy=_policy),
        config=PipelineConfig(max_pages=req.pages),
    )

    try:
        results = await pipeline.run(to_options(req), title_filter=req.filter)
    except FilterPatternError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except httpx.HTTPError as e:
        logger.warning(f"upstream error: {e}")
        raise HTTPException(status_code=502, detail=str(e))

    return SearchResponse(
        query=results.query,
        entries=[EntryOut(**vars(e)) for e in results.entries],
        prev=results.prev,
        next=results.next,
    )
