"""
Craigslist検索CLI。

    python main.py --cat bikes --max 500 --filter "road|gravel" 54cm bike
    python main.py --subregion eby --browse --filter "^broken" sofa
"""
import argparse
import asyncio
import os
import sys

import httpx

from craigs_search.fetchers import FetchPolicy, HttpxMarkupFetcher
from craigs_search.filters import FilterPatternError
from craigs_search.interfaces import ResultRenderer
from craigs_search.models import SearchOptions, SearchResults
from craigs_search.pipeline import ClassifiedsSearchPipeline, PipelineConfig
from craigs_search.query_builder import map_category
from craigs_search.render import (
    HtmlRenderer,
    JsonRenderer,
    MarkdownRenderer,
    html_data_url,
    open_in_browser,
)

from logging import getLogger, basicConfig, DEBUG, INFO, WARNING

logger = getLogger("craigs_search.main")


def _env_int(name: str, default: int) -> int:
    v = os.getenv(name)
    if v is None:
        return default
    try:
        return int(v)
    except ValueError:
        return default


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Search Craigslist listings")
    parser.add_argument(
        "--region", default=os.getenv("CRAIGS_REGION", "sfbay"), help="Region"
    )
    parser.add_argument("--subregion", default="", help="Subregion (sfa, eby, ...)")
    parser.add_argument("--cat", default="sss", help="Category (code or alias)")
    parser.add_argument(
        "--dedup",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Bundle duplicates",
    )
    parser.add_argument(
        "--pictures",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Has pictures",
    )
    parser.add_argument(
        "--sort", default="", help="Sort type (priceasc,pricedsc,date,rel)"
    )
    parser.add_argument(
        "--titles", action="store_true", help="Search in title only"
    )
    parser.add_argument("--filter", default="", help="Title filter")
    parser.add_argument("--today", action="store_true", help="Added today")
    parser.add_argument("--min", type=int, default=0, help="Min price")
    parser.add_argument("--max", type=int, default=0, help="Max price")
    parser.add_argument("--distance", type=int, default=0, help="Search distance")
    parser.add_argument("--postal", default="", help="Postal code")
    parser.add_argument(
        "--pages",
        type=int,
        default=_env_int("MAX_PAGES", 1),
        help="Follow 'next' links up to this many pages",
    )
    out = parser.add_mutually_exclusive_group()
    out.add_argument("--html", action="store_true", help="Return an HTML page")
    out.add_argument(
        "--markdown", action="store_true", help="Return a Markdown report"
    )
    out.add_argument(
        "--browse",
        action="store_true",
        help="Create HTML page and open browser",
    )
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    parser.add_argument("query", nargs="*", help="Search words")
    return parser.parse_args(argv)


def options_from_args(args: argparse.Namespace) -> SearchOptions:
    return SearchOptions(
        region=args.region,
        subregion=args.subregion or None,
        category=map_category(args.cat),
        query=" ".join(args.query),
        sort=args.sort or None,
        search_distance=args.distance,
        postal_code=args.postal,
        min_price=args.min,
        max_price=args.max,
        has_pictures=args.pictures,
        posted_today=args.today,
        bundle_duplicates=args.dedup,
        title_only=args.titles,
    )


async def search(args: argparse.Namespace) -> SearchResults:
    policy = FetchPolicy(timeout_s=float(os.getenv("FETCH_TIMEOUT_S", "20.0")))
    async with httpx.AsyncClient() as client:
        pipeline = ClassifiedsSearchPipeline(
            fetcher=HttpxMarkupFetcher(client, policy=policy),
            config=PipelineConfig(max_pages=max(args.pages, 1)),
        )
        return await pipeline.run(options_from_args(args), title_filter=args.filter)


def pick_renderer(args: argparse.Namespace) -> ResultRenderer:
    if args.browse or args.html:
        return HtmlRenderer()
    if args.markdown:
        return MarkdownRenderer()
    return JsonRenderer()


def output(args: argparse.Namespace, results: SearchResults) -> None:
    page = pick_renderer(args).render(results)
    if args.browse:
        open_in_browser(html_data_url(page))
    else:
        print(page)


def main(argv=None) -> int:
    args = parse_args(argv)

    basicConfig(
        level=WARNING, format="[%(levelname)s](%(name)s): %(message)s", force=True
    )
    getLogger("craigs_search").setLevel(DEBUG if args.verbose else INFO)

    try:
        results = asyncio.run(search(args))
        output(args, results)
    except (httpx.HTTPError, FilterPatternError, RuntimeError) as e:
        logger.debug("search failed", exc_info=True)
        print("ERROR", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
