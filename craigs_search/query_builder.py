from __future__ import annotations
from typing import Optional

from .models import Category, ParamValue, Region, SearchOptions, SearchRequest

SEARCH_URI = "https://{region}.craigslist.org/search/"

# CLIで使う短い名前 -> カテゴリコード
CATEGORY_ALIASES = {
    "all": Category.FOR_SALE,
    "bikes": Category.BIKES,
    "boats": Category.BOATS,
    "cars": Category.CARS,
    "phones": Category.CELLPHONES,
    "computers": Category.COMPUTERS,
    "electronics": Category.ELECTRONICS,
    "free": Category.FREE,
    "music": Category.MUSIC,
    "rvs": Category.RVS,
    "sports": Category.SPORTING,
    "tools": Category.TOOLS,
}


def map_category(name: str) -> str:
    c = CATEGORY_ALIASES.get(name)
    if c is not None:
        return c.value
    # 知らない名前はコードとしてそのまま使う
    return name


def _str_value(v: Optional[str]) -> str:
    if v is None:
        return ""
    # str Enumでも素の文字列でも同じ扱い
    return getattr(v, "value", v)


def query_label(options: SearchOptions) -> str:
    return options.query or "Results"


def build_params(options: SearchOptions) -> dict[str, ParamValue]:
    """
    - 空文字/0/False は送らない（"0"を送るのではなく省略）
    - region/subregion/category は URL側で使うのでここには入れない
    """
    params: dict[str, ParamValue] = {}

    if options.query:
        params["query"] = options.query
    sort = _str_value(options.sort)
    if sort:
        params["sort"] = sort
    if options.search_distance > 0:
        params["search_distance"] = options.search_distance
    if options.postal_code:
        params["postal_code"] = options.postal_code
    if options.min_price > 0:
        params["min_price"] = options.min_price
    if options.max_price > 0:
        params["max_price"] = options.max_price

    # フラグは 1 / "T" で表現
    if options.has_pictures:
        params["hasPic"] = 1
    if options.posted_today:
        params["postedToday"] = 1
    if options.bundle_duplicates:
        params["bundleDuplicates"] = 1
    if options.title_only:
        params["srchType"] = "T"

    return params


def build_path(options: SearchOptions) -> str:
    path = ""
    subregion = _str_value(options.subregion)
    if subregion:
        path = subregion + "/"
    category = _str_value(options.category)
    path += category or Category.FOR_SALE.value
    return path


def build_request(options: SearchOptions) -> SearchRequest:
    region = _str_value(options.region) or Region.SFBAY.value
    return SearchRequest(
        base_url=SEARCH_URI.format(region=region),
        path=build_path(options),
        params=build_params(options),
    )
