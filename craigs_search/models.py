from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Union


class Region(str, Enum):
    SFBAY = "sfbay"


class SubRegion(str, Enum):
    SAN_FRANCISCO = "sfa"
    SOUTH_BAY = "sby"
    EAST_BAY = "eby"
    NORTH_BAY = "nby"
    PENINSULA = "pen"
    SANTA_CRUZ = "scz"


class SortType(str, Enum):
    PRICE_ASC = "priceasc"
    PRICE_DESC = "pricedsc"
    DATE = "date"
    RELEVANCE = "rel"


class Category(str, Enum):
    FOR_SALE = "sss"
    BIKES = "bia"
    BOATS = "boo"
    CARS = "cta"
    CELLPHONES = "moa"
    COMPUTERS = "sya"
    ELECTRONICS = "ela"
    FREE = "zip"
    MUSIC = "msa"
    RVS = "rva"
    SPORTING = "sga"
    TOOLS = "tla"


class MatchMode(str, Enum):
    ANY = "any"
    ALL = "all"


ParamValue = Union[str, int]


@dataclass(frozen=True)
class SearchOptions:
    # 空文字 / 0 / False は「送らない」
    region: Optional[str] = Region.SFBAY.value
    subregion: Optional[str] = None
    category: Optional[str] = None
    query: str = ""
    sort: Optional[str] = None
    search_distance: int = 0
    postal_code: str = ""
    min_price: int = 0
    max_price: int = 0
    has_pictures: bool = False
    posted_today: bool = False
    bundle_duplicates: bool = False
    title_only: bool = False


@dataclass(frozen=True)
class SearchRequest:
    base_url: str
    path: str
    params: dict[str, ParamValue] = field(default_factory=dict)

    @property
    def url(self) -> str:
        return self.base_url + self.path


@dataclass(frozen=True)
class ResultEntry:
    title: str = ""
    href: str = ""
    image: str = ""
    datetime: str = ""
    neighborhood: str = ""
    nearby_loc: str = ""
    nearby_desc: str = ""
    price: str = ""

    def fingerprint(self) -> int:
        from .fingerprint import fingerprint

        return fingerprint(self)


@dataclass
class SearchResults:
    query: str
    entries: list[ResultEntry] = field(default_factory=list)
    prev: str = ""
    next: str = ""

    def with_entries(
        self, entries: list[ResultEntry], description: str = ""
    ) -> "SearchResults":
        """
        entriesを差し替えたコピーを返す。descriptionがあればクエリ表示に付け足す。
        """
        query = f"{self.query} ({description})" if description else self.query
        return replace(self, query=query, entries=list(entries))


@dataclass(frozen=True)
class FilterExpression:
    negate: bool
    mode: MatchMode
    patterns: tuple[str, ...]
