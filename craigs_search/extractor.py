from __future__ import annotations
from typing import Optional, Sequence

from bs4 import BeautifulSoup, Tag

from .interfaces import DocumentNode
from .models import ResultEntry, SearchResults

THUMBNAIL_URL = "https://images.craigslist.org/{id}_300x300.jpg"

ROW_SELECTOR = ".rows li.result-row"
HEADING_LINK_SELECTOR = ".result-heading a"
IMAGE_SELECTOR = "a.result-image"
DATE_SELECTOR = ".result-info .result-date"
HOOD_SELECTOR = ".result-meta .result-hood"
NEARBY_SELECTOR = ".result-meta .nearby"
PRICE_SELECTOR = ".result-meta .result-price"
PREV_SELECTOR = ".buttons .prev"
NEXT_SELECTOR = ".buttons .next"


class SoupNode(DocumentNode):
    """BeautifulSoupのTagを DocumentNode として見せる薄いラッパ。"""

    def __init__(self, tag: Tag) -> None:
        self._tag = tag

    def select(self, selector: str) -> Sequence[SoupNode]:
        return [SoupNode(t) for t in self._tag.select(selector)]

    def select_one(self, selector: str) -> Optional[SoupNode]:
        t = self._tag.select_one(selector)
        return SoupNode(t) if t is not None else None

    def text(self) -> str:
        return self._tag.get_text()

    def attr(self, name: str) -> Optional[str]:
        v = self._tag.get(name)
        if v is None:
            return None
        # class等の複数値属性はリストで返ってくる
        if isinstance(v, list):
            return " ".join(v)
        return str(v)


def parse_document(markup: str | bytes) -> SoupNode:
    return SoupNode(BeautifulSoup(markup, "html.parser"))


def image_url_from_ids(data_ids: Optional[str]) -> str:
    """
    data-ids="3:00a0a_abc123,1:00b0b_def456" の先頭トークンだけを使う。
    空 / ":"なし は画像なし扱い。
    """
    if not data_ids:
        return ""
    first = data_ids.split(",")[0]
    parts = first.split(":")
    if len(parts) < 2 or not parts[1]:
        return ""
    return THUMBNAIL_URL.format(id=parts[1])


# -----------------------
# フィールドごとのアクセサ（None = ノード/属性なし）
# -----------------------


def _first_text(node: DocumentNode, selector: str) -> Optional[str]:
    n = node.select_one(selector)
    return n.text() if n is not None else None


def _first_attr(node: DocumentNode, selector: str, name: str) -> Optional[str]:
    n = node.select_one(selector)
    return n.attr(name) if n is not None else None


def _strip(v: Optional[str]) -> Optional[str]:
    return v.strip() if v is not None else None


def title_of(row: DocumentNode) -> Optional[str]:
    return _first_text(row, HEADING_LINK_SELECTOR)


def href_of(row: DocumentNode) -> Optional[str]:
    return _first_attr(row, HEADING_LINK_SELECTOR, "href")


def image_ids_of(row: DocumentNode) -> Optional[str]:
    return _first_attr(row, IMAGE_SELECTOR, "data-ids")


def datetime_of(row: DocumentNode) -> Optional[str]:
    return _first_attr(row, DATE_SELECTOR, "datetime")


def neighborhood_of(row: DocumentNode) -> Optional[str]:
    return _strip(_first_text(row, HOOD_SELECTOR))


def nearby_of(row: DocumentNode) -> tuple[Optional[str], Optional[str]]:
    n = row.select_one(NEARBY_SELECTOR)
    if n is None:
        return None, None
    return n.attr("title"), n.text().strip()


def price_of(row: DocumentNode) -> Optional[str]:
    # 価格はtrimしない
    return _first_text(row, PRICE_SELECTOR)


def extract_entry(row: DocumentNode) -> ResultEntry:
    loc, desc = nearby_of(row)
    return ResultEntry(
        title=title_of(row) or "",
        href=href_of(row) or "",
        image=image_url_from_ids(image_ids_of(row)),
        datetime=datetime_of(row) or "",
        neighborhood=neighborhood_of(row) or "",
        nearby_loc=loc or "",
        nearby_desc=desc or "",
        price=price_of(row) or "",
    )


def extract_entries(doc: DocumentNode) -> list[ResultEntry]:
    return [extract_entry(row) for row in doc.select(ROW_SELECTOR)]


def extract_pagination(doc: DocumentNode) -> tuple[str, str]:
    prev = _first_attr(doc, PREV_SELECTOR, "href") or ""
    next_ = _first_attr(doc, NEXT_SELECTOR, "href") or ""
    return prev, next_


def extract_results(doc: DocumentNode, query: str) -> SearchResults:
    """重複除去やフィルタ前の候補一覧（文書順）。"""
    prev, next_ = extract_pagination(doc)
    return SearchResults(
        query=query, entries=extract_entries(doc), prev=prev, next=next_
    )
