from __future__ import annotations
import re
from typing import Iterable, Optional

from .models import FilterExpression, MatchMode, ResultEntry

_ALL_SEPARATORS = re.compile(r"[& ,]+")


class FilterPatternError(ValueError):
    pass


def parse_filter(pattern: str) -> Optional[FilterExpression]:
    """
    タイトルフィルタの文法:
    - 先頭 "^" で判定を反転（マッチしないものを残す）
    - "|" を含む → any-of
    - "&" "," " " のどれかを含む → all-of
    - それ以外 → 1要素の any-of
    空文字なら None（フィルタなし）。
    """
    if not pattern:
        return None

    f = pattern.lower()
    negate = False
    if f.startswith("^"):
        negate = True
        f = f[1:]

    if "|" in f:
        mode = MatchMode.ANY
        parts = f.split("|")
    elif _ALL_SEPARATORS.search(f):
        mode = MatchMode.ALL
        parts = [p for p in _ALL_SEPARATORS.split(f) if p]
    else:
        mode = MatchMode.ANY
        parts = [f]

    # 順序を保ったまま重複を除く
    patterns = tuple(dict.fromkeys(parts))
    return FilterExpression(negate=negate, mode=mode, patterns=patterns)


def compile_filter(expr: FilterExpression) -> re.Pattern[str]:
    """
    サブパターンをそのまま "|" でつないで1つの選択にする。
    エスケープも個別のグループ化もしない（"(road|gravel) bike" のように
    区切り文字をまたぐ正規表現の断片もそのまま意味を保つ）。
    """
    alternation = "(" + "|".join(expr.patterns) + ")"
    try:
        return re.compile(alternation)
    except re.error as e:
        raise FilterPatternError(f"invalid filter pattern: {e}") from e


def matches(expr: FilterExpression, rx: re.Pattern[str], title: str) -> bool:
    """残すならTrue。"""
    found = {m.group(0) for m in rx.finditer(title.lower())}
    if not found:
        return expr.negate

    if expr.mode == MatchMode.ANY:
        return not expr.negate

    # all-of: 同じ文字列に何回マッチしても1つとして数える
    hit = len(found) == len(expr.patterns)
    return hit != expr.negate


def filter_entries(
    expr: FilterExpression, entries: Iterable[ResultEntry]
) -> list[ResultEntry]:
    # スキャン前にコンパイルする（不正パターンなら1件も処理しない）
    rx = compile_filter(expr)
    return [e for e in entries if matches(expr, rx, e.title)]


def apply_filter(
    pattern: str, entries: Iterable[ResultEntry]
) -> tuple[list[ResultEntry], str]:
    expr = parse_filter(pattern)
    if expr is None:
        return list(entries), ""
    return filter_entries(expr, entries), f"filter: {pattern}"
