from __future__ import annotations
from typing import Iterable

from .fingerprint import fingerprint
from .models import ResultEntry


def dedupe_entries(
    entries: Iterable[ResultEntry], enabled: bool = True
) -> list[ResultEntry]:
    """
    同じfingerprintの2件目以降を落とす（文書順で最初の1件を残す）。
    seenは呼び出しごとに作り直す。
    """
    if not enabled:
        return list(entries)

    seen: set[int] = set()
    out: list[ResultEntry] = []
    for e in entries:
        h = fingerprint(e)
        if h in seen:
            continue
        seen.add(h)
        out.append(e)
    return out
