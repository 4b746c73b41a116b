from __future__ import annotations
import hashlib
import os
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import ResultEntry

# プロセス起動時に一度だけ決める。同一プロセス内なら同じ内容は同じハッシュになる
HASH_SEED: bytes = os.urandom(16)


def normalize(s: str) -> str:
    s = s.lower()
    return s.replace(" ", "")


def fingerprint_with_seed(entry: "ResultEntry", seed: bytes) -> int:
    """
    重複判定に使うフィールドだけを順番固定で正規化して連結し、64bitに畳む。
    順番: title, image, nearby_loc, nearby_desc, neighborhood, price
    """
    h = hashlib.blake2b(digest_size=8, key=seed)
    for part in (
        entry.title,
        entry.image,
        entry.nearby_loc,
        entry.nearby_desc,
        entry.neighborhood,
        entry.price,
    ):
        h.update(normalize(part).encode("utf-8"))
    return int.from_bytes(h.digest(), "big")


def fingerprint(entry: "ResultEntry") -> int:
    return fingerprint_with_seed(entry, HASH_SEED)
