from __future__ import annotations
from dataclasses import dataclass

from .interfaces import MarkupFetcher
from .models import SearchOptions, SearchResults
from .query_builder import build_request, query_label
from .extractor import parse_document, extract_results
from .dedupe import dedupe_entries
from .filters import apply_filter

from logging import getLogger

logger = getLogger(__name__)


@dataclass(frozen=True)
class PipelineConfig:
    # "next"リンクを辿る最大ページ数（1なら最初のページだけ）
    max_pages: int = 1


class ClassifiedsSearchPipeline:
    def __init__(
        self,
        *,
        fetcher: MarkupFetcher,
        config: PipelineConfig = PipelineConfig(),
    ) -> None:
        self._fetcher = fetcher
        self._cfg = config

    async def collect(self, options: SearchOptions) -> SearchResults:
        """
        重複除去・フィルタ前の候補を集める。
        複数ページ取る場合も結果は1つにまとめる（prevは最初、nextは最後のページ）。
        """
        request = build_request(options)
        logger.info(f"search {request.url} {request.params}")

        # 取得/パースの失敗はそのまま呼び出し元へ
        markup = await self._fetcher.fetch(request)
        results = extract_results(parse_document(markup), query_label(options))

        pages = 1
        while results.next and pages < self._cfg.max_pages:
            logger.info(f"next page: {results.next}")
            markup = await self._fetcher.fetch_url(results.next)
            page = extract_results(parse_document(markup), results.query)
            results.entries.extend(page.entries)
            results.next = page.next
            pages += 1

        logger.info(f"{len(results.entries)} candidates from {pages} page(s)")
        return results

    async def run(
        self, options: SearchOptions, title_filter: str = ""
    ) -> SearchResults:
        results = await self.collect(options)

        # 重複除去はページをまとめた後に1回だけ
        entries = dedupe_entries(results.entries, enabled=options.bundle_duplicates)
        dropped = len(results.entries) - len(entries)
        if dropped:
            logger.info(f"dropped {dropped} duplicate(s)")
        results = results.with_entries(entries)

        # 不正なパターンは FilterPatternError のまま上へ（未フィルタ結果で代用しない）
        filtered, description = apply_filter(title_filter, results.entries)
        if not description:
            return results

        logger.info(f"{description}: {len(filtered)}/{len(results.entries)} kept")
        return results.with_entries(filtered, description)
