import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from typing import Any, Protocol

import httpx

from k_blog_writer.config import Settings
from k_blog_writer.errors import EvidenceUnavailable
from k_blog_writer.providers.search.brave import BraveSearch
from k_blog_writer.providers.search.mock import MockSearch

logger = logging.getLogger(__name__)

PLACEHOLDER_NO_CREDENTIAL = "(검색 결과 없음 - API 키 미설정)"
PLACEHOLDER_HTTP_ERROR = "(검색 실패)"
PLACEHOLDER_NO_RESULTS = "(검색 결과 없음)"
PLACEHOLDER_ERROR = "(검색 중 오류 발생)"
MAX_RESULTS = 10


class SearchProvider(Protocol):
    def is_configured(self) -> bool: ...

    async def search(self, query: str) -> dict[str, Any]: ...


@dataclass(frozen=True)
class Evidence:
    """Evidence block handed to the prompt.

    Always carries usable text: either the rendered results or a placeholder.
    """

    text: str
    query: str
    result_count: int
    status: str

    @property
    def available(self) -> bool:
        return self.status == "ok"

    def as_meta(self) -> dict:
        return {
            "evidence_query": self.query,
            "evidence_results": self.result_count,
            "evidence_status": self.status,
        }


def build_search_provider(settings: Settings) -> SearchProvider:
    if settings.search_provider == "mock":
        return MockSearch()
    return BraveSearch(settings)


class EvidenceFetcher:
    """Runs one search and reduces the results to a bounded text block."""

    def __init__(
        self,
        settings: Settings,
        search_provider: SearchProvider | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.settings = settings
        self.search_provider = search_provider or build_search_provider(settings)
        self.today = today

    def build_query(self, topic: str) -> str:
        return f"{topic} {self.today().year} {self.settings.search_recency_marker}".strip()

    async def fetch(self, topic: str) -> Evidence:
        query = self.build_query(topic)
        try:
            results = await self._collect(query)
            text = self.render(results)
        except EvidenceUnavailable as exc:
            logger.warning("evidence.unavailable reason=%s query=%s", exc.reason, query)
            return Evidence(text=exc.placeholder, query=query, result_count=0, status=exc.reason)
        except Exception as exc:
            logger.error("evidence.failed type=%s detail=%s", exc.__class__.__name__, str(exc))
            return Evidence(text=PLACEHOLDER_ERROR, query=query, result_count=0, status="error")

        logger.info("evidence.collected query=%s results=%d", query, len(results))
        return Evidence(text=text, query=query, result_count=len(results), status="ok")

    async def _collect(self, query: str) -> list[dict[str, Any]]:
        if not self.search_provider.is_configured():
            raise EvidenceUnavailable("missing_credential", PLACEHOLDER_NO_CREDENTIAL)
        try:
            response = await self.search_provider.search(query)
        except httpx.HTTPStatusError as exc:
            logger.error("evidence.http_error status=%d", exc.response.status_code)
            raise EvidenceUnavailable("http_error", PLACEHOLDER_HTTP_ERROR) from exc
        results = list(response.get("results") or [])[:MAX_RESULTS]
        if not results:
            raise EvidenceUnavailable("no_results", PLACEHOLDER_NO_RESULTS)
        return results

    @staticmethod
    def render(results: list[dict[str, Any]]) -> str:
        entries: list[str] = []
        for index, item in enumerate(results, start=1):
            entry = f"[{index}] {item.get('title') or ''}\n{item.get('description') or ''}"
            snippets = item.get("extra_snippets")
            if isinstance(snippets, list) and snippets:
                entry += f"\n추가 정보: {' '.join(str(snippet) for snippet in snippets)}"
            entry += f"\nURL: {item.get('url') or ''}"
            entries.append(entry)
        return "\n\n".join(entries)
