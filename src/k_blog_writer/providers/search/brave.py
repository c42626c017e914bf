import json
import logging
from typing import Any

import httpx

from k_blog_writer.config import Settings

logger = logging.getLogger(__name__)
PAYLOAD_LOG_LIMIT = 4000


class BraveSearch:
    """Brave web search provider with compact input/output logs."""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.settings = settings
        self.search_url = settings.brave_search_url
        self.count = settings.search_count
        self.transport = transport

    def is_configured(self) -> bool:
        return bool(self.settings.brave_api_key)

    async def search(self, query: str) -> dict[str, Any]:
        params = {
            "q": query,
            "count": self.count,
            "search_lang": self.settings.search_lang,
            "country": self.settings.search_country,
            "extra_snippets": "true",
        }
        headers = {
            "X-Subscription-Token": self.settings.brave_api_key,
            "Accept": "application/json",
        }
        logger.info(
            "brave.request query=%s count=%d lang=%s country=%s",
            self._clip(query, 80),
            self.count,
            self.settings.search_lang,
            self.settings.search_country,
        )

        async with httpx.AsyncClient(timeout=self.settings.search_timeout_seconds, transport=self.transport) as client:
            http_response = await client.get(self.search_url, params=params, headers=headers)
            http_response.raise_for_status()
            response = http_response.json()

        results = (response.get("web") or {}).get("results") or []
        logger.info(
            "brave.response results=%d top_titles=%s",
            len(results),
            ", ".join(
                [self._clip(str(item.get("title", "")), self.settings.search_title_chars) for item in results[:3]]
            )
            or "none",
        )
        logger.debug(
            "brave.response.payload=%s",
            self._clip(self._to_json(response), PAYLOAD_LOG_LIMIT),
        )
        return {"query": query, "results": results}

    @staticmethod
    def _clip(text: str, limit: int) -> str:
        normalized = " ".join(text.split()).strip()
        if len(normalized) <= limit:
            return normalized
        return f"{normalized[:limit]}...(truncated)"

    @staticmethod
    def _to_json(payload: Any) -> str:
        try:
            return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
        except (TypeError, ValueError):
            return str(payload)
