from typing import Any


class MockSearch:
    """Offline search provider returning a fixed Brave-shaped result list."""

    def is_configured(self) -> bool:
        return True

    async def search(self, query: str) -> dict[str, Any]:
        return {
            "query": query,
            "results": [
                {
                    "title": f"{query} 후기 모음",
                    "url": "https://example.com/review",
                    "description": f"{query} 관련해서 최근 방문자들이 많이 언급한 장소와 가격대를 정리했어요.",
                    "extra_snippets": ["평일 오전 방문이 가장 한산하다는 의견이 많았어요."],
                },
                {
                    "title": f"{query} 가이드",
                    "url": "https://example.com/guide",
                    "description": f"{query}를 처음 알아보는 분들을 위한 기본 정보와 체크리스트예요.",
                },
            ],
        }
