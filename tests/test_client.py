import argparse
import json
from datetime import date

import httpx

from k_blog_writer.client.cli import MSG_NETWORK_ERROR, run
from k_blog_writer.client.post import compose_full_post, format_seo_summary
from k_blog_writer.usage.gate import UsageGate
from k_blog_writer.usage.store import InMemoryStore

RESULT = {
    "titles": ["첫 번째 제목", "두 번째 제목", "세 번째 제목"],
    "body": "## 소제목\n본문이에요.",
    "tags": ["제주", "맛집"],
    "seoScore": 90,
    "seoAnalysis": {"keywordDensity": "적정", "readability": "우수"},
}


def _args(keyword: str = "제주도 맛집 추천", **overrides) -> argparse.Namespace:
    values = {"keyword": keyword, "endpoint": "http://test/api/generate", "title": 1, "json": False}
    values.update(overrides)
    return argparse.Namespace(**values)


def _gate() -> UsageGate:
    return UsageGate(InMemoryStore(), today=lambda: date(2025, 5, 1))


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_compose_full_post() -> None:
    assert compose_full_post(RESULT) == "첫 번째 제목\n\n## 소제목\n본문이에요.\n\n#제주 #맛집"
    assert compose_full_post(RESULT, title_index=2).startswith("세 번째 제목\n\n")
    assert compose_full_post(RESULT, title_index=7).startswith("첫 번째 제목\n\n")


def test_format_seo_summary_marks_missing_fields() -> None:
    summary = format_seo_summary(RESULT)
    assert summary.splitlines()[0] == "SEO 점수: 90"
    assert "- 키워드 밀도: 적정" in summary
    assert "- CTA: -" in summary


def test_success_increments_usage(capsys) -> None:
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json=RESULT)

    gate = _gate()
    assert run(_args(keyword="  제주도 맛집 추천 "), gate, _client(handler)) == 0

    assert captured["body"] == {"keyword": "제주도 맛집 추천"}
    assert gate.usage().count == 1
    out = capsys.readouterr().out
    assert "첫 번째 제목" in out
    assert "#제주 #맛집" in out
    assert "remaining=2" in out


def test_server_error_does_not_count(capsys) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(429, json={"error": "API 사용 한도를 초과했습니다. 잠시 후 다시 시도해주세요."})

    gate = _gate()
    assert run(_args(), gate, _client(handler)) == 1
    assert gate.usage().count == 0
    assert "API 사용 한도를 초과했습니다" in capsys.readouterr().out


def test_network_error_message(capsys) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    assert run(_args(), _gate(), _client(handler)) == 1
    assert MSG_NETWORK_ERROR in capsys.readouterr().out


def test_exhausted_gate_blocks_request(capsys) -> None:
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        return httpx.Response(200, json=RESULT)

    gate = _gate()
    client = _client(handler)
    for _ in range(3):
        assert run(_args(), gate, client) == 0
    assert run(_args(), gate, client) == 3
    assert calls["count"] == 3
    assert "오늘의 무료 사용 횟수(3회)" in capsys.readouterr().out


def test_empty_keyword_rejected_locally() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    assert run(_args(keyword="   "), _gate(), _client(handler)) == 2


def test_json_output(capsys) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=RESULT)

    assert run(_args(json=True), _gate(), _client(handler)) == 0
    out = capsys.readouterr().out
    assert '"seoScore": 90' in out
