from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any

import httpx

from k_blog_writer.client.post import compose_full_post, format_seo_summary
from k_blog_writer.config import get_settings
from k_blog_writer.usage.gate import UsageGate
from k_blog_writer.usage.store import JsonFileStore

MSG_EMPTY_KEYWORD = "키워드를 입력해주세요."
MSG_LIMIT_REACHED = "오늘의 무료 사용 횟수({limit}회)를 모두 사용했습니다. 내일 다시 이용해주세요."
MSG_NETWORK_ERROR = "네트워크 오류가 발생했습니다. 인터넷 연결을 확인해주세요."
MSG_UNKNOWN_ERROR = "오류가 발생했습니다."


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Generate a Naver SEO blog post from a keyword.")
    parser.add_argument("keyword", help="Keyword to write about, e.g. '제주도 맛집 추천'.")
    parser.add_argument("--endpoint", default=settings.api_endpoint, help="Generation endpoint URL.")
    parser.add_argument(
        "--usage-file",
        default=str(settings.usage_store_path),
        help="JSON file holding the daily usage counter.",
    )
    parser.add_argument("--title", type=int, default=1, help="Which title candidate to use (1-3).")
    parser.add_argument("--json", action="store_true", help="Print the raw result JSON instead of the post.")
    parser.add_argument("--timeout", type=float, default=120.0, help="Request timeout in seconds.")
    return parser.parse_args(argv)


def request_post(client: httpx.Client, endpoint: str, keyword: str) -> tuple[dict[str, Any] | None, str]:
    try:
        response = client.post(endpoint, json={"keyword": keyword})
    except httpx.HTTPError:
        return None, MSG_NETWORK_ERROR
    try:
        data = response.json()
    except ValueError:
        data = None
    if not isinstance(data, dict):
        return None, MSG_UNKNOWN_ERROR
    if not response.is_success:
        return None, str(data.get("error") or MSG_UNKNOWN_ERROR)
    return data, ""


def run(args: argparse.Namespace, gate: UsageGate, client: httpx.Client) -> int:
    keyword = args.keyword.strip()
    if not keyword:
        print(f"[k-blog-writer] {MSG_EMPTY_KEYWORD}")
        return 2
    if not gate.can_use():
        print(f"[k-blog-writer] {MSG_LIMIT_REACHED.format(limit=gate.limit)}")
        return 3

    result, error = request_post(client, args.endpoint, keyword)
    if result is None:
        print(f"[k-blog-writer] {error}")
        return 1

    gate.increment()
    if args.json:
        print(json.dumps(result, ensure_ascii=False, indent=2))
    else:
        print(compose_full_post(result, title_index=args.title - 1))
        print()
        print(format_seo_summary(result))
    print(f"[k-blog-writer] remaining={gate.remaining()}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    gate = UsageGate(JsonFileStore(Path(args.usage_file)), limit=get_settings().usage_daily_limit)
    with httpx.Client(timeout=args.timeout) as client:
        return run(args, gate, client)


if __name__ == "__main__":
    raise SystemExit(main())
