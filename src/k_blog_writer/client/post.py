from typing import Any


def compose_full_post(result: dict[str, Any], title_index: int = 0) -> str:
    """Title, body and hashtag line in the layout pasted into the blog editor."""
    titles = result.get("titles") or [""]
    index = title_index if 0 <= title_index < len(titles) else 0
    tags = " ".join(f"#{tag}" for tag in result.get("tags") or [])
    return f"{titles[index]}\n\n{result.get('body', '')}\n\n{tags}"


def format_seo_summary(result: dict[str, Any]) -> str:
    analysis = result.get("seoAnalysis") or {}
    lines = [f"SEO 점수: {result.get('seoScore', '-')}"]
    labels = {
        "keywordDensity": "키워드 밀도",
        "titleOptimization": "제목 최적화",
        "contentLength": "글자 수",
        "readability": "가독성",
        "ctaPresence": "CTA",
    }
    for key, label in labels.items():
        lines.append(f"- {label}: {analysis.get(key, '-')}")
    return "\n".join(lines)
