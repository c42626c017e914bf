from typing import Any

from k_blog_writer.errors import ValidationError

DEFAULT_MAX_CHARS = 100


def validate_topic(raw: Any, max_chars: int = DEFAULT_MAX_CHARS) -> str:
    """Return the trimmed topic or raise ValidationError."""
    if not isinstance(raw, str) or not raw.strip():
        raise ValidationError(detail="empty keyword")
    topic = raw.strip()
    if len(topic) > max_chars:
        raise ValidationError(
            message=f"키워드는 {max_chars}자 이내로 입력해주세요.",
            detail=f"keyword too long chars={len(topic)} max={max_chars}",
        )
    return topic
