"""Turn raw completion text into the structured post object.

The model is asked for bare JSON but regularly wraps it in a markdown code
fence, so a fenced payload gets exactly one more parse attempt.
"""

import json
import logging
import re
from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError

from k_blog_writer.errors import ParseError

logger = logging.getLogger(__name__)

_LEADING_FENCE = re.compile(r"^```(?:json)?[ \t]*\n?", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\n?```$")


def strip_code_fence(text: str) -> str:
    cleaned = _LEADING_FENCE.sub("", text.strip())
    cleaned = _TRAILING_FENCE.sub("", cleaned.rstrip())
    return cleaned.strip()


def parse_completion(text: str, schema: type[BaseModel] | None = None) -> dict[str, Any]:
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        logger.info("normalize.retry reason=not_json stripping_fence=true")
        try:
            parsed = json.loads(strip_code_fence(text))
        except json.JSONDecodeError as exc:
            raise ParseError(detail=f"completion is not JSON: {exc.msg}") from exc

    if not isinstance(parsed, dict):
        raise ParseError(detail=f"completion is {type(parsed).__name__}, expected object")

    if schema is not None:
        try:
            schema.model_validate(parsed)
        except SchemaValidationError as exc:
            raise ParseError(detail=f"completion does not match {schema.__name__}: {exc.error_count()} errors") from exc
    return parsed
