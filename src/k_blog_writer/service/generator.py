import logging
from typing import Any

from k_blog_writer.config import Settings, get_settings
from k_blog_writer.errors import (
    ConfigurationError,
    KBlogWriterError,
    ProviderAuthError,
    ProviderGenericError,
    ProviderQuotaError,
)
from k_blog_writer.pipeline.validator import validate_topic
from k_blog_writer.workflow.generation import GenerationWorkflow

logger = logging.getLogger(__name__)

AUTH_MARKERS = ("api key",)
QUOTA_MARKERS = ("quota", "rate limit", "rate_limit")


class GenerateService:
    def __init__(self, settings: Settings | None = None, workflow: GenerationWorkflow | None = None) -> None:
        self.settings = settings or get_settings()
        self._workflow = workflow

    @property
    def workflow(self) -> GenerationWorkflow:
        if self._workflow is None:
            self._workflow = GenerationWorkflow(self.settings)
        return self._workflow

    async def generate(self, keyword: Any) -> dict[str, Any]:
        topic = validate_topic(keyword, max_chars=self.settings.keyword_max_chars)
        if not self.settings.openai_api_key:
            logger.error("generate.config_missing key=OPENAI_API_KEY")
            raise ConfigurationError(detail="OPENAI_API_KEY not set")

        try:
            outcome = await self.workflow.run(topic)
        except Exception as exc:
            error = self.classify_error(exc)
            logger.error(
                "generate.failed topic=%s kind=%s status=%d detail=%s",
                topic,
                error.__class__.__name__,
                error.status_code,
                error.detail or str(exc),
            )
            raise error from exc

        logger.info(
            "generate.done topic=%s titles=%d body_chars=%d %s",
            topic,
            len(outcome.result.get("titles") or []),
            len(str(outcome.result.get("body") or "")),
            " ".join(f"{key}={value}" for key, value in outcome.evidence.as_meta().items()),
        )
        return outcome.result

    @staticmethod
    def classify_error(exc: Exception) -> KBlogWriterError:
        if isinstance(exc, KBlogWriterError):
            return exc
        message = str(exc)
        lowered = message.lower()
        status_code = getattr(exc, "status_code", None)
        if status_code == 401 or any(marker in lowered for marker in AUTH_MARKERS):
            return ProviderAuthError(detail=message)
        if status_code == 429 or any(marker in lowered for marker in QUOTA_MARKERS):
            return ProviderQuotaError(detail=message)
        return ProviderGenericError(detail=f"{exc.__class__.__name__}: {message}")
