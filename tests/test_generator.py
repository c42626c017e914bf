import asyncio

import pytest

from k_blog_writer.config import Settings
from k_blog_writer.errors import (
    ConfigurationError,
    GenerationError,
    ProviderAuthError,
    ProviderGenericError,
    ProviderQuotaError,
    ValidationError,
)
from k_blog_writer.retrieval.evidence import Evidence
from k_blog_writer.service.generator import GenerateService
from k_blog_writer.workflow.generation import GenerationOutcome


class _FakeWorkflow:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.topics: list[str] = []

    async def run(self, topic: str) -> GenerationOutcome:
        self.topics.append(topic)
        if self.error is not None:
            raise self.error
        return GenerationOutcome(
            result={"titles": ["a", "b", "c"], "body": "body"},
            evidence=Evidence(text="[1] t", query=f"{topic} 2025 최신", result_count=1, status="ok"),
        )


class _StatusError(Exception):
    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


def _service(workflow: _FakeWorkflow, api_key: str = "sk-test") -> GenerateService:
    return GenerateService(settings=Settings(OPENAI_API_KEY=api_key), workflow=workflow)  # type: ignore[arg-type]


def test_generate_returns_workflow_result_for_trimmed_topic() -> None:
    workflow = _FakeWorkflow()
    result = asyncio.run(_service(workflow).generate("  제주도 맛집 추천 "))
    assert result == {"titles": ["a", "b", "c"], "body": "body"}
    assert workflow.topics == ["제주도 맛집 추천"]


def test_validation_runs_before_config_check() -> None:
    workflow = _FakeWorkflow()
    with pytest.raises(ValidationError):
        asyncio.run(_service(workflow, api_key="").generate("   "))
    assert workflow.topics == []


def test_missing_api_key_is_configuration_error() -> None:
    workflow = _FakeWorkflow()
    with pytest.raises(ConfigurationError) as exc_info:
        asyncio.run(_service(workflow, api_key="").generate("키워드"))
    assert exc_info.value.status_code == 500
    assert workflow.topics == []


@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (RuntimeError("Incorrect API key provided: sk-****"), ProviderAuthError),
        (_StatusError("Unauthorized", 401), ProviderAuthError),
        (RuntimeError("You exceeded your current quota"), ProviderQuotaError),
        (RuntimeError("Rate limit reached for gpt-4o-mini"), ProviderQuotaError),
        (_StatusError("Too Many Requests", 429), ProviderQuotaError),
        (RuntimeError("Connection error."), ProviderGenericError),
        (RuntimeError("failed to generate"), ProviderGenericError),
    ],
)
def test_provider_errors_are_classified(error: Exception, expected: type) -> None:
    with pytest.raises(expected):
        asyncio.run(_service(_FakeWorkflow(error=error)).generate("키워드"))


def test_typed_errors_pass_through() -> None:
    with pytest.raises(GenerationError):
        asyncio.run(_service(_FakeWorkflow(error=GenerationError())).generate("키워드"))


def test_classify_error_keeps_detail() -> None:
    error = GenerateService.classify_error(RuntimeError("socket closed"))
    assert isinstance(error, ProviderGenericError)
    assert error.status_code == 500
    assert "socket closed" in error.detail
    assert error.message == "서버 오류가 발생했습니다. 잠시 후 다시 시도해주세요."
