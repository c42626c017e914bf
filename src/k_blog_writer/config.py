from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_usage_store_path() -> Path:
    return Path.home() / ".k-blog-writer" / "usage.json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    openai_api_key: str = Field(default="", alias="OPENAI_API_KEY")
    openai_base_url: str | None = Field(default=None, alias="OPENAI_BASE_URL")
    openai_model: str = Field(default="gpt-4o-mini", alias="OPENAI_MODEL")
    llm_temperature: float = Field(default=0.7, alias="LLM_TEMPERATURE")
    llm_max_tokens: int = Field(default=4000, alias="LLM_MAX_TOKENS")
    llm_timeout_seconds: float | None = Field(default=None, alias="LLM_TIMEOUT_SECONDS")
    llm_num_retries: int = Field(default=0, alias="LLM_NUM_RETRIES")

    search_provider: str = Field(default="brave", alias="SEARCH_PROVIDER")
    brave_api_key: str = Field(default="", alias="BRAVE_API_KEY")
    brave_search_url: str = Field(
        default="https://api.search.brave.com/res/v1/web/search",
        alias="BRAVE_SEARCH_URL",
    )
    search_count: int = Field(default=10, alias="SEARCH_COUNT")
    search_lang: str = Field(default="ko", alias="SEARCH_LANG")
    search_country: str = Field(default="KR", alias="SEARCH_COUNTRY")
    search_recency_marker: str = Field(default="최신", alias="SEARCH_RECENCY_MARKER")
    search_timeout_seconds: float = Field(default=30.0, alias="SEARCH_TIMEOUT_SECONDS")
    search_title_chars: int = Field(default=60, alias="SEARCH_TITLE_CHARS")

    keyword_max_chars: int = Field(default=100, alias="KEYWORD_MAX_CHARS")
    strict_result_schema: bool = Field(default=False, alias="STRICT_RESULT_SCHEMA")

    usage_daily_limit: int = Field(default=3, alias="USAGE_DAILY_LIMIT")
    usage_store_path: Path = Field(default_factory=_default_usage_store_path, alias="USAGE_STORE_PATH")
    api_endpoint: str = Field(default="http://127.0.0.1:8000/api/generate", alias="API_ENDPOINT")

    def model_post_init(self, __context: object) -> None:  # type: ignore[override]
        self.search_provider = self.search_provider.strip().lower() or "brave"
        if self.search_provider not in ("brave", "mock"):
            self.search_provider = "brave"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
