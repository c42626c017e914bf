import logging
from typing import Any

from k_blog_writer.config import Settings
from k_blog_writer.errors import GenerationError
from k_blog_writer.pipeline.prompt import Conversation

logger = logging.getLogger(__name__)


class ChatCompletionClient:
    """Single-shot chat completion against an OpenAI-compatible endpoint."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self._llm: Any | None = None

    async def complete(self, conversation: Conversation) -> str:
        llm = self._get_llm()
        logger.info(
            "llm.call model=%s temperature=%.1f max_tokens=%d",
            self.settings.openai_model,
            self.settings.llm_temperature,
            self.settings.llm_max_tokens,
        )
        response = await llm.ainvoke(self._to_langchain_messages(conversation))
        text = self._message_text(getattr(response, "content", response))
        if not text:
            raise GenerationError(detail="empty completion")
        logger.info("llm.response chars=%d", len(text))
        return text

    def _get_llm(self):
        if self._llm is None:
            from langchain_openai import ChatOpenAI

            self._llm = ChatOpenAI(
                model=self.settings.openai_model,
                api_key=self.settings.openai_api_key or None,
                base_url=self.settings.openai_base_url,
                temperature=self.settings.llm_temperature,
                max_tokens=self.settings.llm_max_tokens,
                timeout=self.settings.llm_timeout_seconds,
                max_retries=self.settings.llm_num_retries,
            )
        return self._llm

    @staticmethod
    def _to_langchain_messages(conversation: Conversation) -> list:
        from langchain_core.messages import HumanMessage, SystemMessage

        return [
            SystemMessage(content=conversation.system.content),
            HumanMessage(content=conversation.user.content),
        ]

    @staticmethod
    def _message_text(content: Any) -> str:
        if content is None:
            return ""
        if isinstance(content, str):
            return content.strip()
        if isinstance(content, list):
            parts: list[str] = []
            for item in content:
                if isinstance(item, dict):
                    if "text" in item:
                        parts.append(str(item["text"]))
                else:
                    parts.append(str(item))
            return "\n".join(parts).strip()
        return str(content).strip()
