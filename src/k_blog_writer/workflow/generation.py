import logging
from dataclasses import dataclass
from typing import Any

from k_blog_writer.api.schemas import GenerationResult
from k_blog_writer.config import Settings, get_settings
from k_blog_writer.pipeline.normalizer import parse_completion
from k_blog_writer.pipeline.prompt import Conversation, build_conversation
from k_blog_writer.providers.llm.openai_chat import ChatCompletionClient
from k_blog_writer.retrieval.evidence import Evidence, EvidenceFetcher, SearchProvider

logger = logging.getLogger(__name__)
ERROR_LOG_LIMIT = 1000


@dataclass
class GenerationOutcome:
    result: dict[str, Any]
    evidence: Evidence


class GenerationWorkflow:
    """Linear fetch -> assemble -> generate -> normalize pipeline on LangGraph."""

    def __init__(
        self,
        settings: Settings | None = None,
        search_provider: SearchProvider | None = None,
        chat_client: ChatCompletionClient | None = None,
        evidence_fetcher: EvidenceFetcher | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.evidence_fetcher = evidence_fetcher or EvidenceFetcher(self.settings, search_provider=search_provider)
        self.chat_client = chat_client or ChatCompletionClient(self.settings)
        self._graph: Any | None = None

    async def run(self, topic: str) -> GenerationOutcome:
        app = self._get_graph()
        try:
            final_state = await app.ainvoke(
                {
                    "topic": topic,
                    "evidence": None,
                    "conversation": None,
                    "completion": "",
                    "result": None,
                }
            )
        except Exception as exc:
            logger.error(
                "workflow.error model=%s type=%s detail=%s",
                self.settings.openai_model,
                exc.__class__.__name__,
                self._extract_error_detail(exc),
            )
            raise
        return GenerationOutcome(result=final_state["result"], evidence=final_state["evidence"])

    def _get_graph(self):
        if self._graph is None:
            self._graph = self._build_graph()
        return self._graph

    def _build_graph(self):
        from typing import TypedDict

        from langgraph.graph import END, START, StateGraph

        class WorkflowState(TypedDict):
            topic: str
            evidence: Evidence | None
            conversation: Conversation | None
            completion: str
            result: dict[str, Any] | None

        schema = GenerationResult if self.settings.strict_result_schema else None

        async def fetch_node(state: WorkflowState) -> dict[str, Any]:
            logger.info("fetch")
            evidence = await self.evidence_fetcher.fetch(state["topic"])
            logger.info("evidence.length chars=%d status=%s", len(evidence.text), evidence.status)
            return {"evidence": evidence}

        async def assemble_node(state: WorkflowState) -> dict[str, Any]:
            logger.info("assemble")
            return {"conversation": build_conversation(state["topic"], state["evidence"].text)}

        async def generate_node(state: WorkflowState) -> dict[str, Any]:
            logger.info("generate")
            return {"completion": await self.chat_client.complete(state["conversation"])}

        async def normalize_node(state: WorkflowState) -> dict[str, Any]:
            logger.info("normalize")
            return {"result": parse_completion(state["completion"], schema=schema)}

        graph = StateGraph(WorkflowState)
        graph.add_node("fetch_step", fetch_node)
        graph.add_node("assemble_step", assemble_node)
        graph.add_node("generate_step", generate_node)
        graph.add_node("normalize_step", normalize_node)
        graph.add_edge(START, "fetch_step")
        graph.add_edge("fetch_step", "assemble_step")
        graph.add_edge("assemble_step", "generate_step")
        graph.add_edge("generate_step", "normalize_step")
        graph.add_edge("normalize_step", END)
        return graph.compile()

    @staticmethod
    def _clip(text: str, limit: int) -> str:
        normalized = " ".join(text.split()).strip()
        if len(normalized) <= limit:
            return normalized
        return f"{normalized[:limit]}...(truncated)"

    def _extract_error_detail(self, exc: Exception) -> str:
        status_code = getattr(exc, "status_code", None)
        message = getattr(exc, "message", None) or str(exc)
        body = getattr(exc, "body", None)
        details = [f"status_code={status_code}" if status_code is not None else ""]
        if body is not None:
            details.append(f"body={body}")
        details.append(f"message={message}")
        return self._clip(" ".join([part for part in details if part]).strip(), ERROR_LOG_LIMIT)
