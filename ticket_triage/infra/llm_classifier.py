import asyncio
import logging
from typing import Final

from langchain_core.language_models import BaseChatModel
from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import ChatPromptTemplate
from langchain_core.runnables import Runnable

from ticket_triage.core.config import Settings, settings as default_settings
from ticket_triage.core.errors import ExternalServiceError
from ticket_triage.domain.models import PriorityLevel
from ticket_triage.domain.ports import PriorityOracle

logger = logging.getLogger(__name__)

DEFAULT_PRIORITY: Final[PriorityLevel] = PriorityLevel.MEDIUM

# Accept both the wire tokens the prompt asks for and the internal names.
_TOKENS: Final[dict[str, PriorityLevel]] = {
    **{level.value: level for level in PriorityLevel},
    **{level.name: level for level in PriorityLevel},
}

_SYSTEM_PROMPT: Final[str] = (
    "You are an expert in support ticket classification.\n"
    "Analyze the user ticket and determine its priority level.\n"
    "The only valid responses are: {levels}.\n"
    "Classification criteria:\n"
    "- CRITICA: System is down, financial loss, or security breach\n"
    "- ALTA: Main functionality is broken but system remains operational\n"
    "- MEDIA: Non-blocking bug or complex inquiry\n"
    "- BAJA: General inquiry, feature request, or minor bug\n"
    "Respond with ONLY one of these four words, nothing else."
)


def _build_llm(settings: Settings) -> BaseChatModel:
    provider = settings.llm_provider.lower().strip()

    if provider == "openai":
        if not settings.openai_api_key:
            raise ExternalServiceError("OPENAI_API_KEY is required for LLM_PROVIDER=openai")

        from langchain_openai import ChatOpenAI

        return ChatOpenAI(
            model=settings.llm_model,
            temperature=0,
            max_tokens=10,
            timeout=settings.llm_timeout_seconds,
            max_retries=0,
            api_key=settings.openai_api_key,
        )

    raise ExternalServiceError(f"Unsupported LLM_PROVIDER: {settings.llm_provider}")


def _level_values() -> str:
    return ", ".join(level.value for level in PriorityLevel)


def parse_priority(raw: str | None) -> PriorityLevel:
    """Map raw model output to a PriorityLevel, falling back to MEDIA on anything unexpected."""
    token = (raw or "").strip().upper()
    level = _TOKENS.get(token)
    if level is None:
        logger.warning("Unexpected LLM response: %r. Defaulting to %s", raw, DEFAULT_PRIORITY.value)
        return DEFAULT_PRIORITY
    return level


class LangChainPriorityOracle(PriorityOracle):
    """
    Single responsibility: ask an LLM for a ticket's priority.

    classify() never raises. Missing credentials, transport errors, timeouts and
    unparseable answers all resolve to MEDIA. One attempt per call, no retries.
    """

    def __init__(
        self,
        llm: Runnable | None = None,
        *,
        timeout: float | None = None,
        settings: Settings | None = None,
    ) -> None:
        cfg = settings or default_settings
        self._timeout = timeout if timeout is not None else cfg.llm_timeout_seconds
        self._prompt = ChatPromptTemplate.from_messages(
            [
                ("system", _SYSTEM_PROMPT),
                ("human", 'Ticket: "{description}"'),
            ]
        )
        self._chain: Runnable | None = None
        try:
            model = llm if llm is not None else _build_llm(cfg)
        except ExternalServiceError as e:
            logger.warning("LLM provider unavailable; priorities will default to %s. Reason: %s", DEFAULT_PRIORITY.value, e)
        except Exception:
            logger.exception("LLM client could not be built; priorities will default to %s", DEFAULT_PRIORITY.value)
        else:
            self._chain = self._prompt | model | StrOutputParser()

    @property
    def available(self) -> bool:
        return self._chain is not None

    async def classify(self, text: str) -> PriorityLevel:
        if self._chain is None:
            return DEFAULT_PRIORITY

        try:
            raw = await asyncio.wait_for(
                self._chain.ainvoke({"description": text, "levels": _level_values()}),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError:
            logger.warning("LLM classification timed out after %.1fs; defaulting to %s", self._timeout, DEFAULT_PRIORITY.value)
            return DEFAULT_PRIORITY
        except Exception:
            logger.exception("LLM provider failed during classification; defaulting to %s", DEFAULT_PRIORITY.value)
            return DEFAULT_PRIORITY

        return parse_priority(raw)
