from fastapi import Request

from ticket_triage.core.config import Settings, settings as default_settings
from ticket_triage.infra.llm_classifier import LangChainPriorityOracle
from ticket_triage.infra.memory_repo import InMemoryTicketRepository
from ticket_triage.services.ticket_service import TicketService


def build_ticket_service(settings: Settings | None = None) -> TicketService:
    """One store and one oracle per app; the store lives as long as the process."""
    cfg = settings or default_settings
    return TicketService(
        repo=InMemoryTicketRepository(),
        oracle=LangChainPriorityOracle(settings=cfg),
    )


def get_ticket_service(request: Request) -> TicketService:
    return request.app.state.ticket_service
