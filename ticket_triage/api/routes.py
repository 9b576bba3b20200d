import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Path, Query, status
from fastapi.responses import RedirectResponse

from ticket_triage.api.schemas import (
    CreateTicketRequest,
    TicketListResponse,
    TicketResponse,
    UpdateTicketStatusRequest,
)
from ticket_triage.core.errors import NotFoundError
from ticket_triage.deps import get_ticket_service
from ticket_triage.domain.models import PriorityLevel, TicketStatus
from ticket_triage.services.ticket_service import TicketService

router = APIRouter()
tickets_router = APIRouter(prefix="/api/tickets", tags=["tickets"])

_STARTED_AT = time.monotonic()


@router.get("/health", tags=["health"])
def health():
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - _STARTED_AT, 3),
    }


@router.get("/", include_in_schema=False)
def root():
    return RedirectResponse(url="/docs")


@tickets_router.post("", response_model=TicketResponse, status_code=status.HTTP_201_CREATED)
async def create_ticket(
    payload: CreateTicketRequest,
    svc: TicketService = Depends(get_ticket_service),
):
    ticket = await svc.create_new_ticket(payload.description)
    return TicketResponse.from_ticket(ticket)


@tickets_router.get("", response_model=TicketListResponse)
def list_tickets(
    status_filter: TicketStatus | None = Query(None, alias="status"),
    priority: PriorityLevel | None = Query(None),
    svc: TicketService = Depends(get_ticket_service),
):
    if status_filter is not None:
        tickets = svc.get_tickets_by_status(status_filter)
    elif priority is not None:
        tickets = svc.get_tickets_by_priority(priority)
    else:
        tickets = svc.get_all_tickets()
    return TicketListResponse.from_tickets(tickets)


@tickets_router.get("/{ticket_id}", response_model=TicketResponse)
def get_ticket(
    ticket_id: int = Path(..., gt=0),
    svc: TicketService = Depends(get_ticket_service),
):
    ticket = svc.get_ticket_by_id(ticket_id)
    if ticket is None:
        raise NotFoundError(f"Ticket with ID {ticket_id} not found")
    return TicketResponse.from_ticket(ticket)


@tickets_router.patch("/{ticket_id}/status", response_model=TicketResponse)
def update_ticket_status(
    payload: UpdateTicketStatusRequest,
    ticket_id: int = Path(..., gt=0),
    svc: TicketService = Depends(get_ticket_service),
):
    ticket = svc.update_ticket_status(ticket_id, payload.status)
    if ticket is None:
        raise NotFoundError(f"Ticket with ID {ticket_id} not found")
    return TicketResponse.from_ticket(ticket)
