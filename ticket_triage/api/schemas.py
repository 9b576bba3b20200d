from datetime import datetime
from typing import Annotated, Sequence

from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel

from ticket_triage.domain.models import MAX_DESCRIPTION_LENGTH, PriorityLevel, Ticket, TicketStatus

Description = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=MAX_DESCRIPTION_LENGTH)]


class CreateTicketRequest(BaseModel):
    description: Description = Field(..., description="Free-text issue description")


class UpdateTicketStatusRequest(BaseModel):
    status: TicketStatus = Field(..., description="ABIERTO | EN_PROCESO | CERRADO")


class TicketOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    description: str
    priority: PriorityLevel
    status: TicketStatus
    created_at: datetime
    updated_at: datetime | None = None


class TicketResponse(BaseModel):
    success: bool = True
    data: TicketOut

    @staticmethod
    def from_ticket(ticket: Ticket) -> "TicketResponse":
        return TicketResponse(data=TicketOut.model_validate(ticket))


class TicketListResponse(BaseModel):
    success: bool = True
    count: int
    data: list[TicketOut]

    @staticmethod
    def from_tickets(tickets: Sequence[Ticket]) -> "TicketListResponse":
        return TicketListResponse(
            count=len(tickets),
            data=[TicketOut.model_validate(ticket) for ticket in tickets],
        )
