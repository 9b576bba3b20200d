from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class PriorityLevel(StrEnum):
    LOW = "BAJA"
    MEDIUM = "MEDIA"
    HIGH = "ALTA"
    CRITICAL = "CRITICA"


class TicketStatus(StrEnum):
    OPEN = "ABIERTO"
    IN_PROGRESS = "EN_PROCESO"
    CLOSED = "CERRADO"


MAX_DESCRIPTION_LENGTH = 5000


class Ticket(BaseModel):
    """Immutable snapshot of a stored ticket; the repository swaps in new snapshots on change."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., gt=0)
    description: str = Field(..., min_length=1, max_length=MAX_DESCRIPTION_LENGTH)
    priority: PriorityLevel = Field(..., description="BAJA | MEDIA | ALTA | CRITICA")
    status: TicketStatus = Field(..., description="ABIERTO | EN_PROCESO | CERRADO")
    created_at: datetime
    updated_at: datetime | None = None
