from typing import Callable, Protocol, Sequence

from ticket_triage.domain.models import PriorityLevel, Ticket, TicketStatus


class TicketRepository(Protocol):
    def create(self, description: str, priority: PriorityLevel, status: TicketStatus = TicketStatus.OPEN) -> Ticket: ...

    def find_all(self) -> Sequence[Ticket]: ...

    def find_by_id(self, ticket_id: int) -> Ticket | None: ...

    def update_status(
        self,
        ticket_id: int,
        status: TicketStatus,
        guard: Callable[[TicketStatus, TicketStatus], None] | None = None,
    ) -> Ticket | None: ...

    def find_by_status(self, status: TicketStatus) -> Sequence[Ticket]: ...

    def find_by_priority(self, priority: PriorityLevel) -> Sequence[Ticket]: ...

    def clear(self) -> None: ...


class PriorityOracle(Protocol):
    async def classify(self, text: str) -> PriorityLevel: ...
