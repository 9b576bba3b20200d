import logging
from typing import Sequence

from ticket_triage.core.errors import InvalidTransitionError
from ticket_triage.domain.models import PriorityLevel, Ticket, TicketStatus
from ticket_triage.domain.ports import PriorityOracle, TicketRepository
from ticket_triage.domain.state import TicketStateMachine

logger = logging.getLogger(__name__)


class TicketService:
    """
    Orchestrates the use-cases:
    - classify the ticket text, then store the ticket
    - read / filter tickets
    - move a ticket through its status lifecycle
    """

    def __init__(
        self,
        repo: TicketRepository,
        oracle: PriorityOracle,
        state_machine: TicketStateMachine | None = None,
    ) -> None:
        self._repo = repo
        self._oracle = oracle
        self._state_machine = state_machine or TicketStateMachine()

    async def create_new_ticket(self, description: str) -> Ticket:
        cleaned = description.strip()
        # classification happens before the repository is touched
        priority = await self._oracle.classify(cleaned)
        ticket = self._repo.create(cleaned, priority, status=self._state_machine.initial_state())
        logger.info("Created ticket %s (priority=%s)", ticket.id, ticket.priority.value)
        return ticket

    def get_all_tickets(self) -> Sequence[Ticket]:
        return self._repo.find_all()

    def get_ticket_by_id(self, ticket_id: int) -> Ticket | None:
        return self._repo.find_by_id(ticket_id)

    def get_tickets_by_status(self, status: TicketStatus) -> Sequence[Ticket]:
        return self._repo.find_by_status(status)

    def get_tickets_by_priority(self, priority: PriorityLevel) -> Sequence[Ticket]:
        return self._repo.find_by_priority(priority)

    def update_ticket_status(self, ticket_id: int, status: TicketStatus) -> Ticket | None:
        previous: list[TicketStatus] = []

        # runs inside the repository's critical section, against the stored status
        def check(current: TicketStatus, target: TicketStatus) -> None:
            if not self._state_machine.can_transition(current, target):
                raise InvalidTransitionError(f"Cannot transition ticket {ticket_id}: {current} -> {target}")
            previous.append(current)

        updated = self._repo.update_status(ticket_id, status, guard=check)
        if updated is not None:
            logger.info("Ticket %s status %s -> %s", ticket_id, previous[0].value, updated.status.value)
        return updated
