import logging
import threading
from datetime import datetime, timezone
from typing import Callable

from ticket_triage.domain.models import PriorityLevel, Ticket, TicketStatus
from ticket_triage.domain.ports import TicketRepository

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryTicketRepository(TicketRepository):
    """
    Process-lifetime ticket store.

    Tickets are kept as frozen snapshots keyed by id (dicts preserve insertion
    order, which is also id order). Every operation runs under one lock, so id
    allocation and status updates are never observed half-done. The lock is
    plain threading: nothing here awaits.
    """

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._tickets: dict[int, Ticket] = {}
        self._last_id = 0

    def create(self, description: str, priority: PriorityLevel, status: TicketStatus = TicketStatus.OPEN) -> Ticket:
        with self._lock:
            self._last_id += 1
            ticket = Ticket(
                id=self._last_id,
                description=description,
                priority=priority,
                status=status,
                created_at=self._clock(),
            )
            self._tickets[ticket.id] = ticket
        logger.debug("Stored ticket %s with priority %s", ticket.id, ticket.priority.name)
        return ticket

    def find_all(self) -> list[Ticket]:
        with self._lock:
            return list(self._tickets.values())

    def find_by_id(self, ticket_id: int) -> Ticket | None:
        with self._lock:
            return self._tickets.get(ticket_id)

    def update_status(
        self,
        ticket_id: int,
        status: TicketStatus,
        guard: Callable[[TicketStatus, TicketStatus], None] | None = None,
    ) -> Ticket | None:
        """Set a new status; `guard(current, target)` runs under the lock and may raise to veto."""
        with self._lock:
            current = self._tickets.get(ticket_id)
            if current is None:
                return None
            if guard is not None:
                guard(current.status, status)
            # never move backwards even if the wall clock does
            floor = current.updated_at or current.created_at
            updated = current.model_copy(update={"status": status, "updated_at": max(self._clock(), floor)})
            self._tickets[ticket_id] = updated
            return updated

    def find_by_status(self, status: TicketStatus) -> list[Ticket]:
        with self._lock:
            return [t for t in self._tickets.values() if t.status == status]

    def find_by_priority(self, priority: PriorityLevel) -> list[Ticket]:
        with self._lock:
            return [t for t in self._tickets.values() if t.priority == priority]

    def clear(self) -> None:
        with self._lock:
            self._tickets.clear()
            self._last_id = 0
