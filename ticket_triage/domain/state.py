from typing import Mapping, Set

from ticket_triage.domain.models import TicketStatus

_ANY_TO_ANY: Mapping[TicketStatus, Set[TicketStatus]] = {status: set(TicketStatus) for status in TicketStatus}


class TicketStateMachine:
    """Lifecycle ABIERTO -> EN_PROCESO -> CERRADO; reopening is currently allowed."""

    def __init__(self, transitions: Mapping[TicketStatus, Set[TicketStatus]] | None = None) -> None:
        self._transitions = transitions if transitions is not None else _ANY_TO_ANY

    @staticmethod
    def initial_state() -> TicketStatus:
        return TicketStatus.OPEN

    def can_transition(self, current: TicketStatus, target: TicketStatus) -> bool:
        return target in self._transitions.get(current, set())
