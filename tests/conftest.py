import pytest
from fastapi.testclient import TestClient

from ticket_triage.domain.models import PriorityLevel
from ticket_triage.infra.memory_repo import InMemoryTicketRepository
from ticket_triage.main import create_app
from ticket_triage.services.ticket_service import TicketService


class StubOracle:
    """Returns a fixed level and remembers what it was asked to classify."""

    def __init__(self, level: PriorityLevel = PriorityLevel.MEDIUM) -> None:
        self.level = level
        self.calls: list[str] = []

    async def classify(self, text: str) -> PriorityLevel:
        self.calls.append(text)
        return self.level


@pytest.fixture
def repo():
    repository = InMemoryTicketRepository()
    yield repository
    repository.clear()


@pytest.fixture
def oracle():
    return StubOracle()


@pytest.fixture
def service(repo, oracle):
    return TicketService(repo=repo, oracle=oracle)


@pytest.fixture
def client(service):
    app = create_app(ticket_service=service)
    with TestClient(app) as test_client:
        yield test_client
