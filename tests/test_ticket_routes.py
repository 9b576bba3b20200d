from fastapi.testclient import TestClient

from ticket_triage.domain.models import PriorityLevel, TicketStatus
from ticket_triage.domain.state import TicketStateMachine
from ticket_triage.main import create_app
from ticket_triage.services.ticket_service import TicketService


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "OK"
    assert "timestamp" in body
    assert body["uptime"] >= 0


def test_root_redirects_to_docs(client):
    r = client.get("/", follow_redirects=False)
    assert r.status_code in (302, 307)
    assert r.headers["location"] == "/docs"


def test_create_ticket_returns_created(client, oracle):
    oracle.level = PriorityLevel.CRITICAL

    r = client.post("/api/tickets", json={"description": "  Payment system is down  "})

    assert r.status_code == 201
    body = r.json()
    assert body["success"] is True
    data = body["data"]
    assert data["id"] == 1
    assert data["description"] == "Payment system is down"
    assert data["priority"] == "CRITICA"
    assert data["status"] == "ABIERTO"
    assert data["createdAt"]
    assert data["updatedAt"] is None


def test_create_accepts_maximum_length_description(client):
    description = "x" * 5000

    r = client.post("/api/tickets", json={"description": description})

    assert r.status_code == 201
    assert r.json()["data"]["description"] == description


def test_create_validation_errors(client):
    assert client.post("/api/tickets", json={}).status_code == 422
    assert client.post("/api/tickets", json={"description": "   "}).status_code == 422
    assert client.post("/api/tickets", json={"description": "x" * 5001}).status_code == 422
    assert client.post("/api/tickets", json={"description": 42}).status_code == 422


def test_get_ticket_and_not_found(client):
    tid = client.post("/api/tickets", json={"description": "Broken link"}).json()["data"]["id"]

    r = client.get(f"/api/tickets/{tid}")
    assert r.status_code == 200
    assert r.json()["data"]["description"] == "Broken link"

    r404 = client.get("/api/tickets/999")
    assert r404.status_code == 404
    assert r404.json()["detail"] == "Ticket with ID 999 not found"


def test_invalid_ticket_id_is_rejected(client):
    assert client.get("/api/tickets/0").status_code == 422
    assert client.get("/api/tickets/abc").status_code == 422


def test_update_status_flow(client):
    tid = client.post("/api/tickets", json={"description": "Slow dashboard"}).json()["data"]["id"]

    r = client.patch(f"/api/tickets/{tid}/status", json={"status": "EN_PROCESO"})
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["status"] == "EN_PROCESO"
    assert data["updatedAt"] is not None

    r2 = client.patch(f"/api/tickets/{tid}/status", json={"status": "CERRADO"})
    assert r2.json()["data"]["status"] == "CERRADO"


def test_update_status_validation_and_not_found(client):
    assert client.patch("/api/tickets/1/status", json={"status": "DONE"}).status_code == 422
    assert client.patch("/api/tickets/999/status", json={"status": "CERRADO"}).status_code == 404


def test_list_and_filters(client, repo):
    repo.create("a", PriorityLevel.LOW)
    b = repo.create("b", PriorityLevel.HIGH)
    repo.update_status(b.id, TicketStatus.CLOSED)

    everything = client.get("/api/tickets").json()
    assert everything["count"] == 2
    assert [t["id"] for t in everything["data"]] == [1, 2]

    closed = client.get("/api/tickets", params={"status": "CERRADO"}).json()
    assert [t["id"] for t in closed["data"]] == [b.id]

    low = client.get("/api/tickets", params={"priority": "BAJA"}).json()
    assert [t["id"] for t in low["data"]] == [1]

    # status wins when both filters are present
    both = client.get("/api/tickets", params={"status": "ABIERTO", "priority": "ALTA"}).json()
    assert [t["id"] for t in both["data"]] == [1]


def test_invalid_filters_are_rejected(client):
    assert client.get("/api/tickets", params={"status": "OPEN"}).status_code == 422
    assert client.get("/api/tickets", params={"priority": "URGENTE"}).status_code == 422


def test_rejected_transition_maps_to_conflict(repo, oracle):
    locked = {status: {status} for status in TicketStatus}
    service = TicketService(repo=repo, oracle=oracle, state_machine=TicketStateMachine(locked))
    ticket = repo.create("Locked", PriorityLevel.MEDIUM)

    with TestClient(create_app(ticket_service=service)) as client:
        r = client.patch(f"/api/tickets/{ticket.id}/status", json={"status": "CERRADO"})

    assert r.status_code == 409
