"""Integration smoke tests for REST API (using in-memory UoW via dependency override)."""
from __future__ import annotations

import uuid

import pytest
from fastapi.testclient import TestClient

from chat_relay.api.deps import get_clock, get_uow
from chat_relay.app import create_app
from tests.conftest import T0, FakeClock, FakeUoW


@pytest.fixture
def app_with_uow():
    app = create_app()
    uow = FakeUoW()
    clock = FakeClock()

    async def _override():
        yield uow

    app.dependency_overrides[get_uow] = _override
    app.dependency_overrides[get_clock] = lambda: clock
    return app, uow


@pytest.fixture
def client(app_with_uow):
    app, _ = app_with_uow
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def uow(app_with_uow):
    _, uow = app_with_uow
    return uow


def _as(name: str) -> dict[str, str]:
    return {"User": name}


def _join(client, name: str):
    return client.post("/participants", json={"name": name})


def _post(client, sender: str, *, to: str = "Todos", text: str = "hi", kind: str = "message"):
    return client.post("/messages", headers=_as(sender), json={"to": to, "text": text, "type": kind})


def test_healthz(client):
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_join_and_list_participants(client):
    resp = _join(client, "Alice")
    assert resp.status_code == 201
    assert resp.json()["name"] == "Alice"

    resp = client.get("/participants")
    assert resp.status_code == 200
    assert [p["name"] for p in resp.json()] == ["Alice"]


def test_join_twice_conflicts(client):
    assert _join(client, "Alice").status_code == 201
    assert _join(client, "Alice").status_code == 409


@pytest.mark.parametrize("body", [{}, {"name": ""}, {"name": "   "}, {"name": None}])
def test_join_invalid_name(client, body):
    resp = client.post("/participants", json=body)
    assert resp.status_code == 422


def test_post_and_list_messages(client):
    _join(client, "A")

    resp = _post(client, "A", text="hi")
    assert resp.status_code == 201
    data = resp.json()
    assert data["from"] == "A"
    assert data["to"] == "Todos"
    assert data["type"] == "message"
    # Rendered in server local time
    assert data["time"] == T0.astimezone().strftime("%H:%M:%S")

    resp = client.get("/messages", headers=_as("A"))
    assert resp.status_code == 200
    messages = resp.json()
    assert [m["type"] for m in messages] == ["status", "message"]
    assert messages[1]["text"] == "hi"


def test_private_message_visibility(client):
    for name in ("Alice", "Bob", "Carol"):
        _join(client, name)
    _post(client, "Alice", to="Bob", text="psst", kind="private_message")

    def texts(viewer):
        return [m["text"] for m in client.get("/messages", headers=_as(viewer)).json()]

    assert "psst" in texts("Alice")
    assert "psst" in texts("Bob")
    assert "psst" not in texts("Carol")


def test_list_messages_with_limit(client):
    _join(client, "A")
    for text in ("one", "two", "three"):
        _post(client, "A", text=text)

    resp = client.get("/messages", params={"limit": 2}, headers=_as("A"))
    assert resp.status_code == 200
    assert [m["text"] for m in resp.json()] == ["two", "three"]


@pytest.mark.parametrize("limit", ["0", "-1", "abc"])
def test_list_messages_invalid_limit(client, limit):
    _join(client, "A")
    resp = client.get("/messages", params={"limit": limit}, headers=_as("A"))
    assert resp.status_code == 422


def test_list_messages_requires_user_header(client):
    assert client.get("/messages").status_code == 422


def test_post_from_unknown_sender(client):
    resp = _post(client, "Ghost")
    assert resp.status_code == 422


def test_post_with_status_kind_rejected(client):
    _join(client, "A")
    assert _post(client, "A", kind="status").status_code == 422


def test_heartbeat(client):
    _join(client, "A")
    assert client.post("/status", headers=_as("A")).status_code == 200
    assert client.post("/status", headers=_as("Nobody")).status_code == 404
    assert client.post("/status").status_code == 404


def test_edit_message(client):
    _join(client, "A")
    _join(client, "B")
    msg_id = _post(client, "A", text="draft").json()["id"]

    resp = client.put(
        f"/messages/{msg_id}", headers=_as("B"), json={"to": "Todos", "text": "hack", "type": "message"},
    )
    assert resp.status_code == 401

    resp = client.put(
        f"/messages/{msg_id}", headers=_as("A"), json={"to": "B", "text": "final", "type": "private_message"},
    )
    assert resp.status_code == 200
    assert resp.json()["id"] == msg_id
    assert resp.json()["text"] == "final"

    resp = client.put(f"/messages/{msg_id}", headers=_as("A"), json={"to": "B", "text": ""})
    assert resp.status_code == 422


def test_edit_missing_message(client):
    _join(client, "A")
    resp = client.put(
        f"/messages/{uuid.uuid4()}", headers=_as("A"), json={"to": "Todos", "text": "x", "type": "message"},
    )
    assert resp.status_code == 404


def test_delete_message(client, uow):
    _join(client, "A")
    _join(client, "B")
    msg_id = _post(client, "A", text="bye").json()["id"]

    assert client.delete(f"/messages/{msg_id}", headers=_as("B")).status_code == 401
    assert client.delete(f"/messages/{msg_id}", headers=_as("A")).status_code == 200
    assert client.delete(f"/messages/{msg_id}", headers=_as("A")).status_code == 404
    assert all(str(m.id) != msg_id for m in uow.messages._messages)


@pytest.mark.parametrize("message_id", [str(uuid.uuid4()), "not-an-id"])
def test_delete_nonexistent_message(client, message_id):
    assert client.delete(f"/messages/{message_id}", headers=_as("A")).status_code == 404


def test_store_fault_returns_500(client, uow, monkeypatch):
    from chat_relay.application.exceptions import StoreFaultError

    async def _down():
        raise StoreFaultError("connection refused")

    monkeypatch.setattr(uow.participants, "list_all", _down)

    resp = client.get("/participants")
    assert resp.status_code == 500


def test_request_id_echoed(client):
    resp = client.get("/healthz", headers={"X-Request-ID": "abc123"})
    assert resp.headers["X-Request-ID"] == "abc123"
