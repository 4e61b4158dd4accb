"""Integration tests for the notification endpoints."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from teamboard.application.use_cases.notifications import Notifier
from teamboard.infrastructure.security import create_access_token


@pytest.fixture()
def client(session):
    from main import create_app

    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def alice(factory):
    return factory.user("Alice")


@pytest.fixture()
def auth_headers(alice):
    token = create_access_token({"sub": str(alice.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def seeded(session, factory, alice):
    bob = factory.user("Bob")
    notifier = Notifier(session, publish=None)
    first = notifier.notify_one(alice.id, "First", "one", "info", "/tasks/1")
    second = notifier.notify_one(alice.id, "Second", "two", "warning", "/tasks/2")
    other = notifier.notify_one(bob.id, "Bob only", "three", "info")
    return first, second, other


def test_requests_without_token_are_rejected(client):
    assert client.get("/notifications/").status_code == 401


def test_list_filters_by_read_state_and_limit(client, auth_headers, seeded):
    first, second, _ = seeded

    response = client.get("/notifications/", headers=auth_headers)
    assert response.status_code == 200
    body = response.json()
    assert [item["id"] for item in body] == [second.id, first.id]
    assert body[0]["severity"] == "warning"
    assert body[0]["read"] is False

    client.patch(f"/notifications/{first.id}/read", headers=auth_headers)

    unread = client.get("/notifications/", params={"read": "false"}, headers=auth_headers).json()
    assert [item["id"] for item in unread] == [second.id]
    read = client.get("/notifications/", params={"read": "true"}, headers=auth_headers).json()
    assert [item["id"] for item in read] == [first.id]
    limited = client.get("/notifications/", params={"limit": 1}, headers=auth_headers).json()
    assert len(limited) == 1


def test_unread_count_and_mark_all_read(client, auth_headers, seeded):
    assert client.get("/notifications/unread-count", headers=auth_headers).json() == {"count": 2}

    response = client.patch("/notifications/read-all", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["updated"] == 2

    assert client.get("/notifications/unread-count", headers=auth_headers).json() == {"count": 0}


def test_cannot_touch_notifications_of_other_users(client, auth_headers, seeded):
    _, _, other = seeded

    assert client.patch(f"/notifications/{other.id}/read", headers=auth_headers).status_code == 404
    assert client.delete(f"/notifications/{other.id}", headers=auth_headers).status_code == 404


def test_delete_notification(client, auth_headers, seeded):
    first, second, _ = seeded

    response = client.delete(f"/notifications/{first.id}", headers=auth_headers)
    assert response.status_code == 200

    remaining = client.get("/notifications/", headers=auth_headers).json()
    assert [item["id"] for item in remaining] == [second.id]
    assert client.delete(f"/notifications/{first.id}", headers=auth_headers).status_code == 404


def test_websocket_sends_unread_notifications_on_connect(client, alice, seeded):
    first, second, _ = seeded
    token = create_access_token({"sub": str(alice.id)})

    with client.websocket_connect(f"/notifications/ws?token={token}") as websocket:
        init = websocket.receive_json()
        assert init["type"] == "init"
        assert {item["id"] for item in init["data"]} == {first.id, second.id}

        websocket.send_json({"type": "ping"})
        assert websocket.receive_json() == {"type": "pong"}


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "OK"
