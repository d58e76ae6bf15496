"""API tests: HTTP surface over the engine."""
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from cadence.api import deps
from cadence.core import redis as redis_core
from cadence.core.config import settings
from cadence.main import create_app

HEADERS = {"X-Player-Token": "tok-api"}


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "database_dsn", f"sqlite+aiosqlite:///{tmp_path / 'api.db'}")
    monkeypatch.setattr(settings, "environment", "dev")
    monkeypatch.setattr(settings, "redis_url", None)
    monkeypatch.setattr(redis_core, "_redis", None)
    deps.reset_engines()
    with TestClient(create_app()) as c:
        yield c
    deps.reset_engines()


def test_requires_identity(client):
    resp = client.get("/api/state")
    assert resp.status_code == 401


def test_state_before_bootstrap(client):
    resp = client.get("/api/state", headers=HEADERS)
    assert resp.status_code == 404


def test_bootstrap_and_play(client):
    resp = client.post("/api/bootstrap", json={"name": "Robin", "city_id": "london"}, headers=HEADERS)
    assert resp.status_code == 200
    body = resp.json()
    assert body["created"] is True
    assert Decimal(body["state"]["wallet"]["balance"]) == 500

    resp = client.post("/api/equipment", json={"catalog_item_id": "guitar_basic"}, headers=HEADERS)
    assert resp.status_code == 200
    equipment_id = resp.json()["id"]

    resp = client.post("/api/equipment", json={"catalog_item_id": "piano_legendary"}, headers=HEADERS)
    assert resp.status_code == 402
    assert resp.json()["detail"]["error"] == "insufficient_funds"

    resp = client.delete(f"/api/equipment/{equipment_id}", headers=HEADERS)
    assert resp.status_code == 200
    assert Decimal(resp.json()["amount"]) == Decimal("75.00")

    resp = client.put(
        "/api/slots/free_time",
        json={"activity": {"kind": "practice", "instrument": "guitar"}},
        headers=HEADERS,
    )
    assert resp.status_code == 200
    assert resp.json()["current_activity"]["kind"] == "practice"

    resp = client.put(
        "/api/slots/free_time",
        json={"activity": {"kind": "job", "job_type": "barista"}},
        headers=HEADERS,
    )
    assert resp.status_code == 409

    resp = client.get("/api/status", headers=HEADERS)
    assert resp.status_code == 200
    assert resp.json()["health_status"] == "good"


def test_bootstrap_is_idempotent_and_persisted(client):
    client.post("/api/bootstrap", json={"name": "Robin"}, headers=HEADERS)
    client.post("/api/housing", json={"housing_type": "studio", "city_id": "istanbul"}, headers=HEADERS)
    deps.reset_engines()
    resp = client.post("/api/bootstrap", json={"name": "Robin"}, headers=HEADERS)
    body = resp.json()
    assert body["created"] is False
    assert body["state"]["current_housing"]["housing_type"] == "studio"
    assert Decimal(body["state"]["wallet"]["balance"]) == 360


def test_creative_flow_errors(client):
    client.post("/api/bootstrap", json={"name": "Robin"}, headers=HEADERS)
    resp = client.post(
        "/api/songs",
        json={"title": "Tune", "genre": "jazz", "mood": "calm", "primary_instrument": "piano"},
        headers=HEADERS,
    )
    assert resp.status_code == 200
    song_id = resp.json()["id"]
    resp = client.post("/api/setlists", json={"name": "Set", "song_ids": [song_id]}, headers=HEADERS)
    assert resp.status_code == 422
    assert resp.json()["detail"]["error"] == "validation_failed"


def test_catalog(client):
    resp = client.get("/api/catalog")
    assert resp.status_code == 200
    body = resp.json()
    assert len(body["cities"]) == 5
    assert len(body["equipment"]) == 18


def _song(client, title):
    resp = client.post(
        "/api/songs",
        json={"title": title, "genre": "rock", "mood": "energetic", "primary_instrument": "guitar"},
        headers=HEADERS,
    )
    assert resp.status_code == 200
    return resp.json()["id"]


def test_setlist_editing_and_readiness(client):
    client.post("/api/bootstrap", json={"name": "Robin"}, headers=HEADERS)
    song_ids = [_song(client, f"Song {i}") for i in range(4)]
    resp = client.post("/api/setlists", json={"name": "Main", "song_ids": song_ids[:3]}, headers=HEADERS)
    setlist_id = resp.json()["id"]

    resp = client.get("/api/setlists", headers=HEADERS)
    assert resp.status_code == 200
    [listed] = resp.json()
    assert listed["song_count"] == 3
    assert listed["readiness"]

    resp = client.put(f"/api/setlists/{setlist_id}/songs/{song_ids[3]}", headers=HEADERS)
    assert resp.json()["song_count"] == 4
    resp = client.delete(f"/api/setlists/{setlist_id}/songs/{song_ids[3]}", headers=HEADERS)
    assert resp.json()["song_count"] == 3
    resp = client.delete(f"/api/setlists/{setlist_id}/songs/{song_ids[3]}", headers=HEADERS)
    assert resp.status_code == 422


def test_book_gig_with_naive_timestamp(client):
    client.post("/api/bootstrap", json={"name": "Robin"}, headers=HEADERS)
    song_ids = [_song(client, f"Song {i}") for i in range(3)]
    setlist_id = client.post("/api/setlists", json={"name": "Main", "song_ids": song_ids}, headers=HEADERS).json()["id"]
    naive = (datetime.now(timezone.utc) + timedelta(days=2)).replace(tzinfo=None)

    resp = client.post(
        "/api/gigs",
        json={
            "venue_id": "the_troubadour",
            "setlist_id": setlist_id,
            "scheduled_at": naive.isoformat(),
            "ticket_price": "12.50",
        },
        headers=HEADERS,
    )
    assert resp.status_code == 200
    gig = resp.json()
    assert Decimal(gig["ticket_price"]) == Decimal("12.50")

    resp = client.delete(f"/api/gigs/{gig['id']}", headers=HEADERS)
    assert resp.json()["status"] == "cancelled"
    resp = client.delete(f"/api/gigs/{gig['id']}", headers=HEADERS)
    assert resp.status_code == 409


def test_release_lookup_and_revenue(client):
    client.post("/api/bootstrap", json={"name": "Robin"}, headers=HEADERS)
    resp = client.get(f"/api/releases/{uuid4()}", headers=HEADERS)
    assert resp.status_code == 404
    assert resp.json()["detail"]["error"] == "not_found"

    resp = client.get("/api/status", headers=HEADERS)
    assert Decimal(resp.json()["release_revenue"]) == 0
