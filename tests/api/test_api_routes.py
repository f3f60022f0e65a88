from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from linguachat.core.config import settings
from linguachat.modules.gateway import GatewayError, GatewayErrorKind
from linguachat.modules.session import session_manager
from main import app

V = settings.app.version


@pytest.fixture
def gateway(monkeypatch):
    fake = MagicMock()
    fake.chat = AsyncMock(return_value="Dzień dobry!")
    fake.translate = AsyncMock(return_value="dom")
    monkeypatch.setattr(session_manager, "gateway_factory", lambda kind: fake)
    yield fake
    session_manager.sessions.clear()


@pytest.fixture
def client(gateway):
    return TestClient(app)


def _session(client, *, configured=True, speech_output=True) -> str:
    res = client.post(f"/{V}/sessions", json={"speech_output": speech_output})
    assert res.status_code == 201
    sid = res.json()["id"]
    if configured:
        res = client.put(
            f"/{V}/sessions/{sid}/provider", json={"kind": "groq", "api_key": "gsk_test"}
        )
        assert res.status_code == 200
    return sid


def test_root_reports_status(client):
    res = client.get("/")

    assert res.status_code == 200
    assert res.json()["status"] == "ok"


def test_unknown_session_is_404(client):
    assert client.get(f"/{V}/sessions/nope").status_code == 404
    assert client.post(f"/{V}/sessions/nope/messages", json={"text": "hi"}).status_code == 404
    assert client.delete(f"/{V}/sessions/nope").status_code == 404


def test_create_and_end_session(client):
    sid = _session(client, configured=False)

    state = client.get(f"/{V}/sessions/{sid}").json()
    assert state["state"] == "idle"
    assert state["configured"] is False

    assert client.delete(f"/{V}/sessions/{sid}").status_code == 204
    assert client.get(f"/{V}/sessions/{sid}").status_code == 404


def test_submit_without_provider_is_400(client):
    sid = _session(client, configured=False)

    res = client.post(f"/{V}/sessions/{sid}/messages", json={"text": "hola"})

    assert res.status_code == 400
    assert res.json()["detail"]["rejection"] == "not_configured"


def test_configure_with_bad_key_is_400(client):
    sid = _session(client, configured=False)

    res = client.put(
        f"/{V}/sessions/{sid}/provider", json={"kind": "openai", "api_key": "gsk_wrong"}
    )

    assert res.status_code == 400


def test_submit_turn_and_playback(client, gateway):
    sid = _session(client)

    res = client.post(f"/{V}/sessions/{sid}/messages", json={"text": "hello"})

    assert res.status_code == 200
    body = res.json()
    assert body["state"] == "speaking"
    assert [e["type"] for e in body["effects"]] == [
        "render_message",
        "render_message",
        "speak_text",
    ]

    busy = client.post(f"/{V}/sessions/{sid}/capture/start")
    assert busy.status_code == 409
    assert busy.json()["detail"]["rejection"] == "busy"

    res = client.post(f"/{V}/sessions/{sid}/playback/finished")
    assert res.json()["state"] == "idle"
    history = client.get(f"/{V}/sessions/{sid}").json()["history"]
    assert [m["role"] for m in history] == ["user", "assistant"]


def test_empty_message_is_422(client):
    sid = _session(client)

    res = client.post(f"/{V}/sessions/{sid}/messages", json={"text": "  "})

    assert res.status_code == 422
    assert res.json()["detail"]["rejection"] == "empty_input"


def test_gateway_failure_is_reported_as_effect(client, gateway):
    gateway.chat.side_effect = GatewayError(GatewayErrorKind.AUTH, "401")
    sid = _session(client)

    res = client.post(f"/{V}/sessions/{sid}/messages", json={"text": "hello"})

    assert res.status_code == 200
    body = res.json()
    assert body["state"] == "idle"
    assert [e for e in body["effects"] if e["type"] == "show_error"][0]["kind"] == "auth"


def test_capture_flow(client):
    sid = _session(client, speech_output=False)

    assert client.post(f"/{V}/sessions/{sid}/capture/start").json()["state"] == "recording"
    res = client.post(f"/{V}/sessions/{sid}/capture/transcript", json={"text": "hola"})
    assert res.json()["state"] == "idle"

    client.post(f"/{V}/sessions/{sid}/capture/start")
    res = client.post(f"/{V}/sessions/{sid}/capture/error", json={"message": "no-speech"})
    assert res.json()["effects"][0]["kind"] == "capture"

    res = client.post(f"/{V}/sessions/{sid}/capture/error", json={"message": "again"})
    assert res.status_code == 409


def test_translate_word(client):
    sid = _session(client)

    res = client.post(f"/{V}/sessions/{sid}/translate", json={"word": "house"})

    assert res.json() == {"word": "house", "translation": "dom"}


def test_translate_requires_provider(client):
    sid = _session(client, configured=False)

    res = client.post(f"/{V}/sessions/{sid}/translate", json={"word": "house"})

    assert res.status_code == 400


def test_favorites_crud_and_export(client):
    sid = _session(client)
    base = f"/{V}/sessions/{sid}/favorites"

    created = client.post(base, json={"word": "casa", "translation": "house"})
    assert created.status_code == 201
    fav_id = created.json()["favorite"]["id"]
    assert created.json()["effects"][0]["level"] == "success"

    dup = client.post(base, json={"word": "Casa", "translation": "home"})
    assert dup.status_code == 409
    assert dup.json()["detail"]["rejection"] == "duplicate_word"

    client.post(base, json={"word": "perro", "translation": "dog"})
    listed = client.get(base, params={"q": "dog"}).json()
    assert [f["word"] for f in listed["items"]] == ["perro"]
    assert listed["total"] == 2

    export = client.get(f"{base}/export")
    assert export.status_code == 200
    assert export.headers["content-type"].startswith("text/csv")
    assert export.text.splitlines()[0] == '"word","translation","date"'
    assert len(export.text.splitlines()) == 3

    assert client.delete(f"{base}/{fav_id}").status_code == 204
    assert client.delete(f"{base}/{fav_id}").status_code == 204
    assert client.get(base).json()["total"] == 1

    assert client.delete(base).status_code == 204
    assert client.get(base).json()["items"] == []


def test_blank_favorite_is_422(client):
    sid = _session(client)

    res = client.post(
        f"/{V}/sessions/{sid}/favorites", json={"word": "  ", "translation": "house"}
    )

    assert res.status_code == 422


def test_flashcards_flow(client):
    sid = _session(client)
    cards = f"/{V}/sessions/{sid}/flashcards"

    empty = client.get(f"{cards}/current").json()
    assert empty["empty"] is True
    assert empty["stats"]["total"] == 0

    for word in ("casa", "perro", "gato"):
        client.post(f"/{V}/sessions/{sid}/favorites", json={"word": word, "translation": "x"})

    current = client.get(f"{cards}/current").json()
    assert current["card"]["word"] == "casa"
    assert client.post(f"{cards}/flip").json()["stats"]["flipped"] is True

    answered = client.post(f"{cards}/answer", json={"grade": "correct"}).json()
    assert answered["card"]["word"] == "perro"
    assert answered["stats"]["correct_count"] == 1
    assert answered["stats"]["flipped"] is False

    assert client.post(f"{cards}/previous").json()["card"]["word"] == "casa"
    assert client.post(f"{cards}/next").json()["stats"]["position"] == 2

    shuffled = client.post(f"{cards}/shuffle").json()
    assert shuffled["stats"]["position"] == 1

    reset = client.post(f"{cards}/reset").json()
    assert reset["stats"]["correct_count"] == 0

    assert client.post(f"{cards}/answer", json={"grade": "maybe"}).status_code == 422
