"""Tests for the outbound call trigger and status endpoints."""
from types import SimpleNamespace

from conftest import FakeElevenLabs
from wth_backend.calls.briefing import build_tomorrow_briefing
from wth_backend.calls.telephony_client import OutboundCallClient, get_call_client


EVENTS = [
    {"summary": "Standup", "start": {"dateTime": "2025-09-21T09:00:00+08:00"}},
    {"summary": "Offsite", "start": {"date": "2025-09-21"}},
]


def test_trigger_places_one_call(client, elevenlabs_client) -> None:
    response = client.post("/api/calls/trigger", json={"countryCode": "+65", "phoneNumber": "81234567"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Call triggered successfully"
    assert body["toNumber"] == "+6581234567"
    assert body["callId"] == "sip_123"
    assert body["conversationData"] is None
    assert elevenlabs_client.sip_calls == [
        {"agent_id": "agent_1", "agent_phone_number_id": "phone_1", "to_number": "+6581234567"}
    ]


def test_trigger_forwards_dynamic_variables(client, elevenlabs_client) -> None:
    briefing = build_tomorrow_briefing(EVENTS, "2025-09-21")

    response = client.post(
        "/api/calls/trigger",
        json={"countryCode": "+1", "phoneNumber": "5551234567", "conversation_initiation_client_data": briefing},
    )

    assert response.status_code == 200
    assert response.json()["conversationData"] == {
        "date": "2025-09-21",
        "eventCount": 2,
        "message": briefing["dynamic_variables"]["message"],
    }
    sent = elevenlabs_client.sip_calls[0]["conversation_initiation_client_data"]
    assert sent["dynamic_variables"]["events"] == EVENTS


def test_calling_twice_places_two_calls(client, elevenlabs_client) -> None:
    payload = {"countryCode": "+44", "phoneNumber": "7700900123"}

    client.post("/api/calls/trigger", json=payload)
    client.post("/api/calls/trigger", json=payload)

    assert len(elevenlabs_client.sip_calls) == 2


def test_missing_phone_fields(client, elevenlabs_client) -> None:
    for payload in ({"countryCode": "+65"}, {"phoneNumber": "81234567"}, {}):
        response = client.post("/api/calls/trigger", json=payload)

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Country code and phone number are required"}
    assert elevenlabs_client.sip_calls == []


def test_numeric_phone_fields_are_accepted(client, elevenlabs_client) -> None:
    response = client.post("/api/calls/trigger", json={"countryCode": "+65", "phoneNumber": 81234567})

    assert response.status_code == 200
    assert response.json()["toNumber"] == "+6581234567"
    assert elevenlabs_client.sip_calls[0]["to_number"] == "+6581234567"


def test_missing_agent_configuration(app, client) -> None:
    fake = FakeElevenLabs()
    app.dependency_overrides[get_call_client] = lambda: OutboundCallClient(
        client=fake, agent_id="agent_1", agent_phone_number_id=""
    )

    response = client.post("/api/calls/trigger", json={"countryCode": "+65", "phoneNumber": "81234567"})

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "error": "ElevenLabs configuration missing. Please check environment variables.",
    }
    assert fake.sip_calls == []


def test_provider_error_is_forwarded(app, client) -> None:
    fake = FakeElevenLabs(error=RuntimeError("Agent phone number not found"))
    app.dependency_overrides[get_call_client] = lambda: OutboundCallClient(
        client=fake, agent_id="agent_1", agent_phone_number_id="phone_1"
    )

    response = client.post("/api/calls/trigger", json={"countryCode": "+65", "phoneNumber": "81234567"})

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "error": "Failed to trigger call",
        "details": "Agent phone number not found",
    }


def test_call_id_falls_back_to_unknown(app, client) -> None:
    fake = FakeElevenLabs(result=SimpleNamespace(success=True, message="queued"))
    app.dependency_overrides[get_call_client] = lambda: OutboundCallClient(
        client=fake, agent_id="agent_1", agent_phone_number_id="phone_1"
    )

    response = client.post("/api/calls/trigger", json={"countryCode": "+65", "phoneNumber": "81234567"})

    assert response.json()["callId"] == "unknown"


def test_status_is_placeholder(client) -> None:
    response = client.get("/api/calls/status/abc123")

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "callId": "abc123",
        "status": "unknown",
        "message": "Call status endpoint - implementation pending",
    }


def test_briefing_message() -> None:
    briefing = build_tomorrow_briefing(EVENTS, "2025-09-21")["dynamic_variables"]

    assert briefing["message"] == (
        "Here are my events for tomorrow (2025-09-21): "
        "Standup at 2025-09-21T09:00:00+08:00, Offsite at 2025-09-21"
    )
    empty = build_tomorrow_briefing([], "2025-09-21")["dynamic_variables"]
    assert empty["message"] == "Here are my events for tomorrow (2025-09-21): No events scheduled"
    assert empty["events"] == []
