"""Tests for the device-side API client against a fake HTTP session."""
from datetime import date

import pytest

from conftest import make_subtasks_json
from wth_backend.breakdown.dto import BreakdownResponse
from wth_backend.client.api_client import ApiClient, ApiError, BreakdownExistsError
from wth_backend.db.event_cache import EventCache
from wth_backend.gcal.dto import CalendarEvent


class FakeResponse:
    def __init__(self, status_code: int, body) -> None:
        self.status_code = status_code
        self._body = body
        self.ok = 200 <= status_code < 300
        self.reason = "Internal Server Error" if status_code >= 500 else "OK"
        self.text = str(body)

    def json(self):
        if isinstance(self._body, str):
            raise ValueError("not json")
        return self._body


class FakeSession:
    def __init__(self, *responses: FakeResponse) -> None:
        self.responses = list(responses)
        self.requests: list[dict] = []

    def request(self, method: str, url: str, **kwargs) -> FakeResponse:
        self.requests.append({"method": method, "url": url, **kwargs})
        return self.responses.pop(0)


TIMED_EVENT = {
    "id": "evt1",
    "summary": "Team sync",
    "start": {"dateTime": "2025-09-20T09:00:00+08:00"},
    "end": {"dateTime": "2025-09-20T09:30:00+08:00"},
    "location": "Room 4",
}

BREAKDOWN = {
    "eventId": "event_1_abcdefghi",
    "eventTitle": "Team sync",
    "eventDate": "2025-09-20",
    "subtasks": [
        {"id": "subtask_1", "text": "Prepare notes", "estimatedTime": "10 minutes", "priority": "high"},
    ],
    "generatedAt": "2025-09-19T12:00:00.000Z",
}


def test_get_day_events_caches_items(storage) -> None:
    session = FakeSession(FakeResponse(200, {"date": "2025-09-20", "tz": "UTC", "calendarId": "primary",
                                             "items": [TIMED_EVENT]}))
    api = ApiClient("http://backend/", storage, session=session)

    events = api.get_day_events("2025-09-20")

    assert [e.id for e in events] == ["evt1"]
    assert session.requests[0]["url"] == "http://backend/calendar/day"
    assert session.requests[0]["params"] == {"date": "2025-09-20"}
    assert EventCache(storage).get("2025-09-20") == [TIMED_EVENT]


def test_break_down_event_builds_request(storage) -> None:
    session = FakeSession(FakeResponse(200, BREAKDOWN))
    api = ApiClient("http://backend", storage, session=session)

    result = api.break_down_event(CalendarEvent.model_validate(TIMED_EVENT))

    assert isinstance(result, BreakdownResponse)
    assert session.requests[0]["json"] == {
        "title": "Team sync",
        "date": "2025-09-20",
        "startTime": "09:00:00",
        "endTime": "09:30:00",
        "duration": 30,
        "description": "",
        "location": "Room 4",
        "eventType": "meeting",
    }


def test_accepted_breakdown_blocks_regeneration(storage) -> None:
    session = FakeSession(FakeResponse(200, BREAKDOWN))
    api = ApiClient("http://backend", storage, session=session)
    event = CalendarEvent.model_validate(TIMED_EVENT)

    result = api.break_down_event(event)
    api.accept_breakdown(event, result.subtasks)

    assert api.checklists.get("evt1").subtasks == result.subtasks
    with pytest.raises(BreakdownExistsError):
        api.break_down_event(event)
    assert len(session.requests) == 1


def test_server_error_message_is_surfaced(storage) -> None:
    session = FakeSession(FakeResponse(500, {"error": "Failed to parse AI response",
                                             "message": "OpenAI returned invalid JSON format"}))
    api = ApiClient("http://backend", storage, session=session)

    with pytest.raises(ApiError) as excinfo:
        api.break_down_event(CalendarEvent.model_validate(TIMED_EVENT))

    assert excinfo.value.status_code == 500
    assert excinfo.value.message == "OpenAI returned invalid JSON format"


def test_non_json_error_body(storage) -> None:
    api = ApiClient("http://backend", storage, session=FakeSession(FakeResponse(502, "<html>bad gateway</html>")))

    with pytest.raises(ApiError) as excinfo:
        api.get_day_events("2025-09-20")

    assert excinfo.value.message == "Internal Server Error"


def test_tomorrow_briefing_uses_cached_events(storage) -> None:
    session = FakeSession(FakeResponse(200, {
        "success": True, "message": "Call triggered successfully", "callId": "sip_1",
        "toNumber": "+6581234567", "conversationData": {"date": "2025-09-21", "eventCount": 1, "message": "x"},
    }))
    api = ApiClient("http://backend", storage, session=session)
    api.phone_numbers.save("+65", "81234567")
    EventCache(storage).put("2025-09-21", [TIMED_EVENT])

    result = api.trigger_tomorrow_briefing(today=date(2025, 9, 20))

    assert result.success is True
    sent = session.requests[0]["json"]
    assert sent["countryCode"] == "+65"
    assert sent["phoneNumber"] == "81234567"
    variables = sent["conversation_initiation_client_data"]["dynamic_variables"]
    assert variables["date"] == "2025-09-21"
    assert variables["events"] == [TIMED_EVENT]


def test_tomorrow_briefing_requires_saved_number(storage) -> None:
    api = ApiClient("http://backend", storage, session=FakeSession())

    with pytest.raises(ValueError, match="save a phone number"):
        api.trigger_tomorrow_briefing()


def test_subtask_json_fixture_is_wrapped() -> None:
    assert make_subtasks_json(count=1).startswith('{"subtasks"')
