"""
Device-side API Client

Talks to the backend the way the mobile app does, and keeps the results in
local storage: fetched days go to the event cache, accepted breakdowns go to
the checklist store.
"""

import logging
from datetime import date as date_cls, timedelta
from typing import Any, Dict, List, Optional, Sequence

import requests

from wth_backend.breakdown.dto import BreakdownResponse, Subtask
from wth_backend.calls.briefing import build_tomorrow_briefing
from wth_backend.calls.dto import TriggerCallResponse
from wth_backend.db.checklist_store import BreakdownRecord, ChecklistStore
from wth_backend.db.event_cache import EventCache
from wth_backend.db.persistence import KeyValueStorage
from wth_backend.db.phone_store import PhoneNumberStore
from wth_backend.gcal.dto import CalendarEvent
from wth_backend.gcal.utils.datetime_utils import split_event_times

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-2xx reply from the backend; ``message`` is what the user sees."""

    def __init__(self, status_code: int, message: str, body: Any = None):
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.body = body


class BreakdownExistsError(RuntimeError):
    pass


def _error_message(body: Any, fallback: str) -> str:
    if isinstance(body, dict):
        for key in ("message", "details", "error"):
            if body.get(key):
                return str(body[key])
    return fallback


class ApiClient:

    def __init__(
        self,
        base_url: str,
        storage: KeyValueStorage,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout
        self.checklists = ChecklistStore(storage)
        self.event_cache = EventCache(storage)
        self.phone_numbers = PhoneNumberStore(storage)

    def _request(self, method: str, path: str, **kwargs) -> Any:
        response = self.session.request(method, f"{self.base_url}{path}", timeout=self.timeout, **kwargs)
        try:
            body = response.json()
        except ValueError:
            body = response.text
        if not response.ok:
            message = _error_message(body, response.reason or "Request failed")
            logger.error("%s %s failed with %s: %s", method, path, response.status_code, message)
            raise ApiError(response.status_code, message, body)
        return body

    # -- calendar -------------------------------------------------------

    def get_day_events(self, date: str) -> List[CalendarEvent]:
        """Fetch one day's events and cache the raw items for that day."""
        body = self._request("GET", "/calendar/day", params={"date": date})
        items = body.get("items") or []
        self.event_cache.put(date, items)
        return [CalendarEvent.model_validate(item) for item in items]

    # -- breakdowns -----------------------------------------------------

    def break_down_event(self, event: CalendarEvent) -> BreakdownResponse:
        """
        Ask the backend for a preparation checklist for ``event``.

        Raises:
            BreakdownExistsError: A breakdown was already accepted for this event
            ApiError: The backend rejected the request or the AI call failed
        """
        if self.checklists.has_breakdown(event.id):
            raise BreakdownExistsError(f"Event {event.id} already has a breakdown")

        payload = {
            "title": event.summary,
            **split_event_times(event),
            "description": event.description or "",
            "location": event.location or "",
            "eventType": "meeting",
        }
        body = self._request("POST", "/api/events/breakdown", json=payload)
        return BreakdownResponse.model_validate(body)

    def accept_breakdown(self, event: CalendarEvent, selected: Sequence[Subtask]) -> BreakdownRecord:
        """Store the subtasks the user kept, keyed by the calendar event's id."""
        return self.checklists.save(event.id, selected)

    # -- calls ----------------------------------------------------------

    def trigger_call(
        self,
        country_code: str,
        phone_number: str,
        conversation_initiation_client_data: Optional[Dict[str, Any]] = None,
    ) -> TriggerCallResponse:
        payload = {"countryCode": country_code, "phoneNumber": phone_number}
        if conversation_initiation_client_data is not None:
            payload["conversation_initiation_client_data"] = conversation_initiation_client_data
        body = self._request("POST", "/api/calls/trigger", json=payload)
        return TriggerCallResponse.model_validate(body)

    def trigger_tomorrow_briefing(self, today: Optional[date_cls] = None) -> TriggerCallResponse:
        """
        Call the saved number, briefing the agent with tomorrow's cached events.

        Raises:
            ValueError: No phone number has been saved
        """
        saved = self.phone_numbers.get()
        if saved is None:
            raise ValueError("Please save a phone number first")

        tomorrow = ((today or date_cls.today()) + timedelta(days=1)).isoformat()
        events = self.event_cache.get(tomorrow)
        country_code, phone_number = saved
        return self.trigger_call(country_code, phone_number, build_tomorrow_briefing(events, tomorrow))
