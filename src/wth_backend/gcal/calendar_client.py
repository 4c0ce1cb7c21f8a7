"""
Google Calendar Client
"""

import logging
from functools import lru_cache
from typing import Any, Dict, List, Optional

from googleapiclient.discovery import build
from google.oauth2.credentials import Credentials

from wth_backend.config import settings, missing_settings, CALENDAR_KEYS
from wth_backend.constants import CALENDAR_SETTINGS
from wth_backend.gcal.utils.datetime_utils import day_window_utc

# Set up logging
logger = logging.getLogger(__name__)


class CalendarConfigError(RuntimeError):
    """Raised when the OAuth settings needed to reach Google are missing."""


class GoogleCalendarClient:
    """
    Read-only access to one Google Calendar.

    Authenticates with a long-lived refresh token; google-auth exchanges it
    for an access token on the first request.
    """

    def __init__(
        self,
        calendar_id: Optional[str] = None,
        timezone: Optional[str] = None,
        service: Any = None,
    ):
        """
        Initialize the Google Calendar client.

        Args:
            calendar_id: Calendar to query (defaults to GOOGLE_CALENDAR_ID)
            timezone: Timezone hint sent with every query (defaults to DEFAULT_TZ)
            service: Prebuilt Calendar API resource; built from settings when omitted
        """
        self.calendar_id = calendar_id or settings.GOOGLE_CALENDAR_ID
        self.timezone = timezone or settings.DEFAULT_TZ
        self._service = service

    @property
    def service(self):
        if self._service is None:
            self._service = self._initialize_service()
        return self._service

    def _initialize_service(self):
        """Build the Calendar API resource from the refresh-token credentials."""
        missing = missing_settings(*CALENDAR_KEYS)
        if missing:
            raise CalendarConfigError(
                f"Google Calendar credentials missing: {', '.join(missing)}"
            )

        creds = Credentials(
            token=None,
            refresh_token=settings.GOOGLE_REFRESH_TOKEN,
            client_id=settings.GOOGLE_CLIENT_ID,
            client_secret=settings.GOOGLE_CLIENT_SECRET,
            token_uri=CALENDAR_SETTINGS.TOKEN_URI,
            scopes=CALENDAR_SETTINGS.SCOPES,
        )
        service = build(
            "calendar",
            CALENDAR_SETTINGS.API_VERSION,
            credentials=creds,
            cache_discovery=False,
        )
        logger.info("Google Calendar client initialized for %s", self.calendar_id)
        return service

    def list_day_events(self, date: str) -> List[Dict[str, Any]]:
        """
        List every event instance on one date.

        Recurring events are expanded and the result is ordered by start
        time. At most CALENDAR_SETTINGS.MAX_RESULTS instances are returned;
        there is no pagination past that.

        Args:
            date: Date in YYYY-MM-DD format

        Returns:
            Raw Google Calendar event items (possibly empty)
        """
        time_min, time_max = day_window_utc(date)
        logger.info("Querying %s from %s to %s (%s)", self.calendar_id, time_min, time_max, self.timezone)

        events_result = self.service.events().list(
            calendarId=self.calendar_id,
            timeMin=time_min,
            timeMax=time_max,
            timeZone=self.timezone,
            singleEvents=True,
            orderBy="startTime",
            maxResults=CALENDAR_SETTINGS.MAX_RESULTS,
        ).execute()

        return events_result.get("items") or []


@lru_cache(maxsize=1)
def get_calendar_client() -> GoogleCalendarClient:
    """FastAPI dependency returning the shared calendar client."""
    return GoogleCalendarClient()


def provider_error_message(error: Exception) -> str:
    """The provider's own message for an error (HttpError keeps it in ``reason``)."""
    return getattr(error, "reason", None) or str(error) or error.__class__.__name__
