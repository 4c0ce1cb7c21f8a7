import time

from fastapi import APIRouter

from wth_backend.config import settings, missing_settings, CALENDAR_KEYS, BREAKDOWN_KEYS, CALL_KEYS
from wth_backend.constants import APP_SETTINGS
from wth_backend.gcal.utils.datetime_utils import utc_now_iso
from wth_backend.routes.dto import HealthResponse

router = APIRouter()

STARTED_AT = time.time()


def uptime() -> float:
    return time.time() - STARTED_AT


@router.get("", response_model=HealthResponse)
def health_check():
    """Liveness plus which provider integrations are configured (values are never exposed)."""
    components = {
        "google_calendar": "configured" if not missing_settings(*CALENDAR_KEYS) else "missing",
        "openai": "configured" if not missing_settings(*BREAKDOWN_KEYS) else "missing",
        "elevenlabs": "configured" if not missing_settings("ELEVEN_API_KEY", *CALL_KEYS) else "missing",
    }
    return HealthResponse(
        status="healthy",
        service=APP_SETTINGS.APP_NAME,
        version=APP_SETTINGS.VERSION,
        timestamp=utc_now_iso(),
        uptime=uptime(),
        environment=settings.APP_ENV,
        components=components,
    )
