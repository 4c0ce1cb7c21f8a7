import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from wth_backend.gcal.calendar_client import GoogleCalendarClient, get_calendar_client, provider_error_message
from wth_backend.gcal.utils.datetime_utils import is_valid_day, utc_now_iso
from wth_backend.routes.dto import DayEventsResponse, ErrorResponse

# Set up logging
logger = logging.getLogger(__name__)

router = APIRouter()


def _error(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=error).model_dump(exclude_none=True))


@router.get("/test")
def calendar_test():
    return {"message": "Calendar router is working!", "timestamp": utc_now_iso()}


@router.get(
    "/day",
    response_model=DayEventsResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def day_events(
    date: str = Query(default="", description="Calendar date as YYYY-MM-DD"),
    calendar_client: GoogleCalendarClient = Depends(get_calendar_client),
):
    """
    Every event instance on one date, recurring events expanded, ordered by start.

    Malformed dates are rejected before any call to Google. Provider failures
    come back as 500 with the provider's message; nothing is retried.
    """
    date = date.strip()
    if not is_valid_day(date):
        logger.info("Invalid date format: %r", date)
        return _error(400, "Provide ?date=YYYY-MM-DD")

    try:
        items = calendar_client.list_day_events(date)
    except Exception as e:
        logger.exception("Calendar query failed for %s", date)
        return _error(500, provider_error_message(e))

    logger.info("Returning %d events for %s", len(items), date)
    return DayEventsResponse(
        date=date,
        tz=calendar_client.timezone,
        calendarId=calendar_client.calendar_id,
        items=items,
    )
