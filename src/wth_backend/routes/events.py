import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from wth_backend.breakdown.dto import (
    BreakdownErrorResponse,
    BreakdownRequest,
    BreakdownResponse,
    MissingFieldsResponse,
)
from wth_backend.breakdown.generator import (
    BreakdownError,
    EventBreakdownGenerator,
    get_breakdown_generator,
    missing_required_fields,
)
from wth_backend.constants import BREAKDOWN_SETTINGS

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/breakdown",
    response_model=BreakdownResponse,
    responses={400: {"model": MissingFieldsResponse}, 500: {"model": BreakdownErrorResponse}},
)
def breakdown_event(
    request: Optional[BreakdownRequest] = None,
    generator: EventBreakdownGenerator = Depends(get_breakdown_generator),
):
    """
    Break one event down into 5-8 preparation subtasks.

    Flow:
    1. Check the five required fields (400 listing the missing ones)
    2. Prompt the LLM and parse its JSON
    3. Normalize ids, estimates and priorities
    """
    request = request or BreakdownRequest()
    logger.info("Event breakdown request received for %r", request.title)

    missing = missing_required_fields(request)
    if missing:
        body = MissingFieldsResponse(
            required=list(BREAKDOWN_SETTINGS.REQUIRED_FIELDS),
            missing=missing,
            received={name: getattr(request, name) for name in BREAKDOWN_SETTINGS.REQUIRED_FIELDS},
        )
        return JSONResponse(status_code=400, content=body.model_dump())

    try:
        response = generator.generate(request)
    except BreakdownError as e:
        logger.error("Breakdown failed (%s): %s", e.error, e.message)
        body = BreakdownErrorResponse(error=e.error, message=e.message)
        return JSONResponse(status_code=500, content=body.model_dump())

    logger.info("Sending %d subtasks for %s", len(response.subtasks), response.eventId)
    return response
