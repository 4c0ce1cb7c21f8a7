import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from wth_backend.calls.briefing import summarize_conversation_data
from wth_backend.calls.dto import CallErrorResponse, CallStatusResponse, TriggerCallRequest, TriggerCallResponse
from wth_backend.calls.telephony_client import OutboundCallClient, TelephonyConfigError, get_call_client

logger = logging.getLogger(__name__)

router = APIRouter()


def _error(status_code: int, error: str, details: Optional[str] = None) -> JSONResponse:
    body = CallErrorResponse(error=error, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@router.post(
    "/trigger",
    response_model=TriggerCallResponse,
    responses={400: {"model": CallErrorResponse}, 500: {"model": CallErrorResponse}},
)
def trigger_call(
    request: Optional[TriggerCallRequest] = None,
    call_client: OutboundCallClient = Depends(get_call_client),
):
    """
    Have the voice agent call countryCode + phoneNumber.

    Every invocation places a real call; there is no dedup.
    """
    request = request or TriggerCallRequest()
    if not request.countryCode or not request.phoneNumber:
        return _error(400, "Country code and phone number are required")

    try:
        call_client.check_configuration()
    except TelephonyConfigError as e:
        logger.error("%s", e)
        return _error(500, "ElevenLabs configuration missing. Please check environment variables.")

    to_number = f"{request.countryCode}{request.phoneNumber}"
    conversation_data = request.conversation_initiation_client_data
    if conversation_data and conversation_data.dynamic_variables:
        logger.info("Dynamic variables: %s", conversation_data.dynamic_variables)

    try:
        call_id = call_client.place_call(
            to_number,
            conversation_data.model_dump(exclude_none=True) if conversation_data else None,
        )
    except Exception as e:
        logger.exception("Error triggering call to %s", to_number)
        return _error(500, "Failed to trigger call", str(e))

    return TriggerCallResponse(
        success=True,
        message="Call triggered successfully",
        callId=call_id,
        toNumber=to_number,
        conversationData=summarize_conversation_data(conversation_data),
    )


@router.get("/status/{call_id}", response_model=CallStatusResponse)
def call_status(call_id: str):
    # TODO: look the call up via the ElevenLabs conversations API once call ids are persisted
    return CallStatusResponse(
        success=True,
        callId=call_id,
        status="unknown",
        message="Call status endpoint - implementation pending",
    )
