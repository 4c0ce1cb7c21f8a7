import logging
from typing import Optional

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from wth_backend.routes.dto import ErrorResponse, OAuthCodeResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/callback/google", response_model=OAuthCodeResponse, responses={400: {"model": ErrorResponse}})
def google_oauth_callback(
    code: Optional[str] = Query(default=None),
    error: Optional[str] = Query(default=None),
):
    """Receive Google's OAuth redirect and show the code for manual token exchange."""
    if error:
        logger.warning("OAuth error: %s", error)
        body = ErrorResponse(error="OAuth authorization failed", details=error)
        return JSONResponse(status_code=400, content=body.model_dump(exclude_none=True))

    if not code:
        body = ErrorResponse(error="No authorization code received")
        return JSONResponse(status_code=400, content=body.model_dump(exclude_none=True))

    logger.info("Authorization code received")
    return OAuthCodeResponse(
        message="Authorization successful!",
        code=code,
        instructions="Copy this code and exchange it for a refresh token with the Google OAuth client",
    )
