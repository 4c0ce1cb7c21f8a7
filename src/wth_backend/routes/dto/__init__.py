"""
Routes Data Transfer Objects (DTOs)

Response models owned by the HTTP layer itself; feature payloads live in
each feature package's dto module.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class DayEventsResponse(BaseModel):
    """Response model for the calendar day endpoint."""
    date: str
    tz: str
    calendarId: str
    items: List[Dict[str, Any]] = []


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None


class OAuthCodeResponse(BaseModel):
    message: str
    code: str
    instructions: str


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str
    service: Optional[str] = None
    version: Optional[str] = None
    timestamp: Optional[str] = None
    uptime: Optional[float] = None
    environment: Optional[str] = None
    components: Optional[Dict[str, str]] = None
