"""
Event Breakdown Data Transfer Objects (DTOs)

- BreakdownRequest: event fields posted by the client
- Subtask: one normalized checklist item
- BreakdownResponse: generated checklist for one event
"""

import json
from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator


Priority = Literal["high", "medium", "low"]


def coerce_text(value: Any) -> Optional[str]:
    """
    Read any JSON value as text.

    Falsy non-strings (0, false, [], {}) count as absent; other numbers and
    booleans are rendered as strings, containers as compact JSON.
    """
    if value is None or isinstance(value, str):
        return value
    if not value:
        return None
    if isinstance(value, bool):
        return "true"
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value, separators=(",", ":"))


class BreakdownRequest(BaseModel):
    """
    Every field is optional at the model level so the route can report
    exactly which required ones are missing instead of a generic 422.
    """
    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    date: Optional[str] = None
    startTime: Optional[str] = None
    endTime: Optional[str] = None
    duration: Optional[Union[int, float, str]] = None
    description: Optional[str] = None
    location: Optional[str] = None
    eventType: Optional[str] = None

    @field_validator("title", "date", "startTime", "endTime", "description", "location", "eventType", mode="before")
    @classmethod
    def _text(cls, value: Any) -> Optional[str]:
        return coerce_text(value)

    @field_validator("duration", mode="before")
    @classmethod
    def _duration(cls, value: Any) -> Optional[Union[int, float, str]]:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return coerce_text(value)
        return value


class Subtask(BaseModel):
    id: str
    text: str
    estimatedTime: str
    priority: Priority
    completed: bool = False


class BreakdownResponse(BaseModel):
    eventId: str
    eventTitle: str
    eventDate: str
    subtasks: List[Subtask]
    generatedAt: str


class MissingFieldsResponse(BaseModel):
    error: str = "Missing required fields"
    required: List[str]
    missing: List[str]
    received: dict


class BreakdownErrorResponse(BaseModel):
    error: str
    message: str
