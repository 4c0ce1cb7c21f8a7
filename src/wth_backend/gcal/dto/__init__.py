"""
Calendar Data Models

Google returns far more fields than we use; unknown keys are kept so an item
can be forwarded or cached without losing anything.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class EventTime(BaseModel):
    """Either a timed instant (``dateTime``) or an all-day ``date``."""
    model_config = ConfigDict(extra="allow")

    dateTime: Optional[str] = None
    date: Optional[str] = None
    timeZone: Optional[str] = None


class EventPerson(BaseModel):
    model_config = ConfigDict(extra="allow")

    email: Optional[str] = None
    displayName: Optional[str] = None


class CalendarEvent(BaseModel):
    """A calendar item as sourced from the provider."""
    model_config = ConfigDict(extra="allow")

    id: str
    summary: str = ""
    start: EventTime
    end: EventTime
    description: Optional[str] = None
    location: Optional[str] = None
    status: Optional[str] = None
    htmlLink: Optional[str] = None
    creator: Optional[EventPerson] = None
    organizer: Optional[EventPerson] = None
