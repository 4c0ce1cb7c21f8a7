"""
Event Breakdown Generator

Turns one calendar event into a preparation checklist:
prompt → LLM completion → JSON parse → shape decode → normalization.
Nothing is retried or repaired; every failure is terminal for the request.
"""

import json
import logging
import random
import string
import time
from enum import Enum
from functools import lru_cache
from typing import Any, Dict, List, Optional

from openai import OpenAI

from wth_backend.config import settings, missing_settings, BREAKDOWN_KEYS
from wth_backend.constants import BREAKDOWN_SETTINGS
from wth_backend.breakdown.dto import BreakdownRequest, BreakdownResponse, Subtask
from wth_backend.breakdown.prompts import build_breakdown_prompt
from wth_backend.gcal.utils.datetime_utils import utc_now_iso

logger = logging.getLogger(__name__)


class BreakdownError(Exception):
    """Base class for breakdown failures; ``error`` and ``message`` form the 500 body."""
    error = "Failed to generate subtasks"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BreakdownConfigError(BreakdownError):
    pass


class InvalidAIResponseError(BreakdownError):
    error = "Failed to parse AI response"

    def __init__(self, message: str = "OpenAI returned invalid JSON format"):
        super().__init__(message)


class InvalidSubtasksError(BreakdownError):
    error = "Invalid subtasks format"

    def __init__(self, message: str = "OpenAI returned empty or invalid subtasks"):
        super().__init__(message)


class ResponseShape(str, Enum):
    """How the model laid out its subtasks."""
    WRAPPED = "wrapped"  # {"subtasks": [...]}
    BARE = "bare"        # [...]


def missing_required_fields(request: BreakdownRequest) -> List[str]:
    """Names of required fields that are absent or empty, in declaration order."""
    return [name for name in BREAKDOWN_SETTINGS.REQUIRED_FIELDS if not getattr(request, name)]


def generate_event_id() -> str:
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=9))
    return f"event_{int(time.time() * 1000)}_{suffix}"


def parse_model_output(raw_text: str) -> Any:
    try:
        return json.loads(raw_text)
    except (TypeError, ValueError) as e:
        logger.error("Failed to parse JSON response: %s", e)
        raise InvalidAIResponseError() from e


def classify_response(parsed: Any) -> ResponseShape:
    if isinstance(parsed, dict) and "subtasks" in parsed:
        return ResponseShape.WRAPPED
    if isinstance(parsed, list):
        return ResponseShape.BARE
    raise InvalidSubtasksError()


def decode_subtasks(parsed: Any) -> List[Any]:
    """
    Pull the subtask sequence out of a parsed model response.

    Raises:
        InvalidSubtasksError: The value is neither shape, or the sequence is empty
    """
    shape = classify_response(parsed)
    if shape is ResponseShape.WRAPPED:
        items = parsed["subtasks"]
    else:
        items = parsed

    if not isinstance(items, list) or not items:
        raise InvalidSubtasksError()
    return items


def _subtask_text(raw: Any) -> str:
    if isinstance(raw, dict):
        text = raw.get("text")
        if text:
            return str(text)
        return json.dumps(raw)
    return str(raw)


def _estimated_time(raw: Any) -> str:
    value = raw.get("estimatedTime") if isinstance(raw, dict) else None
    if value is None or value == "":
        return BREAKDOWN_SETTINGS.DEFAULT_ESTIMATED_TIME
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return f"{value} minutes"
    return str(value)


def _priority(raw: Any) -> str:
    value = raw.get("priority") if isinstance(raw, dict) else None
    if isinstance(value, str) and value.lower() in BREAKDOWN_SETTINGS.PRIORITIES:
        return value.lower()
    return BREAKDOWN_SETTINGS.DEFAULT_PRIORITY


def normalize_subtasks(items: List[Any]) -> List[Subtask]:
    """Re-number subtasks as subtask_1..k and fill in defaults."""
    return [
        Subtask(
            id=f"subtask_{index}",
            text=_subtask_text(raw),
            estimatedTime=_estimated_time(raw),
            priority=_priority(raw),
        )
        for index, raw in enumerate(items, 1)
    ]


class EventBreakdownGenerator:
    """Generates preparation checklists with the OpenAI Responses API."""

    def __init__(self, client: Optional[OpenAI] = None, model: Optional[str] = None):
        self._client = client
        self.model = model or settings.BREAKDOWN_MODEL

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            missing = missing_settings(*BREAKDOWN_KEYS)
            if missing:
                raise BreakdownConfigError(f"OpenAI configuration missing: {', '.join(missing)}")
            self._client = OpenAI(api_key=settings.OPENAI_API_KEY)
        return self._client

    def complete(self, prompt: str) -> str:
        logger.info("Calling OpenAI (%s) for event breakdown", self.model)
        response = self.client.responses.create(model=self.model, input=prompt)
        return response.output_text

    def generate(self, request: BreakdownRequest) -> BreakdownResponse:
        """
        Build the checklist for one event.

        Args:
            request: Event fields; the required ones must already be checked

        Returns:
            BreakdownResponse with a fresh event id and normalized subtasks

        Raises:
            BreakdownError: On misconfiguration, provider failure or a bad response
        """
        prompt = build_breakdown_prompt(
            title=request.title,
            date=request.date,
            start_time=request.startTime,
            end_time=request.endTime,
            duration=request.duration,
            description=request.description,
            location=request.location,
            event_type=request.eventType,
        )

        try:
            raw_text = self.complete(prompt)
        except BreakdownError:
            raise
        except Exception as e:
            logger.error("OpenAI request failed: %s", e)
            raise BreakdownError(str(e)) from e

        logger.debug("OpenAI response: %s", raw_text)
        subtasks = normalize_subtasks(decode_subtasks(parse_model_output(raw_text)))

        if not BREAKDOWN_SETTINGS.MIN_SUBTASKS <= len(subtasks) <= BREAKDOWN_SETTINGS.MAX_SUBTASKS:
            logger.warning(
                "Breakdown for '%s' has %d subtasks, expected %d-%d",
                request.title, len(subtasks),
                BREAKDOWN_SETTINGS.MIN_SUBTASKS, BREAKDOWN_SETTINGS.MAX_SUBTASKS,
            )

        return BreakdownResponse(
            eventId=generate_event_id(),
            eventTitle=request.title,
            eventDate=request.date,
            subtasks=subtasks,
            generatedAt=utc_now_iso(),
        )


@lru_cache(maxsize=1)
def get_breakdown_generator() -> EventBreakdownGenerator:
    """FastAPI dependency returning the shared generator."""
    return EventBreakdownGenerator()
