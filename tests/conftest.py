"""Shared fixtures: the app with every provider client swapped for a fake."""
import json
import typing as t
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from wth_backend.breakdown.generator import EventBreakdownGenerator, get_breakdown_generator
from wth_backend.calls.telephony_client import OutboundCallClient, get_call_client
from wth_backend.db.persistence import InMemoryStorage
from wth_backend.gcal.calendar_client import get_calendar_client
from wth_backend.main import create_app


class FakeCalendarClient:
    """Records day queries and returns canned items."""

    def __init__(self, items: list | None = None, error: Exception | None = None) -> None:
        self.items = items or []
        self.error = error
        self.calendar_id = "primary"
        self.timezone = "Asia/Singapore"
        self.queried_dates: list[str] = []

    def list_day_events(self, date: str) -> list[dict]:
        self.queried_dates.append(date)
        if self.error:
            raise self.error
        return self.items


class FakeResponses:
    def __init__(self, output_text: str | None = None, error: Exception | None = None) -> None:
        self.output_text = output_text
        self.error = error
        self.calls: list[dict] = []

    def create(self, **kwargs: t.Any) -> SimpleNamespace:
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return SimpleNamespace(output_text=self.output_text)


class FakeOpenAI:
    def __init__(self, output_text: str | None = None, error: Exception | None = None) -> None:
        self.responses = FakeResponses(output_text, error)


class FakeSipTrunk:
    def __init__(self, result: t.Any = None, error: Exception | None = None) -> None:
        self.result = result if result is not None else SimpleNamespace(
            success=True, message="ok", conversation_id="conv_1", sip_call_id="sip_123"
        )
        self.error = error
        self.calls: list[dict] = []

    def outbound_call(self, **kwargs: t.Any) -> t.Any:
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return self.result


class FakeElevenLabs:
    def __init__(self, result: t.Any = None, error: Exception | None = None) -> None:
        self.conversational_ai = SimpleNamespace(sip_trunk=FakeSipTrunk(result, error))

    @property
    def sip_calls(self) -> list[dict]:
        return self.conversational_ai.sip_trunk.calls


def make_subtasks_json(count: int = 6, wrapped: bool = True) -> str:
    subtasks = [
        {"id": f"prep_{i}", "text": f"Task {i}", "estimatedTime": "10 minutes", "priority": "high"}
        for i in range(1, count + 1)
    ]
    return json.dumps({"subtasks": subtasks} if wrapped else subtasks)


@pytest.fixture
def app():
    application = create_app()
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def calendar_client(app) -> FakeCalendarClient:
    fake = FakeCalendarClient()
    app.dependency_overrides[get_calendar_client] = lambda: fake
    return fake


@pytest.fixture
def openai_client(app) -> FakeOpenAI:
    fake = FakeOpenAI(output_text=make_subtasks_json())
    generator = EventBreakdownGenerator(client=fake, model="gpt-test")
    app.dependency_overrides[get_breakdown_generator] = lambda: generator
    return fake


@pytest.fixture
def elevenlabs_client(app) -> FakeElevenLabs:
    fake = FakeElevenLabs()
    call_client = OutboundCallClient(client=fake, agent_id="agent_1", agent_phone_number_id="phone_1")
    app.dependency_overrides[get_call_client] = lambda: call_client
    return fake


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()
