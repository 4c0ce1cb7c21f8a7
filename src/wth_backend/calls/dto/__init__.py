"""
Outbound Call Data Transfer Objects (DTOs)
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from wth_backend.breakdown.dto import coerce_text


class DynamicVariables(BaseModel):
    """Variables the voice agent can reference during the call."""
    model_config = ConfigDict(extra="allow")

    date: Optional[str] = None
    events: List[Dict[str, Any]] = []
    message: Optional[str] = None


class ConversationInitiationData(BaseModel):
    model_config = ConfigDict(extra="allow")

    dynamic_variables: Optional[DynamicVariables] = None


class TriggerCallRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    countryCode: Optional[str] = None
    phoneNumber: Optional[str] = None
    conversation_initiation_client_data: Optional[ConversationInitiationData] = None

    @field_validator("countryCode", "phoneNumber", mode="before")
    @classmethod
    def _text(cls, value: Any) -> Optional[str]:
        return coerce_text(value)


class ConversationSummary(BaseModel):
    date: Optional[str] = None
    eventCount: int = 0
    message: Optional[str] = None


class TriggerCallResponse(BaseModel):
    success: bool
    message: str
    callId: str
    toNumber: str
    conversationData: Optional[ConversationSummary] = None


class CallStatusResponse(BaseModel):
    success: bool
    callId: str
    status: str
    message: str


class CallErrorResponse(BaseModel):
    success: bool = False
    error: str
    details: Optional[str] = None
