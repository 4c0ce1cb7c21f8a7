"""
ElevenLabs Outbound Call Client

Places one real phone call per invocation. There is no idempotency key:
calling twice places two calls.
"""

import logging
from functools import lru_cache
from typing import Any, Dict, Optional

from elevenlabs.client import ElevenLabs

from wth_backend.config import settings, CALL_KEYS

logger = logging.getLogger(__name__)


class TelephonyConfigError(RuntimeError):
    """Agent id or agent phone line is not configured."""


class OutboundCallClient:

    def __init__(
        self,
        client: Optional[ElevenLabs] = None,
        agent_id: Optional[str] = None,
        agent_phone_number_id: Optional[str] = None,
    ):
        self._client = client
        self.agent_id = agent_id if agent_id is not None else settings.ELEVEN_AGENT_ID
        self.agent_phone_number_id = (
            agent_phone_number_id if agent_phone_number_id is not None
            else settings.ELEVEN_AGENT_PHONE_NUMBER_ID
        )

    @property
    def client(self) -> ElevenLabs:
        if self._client is None:
            self._client = ElevenLabs(api_key=settings.ELEVEN_API_KEY)
        return self._client

    def check_configuration(self) -> None:
        missing = [
            name for name, value in zip(CALL_KEYS, (self.agent_id, self.agent_phone_number_id))
            if not value
        ]
        if missing:
            raise TelephonyConfigError(f"Missing ElevenLabs settings: {', '.join(missing)}")

    def place_call(
        self,
        to_number: str,
        conversation_initiation_client_data: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Ask the voice agent to call ``to_number``.

        Args:
            to_number: Full number, country code included
            conversation_initiation_client_data: Optional dynamic variables for the agent

        Returns:
            Provider call id, or "unknown" when the provider returns none

        Raises:
            TelephonyConfigError: Before any provider call when configuration is missing
        """
        self.check_configuration()

        call_options = {
            "agent_id": self.agent_id,
            "agent_phone_number_id": self.agent_phone_number_id,
            "to_number": to_number,
        }
        if conversation_initiation_client_data:
            call_options["conversation_initiation_client_data"] = conversation_initiation_client_data

        logger.info("Triggering call to %s via agent %s", to_number, self.agent_id)
        result = self.client.conversational_ai.sip_trunk.outbound_call(**call_options)
        logger.info("Call triggered successfully: %s", result)

        return (
            getattr(result, "sip_call_id", None)
            or getattr(result, "conversation_id", None)
            or "unknown"
        )


@lru_cache(maxsize=1)
def get_call_client() -> OutboundCallClient:
    """FastAPI dependency returning the shared call client."""
    return OutboundCallClient()
