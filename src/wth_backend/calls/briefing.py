"""
Tomorrow Briefing

Builds the dynamic variables that brief the voice agent on a day's events,
and summarises them back for the trigger response.
"""

from typing import Any, Dict, List, Optional

from wth_backend.calls.dto import ConversationInitiationData, ConversationSummary


def _event_line(event: Dict[str, Any]) -> str:
    start = event.get("start") or {}
    return f"{event.get('summary')} at {start.get('dateTime') or start.get('date')}"


def build_briefing_message(date: str, events: List[Dict[str, Any]]) -> str:
    if events:
        listing = ", ".join(_event_line(event) for event in events)
    else:
        listing = "No events scheduled"
    return f"Here are my events for tomorrow ({date}): {listing}"


def build_tomorrow_briefing(events: List[Dict[str, Any]], date: str) -> Dict[str, Any]:
    """
    Conversation initiation data for a briefing call.

    Args:
        events: Raw calendar items for the day
        date: The day in YYYY-MM-DD format

    Returns:
        {"dynamic_variables": {"date", "events", "message"}}
    """
    return {
        "dynamic_variables": {
            "date": date,
            "events": events,
            "message": build_briefing_message(date, events),
        }
    }


def summarize_conversation_data(
    data: Optional[ConversationInitiationData],
) -> Optional[ConversationSummary]:
    if data is None:
        return None
    variables = data.dynamic_variables
    if variables is None:
        return ConversationSummary()
    return ConversationSummary(
        date=variables.date,
        eventCount=len(variables.events or []),
        message=variables.message,
    )
