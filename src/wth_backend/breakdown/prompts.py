"""
Event Breakdown Prompts

The breakdown prompt asks for preparation tasks only, returned as one strict
JSON object. No prompts should exist outside this file.
"""

EVENT_BREAKDOWN_PROMPT = """You are a productivity assistant. Given a calendar event, generate a comprehensive checklist of subtasks.

Event Details:
- Title: {title}
- Date: {date}
- Time: {start_time} - {end_time}
- Duration: {duration} minutes
- Description: {description}
- Location: {location}
- Event Type: {event_type}

Requirements:
- Generate 5–8 subtasks ONLY about preparation *before* the event (ideally the evening/night before).
- Do not include tasks that happen during or after the event itself.
- Subtasks should be specific, actionable, and practical (e.g., "Prepare meeting notes", "Lay out clothes", "Set up Zoom link", "Block distractions").
- "estimatedTime" must be a string in minutes (e.g., "10 minutes").
- "priority" must be one of: "high", "medium", "low".

Return ONLY a valid JSON object with this exact shape:
{{
  "subtasks": [
    {{ "id": "prep_1", "text": "...", "estimatedTime": "X minutes", "priority": "high|medium|low" }}
  ]
}}

Do not include any other text, explanations, or formatting or markdown. Just the JSON object."""


def build_breakdown_prompt(
    title: str,
    date: str,
    start_time: str,
    end_time: str,
    duration,
    description: str = None,
    location: str = None,
    event_type: str = None,
) -> str:
    """Fill the breakdown template, substituting placeholders for absent optional fields."""
    return EVENT_BREAKDOWN_PROMPT.format(
        title=title,
        date=date,
        start_time=start_time,
        end_time=end_time,
        duration=duration,
        description=description or "No description provided",
        location=location or "No location specified",
        event_type=event_type or "Not specified",
    )
