"""
Application Constants
"""

import re


class APP_SETTINGS:
    """Service metadata"""
    APP_NAME = "WTH MVP Backend"
    VERSION = "1.0.0"
    DESCRIPTION = "Calendar day proxy, AI event breakdowns and briefing calls"


class CALENDAR_SETTINGS:
    """Calendar day query settings"""
    API_VERSION = "v3"
    SCOPES = ["https://www.googleapis.com/auth/calendar.readonly"]
    TOKEN_URI = "https://oauth2.googleapis.com/token"
    MAX_RESULTS = 2500
    DATE_PATTERN = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")


class BREAKDOWN_SETTINGS:
    """Event breakdown settings"""
    REQUIRED_FIELDS = ["title", "date", "startTime", "endTime", "duration"]
    PRIORITIES = ("high", "medium", "low")
    DEFAULT_ESTIMATED_TIME = "15 minutes"
    DEFAULT_PRIORITY = "medium"
    MIN_SUBTASKS = 5
    MAX_SUBTASKS = 8


class CALL_SETTINGS:
    """Outbound call settings"""
    COUNTRY_CODE_PATTERN = re.compile(r"^\+[1-9][0-9]{0,3}$")
    PHONE_NUMBER_PATTERN = re.compile(r"^[0-9]{7,15}$")
    PHONE_NUMBER_STRIP = re.compile(r"[\s\-\(\)]")


class STORAGE_KEYS:
    """Keys used in device-side key-value storage"""
    EVENT_BREAKDOWNS = "eventBreakdowns"
    USER_SETTINGS = "user_settings"
    CALENDAR_EVENTS_PREFIX = "calendar_events_"
    COUNTRY_CODE = "userCountryCode"
    PHONE_NUMBER = "userPhoneNumber"


class SETTINGS_LIMITS:
    """Inclusive ranges for user settings"""
    SLEEP_HOURS = (1, 24)
    GET_READY_MINUTES = (0, 480)
    COMMUTE_MINUTES = (0, 300)
    INT_PREFIX = re.compile(r"\s*([+-]?[0-9]+)")
