"""
User Settings Store

Preferences kept on the device under one key. Ranges are inclusive:
sleep hours 1-24, get-ready 0-480 minutes, commute 0-300 minutes.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict

from wth_backend.constants import SETTINGS_LIMITS, STORAGE_KEYS
from wth_backend.db.persistence import KeyValueStorage, read_json, write_json

logger = logging.getLogger(__name__)


class UserSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    sleepHours: Optional[int] = None
    getReadyMinutes: Optional[int] = None
    commuteMinutes: Optional[int] = None


@dataclass
class SettingsForm:
    """Raw text as typed into the settings screen."""
    name: str = ""
    sleepHours: str = ""
    getReadyMinutes: str = ""
    commuteMinutes: str = ""


class SettingsValidationError(ValueError):
    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


def _parse_int(text: Any) -> Optional[int]:
    # Leading integer only: "8.5" and "8h" read as 8
    match = SETTINGS_LIMITS.INT_PREFIX.match(str(text))
    return int(match.group(1)) if match else None


def _in_range(value: Optional[int], bounds) -> bool:
    low, high = bounds
    return value is not None and low <= value <= high


def validate_settings(
    sleep_hours: Optional[int],
    get_ready_minutes: Optional[int],
    commute_minutes: Optional[int],
) -> List[str]:
    """Error messages for every out-of-range value; empty when all are valid."""
    errors = []
    if not _in_range(sleep_hours, SETTINGS_LIMITS.SLEEP_HOURS):
        errors.append("Sleep hours must be between 1 and 24")
    if not _in_range(get_ready_minutes, SETTINGS_LIMITS.GET_READY_MINUTES):
        errors.append("Get ready time must be between 0 and 480 minutes")
    if not _in_range(commute_minutes, SETTINGS_LIMITS.COMMUTE_MINUTES):
        errors.append("Commute time must be between 0 and 300 minutes")
    return errors


def validate_settings_form(form: SettingsForm) -> List[str]:
    return validate_settings(
        _parse_int(form.sleepHours),
        _parse_int(form.getReadyMinutes),
        _parse_int(form.commuteMinutes),
    )


def form_to_settings(form: SettingsForm) -> UserSettings:
    return UserSettings(
        name=form.name.strip() or None,
        sleepHours=_parse_int(form.sleepHours),
        getReadyMinutes=_parse_int(form.getReadyMinutes),
        commuteMinutes=_parse_int(form.commuteMinutes),
    )


class SettingsStore:

    def __init__(self, storage: KeyValueStorage, key: str = STORAGE_KEYS.USER_SETTINGS):
        self.storage = storage
        self.key = key

    def get(self) -> UserSettings:
        """Stored settings, or empty settings when none are saved."""
        data = read_json(self.storage, self.key, {})
        try:
            return UserSettings.model_validate(data)
        except ValueError as e:
            logger.error("Ignoring unreadable settings: %s", e)
            return UserSettings()

    def save(self, settings: UserSettings) -> None:
        write_json(self.storage, self.key, settings.model_dump(exclude_none=True))

    def save_form(self, form: SettingsForm) -> UserSettings:
        """
        Validate and persist a settings form.

        Raises:
            SettingsValidationError: Listing every invalid field; nothing is saved
        """
        errors = validate_settings_form(form)
        if errors:
            raise SettingsValidationError(errors)
        settings = form_to_settings(form)
        self.save(settings)
        return settings

    def update_setting(self, key: str, value: Any) -> UserSettings:
        """
        Change one setting and keep the rest.

        Raises:
            KeyError: Unknown setting name
            ValueError: Value of the wrong type; nothing is saved
        """
        if key not in UserSettings.model_fields:
            raise KeyError(key)
        updated = UserSettings.model_validate({**self.get().model_dump(), key: value})
        self.save(updated)
        return updated

    def clear(self) -> None:
        self.storage.delete(self.key)
