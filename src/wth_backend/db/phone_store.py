"""
Saved Phone Number

The number the briefing call goes to, stored as two keys.
"""

from typing import Optional, Tuple

from wth_backend.constants import CALL_SETTINGS, STORAGE_KEYS
from wth_backend.db.persistence import KeyValueStorage


class InvalidPhoneNumberError(ValueError):
    pass


def validate_phone_number(country_code: str, phone_number: str) -> None:
    """
    Raises:
        InvalidPhoneNumberError: With the message shown to the user
    """
    country_code = (country_code or "").strip()
    phone_number = (phone_number or "").strip()
    if not country_code:
        raise InvalidPhoneNumberError("Please enter a country code")
    if not phone_number:
        raise InvalidPhoneNumberError("Please enter a phone number")
    if not CALL_SETTINGS.COUNTRY_CODE_PATTERN.fullmatch(country_code):
        raise InvalidPhoneNumberError("Please enter a valid country code (e.g., +1, +44, +91)")
    digits = CALL_SETTINGS.PHONE_NUMBER_STRIP.sub("", phone_number)
    if not CALL_SETTINGS.PHONE_NUMBER_PATTERN.fullmatch(digits):
        raise InvalidPhoneNumberError("Please enter a valid phone number (7-15 digits)")


class PhoneNumberStore:

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage

    def save(self, country_code: str, phone_number: str) -> None:
        validate_phone_number(country_code, phone_number)
        self.storage.set(STORAGE_KEYS.COUNTRY_CODE, country_code.strip())
        self.storage.set(STORAGE_KEYS.PHONE_NUMBER, phone_number.strip())

    def get(self) -> Optional[Tuple[str, str]]:
        """(country_code, phone_number), or None unless both are saved."""
        country_code = self.storage.get(STORAGE_KEYS.COUNTRY_CODE)
        phone_number = self.storage.get(STORAGE_KEYS.PHONE_NUMBER)
        if not country_code or not phone_number:
            return None
        return country_code, phone_number

    def clear(self) -> None:
        self.storage.delete(STORAGE_KEYS.COUNTRY_CODE)
        self.storage.delete(STORAGE_KEYS.PHONE_NUMBER)
