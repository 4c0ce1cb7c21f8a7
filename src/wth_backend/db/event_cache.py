"""
Per-Day Event Cache

Raw calendar items cached under ``calendar_events_<YYYY-MM-DD>`` so the
briefing call can be assembled without another calendar round trip.
"""

from typing import Any, Dict, List

from wth_backend.constants import STORAGE_KEYS
from wth_backend.db.persistence import KeyValueStorage, read_json, write_json


class EventCache:

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage

    @staticmethod
    def key_for(date: str) -> str:
        return f"{STORAGE_KEYS.CALENDAR_EVENTS_PREFIX}{date}"

    def put(self, date: str, events: List[Dict[str, Any]]) -> None:
        write_json(self.storage, self.key_for(date), events)

    def get(self, date: str) -> List[Dict[str, Any]]:
        """Cached items for ``date``; empty when nothing (or nothing readable) is cached."""
        events = read_json(self.storage, self.key_for(date), [])
        return events if isinstance(events, list) else []

    def clear(self, date: str) -> None:
        self.storage.delete(self.key_for(date))
