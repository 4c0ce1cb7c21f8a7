"""
Local Checklist Store

One storage key holds a JSON map ``{eventId: BreakdownRecord}``. A record is
created when the user accepts a generated breakdown; afterwards only the
subtask completion flags change.
"""

import logging
from typing import Dict, List, Optional, Sequence, Union

from pydantic import BaseModel

from wth_backend.breakdown.dto import Subtask
from wth_backend.constants import STORAGE_KEYS
from wth_backend.db.persistence import KeyValueStorage, read_json, write_json
from wth_backend.gcal.utils.datetime_utils import utc_now_iso

logger = logging.getLogger(__name__)


class BreakdownRecord(BaseModel):
    eventId: str
    subtasks: List[Subtask]
    savedAt: str
    lastUpdated: Optional[str] = None


SubtaskLike = Union[Subtask, dict]


def _as_subtasks(subtasks: Sequence[SubtaskLike]) -> List[Subtask]:
    return [s if isinstance(s, Subtask) else Subtask.model_validate(s) for s in subtasks]


class ChecklistStore:
    """Persistent mapping from event id to its accepted breakdown."""

    def __init__(self, storage: KeyValueStorage, key: str = STORAGE_KEYS.EVENT_BREAKDOWNS):
        self.storage = storage
        self.key = key

    def _load(self) -> Dict[str, dict]:
        data = read_json(self.storage, self.key, {})
        if not isinstance(data, dict):
            logger.error("Ignoring non-map value under %s", self.key)
            return {}
        return data

    def _store(self, records: Dict[str, dict]) -> None:
        write_json(self.storage, self.key, records)

    def get_all(self) -> Dict[str, BreakdownRecord]:
        records = {}
        for event_id, raw in self._load().items():
            try:
                records[event_id] = BreakdownRecord.model_validate(raw)
            except ValueError as e:
                logger.error("Skipping unreadable breakdown for %s: %s", event_id, e)
        return records

    def get(self, event_id: str) -> Optional[BreakdownRecord]:
        """The record for ``event_id``, or None if no breakdown was accepted yet."""
        return self.get_all().get(event_id)

    def has_breakdown(self, event_id: str) -> bool:
        return self.get(event_id) is not None

    def save(self, event_id: str, subtasks: Sequence[SubtaskLike]) -> BreakdownRecord:
        """Insert or overwrite the record for ``event_id``."""
        record = BreakdownRecord(
            eventId=event_id,
            subtasks=_as_subtasks(subtasks),
            savedAt=utc_now_iso(),
        )
        records = self._load()
        records[event_id] = record.model_dump(exclude_none=True)
        self._store(records)
        logger.info("Saved %d subtasks for %s", len(record.subtasks), event_id)
        return record

    def update_completion(self, event_id: str, subtasks: Sequence[SubtaskLike]) -> Optional[BreakdownRecord]:
        """
        Replace the subtasks of an existing record.

        Does nothing (and returns None) when there is no record for ``event_id``.
        """
        record = self.get(event_id)
        if record is None:
            return None
        updated = record.model_copy(update={"subtasks": _as_subtasks(subtasks), "lastUpdated": utc_now_iso()})
        records = self._load()
        records[event_id] = updated.model_dump(exclude_none=True)
        self._store(records)
        return updated

    def toggle_subtask(self, event_id: str, subtask_id: str) -> Optional[BreakdownRecord]:
        record = self.get(event_id)
        if record is None:
            return None
        subtasks = [
            s.model_copy(update={"completed": not s.completed}) if s.id == subtask_id else s
            for s in record.subtasks
        ]
        return self.update_completion(event_id, subtasks)

    def clear_one(self, event_id: str) -> None:
        records = self._load()
        if records.pop(event_id, None) is not None:
            self._store(records)

    def clear_all(self) -> None:
        self.storage.delete(self.key)
