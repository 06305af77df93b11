"""
Service / facade layer.

This module implements the entry rules before any store interaction. It
never touches the store's internals; it calls an `EntryStore`. All
writes go through `PainService` so that no invalid entry can reach the
store.

Key responsibilities:
- decode client payloads (malformed bodies become `DecodeError`)
- assign server-controlled fields (`id`, `timestamp`)
- validate level, location and timestamp before any write
- raise `NotFoundError` for unknown ids

Note on the timestamp rule: create and update always stamp "now" before
validating, so "timestamp in the future" cannot be produced through the
API. The rule is kept in `validate_entry` for direct callers.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, List, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from errors import DecodeError, EntryValidationError, NotFoundError, ServiceError
from logging_config import null_logger
from models import LOCATIONS, PainEntry, PainEntryIn
from repo_entries import EntryStore

MIN_LEVEL = 0
MAX_LEVEL = 10


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def validate_entry(entry: PainEntry, now: Optional[datetime] = None) -> None:
    """Raise `EntryValidationError` for the first broken rule.

    Rules, in order: level within [0, 10], location in the fixed set,
    timestamp not after `now`. Naive timestamps (and a naive `now`) are
    read as UTC.
    """
    if not MIN_LEVEL <= entry.level <= MAX_LEVEL:
        raise EntryValidationError("level out of range")

    if entry.location not in LOCATIONS:
        raise EntryValidationError(f"invalid location: {entry.location}")

    now = now or utc_now()
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    ts = entry.timestamp
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    if ts > now:
        raise EntryValidationError("timestamp in the future")


class PainService:
    """Business rules + validation for pain entries.

    Example usage:
        store = MemoryEntryStore()
        svc = PainService(store, logger=logging.getLogger("pain"))
        entry = svc.create(b'{"level": 5, "location": "back"}')
    """

    def __init__(
        self,
        store: EntryStore,
        logger: Optional[logging.Logger] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.store = store
        self.logger = logger or null_logger()
        self.clock = clock or utc_now

    def create(self, raw: Union[bytes, str]) -> PainEntry:
        """Decode, stamp, validate and store a new entry.

        Any client-supplied `id` or `timestamp` is discarded.
        """
        payload = self._decode(raw)
        entry = PainEntry(
            id=str(uuid.uuid4()),
            timestamp=self.clock(),
            level=payload.level,
            location=payload.location,
            notes=payload.notes,
        )
        self._validate(entry)

        self.store.set(entry.id, entry)
        self.logger.info("created entry %s", entry.id)
        return entry

    def get(self, entry_id: str) -> PainEntry:
        return self._existing(entry_id)

    def update(self, entry_id: str, raw: Union[bytes, str]) -> PainEntry:
        """Replace level, location and notes of an existing entry.

        The lookup happens before decoding, so an unknown id is a 404
        whatever the body holds. The id is kept; the timestamp is
        refreshed.
        """
        existing = self._existing(entry_id)
        payload = self._decode(raw)

        entry = PainEntry(
            id=existing.id,
            timestamp=self.clock(),
            level=payload.level,
            location=payload.location,
            notes=payload.notes,
        )
        self._validate(entry)

        self.store.set(entry.id, entry)
        self.logger.info("updated entry %s", entry.id)
        return entry

    def delete(self, entry_id: str) -> None:
        self._existing(entry_id)
        self.store.delete(entry_id)
        self.logger.info("deleted entry %s", entry_id)

    def list(self) -> List[PainEntry]:
        return self.store.list()

    def health(self) -> dict:
        return {"status": "ok"}

    def _existing(self, entry_id: str) -> PainEntry:
        entry, ok = self.store.get(entry_id)
        if not ok:
            self._fail(NotFoundError(entry_id))
        return entry

    def _decode(self, raw: Union[bytes, str]) -> PainEntryIn:
        try:
            return PainEntryIn.model_validate_json(raw)
        except PydanticValidationError as e:
            self.logger.debug("payload rejected: %s", e)
            self._fail(DecodeError())

    def _validate(self, entry: PainEntry) -> None:
        try:
            validate_entry(entry, now=self.clock())
        except EntryValidationError as e:
            self._fail(e)

    def _fail(self, err: ServiceError) -> None:
        self.logger.error(err.message)
        raise err
