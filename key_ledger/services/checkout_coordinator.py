"""
Checkout coordinator — the only writer of key state.

Every mutation follows the same sequence under one lock:
1. Validate the input (no I/O yet)
2. Read the current key table
3. Check the key exists and the transition is legal
4. Write the new key table
5. For check-out/check-in, append the activity log entry

The key table is written before the log. If the log append fails
the state change stands: the operation succeeds, the result says
the entry was not recorded, and the failure is logged as an error.
A failed key table write aborts the operation before the log is
touched, so the log never describes a change that did not happen.
"""

import threading
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

from key_ledger.exceptions import (
    InvalidStateError,
    NotFoundError,
    StoreIOError,
    ValidationError,
)
from key_ledger.logger import get_logger
from key_ledger.models.enums import KeyStatus, LogAction
from key_ledger.schemas.key import Key
from key_ledger.schemas.log_entry import LogEntry
from key_ledger.storage.activity_log import ActivityLog
from key_ledger.storage.key_record_store import KeyRecordStore

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TransitionResult:
    """Outcome of a successful check-out or check-in."""
    key: Key
    log_entry: LogEntry
    log_recorded: bool


class IdGenerator:
    """
    Millisecond-timestamp ids that never repeat within a process.

    Two calls in the same millisecond get consecutive values. Ids
    already in storage are passed as taken (skipped) or after (the
    new id is greater), so a restarted process with a slow clock
    neither reuses an id nor goes backwards.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self.clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def next_id(self, taken: set[str] | None = None, after: int = 0) -> str:
        with self._lock:
            candidate = max(
                int(self.clock() * 1000), self._last + 1, after + 1
            )
            while taken and str(candidate) in taken:
                candidate += 1
            self._last = candidate
            return str(candidate)


def _require_text(value: str, field: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationError(f"{field} must not be empty")
    return cleaned


def _find(keys: list[Key], key_id: str) -> int:
    for index, key in enumerate(keys):
        if key.id == key_id:
            return index
    raise NotFoundError(f"Key {key_id} not found")


class CheckoutCoordinator:
    """
    Applies key transitions across the key table and the activity log.

    One instance is shared by the whole process. Its lock covers the
    full read-modify-write-log sequence of every mutating call, so
    two callers can never both see a key as available and both
    check it out. Reads go straight to the stores and do not take
    the lock.
    """

    def __init__(
        self,
        key_store: KeyRecordStore,
        activity_log: ActivityLog,
        clock: Callable[[], datetime] = _utcnow,
        id_generator: IdGenerator | None = None,
    ):
        self.key_store = key_store
        self.activity_log = activity_log
        self.clock = clock
        self.id_generator = id_generator or IdGenerator()
        self._lock = threading.Lock()

    def add_key(self, name: str, location: str) -> Key:
        """Add a new, available key to the inventory."""
        name = _require_text(name, "name")
        location = _require_text(location, "location")

        with self._lock:
            keys = self.key_store.list()
            key = Key(
                id=self.id_generator.next_id({k.id for k in keys}),
                name=name,
                location=location,
            )
            keys.append(key)
            self.key_store.replace_all(keys)

        logger.info("Added key %s (%s) at %s", key.id, key.name, key.location)
        return key

    def remove_key(self, key_id: str) -> Key:
        """
        Remove a key from the inventory.

        A checked-out key must be checked in first. The key's
        history stays in the activity log.
        """
        with self._lock:
            keys = self.key_store.list()
            key = keys[_find(keys, key_id)]
            if key.status != KeyStatus.AVAILABLE:
                raise InvalidStateError(
                    f"Key {key_id} is checked out to {key.holder}; "
                    f"check it in before removing it"
                )
            self.key_store.replace_all([k for k in keys if k.id != key_id])

        logger.info("Removed key %s (%s)", key.id, key.name)
        return key

    def check_out(self, key_id: str, person: str) -> TransitionResult:
        """Hand an available key to person."""
        person = _require_text(person, "person")

        with self._lock:
            keys = self.key_store.list()
            index = _find(keys, key_id)
            key = keys[index]
            if key.status != KeyStatus.AVAILABLE:
                raise InvalidStateError(
                    f"Key {key_id} is already checked out to {key.holder}"
                )

            now = self.clock()
            updated = key.checked_out(person, now)
            keys[index] = updated
            self.key_store.replace_all(keys)

            entry = self._new_entry(updated.name, LogAction.CHECKOUT, person, now)
            recorded = self._record(entry)

        logger.info("Key %s (%s) checked out to %s", key_id, updated.name, person)
        return TransitionResult(key=updated, log_entry=entry, log_recorded=recorded)

    def check_in(self, key_id: str, person: str) -> TransitionResult:
        """
        Return a checked-out key to the inventory.

        person is whoever brings the key back and does not have to
        be the holder.
        """
        person = _require_text(person, "person")

        with self._lock:
            keys = self.key_store.list()
            index = _find(keys, key_id)
            key = keys[index]
            if key.status != KeyStatus.CHECKED_OUT:
                raise InvalidStateError(f"Key {key_id} is not checked out")

            updated = key.checked_in()
            keys[index] = updated
            self.key_store.replace_all(keys)

            entry = self._new_entry(
                updated.name, LogAction.CHECKIN, person, self.clock()
            )
            recorded = self._record(entry)

        logger.info(
            "Key %s (%s) checked in by %s (was held by %s)",
            key_id, updated.name, person, key.holder,
        )
        return TransitionResult(key=updated, log_entry=entry, log_recorded=recorded)

    def _new_entry(
        self, key_name: str, action: LogAction, person: str, at: datetime
    ) -> LogEntry:
        return LogEntry(
            id=self.id_generator.next_id(after=self._latest_log_id()),
            key_name=key_name,
            action=action,
            person=person,
            timestamp=at,
        )

    def _latest_log_id(self) -> int:
        try:
            entries = self.activity_log.list()
        except StoreIOError:
            # The append that follows fails the same way and is reported there
            return 0
        return max((int(e.id) for e in entries if e.id.isdecimal()), default=0)

    def _record(self, entry: LogEntry) -> bool:
        """Append entry to the activity log; the key table is already committed."""
        try:
            self.activity_log.append(entry)
        except StoreIOError:
            logger.exception(
                "State committed but activity log append failed: "
                "%s of %r by %s at %s is missing from the log",
                entry.action.value, entry.key_name, entry.person,
                entry.timestamp.isoformat(),
            )
            return False
        return True
