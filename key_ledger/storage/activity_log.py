"""
Activity log — append-only history of check-outs and check-ins.

Entries live in one blob named "checkoutLogs" in the order they
were appended. The store never sorts or rewrites entries; display
order is chosen by the reader (see newest_first).
"""

from pydantic import TypeAdapter, ValidationError as SchemaValidationError

from key_ledger.exceptions import StoreIOError
from key_ledger.logger import get_logger
from key_ledger.schemas.log_entry import LogEntry
from key_ledger.storage.blob_store import BlobStore

logger = get_logger(__name__)

LOG_BLOB = "checkoutLogs"

_entries_adapter = TypeAdapter(list[LogEntry])


class ActivityLog:

    def __init__(self, blob_store: BlobStore):
        self.blob_store = blob_store

    def list(self) -> list[LogEntry]:
        """Return all entries in append order."""
        raw = self.blob_store.get(LOG_BLOB)
        if raw is None:
            return []
        try:
            return _entries_adapter.validate_json(raw)
        except SchemaValidationError as e:
            logger.error("Stored activity log is malformed: %s", e)
            raise StoreIOError("Stored activity log is malformed") from e

    def append(self, entry: LogEntry) -> None:
        """
        Add entry at the end of the log.

        The blob store has no append primitive, so this reads the
        whole log and writes it back with the entry added. It is
        not safe against concurrent appends on its own.
        """
        entries = self.list()
        entries.append(entry)
        payload = _entries_adapter.dump_json(entries, by_alias=True)
        self.blob_store.set(LOG_BLOB, payload.decode("utf-8"))


def newest_first(entries: list[LogEntry]) -> list[LogEntry]:
    """Return entries sorted by timestamp, most recent first."""
    return sorted(entries, key=lambda e: e.timestamp, reverse=True)
