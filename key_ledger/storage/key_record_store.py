"""
Key record store — the current state of every key.

The whole key table lives in one blob named "keys". There is
no per-key read or write: list() returns the full collection and
replace_all() overwrites it. Parsing is strict; a malformed blob
raises StoreIOError instead of yielding half-valid records.
"""

from collections.abc import Sequence

from pydantic import TypeAdapter, ValidationError as SchemaValidationError

from key_ledger.exceptions import StoreIOError
from key_ledger.logger import get_logger
from key_ledger.schemas.key import Key
from key_ledger.storage.blob_store import BlobStore

logger = get_logger(__name__)

KEYS_BLOB = "keys"

_keys_adapter = TypeAdapter(list[Key])


class KeyRecordStore:

    def __init__(self, blob_store: BlobStore):
        self.blob_store = blob_store

    def list(self) -> list[Key]:
        """
        Return every key in stored order.

        An absent blob is a fresh install and yields an empty list.
        """
        raw = self.blob_store.get(KEYS_BLOB)
        if raw is None:
            return []
        try:
            keys = _keys_adapter.validate_json(raw)
        except SchemaValidationError as e:
            logger.error("Stored key table is malformed: %s", e)
            raise StoreIOError("Stored key table is malformed") from e

        # Key ids must be unique
        seen = set()
        for key in keys:
            if key.id in seen:
                logger.error("Stored key table repeats id %s", key.id)
                raise StoreIOError(
                    f"Stored key table is malformed: duplicate id {key.id}"
                )
            seen.add(key.id)
        return keys

    def replace_all(self, keys: Sequence[Key]) -> None:
        """Write keys as the new, complete key table."""
        payload = _keys_adapter.dump_json(
            keys, by_alias=True, exclude_none=True
        )
        self.blob_store.set(KEYS_BLOB, payload.decode("utf-8"))
