"""Persistence layer: the blob store and the two collections kept in it."""

from key_ledger.storage.blob_store import BlobStore
from key_ledger.storage.key_record_store import KeyRecordStore
from key_ledger.storage.activity_log import ActivityLog

__all__ = ["BlobStore", "KeyRecordStore", "ActivityLog"]
