"""
Process-wide stores and coordinator.

The coordinator's lock only protects the key table if every
request uses the same coordinator, so these are built once per
process (lru_cache) and handed to endpoints through Depends().
Tests override them with instances bound to a test database.
"""

from functools import lru_cache

from key_ledger.models.base import SessionLocal
from key_ledger.services.checkout_coordinator import CheckoutCoordinator
from key_ledger.storage.activity_log import ActivityLog
from key_ledger.storage.blob_store import BlobStore
from key_ledger.storage.key_record_store import KeyRecordStore


@lru_cache()
def get_blob_store() -> BlobStore:
    return BlobStore(SessionLocal)


@lru_cache()
def get_key_store() -> KeyRecordStore:
    return KeyRecordStore(get_blob_store())


@lru_cache()
def get_activity_log() -> ActivityLog:
    return ActivityLog(get_blob_store())


@lru_cache()
def get_coordinator() -> CheckoutCoordinator:
    return CheckoutCoordinator(get_key_store(), get_activity_log())
