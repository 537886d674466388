"""
Shared test fixtures.

Sets up an isolated SQLite database so tests never touch the
real one. Tables are created before each test and dropped after,
so every test starts with an empty key table and an empty log.
"""

import logging
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from key_ledger.dependencies import (
    get_activity_log,
    get_coordinator,
    get_key_store,
)
from key_ledger.exceptions import StoreIOError
from key_ledger.main import app
from key_ledger.models.base import Base, build_engine, get_db
from key_ledger.services.checkout_coordinator import CheckoutCoordinator
from key_ledger.storage.activity_log import ActivityLog
from key_ledger.storage.blob_store import BlobStore
from key_ledger.storage.key_record_store import KeyRecordStore


TEST_DATABASE_URL = "sqlite:///./test.db"

engine = build_engine(TEST_DATABASE_URL)

TestSessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


class BrokenBlobStore(BlobStore):
    """
    A blob store whose writes to chosen blobs fail.

    Used to simulate the backing store refusing a write partway
    through an operation.
    """

    def __init__(self, session_factory, fail_writes=()):
        super().__init__(session_factory)
        self.fail_writes = set(fail_writes)

    def set(self, name, value):
        if name in self.fail_writes:
            raise StoreIOError(f"Failed to write '{name}'")
        super().set(name, value)


class SteppingClock:
    """A clock that advances one minute every time it is read."""

    def __init__(self, start=None):
        self.now = start or datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self):
        current = self.now
        self.now = current + timedelta(minutes=1)
        return current


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop them after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def ledger_caplog(caplog):
    """caplog attached to the key_ledger logger, which does not propagate to root."""
    logger = logging.getLogger("key_ledger")
    logger.addHandler(caplog.handler)
    yield caplog
    logger.removeHandler(caplog.handler)


@pytest.fixture
def blob_store():
    return BlobStore(TestSessionLocal)


@pytest.fixture
def broken_blob_store():
    """Factory: a blob store over the test database that fails writes to the named blobs."""
    def factory(*fail_writes):
        return BrokenBlobStore(TestSessionLocal, fail_writes)
    return factory


@pytest.fixture
def key_store(blob_store):
    return KeyRecordStore(blob_store)


@pytest.fixture
def activity_log(blob_store):
    return ActivityLog(blob_store)


@pytest.fixture
def clock():
    return SteppingClock()


@pytest.fixture
def coordinator(key_store, activity_log, clock):
    return CheckoutCoordinator(key_store, activity_log, clock=clock)


@pytest.fixture
def client(key_store, activity_log, coordinator):
    """
    Provide a test client wired to the test stores.

    The process-wide dependencies are overridden so every request
    shares the fixture coordinator, as production requests share
    the cached one.
    """
    def override_get_db():
        db = TestSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_key_store] = lambda: key_store
    app.dependency_overrides[get_activity_log] = lambda: activity_log
    app.dependency_overrides[get_coordinator] = lambda: coordinator
    yield TestClient(app)
    app.dependency_overrides.clear()
