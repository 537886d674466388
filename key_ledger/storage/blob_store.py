"""
Blob store — named text values with whole-value get/set.

This is the only code that talks to the database on behalf of
the ledger. It has no notion of keys or log entries, and no
partial update or append: callers read a value, change it in
memory, and write the whole thing back.
"""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from key_ledger.exceptions import StoreIOError
from key_ledger.logger import get_logger
from key_ledger.models.blob import Blob

logger = get_logger(__name__)


class BlobStore:
    """
    Whole-value blob storage over SQLAlchemy.

    Each call opens and closes its own session, so one instance
    can be shared by every thread in the process. The store does
    not serialize writers; callers that read-modify-write must
    hold their own lock.
    """

    def __init__(self, session_factory: sessionmaker[Session]):
        self.session_factory = session_factory

    def get(self, name: str) -> str | None:
        """Return the stored value, or None if nothing was ever written."""
        try:
            with self.session_factory() as session:
                blob = session.get(Blob, name)
                return blob.value if blob else None
        except SQLAlchemyError as e:
            logger.error("Failed to read blob %r: %s", name, e)
            raise StoreIOError(f"Failed to read '{name}'") from e

    def set(self, name: str, value: str) -> None:
        """Replace the stored value and commit."""
        try:
            with self.session_factory() as session:
                blob = session.get(Blob, name)
                if blob:
                    blob.value = value
                else:
                    session.add(Blob(name=name, value=value))
                session.commit()
        except SQLAlchemyError as e:
            logger.error("Failed to write blob %r: %s", name, e)
            raise StoreIOError(f"Failed to write '{name}'") from e
