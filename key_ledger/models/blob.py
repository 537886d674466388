"""
Blob model.

The ledger persists each collection (the key table, the activity
log) as one named text value. There is no per-record row: a write
always replaces the whole value.
"""

from datetime import datetime, timezone

from sqlalchemy import String, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column

from key_ledger.models.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Blob(Base):
    __tablename__ = "blobs"

    name: Mapped[str] = mapped_column(String(100), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )

    def __repr__(self) -> str:
        return f"<Blob {self.name} ({len(self.value)} chars)>"
