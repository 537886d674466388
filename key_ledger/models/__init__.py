"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from key_ledger.models.base import Base
from key_ledger.models.enums import KeyStatus, LogAction
from key_ledger.models.blob import Blob

__all__ = [
    "Base",
    "KeyStatus",
    "LogAction",
    "Blob",
]
