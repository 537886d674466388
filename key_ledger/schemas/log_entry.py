"""
Pydantic schemas for the activity log.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator

from key_ledger.models.enums import LogAction


class LogEntry(BaseModel):
    """
    Immutable record of one check-out or check-in.

    key_name is a copy of the key's name when the transition
    happened, so the entry still reads correctly after the key
    is deleted.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, strict=True)

    id: str = Field(min_length=1)
    key_name: str = Field(min_length=1, alias="keyName")
    action: LogAction
    person: str = Field(min_length=1, alias="personName")
    timestamp: datetime

    @field_validator("timestamp")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class LogEntryResponse(BaseModel):
    id: str
    key_name: str
    action: LogAction
    person: str
    timestamp: datetime

    model_config = {"from_attributes": True}
