"""
Pydantic schemas for keys.

Key is the stored record: its aliases are the field names used
in the persisted "keys" blob. The request/response schemas below
it are the API contract, which uses plain snake_case names and
exposes the derived status instead of the raw flag.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from key_ledger.models.enums import KeyStatus


class Key(BaseModel):
    """
    One physical key.

    holder and checked_out_at are set together, and only while
    the key is checked out. A record that breaks this rule is
    rejected when it is parsed, so it can never reach a service.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, strict=True)

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    location: str = Field(min_length=1)
    is_checked_out: bool = Field(default=False, alias="isCheckedOut")
    checked_out_by: str | None = Field(
        default=None, min_length=1, alias="checkedOutBy"
    )
    checked_out_at: datetime | None = Field(default=None, alias="checkedOutAt")

    @field_validator("checked_out_at")
    @classmethod
    def assume_utc(cls, v: datetime | None) -> datetime | None:
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @model_validator(mode="after")
    def holder_matches_status(self) -> "Key":
        has_holder = self.checked_out_by is not None
        has_time = self.checked_out_at is not None
        if has_holder != has_time:
            raise ValueError(
                "checkedOutBy and checkedOutAt must be set together"
            )
        if self.is_checked_out != has_holder:
            raise ValueError(
                "checkedOutBy/checkedOutAt must be present exactly "
                "when isCheckedOut is true"
            )
        return self

    @property
    def status(self) -> KeyStatus:
        if self.is_checked_out:
            return KeyStatus.CHECKED_OUT
        return KeyStatus.AVAILABLE

    @property
    def holder(self) -> str | None:
        return self.checked_out_by

    def checked_out(self, person: str, at: datetime) -> "Key":
        """Return a copy of this key checked out to person."""
        return Key(
            id=self.id,
            name=self.name,
            location=self.location,
            is_checked_out=True,
            checked_out_by=person,
            checked_out_at=at,
        )

    def checked_in(self) -> "Key":
        """Return a copy of this key back in inventory."""
        return Key(id=self.id, name=self.name, location=self.location)

    def __repr__(self) -> str:
        return f"<Key {self.id} {self.name!r} ({self.status.value})>"


# --- Request Schemas ---

class KeyCreate(BaseModel):
    """Request to add a key to the inventory."""
    name: str = Field(max_length=100)
    location: str = Field(max_length=100)


class PersonRequest(BaseModel):
    """Body of a check-out or check-in request."""
    person: str = Field(max_length=100)


# --- Response Schemas ---

class KeyResponse(BaseModel):
    id: str
    name: str
    location: str
    status: KeyStatus
    holder: str | None
    checked_out_at: datetime | None

    model_config = {"from_attributes": True}


class InventorySummary(BaseModel):
    """Counts shown on the inventory overview."""
    total: int
    available: int
    checked_out: int
