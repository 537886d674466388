"""
Pydantic schema for check-out / check-in responses.
"""

from pydantic import BaseModel

from key_ledger.schemas.key import KeyResponse
from key_ledger.schemas.log_entry import LogEntryResponse


class TransitionResponse(BaseModel):
    """
    Result of a check-out or check-in.

    log_recorded is False when the key was updated but the
    activity log entry could not be written.
    """
    key: KeyResponse
    log_entry: LogEntryResponse
    log_recorded: bool

    model_config = {"from_attributes": True}
