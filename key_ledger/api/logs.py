"""
Activity log API endpoints.
"""

from fastapi import APIRouter, Depends

from key_ledger.api.errors import to_http
from key_ledger.dependencies import get_activity_log
from key_ledger.exceptions import KeyLedgerError
from key_ledger.schemas.log_entry import LogEntryResponse
from key_ledger.storage.activity_log import ActivityLog, newest_first

router = APIRouter(prefix="/logs", tags=["Activity Log"])


@router.get("", response_model=list[LogEntryResponse])
def list_logs(activity_log: ActivityLog = Depends(get_activity_log)):
    """
    Get every check-out and check-in, newest first.

    Entries for deleted keys are included.
    """
    try:
        entries = activity_log.list()
    except KeyLedgerError as e:
        raise to_http(e) from e
    return [LogEntryResponse.model_validate(e) for e in newest_first(entries)]
