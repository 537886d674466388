"""
Translation of ledger errors into HTTP errors.
"""

from fastapi import HTTPException

from key_ledger.exceptions import (
    InvalidStateError,
    KeyLedgerError,
    NotFoundError,
    StoreIOError,
    ValidationError,
)

STATUS_CODES: dict[type[KeyLedgerError], int] = {
    ValidationError: 400,
    NotFoundError: 404,
    InvalidStateError: 409,
    StoreIOError: 503,
}


def to_http(error: KeyLedgerError) -> HTTPException:
    for error_type, status_code in STATUS_CODES.items():
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=str(error))
    return HTTPException(status_code=500, detail=str(error))
