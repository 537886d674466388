"""
Key inventory API endpoints.

Mutations go through the CheckoutCoordinator. Listing reads the
key store directly and does not wait on in-flight mutations.
"""

from fastapi import APIRouter, Depends

from key_ledger.api.errors import to_http
from key_ledger.dependencies import get_coordinator, get_key_store
from key_ledger.exceptions import KeyLedgerError
from key_ledger.models.enums import KeyStatus
from key_ledger.schemas.key import (
    KeyCreate,
    KeyResponse,
    PersonRequest,
    InventorySummary,
)
from key_ledger.schemas.transition import TransitionResponse
from key_ledger.services.checkout_coordinator import CheckoutCoordinator
from key_ledger.services.inventory import STATUS_FILTERS, summarize
from key_ledger.storage.key_record_store import KeyRecordStore

router = APIRouter(prefix="/keys", tags=["Keys"])


@router.get("", response_model=list[KeyResponse])
def list_keys(
    status: KeyStatus | None = None,
    key_store: KeyRecordStore = Depends(get_key_store),
):
    """
    List keys in stored order.

    Pass status=AVAILABLE or status=CHECKED_OUT to get the keys
    that can currently be checked out or checked in.
    """
    try:
        keys = key_store.list()
    except KeyLedgerError as e:
        raise to_http(e) from e
    if status is not None:
        keys = STATUS_FILTERS[status](keys)
    return [KeyResponse.model_validate(k) for k in keys]


@router.get("/summary", response_model=InventorySummary)
def get_summary(key_store: KeyRecordStore = Depends(get_key_store)):
    """Count total, available and checked-out keys."""
    try:
        return summarize(key_store.list())
    except KeyLedgerError as e:
        raise to_http(e) from e


@router.post("", response_model=KeyResponse, status_code=201)
def add_key(
    request: KeyCreate,
    coordinator: CheckoutCoordinator = Depends(get_coordinator),
):
    """Add a new key. It starts out available."""
    try:
        key = coordinator.add_key(request.name, request.location)
    except KeyLedgerError as e:
        raise to_http(e) from e
    return KeyResponse.model_validate(key)


@router.delete("/{key_id}", response_model=KeyResponse)
def remove_key(
    key_id: str,
    coordinator: CheckoutCoordinator = Depends(get_coordinator),
):
    """
    Remove a key from the inventory.

    Refused with 409 while the key is checked out. Its history
    remains in the activity log.
    """
    try:
        key = coordinator.remove_key(key_id)
    except KeyLedgerError as e:
        raise to_http(e) from e
    return KeyResponse.model_validate(key)


@router.post("/{key_id}/checkout", response_model=TransitionResponse)
def check_out(
    key_id: str,
    request: PersonRequest,
    coordinator: CheckoutCoordinator = Depends(get_coordinator),
):
    """Check an available key out to a person."""
    try:
        result = coordinator.check_out(key_id, request.person)
    except KeyLedgerError as e:
        raise to_http(e) from e
    return TransitionResponse.model_validate(result)


@router.post("/{key_id}/checkin", response_model=TransitionResponse)
def check_in(
    key_id: str,
    request: PersonRequest,
    coordinator: CheckoutCoordinator = Depends(get_coordinator),
):
    """Return a checked-out key. Anyone may return it."""
    try:
        result = coordinator.check_in(key_id, request.person)
    except KeyLedgerError as e:
        raise to_http(e) from e
    return TransitionResponse.model_validate(result)
