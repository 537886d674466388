"""
Read-side helpers for the inventory views.

These never touch storage; they work on a key list already
returned by KeyRecordStore.list().
"""

from key_ledger.models.enums import KeyStatus
from key_ledger.schemas.key import Key, InventorySummary


def available_keys(keys: list[Key]) -> list[Key]:
    """Keys that can be checked out."""
    return [k for k in keys if k.status == KeyStatus.AVAILABLE]


def checked_out_keys(keys: list[Key]) -> list[Key]:
    """Keys that can be checked in."""
    return [k for k in keys if k.status == KeyStatus.CHECKED_OUT]


STATUS_FILTERS = {
    KeyStatus.AVAILABLE: available_keys,
    KeyStatus.CHECKED_OUT: checked_out_keys,
}


def summarize(keys: list[Key]) -> InventorySummary:
    checked_out = len(checked_out_keys(keys))
    return InventorySummary(
        total=len(keys),
        available=len(keys) - checked_out,
        checked_out=checked_out,
    )
