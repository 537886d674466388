"""
Error taxonomy for the key ledger.

Services raise these; the API layer translates them to
HTTP status codes. None of them are retried automatically.
"""


class KeyLedgerError(Exception):
    """Base class for all key ledger errors."""


class ValidationError(KeyLedgerError, ValueError):
    """Bad input, e.g. a blank name. Raised before any write."""


class NotFoundError(KeyLedgerError, LookupError):
    """The requested key id does not exist."""


class InvalidStateError(KeyLedgerError):
    """The operation is not allowed for the key's current status."""


class StoreIOError(KeyLedgerError, OSError):
    """
    The backing store could not be read or written.

    Malformed stored data is reported the same way: a blob
    that cannot be parsed is as unusable as one that cannot
    be read.
    """
