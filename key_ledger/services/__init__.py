"""Business logic services."""

from key_ledger.services.checkout_coordinator import (
    CheckoutCoordinator,
    TransitionResult,
)

__all__ = ["CheckoutCoordinator", "TransitionResult"]
