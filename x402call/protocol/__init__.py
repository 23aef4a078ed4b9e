"""Protocol-level helpers shared by the payment and authentication flows."""

from .normalize import is_v1_response, normalize_payment_required

__all__ = [
    "is_v1_response",
    "normalize_payment_required",
]
