"""HTTP wire layer for x402.

The engines live in ``x402call.http.negotiation`` and
``x402call.http.authentication`` and are re-exported from ``x402call``.
"""

from .constants import (
    PAYMENT_REQUIRED_HEADER,
    PAYMENT_RESPONSE_HEADER,
    PAYMENT_SIGNATURE_HEADER,
    X_PAYMENT_HEADER,
    X_PAYMENT_RESPONSE_HEADER,
)
from .utils import (
    decode_payment_required_header,
    decode_payment_response_header,
    decode_payment_signature_header,
    encode_payment_required_header,
    encode_payment_response_header,
    encode_payment_signature_header,
)
from .x402_http_client import x402HTTPClient

__all__ = [
    # Headers
    "PAYMENT_REQUIRED_HEADER",
    "PAYMENT_RESPONSE_HEADER",
    "PAYMENT_SIGNATURE_HEADER",
    "X_PAYMENT_HEADER",
    "X_PAYMENT_RESPONSE_HEADER",
    # Codec
    "encode_payment_required_header",
    "decode_payment_required_header",
    "encode_payment_signature_header",
    "decode_payment_signature_header",
    "encode_payment_response_header",
    "decode_payment_response_header",
    # Client
    "x402HTTPClient",
]
