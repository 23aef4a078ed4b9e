"""Header encoding helpers for x402 wire models."""

from __future__ import annotations

import json
from collections.abc import Mapping

from pydantic import ValidationError

from ..encoding import safe_base64_decode, safe_base64_encode
from ..protocol import is_v1_response
from ..schemas import (
    BaseX402Model,
    PaymentPayload,
    PaymentPayloadV1,
    PaymentRequired,
    PaymentRequiredParseError,
    PaymentRequiredV1,
    SettleResponse,
)


def _encode_model(model: BaseX402Model) -> str:
    return safe_base64_encode(model.model_dump_json(by_alias=True, exclude_none=True))


def encode_payment_signature_header(payload: PaymentPayload | PaymentPayloadV1) -> str:
    """Encode a payment payload as a base64 header value."""
    return _encode_model(payload)


def decode_payment_signature_header(header: str) -> PaymentPayload | PaymentPayloadV1:
    """Decode a ``PAYMENT-SIGNATURE`` or ``X-PAYMENT`` header value."""
    data = json.loads(safe_base64_decode(header))
    if data.get("x402Version") == 1:
        return PaymentPayloadV1.model_validate(data)
    return PaymentPayload.model_validate(data)


def encode_payment_required_header(payment_required: PaymentRequired) -> str:
    """Encode a 402 response as a ``PAYMENT-REQUIRED`` header value."""
    return _encode_model(payment_required)


def parse_payment_required(data: Mapping) -> PaymentRequired | PaymentRequiredV1:
    """Validate a decoded 402 payload into the matching wire model.

    Raises:
        PaymentRequiredParseError: If the payload matches neither version.
    """
    try:
        if is_v1_response(data):
            return PaymentRequiredV1.model_validate(data)
        return PaymentRequired.model_validate(data)
    except ValidationError as e:
        raise PaymentRequiredParseError(f"Invalid payment required payload: {e}") from e


def decode_payment_required_header(header: str) -> PaymentRequired | PaymentRequiredV1:
    """Decode a ``PAYMENT-REQUIRED`` header value.

    Raises:
        PaymentRequiredParseError: If the header is not base64-wrapped JSON.
    """
    try:
        data = json.loads(safe_base64_decode(header))
    except ValueError as e:
        raise PaymentRequiredParseError(f"Invalid PAYMENT-REQUIRED header: {e}") from e
    if not isinstance(data, Mapping):
        raise PaymentRequiredParseError("PAYMENT-REQUIRED header is not a JSON object")
    return parse_payment_required(data)


def encode_payment_response_header(settle: SettleResponse) -> str:
    """Encode a settlement confirmation as a ``PAYMENT-RESPONSE`` header value."""
    return _encode_model(settle)


def decode_payment_response_header(header: str) -> SettleResponse:
    """Decode a ``PAYMENT-RESPONSE`` or ``X-PAYMENT-RESPONSE`` header value.

    Raises:
        ValueError: If the header is not a valid settlement confirmation.
    """
    return SettleResponse.model_validate_json(safe_base64_decode(header))


def merge_retry_headers(
    caller_headers: Mapping[str, str] | None,
    protocol_headers: Mapping[str, str],
) -> dict[str, str]:
    """Build the headers of a retried request.

    Caller headers are kept, except any that share a name (case-insensitively)
    with a protocol header, so the caller can never override the payment or
    sign-in proof.
    """
    reserved = {name.lower() for name in protocol_headers}
    merged = {"Content-Type": "application/json"}
    for name, value in (caller_headers or {}).items():
        if name.lower() == "content-type":
            merged["Content-Type"] = value
        elif name.lower() not in reserved:
            merged[name] = value
    merged.update(protocol_headers)
    return merged
