"""Header encoding for Sign-In-With-X payloads.

The wire form depends on the protocol version of the 402 that issued the
challenge: v2 and later wrap the JSON bundle in base64, v1 sends the JSON
as-is.
"""

from __future__ import annotations

import json

from pydantic import ValidationError

from ...encoding import safe_base64_decode, safe_base64_encode
from ...schemas import X402_VERSION, X402_VERSION_V1, SIWxError
from .types import SIWxPayload


def encode_siwx_header(payload: SIWxPayload, x402_version: int = X402_VERSION) -> str:
    """Encode a signed bundle for the ``SIGN-IN-WITH-X`` header."""
    raw = payload.model_dump_json(by_alias=True, exclude_none=True)
    if x402_version <= X402_VERSION_V1:
        return raw
    return safe_base64_encode(raw)


def parse_siwx_header(header: str, x402_version: int = X402_VERSION) -> SIWxPayload:
    """Decode a ``SIGN-IN-WITH-X`` header value.

    Args:
        header: Header value as received.
        x402_version: Protocol version the challenge was issued under.

    Returns:
        The signed bundle.

    Raises:
        SIWxError: If the header cannot be decoded or lacks required fields.
    """
    try:
        raw = header if x402_version <= X402_VERSION_V1 else safe_base64_decode(header)
        return SIWxPayload.model_validate(json.loads(raw))
    except (ValueError, ValidationError) as e:
        raise SIWxError(f"Invalid sign-in-with-x header: {e}") from e
