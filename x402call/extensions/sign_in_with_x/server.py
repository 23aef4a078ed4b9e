"""Server-side challenge declaration for the Sign-In-With-X extension."""

from __future__ import annotations

import secrets
from datetime import datetime, timedelta, timezone
from typing import Any
from urllib.parse import urlparse

from ...mechanisms.evm.utils import to_caip2
from .types import DEFAULT_EXPIRATION_SECONDS, SIGN_IN_WITH_X

# JSON Schema for the challenge object
SIWX_INFO_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "domain": {"type": "string"},
        "uri": {"type": "string", "format": "uri"},
        "version": {"type": "string"},
        "chainId": {"type": "string"},
        "nonce": {"type": "string"},
        "issuedAt": {"type": "string", "format": "date-time"},
        "expirationTime": {"type": "string", "format": "date-time"},
        "notBefore": {"type": "string", "format": "date-time"},
        "requestId": {"type": "string"},
        "statement": {"type": "string"},
        "resources": {"type": "array", "items": {"type": "string"}},
    },
    "required": ["domain", "uri", "version", "chainId", "nonce", "issuedAt"],
}


def _iso(value: datetime) -> str:
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def declare_siwx_extension(
    resource_uri: str,
    network: str,
    *,
    statement: str | None = None,
    expiration_seconds: int | None = DEFAULT_EXPIRATION_SECONDS,
    version: str = "1",
) -> dict[str, Any]:
    """Build a fresh challenge for a 402 response's extension map.

    Args:
        resource_uri: URL of the protected resource.
        network: Chain the client must sign for (CAIP-2 or v1 name).
        statement: Optional human-readable statement.
        expiration_seconds: Challenge lifetime, or None for no expiry.
        version: Message format version.

    Returns:
        ``{"sign-in-with-x": {"info": {...}, "schema": {...}}}``, ready to
        merge into ``PaymentRequired.extensions``.

    Example:
        ```python
        payment_required = {
            "x402Version": 2,
            "accepts": [],
            "extensions": declare_siwx_extension(
                "https://api.example.com/data", "eip155:8453"
            ),
        }
        ```
    """
    issued_at = datetime.now(timezone.utc)
    info: dict[str, Any] = {
        "domain": urlparse(resource_uri).netloc,
        "uri": resource_uri,
        "version": version,
        "chainId": to_caip2(network),
        "nonce": secrets.token_hex(16),
        "issuedAt": _iso(issued_at),
    }
    if expiration_seconds is not None:
        info["expirationTime"] = _iso(issued_at + timedelta(seconds=expiration_seconds))
    if statement:
        info["statement"] = statement
    info["resources"] = [resource_uri]

    return {SIGN_IN_WITH_X: {"info": info, "schema": SIWX_INFO_SCHEMA}}
