"""Server-side verification for Sign-In-With-X payloads."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from urllib.parse import urlparse

from eth_account import Account
from eth_account.messages import encode_defunct

from .message import create_siwx_message
from .types import DEFAULT_EXPIRATION_SECONDS, SIWxPayload

logger = logging.getLogger(__name__)


@dataclass
class SIWxVerifyResult:
    """Result of signature verification.

    Attributes:
        valid: Whether the signature was produced by ``payload.address``.
        address: The recovered signer address, when recovery succeeded.
        error: Reason for failure.
    """

    valid: bool
    address: str | None = None
    error: str | None = None


@dataclass
class SIWxValidationResult:
    """Result of message field validation.

    Attributes:
        valid: Whether all checks passed.
        errors: Error messages if validation failed.
    """

    valid: bool
    errors: list[str] = field(default_factory=list)


def verify_siwx_signature(payload: SIWxPayload) -> SIWxVerifyResult:
    """Check that the bundle was signed by the address it claims.

    The message is rebuilt from the bundle's own fields, so changing any of
    them after signing makes verification fail.
    """
    try:
        message = create_siwx_message(payload, payload.address)
        recovered = Account.recover_message(
            encode_defunct(text=message), signature=payload.signature
        )
    except Exception as e:
        logger.debug("sign-in-with-x signature recovery failed: %s", e)
        return SIWxVerifyResult(valid=False, error=str(e))

    if recovered.lower() != payload.address.lower():
        return SIWxVerifyResult(
            valid=False,
            address=recovered,
            error="Signature does not match address",
        )
    return SIWxVerifyResult(valid=True, address=recovered)


def _parse_time(value: str) -> datetime:
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def validate_siwx_message(
    payload: SIWxPayload,
    expected_resource_uri: str,
    *,
    max_age_seconds: int = DEFAULT_EXPIRATION_SECONDS,
    now: datetime | None = None,
) -> SIWxValidationResult:
    """Check the bundle's fields against the resource being accessed.

    Verifies that domain and URI match the resource, that the message was
    issued recently, and that any validity window covers ``now``.

    Args:
        payload: Signed bundle parsed from the request header.
        expected_resource_uri: URL of the resource the server is protecting.
        max_age_seconds: Oldest acceptable ``issuedAt``.
        now: Reference time (defaults to the current UTC time).

    Returns:
        Validation result with every failed check listed.
    """
    now = now or datetime.now(timezone.utc)
    expected = urlparse(expected_resource_uri)
    errors: list[str] = []

    if payload.domain != expected.netloc:
        errors.append(f"Domain mismatch: expected {expected.netloc}, got {payload.domain}")

    actual = urlparse(payload.uri)
    if (actual.scheme, actual.netloc) != (expected.scheme, expected.netloc):
        errors.append(f"URI mismatch: expected {expected_resource_uri}, got {payload.uri}")

    try:
        issued_at = _parse_time(payload.issued_at)
        if issued_at > now + timedelta(seconds=60):
            errors.append("issuedAt is in the future")
        elif now - issued_at > timedelta(seconds=max_age_seconds):
            errors.append("Message is too old")

        if payload.expiration_time and _parse_time(payload.expiration_time) <= now:
            errors.append("Message has expired")
        if payload.not_before and _parse_time(payload.not_before) > now:
            errors.append("Message is not yet valid")
    except ValueError as e:
        errors.append(f"Invalid timestamp: {e}")

    return SIWxValidationResult(valid=not errors, errors=errors)
