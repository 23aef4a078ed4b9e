"""Sign-In-With-X authentication engine.

Calls a resource that answers 402 with a ``sign-in-with-x`` challenge,
signs the server's challenge and retries once with the ``SIGN-IN-WITH-X``
header. Every failure comes back as an ``AuthResult``; nothing is raised.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx
from pydantic import ValidationError

from ..extensions.sign_in_with_x import (
    SIGN_IN_WITH_X,
    SIGN_IN_WITH_X_HEADER,
    SIWxExtensionInfo,
    create_siwx_payload,
    encode_siwx_header,
    extract_siwx_challenge,
    find_missing_challenge_fields,
    is_unsupported_chain,
)
from ..factory import get_parse_client
from ..mechanisms.evm.types import ClientEvmSigner
from ..protocol import normalize_payment_required
from ..schemas import (
    AuthenticationInfo,
    AuthError,
    AuthErrorKind,
    AuthResult,
    InvalidRequestError,
)
from .constants import DEFAULT_HTTP_TIMEOUT, PAYMENT_REQUIRED_STATUS
from .session import initial_headers, open_session, read_body, read_json, send
from .utils import merge_retry_headers
from .x402_http_client import x402HTTPClient

logger = logging.getLogger(__name__)


def _failure(
    kind: AuthErrorKind,
    status_code: int,
    message: str,
    details: dict[str, Any] | None = None,
    **kwargs: Any,
) -> AuthResult:
    return AuthResult(
        success=False,
        status_code=status_code,
        error=AuthError(kind=kind, message=message, details=details),
        **kwargs,
    )


async def authed_call(
    signer: ClientEvmSigner,
    url: str,
    *,
    method: str = "GET",
    body: Any = None,
    headers: Mapping[str, str] | None = None,
    http: httpx.AsyncClient | None = None,
    parse_client: x402HTTPClient | None = None,
    timeout: float = DEFAULT_HTTP_TIMEOUT,
) -> AuthResult:
    """Call a resource that requires proof of address ownership.

    At most two requests are sent. The signer is only invoked when the
    server issued a complete challenge for a supported chain.

    Args:
        signer: Signer exposing ``address`` and ``sign_message``.
        url: Resource URL.
        method: HTTP method.
        body: JSON-serializable request body.
        headers: Extra request headers.
        http: Optional ``httpx.AsyncClient`` to reuse; it is not closed.
        parse_client: Client used to read the 402 (defaults to the cached
            read-only client).
        timeout: Transport timeout when no ``http`` client is given.

    Returns:
        The outcome. ``error.requires_payment`` is True when the resource
        asked for payment instead of authentication.
    """
    parse_client = parse_client or get_parse_client()

    async with open_session(http, timeout) as session:
        # Step 1: Initial request
        logger.debug("Making initial request: %s %s", method, url)
        try:
            response = await send(session, method, url, initial_headers(headers), body)
        except httpx.HTTPError as e:
            logger.warning("Initial request to %s failed: %s", url, e)
            return _failure(AuthErrorKind.INITIAL_REQUEST, 0, f"Network error: {e}")
        except InvalidRequestError as e:
            return _failure(AuthErrorKind.INITIAL_REQUEST, 0, str(e))

        if response.status_code != PAYMENT_REQUIRED_STATUS:
            response_headers = dict(response.headers)
            if response.is_success:
                return AuthResult(
                    success=True,
                    status_code=response.status_code,
                    data=read_body(response),
                    headers=response_headers,
                )
            return _failure(
                AuthErrorKind.INITIAL_REQUEST,
                response.status_code,
                f"HTTP {response.status_code}",
                {"body": read_body(response)},
                headers=response_headers,
            )

        # Step 2: Parse the 402
        raw_body = read_json(response)
        try:
            raw = parse_client.get_payment_required_response(response.headers.get, raw_body)
            payment_required = normalize_payment_required(raw)
        except Exception as e:
            return _failure(
                AuthErrorKind.PARSE_REQUIREMENTS,
                response.status_code,
                f"Failed to parse 402 response: {e}",
                {
                    "headers": dict(response.headers),
                    "body": raw_body if raw_body is not None else response.text,
                },
            )

        # Step 3: Find the challenge
        challenge = extract_siwx_challenge(payment_required.extensions)
        if challenge is None:
            return _failure(
                AuthErrorKind.MISSING_EXTENSION,
                response.status_code,
                f"Endpoint returned 402 but no {SIGN_IN_WITH_X} extension found",
                {
                    "x402Version": payment_required.x402_version,
                    "extensions": payment_required.extension_keys(),
                },
                payment_required=payment_required,
            )

        # Step 4: Validate required fields
        missing = find_missing_challenge_fields(challenge)
        if missing:
            return _failure(
                AuthErrorKind.INVALID_CHALLENGE,
                response.status_code,
                f"Invalid {SIGN_IN_WITH_X} extension: missing required fields: "
                + ", ".join(missing),
                {"missingFields": missing, "receivedInfo": dict(challenge)},
                payment_required=payment_required,
            )

        try:
            info = SIWxExtensionInfo.model_validate(challenge)
        except ValidationError as e:
            invalid = [".".join(str(part) for part in error["loc"]) for error in e.errors()]
            return _failure(
                AuthErrorKind.INVALID_CHALLENGE,
                response.status_code,
                f"Invalid {SIGN_IN_WITH_X} extension: malformed fields: " + ", ".join(invalid),
                {"missingFields": [], "invalidFields": invalid, "receivedInfo": dict(challenge)},
                payment_required=payment_required,
            )

        # Step 5: Chains we cannot sign for
        chain_id = info.chain_id
        if is_unsupported_chain(chain_id):
            return _failure(
                AuthErrorKind.UNSUPPORTED_CHAIN,
                response.status_code,
                f"Authentication on {chain_id} is not supported; only EVM chains can sign in",
                {"chainId": chain_id},
                payment_required=payment_required,
            )

        # Steps 6-7: Sign the server's challenge and encode it
        try:
            payload = create_siwx_payload(info, signer)
            siwx_header = encode_siwx_header(payload, payment_required.x402_version)
        except Exception as e:
            return _failure(
                AuthErrorKind.CREATE_SIGNATURE,
                response.status_code,
                f"Failed to sign {SIGN_IN_WITH_X} challenge: {e}",
                payment_required=payment_required,
            )

        # Step 8: Retry with the proof
        logger.debug("Retrying with %s header for %s", SIGN_IN_WITH_X_HEADER, payload.address)
        try:
            authed_response = await send(
                session,
                method,
                url,
                merge_retry_headers(headers, {SIGN_IN_WITH_X_HEADER: siwx_header}),
                body,
            )
        except httpx.HTTPError as e:
            logger.warning("Authenticated request to %s failed: %s", url, e)
            return _failure(
                AuthErrorKind.AUTHED_REQUEST,
                0,
                f"Network error on authenticated request: {e}",
                {"authAddress": payload.address},
                payment_required=payment_required,
            )

    response_headers = dict(authed_response.headers)
    if not authed_response.is_success:
        return _failure(
            AuthErrorKind.AUTHED_REQUEST,
            authed_response.status_code,
            f"HTTP {authed_response.status_code} after authentication",
            {"body": read_body(authed_response), "authAddress": payload.address},
            headers=response_headers,
            payment_required=payment_required,
        )

    return AuthResult(
        success=True,
        status_code=authed_response.status_code,
        data=read_body(authed_response),
        headers=response_headers,
        payment_required=payment_required,
        authentication=AuthenticationInfo(
            address=payload.address,
            domain=payload.domain,
            chain_id=payload.chain_id,
        ),
    )
