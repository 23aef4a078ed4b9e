"""Payment negotiation engine.

Turns one HTTP call into a paid call: request, read the 402, sign a payment,
retry once with the payment attached, then read the settlement. Every
failure comes back as a ``NegotiationResult`` tagged with the phase that
produced it; nothing is raised to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from ..extensions.bazaar import extract_discovery_info
from ..factory import get_parse_client
from ..protocol import normalize_payment_required
from ..schemas import (
    InvalidRequestError,
    NegotiationResult,
    PaymentPayload,
    PaymentPayloadV1,
    Phase,
    PhaseError,
    QueryResult,
    SettlementInfo,
    SettlementStatus,
)
from .constants import DEFAULT_HTTP_TIMEOUT, PAYMENT_REQUIRED_STATUS
from .session import initial_headers, open_session, read_body, read_json, send
from .utils import merge_retry_headers
from .x402_http_client import x402HTTPClient

logger = logging.getLogger(__name__)


def _failure(
    phase: Phase,
    status_code: int,
    message: str,
    details: dict[str, Any] | None = None,
    **kwargs: Any,
) -> NegotiationResult[Any]:
    return NegotiationResult(
        success=False,
        status_code=status_code,
        error=PhaseError(phase=phase, message=message, details=details),
        **kwargs,
    )


def _read_settlement(
    client: x402HTTPClient,
    response: httpx.Response,
    payment_payload: PaymentPayload | PaymentPayloadV1,
) -> tuple[SettlementInfo | None, SettlementStatus, str | None]:
    """Read the settlement confirmation; a miss is reported, never raised."""
    get_header = response.headers.get
    if not client.has_payment_settle_response(get_header):
        logger.debug("Paid response carried no settlement header")
        return None, SettlementStatus.ABSENT, None

    try:
        settle = client.get_payment_settle_response(get_header)
    except ValueError as e:
        logger.debug("Could not parse settlement: %s", e)
        return None, SettlementStatus.MALFORMED, str(e)

    if not settle.transaction:
        logger.debug("Settlement header has no transaction")
        return None, SettlementStatus.MALFORMED, "Settlement response missing transaction"

    settlement = SettlementInfo(
        transaction=settle.transaction,
        network=settle.network or "",
        payer=settle.payer or payment_payload.get_pay_to() or "",
    )
    logger.debug("Settled in %s on %s", settlement.transaction, settlement.network)
    return settlement, SettlementStatus.SETTLED, None


async def make_x402_request(
    client: x402HTTPClient,
    url: str,
    *,
    method: str = "GET",
    body: Any = None,
    headers: Mapping[str, str] | None = None,
    http: httpx.AsyncClient | None = None,
    timeout: float | None = None,
) -> NegotiationResult[Any]:
    """Make a request to an x402-protected endpoint, paying if asked to.

    At most two requests are sent: the original one and, after a 402, one
    retry carrying the payment.

    Args:
        client: Payment-capable HTTP client (see ``create_client``).
        url: Resource URL.
        method: HTTP method.
        body: JSON-serializable request body.
        headers: Extra request headers.
        http: Optional ``httpx.AsyncClient`` to reuse; it is not closed.
        timeout: Transport timeout when no ``http`` client is given. Defaults
            to ``client.timeout``.

    Returns:
        The outcome, with ``payment_required`` set once requirements were read.

    Example:
        ```python
        client = create_client(EthAccountSigner.from_key(key), "eip155:8453")
        result = await make_x402_request(client, "https://api.example.com/data")
        if result.success:
            print(result.data, result.settlement)
        else:
            print(result.error.phase, result.error.message)
        ```
    """
    if timeout is None:
        timeout = client.timeout

    async with open_session(http, timeout) as session:
        # Phase 1: Initial request
        logger.debug("Making initial request: %s %s", method, url)
        try:
            response = await send(session, method, url, initial_headers(headers), body)
        except httpx.HTTPError as e:
            logger.warning("Initial request to %s failed: %s", url, e)
            return _failure(Phase.INITIAL_REQUEST, 0, f"Network error: {e}")
        except InvalidRequestError as e:
            return _failure(Phase.INITIAL_REQUEST, 0, str(e))

        if response.status_code != PAYMENT_REQUIRED_STATUS:
            if response.is_success:
                return NegotiationResult(
                    success=True, status_code=response.status_code, data=read_body(response)
                )
            return _failure(
                Phase.INITIAL_REQUEST,
                response.status_code,
                f"HTTP {response.status_code}",
                {"body": read_body(response), "headers": dict(response.headers)},
            )

        # Phase 2: Parse payment requirements
        logger.debug("Got 402, parsing requirements")
        raw_body = read_json(response)
        try:
            raw_payment_required = client.get_payment_required_response(
                response.headers.get, raw_body
            )
            payment_required = normalize_payment_required(raw_payment_required)
        except Exception as e:
            return _failure(
                Phase.PARSE_REQUIREMENTS,
                response.status_code,
                f"Failed to parse payment requirements: {e}",
                {
                    "headers": dict(response.headers),
                    "body": raw_body if raw_body is not None else response.text,
                },
            )

        # Phase 3: Create signed payment from the raw wire model
        logger.debug("Creating payment payload")
        try:
            payment_payload = client.create_payment_payload(raw_payment_required)
            payment_headers = client.encode_payment_signature_header(payment_payload)
        except Exception as e:
            return _failure(
                Phase.CREATE_SIGNATURE,
                response.status_code,
                f"Failed to create payment: {e}",
                payment_required=payment_required,
            )

        # Phase 4: Retry with payment
        logger.debug("Retrying with %s", ", ".join(payment_headers))
        try:
            paid_response = await send(
                session, method, url, merge_retry_headers(headers, payment_headers), body
            )
        except httpx.HTTPError as e:
            logger.warning("Paid request to %s failed: %s", url, e)
            return _failure(
                Phase.PAID_REQUEST,
                0,
                f"Network error on paid request: {e}",
                payment_required=payment_required,
            )

        if not paid_response.is_success:
            return _failure(
                Phase.PAID_REQUEST,
                paid_response.status_code,
                f"HTTP {paid_response.status_code} after payment",
                {"body": read_body(paid_response), "headers": dict(paid_response.headers)},
                payment_required=payment_required,
            )

        # Phase 5: Settlement
        settlement, settlement_status, settlement_error = _read_settlement(
            client, paid_response, payment_payload
        )

        return NegotiationResult(
            success=True,
            status_code=paid_response.status_code,
            data=read_body(paid_response),
            settlement=settlement,
            settlement_status=settlement_status,
            settlement_error=settlement_error,
            payment_required=payment_required,
        )


async def query_endpoint(
    url: str,
    *,
    method: str = "GET",
    body: Any = None,
    headers: Mapping[str, str] | None = None,
    http: httpx.AsyncClient | None = None,
    timeout: float = DEFAULT_HTTP_TIMEOUT,
) -> QueryResult:
    """Probe an endpoint for its payment requirements without paying.

    Sends exactly one request. A non-402 answer is a successful probe of an
    endpoint that does not charge.

    Args:
        url: Resource URL.
        method: HTTP method.
        body: JSON-serializable request body.
        headers: Extra request headers.
        http: Optional ``httpx.AsyncClient`` to reuse; it is not closed.
        timeout: Transport timeout when no ``http`` client is given.

    Returns:
        Requirements, discovery info and raw response data.
    """
    client = get_parse_client()

    async with open_session(http, timeout) as session:
        try:
            response = await send(session, method, url, initial_headers(headers), body)
        except httpx.HTTPError as e:
            logger.warning("Probe of %s failed: %s", url, e)
            return QueryResult(success=False, status_code=0, error=f"Network error: {e}")
        except InvalidRequestError as e:
            return QueryResult(success=False, status_code=0, error=str(e))

    raw_headers = dict(response.headers)
    if response.status_code != PAYMENT_REQUIRED_STATUS:
        return QueryResult(
            success=True,
            status_code=response.status_code,
            raw_headers=raw_headers,
            raw_body=read_body(response),
        )

    raw_body = read_json(response)
    try:
        raw = client.get_payment_required_response(response.headers.get, raw_body)
        payment_required = normalize_payment_required(raw)
    except Exception as e:
        return QueryResult(
            success=False,
            status_code=response.status_code,
            error=f"Failed to parse payment requirements: {e}",
            parse_errors=[str(e)],
            raw_headers=raw_headers,
            raw_body=raw_body,
        )

    return QueryResult(
        success=True,
        status_code=response.status_code,
        x402_version=payment_required.x402_version,
        payment_required=payment_required,
        discovery=extract_discovery_info(payment_required, raw_body),
        raw_headers=raw_headers,
        raw_body=raw_body,
    )
