"""HTTP-specific client for x402 payment protocol."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Callable

from ..schemas import (
    PaymentPayload,
    PaymentPayloadV1,
    PaymentRequired,
    PaymentRequiredParseError,
    PaymentRequiredV1,
    SettleResponse,
)
from .constants import (
    DEFAULT_HTTP_TIMEOUT,
    PAYMENT_REQUIRED_HEADER,
    PAYMENT_RESPONSE_HEADER,
    PAYMENT_SIGNATURE_HEADER,
    X_PAYMENT_HEADER,
    X_PAYMENT_RESPONSE_HEADER,
)
from .utils import (
    decode_payment_required_header,
    decode_payment_response_header,
    encode_payment_signature_header,
    parse_payment_required,
)

if TYPE_CHECKING:
    from ..client import x402Client


class x402HTTPClient:
    """HTTP-specific client for x402 payment protocol.

    Wraps a x402Client to provide HTTP-specific encoding/decoding. Holds no
    per-call state, so one instance can serve concurrent calls.
    """

    def __init__(self, client: "x402Client", timeout: float = DEFAULT_HTTP_TIMEOUT) -> None:
        """Create x402HTTPClient.

        Args:
            client: Underlying x402Client for payment logic.
            timeout: Transport timeout in seconds for connections the engines
                open on this client's behalf.
        """
        self._client = client
        self._timeout = timeout

    @property
    def client(self) -> "x402Client":
        return self._client

    @property
    def timeout(self) -> float:
        return self._timeout

    # =========================================================================
    # Header Encoding/Decoding
    # =========================================================================

    def encode_payment_signature_header(
        self,
        payload: PaymentPayload | PaymentPayloadV1,
    ) -> dict[str, str]:
        """Encode payment payload into HTTP headers.

        Returns appropriate header based on protocol version:
        - V2: { "PAYMENT-SIGNATURE": base64 }
        - V1: { "X-PAYMENT": base64 }

        Args:
            payload: Payment payload to encode.

        Returns:
            Dict with single header name -> value.
        """
        encoded = encode_payment_signature_header(payload)

        if payload.x402_version >= 2:
            return {PAYMENT_SIGNATURE_HEADER: encoded}
        elif payload.x402_version == 1:
            return {X_PAYMENT_HEADER: encoded}
        else:
            raise ValueError(f"Unsupported x402 version: {payload.x402_version}")

    def get_payment_required_response(
        self,
        get_header: Callable[[str], str | None],
        body: Any = None,
    ) -> PaymentRequired | PaymentRequiredV1:
        """Extract payment required from HTTP response.

        The ``PAYMENT-REQUIRED`` header wins; otherwise the body is read as
        a v1 or v2 payment-required object.

        Args:
            get_header: Function to get header by name (case-insensitive).
            body: Response body, already decoded or as raw bytes/text.

        Returns:
            Decoded PaymentRequired (v2) or PaymentRequiredV1.

        Raises:
            PaymentRequiredParseError: If no payment required info found.
        """
        # V2: Check PAYMENT-REQUIRED header
        header = get_header(PAYMENT_REQUIRED_HEADER)
        if header:
            return decode_payment_required_header(header)

        # V1 (or V2 servers that put it in the body)
        if isinstance(body, (bytes, str)) and body:
            try:
                body = json.loads(body)
            except ValueError as e:
                raise PaymentRequiredParseError(f"402 body is not JSON: {e}") from e

        if isinstance(body, Mapping) and "accepts" in body:
            return parse_payment_required(body)

        raise PaymentRequiredParseError("Invalid payment required response")

    def get_payment_settle_response(
        self,
        get_header: Callable[[str], str | None],
    ) -> SettleResponse:
        """Extract settlement response from HTTP headers.

        Args:
            get_header: Function to get header by name.

        Returns:
            Decoded SettleResponse.

        Raises:
            ValueError: If no payment response header found or it is malformed.
        """
        # V2 header
        header = get_header(PAYMENT_RESPONSE_HEADER)
        if header:
            return decode_payment_response_header(header)

        # V1 header
        header = get_header(X_PAYMENT_RESPONSE_HEADER)
        if header:
            return decode_payment_response_header(header)

        raise ValueError("Payment response header not found")

    def has_payment_settle_response(self, get_header: Callable[[str], str | None]) -> bool:
        """Check whether the server sent any settlement header."""
        return bool(get_header(PAYMENT_RESPONSE_HEADER) or get_header(X_PAYMENT_RESPONSE_HEADER))

    # =========================================================================
    # Payment Creation (delegates to x402Client)
    # =========================================================================

    def create_payment_payload(
        self,
        payment_required: PaymentRequired | PaymentRequiredV1,
    ) -> PaymentPayload | PaymentPayloadV1:
        """Create payment payload for the given requirements.

        Delegates to the underlying x402Client.

        Args:
            payment_required: Payment required response from server.

        Returns:
            Payment payload to send with retry request.
        """
        return self._client.create_payment_payload(payment_required)
