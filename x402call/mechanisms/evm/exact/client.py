"""Exact scheme client implementation for EVM chains (EIP-3009)."""

from __future__ import annotations

import time
from typing import Any

from ....schemas import PaymentRequirements, PaymentRequirementsV1
from ..constants import (
    DEFAULT_VALIDITY_BUFFER,
    SCHEME_EXACT,
    TRANSFER_WITH_AUTHORIZATION_TYPES,
)
from ..types import ClientEvmSigner, TypedDataDomain
from ..utils import (
    bytes_to_hex,
    create_nonce,
    hex_to_bytes,
    normalize_address,
    resolve_network,
)


class ExactEvmScheme:
    """Client scheme for exact EVM payments.

    Signs an EIP-3009 ``TransferWithAuthorization`` for the exact amount the
    server asked for. Works for both protocol versions: the same inner payload
    is wrapped in a v2 ``PaymentPayload`` or a v1 ``PaymentPayloadV1`` by
    the caller.
    """

    def __init__(self, signer: ClientEvmSigner):
        """Initialize client with an EVM signer.

        Args:
            signer: Signer exposing ``address`` and ``sign_typed_data``.
        """
        self._signer = signer
        self.scheme = SCHEME_EXACT

    def create_payment_payload(
        self, requirements: PaymentRequirements | PaymentRequirementsV1
    ) -> dict[str, Any]:
        """Create a signed transfer authorization for the requirement.

        Args:
            requirements: Selected payment requirements (v1 or v2).

        Returns:
            Inner payload dict with ``signature`` and ``authorization``.

        Raises:
            UnsupportedNetworkError: If the network is not an EVM chain.
            ValueError: If the EIP-712 domain cannot be determined.
        """
        network = resolve_network(str(requirements.network))
        extra = requirements.extra or {}
        default_asset = network.default_asset or {}

        name = extra.get("name") or default_asset.get("name")
        version = extra.get("version") or default_asset.get("version")
        if not name or not version:
            raise ValueError(
                f"EIP-712 domain name and version are required for asset "
                f"{requirements.asset} on {network.caip2}"
            )

        now = int(time.time())
        nonce = create_nonce()
        authorization = {
            "from": self._signer.address,
            "to": normalize_address(requirements.pay_to),
            "value": str(int(requirements.get_amount())),
            "validAfter": str(now - DEFAULT_VALIDITY_BUFFER),
            "validBefore": str(now + requirements.max_timeout_seconds),
            "nonce": nonce,
        }

        domain = TypedDataDomain(
            name=name,
            version=version,
            chain_id=network.chain_id,
            verifying_contract=normalize_address(requirements.asset),
        )
        message = {
            "from": authorization["from"],
            "to": authorization["to"],
            "value": int(authorization["value"]),
            "validAfter": int(authorization["validAfter"]),
            "validBefore": int(authorization["validBefore"]),
            "nonce": hex_to_bytes(nonce),
        }

        signature = self._signer.sign_typed_data(
            domain,
            TRANSFER_WITH_AUTHORIZATION_TYPES,
            "TransferWithAuthorization",
            message,
        )

        return {
            "signature": bytes_to_hex(signature),
            "authorization": authorization,
        }
