"""x402Client - Client-side component for creating payment payloads.

Manages scheme registration, policy-based filtering, and payload creation.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Protocol, TypeVar

from typing_extensions import Self

from .mechanisms.evm.utils import to_caip2
from .schemas import (
    Network,
    NoMatchingRequirementsError,
    PaymentPayload,
    PaymentPayloadV1,
    PaymentRequired,
    PaymentRequiredV1,
    PaymentRequirements,
    PaymentRequirementsV1,
    ResourceInfo,
    SchemeNotFoundError,
)

logger = logging.getLogger(__name__)

# ============================================================================
# Type Aliases
# ============================================================================

RequirementsView = PaymentRequirements | PaymentRequirementsV1

# Policy: filter/reorder requirements list (e.g., prefer_network, max_amount)
PaymentPolicy = Callable[[int, list[RequirementsView]], list[RequirementsView]]

# Selector: choose final requirement from filtered list
PaymentRequirementsSelector = Callable[[int, list[RequirementsView]], RequirementsView]


class SchemeNetworkClient(Protocol):
    """Builds the scheme-specific inner payload for one requirement."""

    scheme: str

    def create_payment_payload(self, requirements: RequirementsView) -> dict[str, Any]: ...


SchemeT = TypeVar("SchemeT")


def find_schemes_by_network(
    schemes: dict[Network, dict[str, SchemeT]],
    network: Network,
) -> dict[str, SchemeT] | None:
    """Find the schemes registered for a network.

    Both the registered key and the lookup are compared in CAIP-2 form, so
    a v1 name such as ``"base"`` matches ``"eip155:8453"``. A wildcard
    registration like ``"eip155:*"`` matches any chain in the namespace.

    Args:
        schemes: Registry mapping network -> scheme name -> client.
        network: Network to look up.

    Returns:
        The matching scheme map, exact matches before wildcards, or None.
    """
    caip2 = to_caip2(network)
    for registered, clients in schemes.items():
        if to_caip2(registered) == caip2:
            return clients

    namespace = caip2.split(":", 1)[0]
    for registered, clients in schemes.items():
        if registered.endswith(":*") and registered[:-2] == namespace:
            return clients
    return None


# ============================================================================
# Default Implementations
# ============================================================================


def default_payment_selector(
    version: int,
    requirements: list[RequirementsView],
) -> RequirementsView:
    """Default selector: return first requirement.

    Args:
        version: Protocol version.
        requirements: List of filtered requirements.

    Returns:
        First requirement in list.
    """
    return requirements[0]


# ============================================================================
# Built-in Policies
# ============================================================================


def prefer_network(network: Network) -> PaymentPolicy:
    """Create policy that prefers a specific network.

    Networks are compared in CAIP-2 form. The policy returns a new list and
    leaves the input untouched.

    Args:
        network: Network to prefer (CAIP-2 or v1 name).

    Returns:
        Policy function that moves matching requirements to front.
    """
    preferred_caip2 = to_caip2(network)

    def policy(version: int, reqs: list[RequirementsView]) -> list[RequirementsView]:
        preferred = [r for r in reqs if to_caip2(r.network) == preferred_caip2]
        others = [r for r in reqs if to_caip2(r.network) != preferred_caip2]
        return preferred + others

    return policy


def max_amount(max_value: int) -> PaymentPolicy:
    """Create policy that filters by maximum amount.

    Args:
        max_value: Maximum amount in smallest unit.

    Returns:
        Policy function that removes requirements exceeding max.
    """

    def policy(version: int, reqs: list[RequirementsView]) -> list[RequirementsView]:
        return [r for r in reqs if int(r.get_amount()) <= max_value]

    return policy


# ============================================================================
# x402Client
# ============================================================================


class x402Client:
    """Client-side component for creating payment payloads.

    Manages scheme registration, policy-based filtering, and payload creation.
    Supports both V1 and V2 protocol versions with a single registry: a
    scheme registered for ``"eip155:*"`` serves v1 names and CAIP-2 ids alike.

    Example:
        ```python
        from x402call import x402Client
        from x402call.mechanisms.evm import EthAccountSigner, ExactEvmScheme

        client = x402Client()
        client.register("eip155:*", ExactEvmScheme(EthAccountSigner.from_key(key)))
        client.register_policy(prefer_network("eip155:8453"))

        # Create payment payload from 402 response
        payload = client.create_payment_payload(payment_required)
        ```
    """

    def __init__(
        self,
        payment_requirements_selector: PaymentRequirementsSelector | None = None,
    ) -> None:
        """Initialize x402Client.

        Args:
            payment_requirements_selector: Custom selector for choosing
                from filtered requirements. Defaults to first match.
        """
        self._selector = payment_requirements_selector or default_payment_selector
        self._schemes: dict[Network, dict[str, SchemeNetworkClient]] = {}
        self._policies: list[PaymentPolicy] = []

    # ========================================================================
    # Registration
    # ========================================================================

    def register(self, network: Network, client: SchemeNetworkClient) -> Self:
        """Register a scheme client for a network.

        Args:
            network: Network to register for (e.g., "eip155:8453" or "eip155:*").
            client: Scheme client implementation.

        Returns:
            Self for chaining.
        """
        if network not in self._schemes:
            self._schemes[network] = {}
        self._schemes[network][client.scheme] = client
        return self

    def register_policy(self, policy: PaymentPolicy) -> Self:
        """Add a requirement filter policy.

        Policies are applied in registration order to filter and reorder
        payment requirements before selection.

        Args:
            policy: Policy function to add.

        Returns:
            Self for chaining.
        """
        self._policies.append(policy)
        return self

    # ========================================================================
    # Payment Creation
    # ========================================================================

    def create_payment_payload(
        self,
        payment_required: PaymentRequired | PaymentRequiredV1,
        resource: ResourceInfo | None = None,
        extensions: dict[str, Any] | None = None,
    ) -> PaymentPayload | PaymentPayloadV1:
        """Create a payment payload for the given 402 response.

        Args:
            payment_required: The 402 response from the server.
            resource: Optional resource info to include.
            extensions: Optional extensions to include.

        Returns:
            PaymentPayload (V2) or PaymentPayloadV1 (V1).

        Raises:
            NoMatchingRequirementsError: If no requirements match registered schemes.
            SchemeNotFoundError: If scheme not found for selected requirement.
        """
        if payment_required.x402_version == 1:
            return self._create_payment_payload_v1(
                payment_required,  # type: ignore[arg-type]
            )
        return self._create_payment_payload_v2(
            payment_required,  # type: ignore[arg-type]
            resource,
            extensions,
        )

    def _create_payment_payload_v2(
        self,
        payment_required: PaymentRequired,
        resource: ResourceInfo | None,
        extensions: dict[str, Any] | None,
    ) -> PaymentPayload:
        """Create V2 payment payload."""
        selected = self._select_requirements(2, payment_required.accepts)
        inner_payload = self._scheme_for(selected).create_payment_payload(selected)

        return PaymentPayload(
            x402_version=payment_required.x402_version,
            payload=inner_payload,
            accepted=selected,
            resource=resource or payment_required.resource,
            extensions=extensions or payment_required.extensions,
        )

    def _create_payment_payload_v1(
        self,
        payment_required: PaymentRequiredV1,
    ) -> PaymentPayloadV1:
        """Create V1 payment payload."""
        selected = self._select_requirements(1, payment_required.accepts)
        inner_payload = self._scheme_for(selected).create_payment_payload(selected)

        return PaymentPayloadV1(
            x402_version=1,
            scheme=selected.scheme,
            network=selected.network,
            payload=inner_payload,
        )

    def _scheme_for(self, selected: RequirementsView) -> SchemeNetworkClient:
        schemes = find_schemes_by_network(self._schemes, selected.network)
        if schemes is None or selected.scheme not in schemes:
            raise SchemeNotFoundError(selected.scheme, selected.network)
        return schemes[selected.scheme]

    def _select_requirements(self, version: int, requirements: list[Any]) -> Any:
        """Select requirements using policies and selector."""
        # Filter to supported schemes
        supported = []
        for req in requirements:
            schemes = find_schemes_by_network(self._schemes, req.network)
            if schemes and req.scheme in schemes:
                supported.append(req)

        if not supported:
            raise NoMatchingRequirementsError("No payment requirements match registered schemes")

        # Apply policies
        filtered: list[RequirementsView] = list(supported)
        for policy in self._policies:
            filtered = policy(version, filtered)
            if not filtered:
                raise NoMatchingRequirementsError("All requirements filtered out by policies")

        selected = self._selector(version, filtered)
        logger.debug(
            "Selected %s requirement on %s (%d of %d acceptable)",
            selected.scheme,
            selected.network,
            len(filtered),
            len(requirements),
        )
        return selected

    # ========================================================================
    # Introspection
    # ========================================================================

    def get_registered_schemes(self) -> list[dict[str, str]]:
        """Get list of registered schemes for debugging.

        Returns:
            List of {network, scheme} dicts.
        """
        return [
            {"network": network, "scheme": scheme}
            for network, schemes in self._schemes.items()
            for scheme in schemes
        ]
