"""Bazaar discovery info for x402 v2 and v1.

V2 servers declare their calling convention in the ``bazaar`` extension.
V1 servers embed it in each requirement's ``outputSchema``; the helpers
here recover a v2-shaped discovery descriptor from that legacy layout.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel

from ..schemas import NormalizedPaymentRequired

# Extension identifier constant for the bazaar discovery extension
BAZAAR = "bazaar"

QueryParamMethods = Literal["GET", "HEAD", "DELETE"]
BodyMethods = Literal["POST", "PUT", "PATCH"]
BodyType = Literal["json"]

BODY_METHODS: frozenset[str] = frozenset({"POST", "PUT", "PATCH"})


def _output_schema(requirement: Any) -> Mapping[str, Any] | None:
    if isinstance(requirement, BaseModel):
        requirement = requirement.model_dump(by_alias=True)
    if not isinstance(requirement, Mapping):
        return None
    schema = requirement.get("outputSchema")
    return schema if isinstance(schema, Mapping) else None


def _http_input(schema: Mapping[str, Any] | None) -> Mapping[str, Any] | None:
    if schema is None:
        return None
    input_ = schema.get("input")
    if not isinstance(input_, Mapping):
        return None
    if input_.get("type") != "http":
        return None
    method = input_.get("method")
    if not isinstance(method, str) or not method:
        return None
    return input_


def is_discoverable_v1(requirement: Any) -> bool:
    """Check whether a v1 requirement carries an extractable HTTP calling convention.

    Args:
        requirement: Raw v1 requirement mapping or PaymentRequirementsV1.

    Returns:
        True if ``outputSchema.input`` declares an HTTP method and the server
        did not opt out with ``discoverable: false``.
    """
    input_ = _http_input(_output_schema(requirement))
    return input_ is not None and input_.get("discoverable") is not False


def extract_discovery_info_v1(requirement: Any) -> dict[str, Any] | None:
    """Extract discovery info from a v1 requirement's ``outputSchema``.

    Only POST, PUT and PATCH receive a body section, taken from ``body`` or
    the older ``bodyFields`` name.

    Args:
        requirement: Raw v1 requirement mapping or PaymentRequirementsV1.

    Returns:
        Discovery info shaped like the v2 bazaar ``info`` object, or None.

    Example:
        ```python
        extract_discovery_info_v1(
            {"outputSchema": {"input": {"type": "http", "method": "post", "body": {"a": 1}}}}
        )
        # {"input": {"type": "http", "method": "POST", "bodyType": "json", "body": {"a": 1}}}
        ```
    """
    schema = _output_schema(requirement)
    input_ = _http_input(schema)
    if input_ is None or input_.get("discoverable") is False:
        return None

    method = input_["method"].upper()
    info_input: dict[str, Any] = {"type": "http", "method": method}

    if input_.get("queryParams"):
        info_input["queryParams"] = input_["queryParams"]

    if method in BODY_METHODS:
        body = input_.get("body") or input_.get("bodyFields")
        if body:
            info_input["bodyType"] = "json"
            info_input["body"] = body

    if input_.get("headers"):
        info_input["headers"] = input_["headers"]

    info: dict[str, Any] = {"input": info_input}
    output = schema.get("output") if schema is not None else None
    if output:
        info["output"] = {"type": "json", "example": output}
    return info


def extract_discovery_info(
    payment_required: NormalizedPaymentRequired,
    raw_body: Any = None,
) -> dict[str, Any] | None:
    """Get discovery info from a 402 response, whichever version it used.

    V2: returns the ``info`` object of the bazaar extension.
    V1: falls back to extracting from the first requirement's ``outputSchema``
    in the raw body (normalization drops ``outputSchema``).

    Args:
        payment_required: The normalized 402 response.
        raw_body: The raw response body, needed for the v1 fallback.

    Returns:
        Discovery info dict, or None if the server published none.
    """
    bazaar = (payment_required.extensions or {}).get(BAZAAR)
    if isinstance(bazaar, Mapping) and isinstance(bazaar.get("info"), Mapping):
        return dict(bazaar["info"])

    if payment_required.x402_version == 1 and isinstance(raw_body, Mapping):
        accepts = raw_body.get("accepts")
        if isinstance(accepts, list) and accepts:
            return extract_discovery_info_v1(accepts[0])
    return None
