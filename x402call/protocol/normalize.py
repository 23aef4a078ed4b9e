"""x402 v1/v2 normalization layer.

Converts v1 and v2 payment-required responses into a single internal
format. All downstream code should use the normalized types.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ValidationError

from ..schemas import (
    X402_VERSION,
    X402_VERSION_V1,
    NormalizedPaymentRequired,
    NormalizedRequirement,
    PaymentRequiredNormalizationError,
    ResourceInfo,
)

logger = logging.getLogger(__name__)

V1_AMOUNT_FIELD = "maxAmountRequired"
AMOUNT_FIELD = "amount"


def _as_mapping(payment_required: Any) -> Mapping[str, Any] | None:
    if isinstance(payment_required, BaseModel):
        return payment_required.model_dump(by_alias=True, exclude_none=True)
    if isinstance(payment_required, Mapping):
        return payment_required
    return None


def _declared_version(pr: Mapping[str, Any]) -> int | None:
    version = pr.get("x402Version")
    if isinstance(version, bool) or not isinstance(version, int):
        return None
    return version


def is_v1_response(payment_required: Any) -> bool:
    """Detect the v1 response format.

    A body is v1 when it declares ``x402Version: 1`` or, lacking an explicit
    current-version marker, when its first requirement uses
    ``maxAmountRequired`` instead of ``amount``.

    Args:
        payment_required: Raw 402 body (mapping) or parsed wire model.

    Returns:
        True if the body should be read as v1.
    """
    pr = _as_mapping(payment_required)
    if pr is None:
        return False

    version = _declared_version(pr)
    if version == X402_VERSION_V1:
        return True
    if version is not None and version >= X402_VERSION:
        return False

    accepts = pr.get("accepts")
    if isinstance(accepts, list) and accepts and isinstance(accepts[0], Mapping):
        return V1_AMOUNT_FIELD in accepts[0]
    return False


def _amount_string(value: Any) -> Any:
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


def _build_requirement(index: int, fields: dict[str, Any]) -> NormalizedRequirement:
    try:
        return NormalizedRequirement.model_validate(fields)
    except ValidationError as e:
        raise PaymentRequiredNormalizationError(
            f"requirement at index {index} is malformed: {e}"
        ) from e


def _normalize_v1_requirement(index: int, req: Any) -> NormalizedRequirement:
    """Map maxAmountRequired -> amount and keep the embedded resource fields."""
    if not isinstance(req, Mapping):
        raise PaymentRequiredNormalizationError(f"v1 requirement at index {index} is not an object")
    if not req.get(V1_AMOUNT_FIELD):
        raise PaymentRequiredNormalizationError(
            f"v1 requirement at index {index} missing {V1_AMOUNT_FIELD} field"
        )
    return _build_requirement(
        index,
        {
            "scheme": req.get("scheme"),
            "network": req.get("network"),
            "amount": _amount_string(req[V1_AMOUNT_FIELD]),
            "asset": req.get("asset"),
            "payTo": req.get("payTo"),
            "maxTimeoutSeconds": req.get("maxTimeoutSeconds"),
            "extra": req.get("extra"),
            "resource": req.get("resource"),
            "description": req.get("description"),
            "mimeType": req.get("mimeType"),
        },
    )


def _normalize_v2_requirement(index: int, req: Any) -> NormalizedRequirement:
    """Validate that amount exists and pass the fields through."""
    if not isinstance(req, Mapping):
        raise PaymentRequiredNormalizationError(f"v2 requirement at index {index} is not an object")
    if not req.get(AMOUNT_FIELD):
        raise PaymentRequiredNormalizationError(
            f"v2 requirement at index {index} missing {AMOUNT_FIELD} field"
        )
    return _build_requirement(
        index,
        {
            "scheme": req.get("scheme"),
            "network": req.get("network"),
            "amount": _amount_string(req[AMOUNT_FIELD]),
            "asset": req.get("asset"),
            "payTo": req.get("payTo"),
            "maxTimeoutSeconds": req.get("maxTimeoutSeconds"),
            "extra": req.get("extra"),
        },
    )


def _accepts(pr: Mapping[str, Any]) -> list[Any]:
    accepts = pr.get("accepts")
    if accepts is None:
        return []
    if not isinstance(accepts, list):
        raise PaymentRequiredNormalizationError("'accepts' must be a list")
    return accepts


def normalize_payment_required(payment_required: Any) -> NormalizedPaymentRequired:
    """Detect the protocol version and normalize to the internal format.

    Either every requirement is mapped or an error is raised; a partial
    result is never returned.

    Args:
        payment_required: Raw 402 body (mapping) or parsed v1/v2 wire model.

    Returns:
        Normalized payment-required response, requirement order preserved.

    Raises:
        PaymentRequiredNormalizationError: If the body is not an object or any
            requirement lacks its amount field or is otherwise malformed.
    """
    pr = _as_mapping(payment_required)
    if pr is None:
        raise PaymentRequiredNormalizationError(
            f"payment required response must be an object, got {type(payment_required).__name__}"
        )

    if is_v1_response(pr):
        accepts = [_normalize_v1_requirement(i, r) for i, r in enumerate(_accepts(pr))]
        logger.debug("Normalized v1 payment required with %d requirement(s)", len(accepts))
        return NormalizedPaymentRequired(
            x402_version=X402_VERSION_V1,
            error=pr.get("error"),
            accepts=accepts,
        )

    accepts = [_normalize_v2_requirement(i, r) for i, r in enumerate(_accepts(pr))]

    resource = pr.get("resource")
    extensions = pr.get("extensions")
    try:
        resource_info = ResourceInfo.model_validate(resource) if resource is not None else None
    except ValidationError as e:
        raise PaymentRequiredNormalizationError(f"resource is malformed: {e}") from e
    if extensions is not None and not isinstance(extensions, Mapping):
        raise PaymentRequiredNormalizationError("'extensions' must be an object")

    version = _declared_version(pr) or X402_VERSION
    logger.debug(
        "Normalized v%d payment required with %d requirement(s)", version, len(accepts)
    )
    return NormalizedPaymentRequired(
        x402_version=version,
        error=pr.get("error"),
        accepts=accepts,
        resource=resource_info,
        extensions=dict(extensions) if extensions is not None else None,
    )
