"""Tests for the v1/v2 payment-required normalizer."""

import pytest

from x402call.protocol import is_v1_response, normalize_payment_required
from x402call.schemas import (
    PaymentRequired,
    PaymentRequiredNormalizationError,
    PaymentRequiredV1,
    PaymentRequirements,
    PaymentRequirementsV1,
    ResourceInfo,
)

PAY_TO = "0x209693Bc6afc0C5328bA36FaF03C514EF312287C"
USDC_BASE = "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913"
USDC_BASE_SEPOLIA = "0x036CbD53842c5426634e7929541eC2318f3dCF7e"


def v1_requirement(amount: str = "10000", network: str = "base", **overrides) -> dict:
    requirement = {
        "scheme": "exact",
        "network": network,
        "maxAmountRequired": amount,
        "resource": "https://api.example.com/weather",
        "description": "Weather data",
        "mimeType": "application/json",
        "payTo": PAY_TO,
        "maxTimeoutSeconds": 60,
        "asset": USDC_BASE,
        "extra": {"name": "USD Coin", "version": "2"},
    }
    requirement.update(overrides)
    return requirement


def v2_requirement(amount: str = "10000", network: str = "eip155:8453", **overrides) -> dict:
    requirement = {
        "scheme": "exact",
        "network": network,
        "amount": amount,
        "asset": USDC_BASE,
        "payTo": PAY_TO,
        "maxTimeoutSeconds": 60,
        "extra": {"name": "USD Coin", "version": "2"},
    }
    requirement.update(overrides)
    return requirement


class TestIsV1Response:
    """Test version classification."""

    def test_explicit_v1_marker(self):
        assert is_v1_response({"x402Version": 1, "accepts": [v2_requirement()]}) is True

    def test_explicit_v2_marker_wins_over_field_shape(self):
        assert is_v1_response({"x402Version": 2, "accepts": [v1_requirement()]}) is False

    def test_missing_version_uses_legacy_amount_field(self):
        assert is_v1_response({"accepts": [v1_requirement()]}) is True

    def test_missing_version_with_amount_is_v2(self):
        assert is_v1_response({"accepts": [v2_requirement()]}) is False

    def test_empty_accepts_without_version_is_not_v1(self):
        assert is_v1_response({"accepts": []}) is False

    def test_non_object_is_not_v1(self):
        assert is_v1_response("not a body") is False
        assert is_v1_response(None) is False

    def test_accepts_parsed_wire_model(self):
        model = PaymentRequiredV1.model_validate({"x402Version": 1, "accepts": [v1_requirement()]})
        assert is_v1_response(model) is True


class TestNormalizeV1:
    """Test normalization of legacy responses."""

    def test_renames_max_amount_required_to_amount(self):
        body = {
            "x402Version": 1,
            "error": "X-PAYMENT header is required",
            "accepts": [v1_requirement("10000"), v1_requirement("25000", network="base-sepolia")],
        }

        result = normalize_payment_required(body)

        assert result.x402_version == 1
        assert result.error == "X-PAYMENT header is required"
        assert [r.amount for r in result.accepts] == ["10000", "25000"]

    def test_preserves_requirement_order(self):
        body = {
            "x402Version": 1,
            "accepts": [
                v1_requirement("3", network="polygon"),
                v1_requirement("1", network="base"),
                v1_requirement("2", network="base-sepolia"),
            ],
        }

        result = normalize_payment_required(body)

        assert [r.network for r in result.accepts] == ["polygon", "base", "base-sepolia"]

    def test_keeps_legacy_display_fields(self):
        result = normalize_payment_required({"x402Version": 1, "accepts": [v1_requirement()]})

        requirement = result.accepts[0]
        assert requirement.resource == "https://api.example.com/weather"
        assert requirement.description == "Weather data"
        assert requirement.mime_type == "application/json"
        assert requirement.pay_to == PAY_TO
        assert requirement.extra == {"name": "USD Coin", "version": "2"}

    def test_never_sets_resource_or_extensions(self):
        body = {
            "x402Version": 1,
            "accepts": [v1_requirement()],
            "extensions": {"bazaar": {}},
        }

        result = normalize_payment_required(body)

        assert result.resource is None
        assert result.extensions is None

    def test_missing_version_is_read_as_v1(self):
        result = normalize_payment_required({"accepts": [v1_requirement("777")]})

        assert result.x402_version == 1
        assert result.accepts[0].amount == "777"

    def test_missing_legacy_amount_raises(self):
        requirement = v1_requirement()
        del requirement["maxAmountRequired"]

        with pytest.raises(PaymentRequiredNormalizationError, match="maxAmountRequired"):
            normalize_payment_required({"x402Version": 1, "accepts": [requirement]})

    def test_failure_in_later_requirement_raises_without_partial_result(self):
        bad = v1_requirement()
        del bad["maxAmountRequired"]

        with pytest.raises(PaymentRequiredNormalizationError, match="index 1"):
            normalize_payment_required({"x402Version": 1, "accepts": [v1_requirement(), bad]})

    def test_accepts_parsed_v1_model(self):
        model = PaymentRequiredV1(
            accepts=[PaymentRequirementsV1.model_validate(v1_requirement("5000"))]
        )

        result = normalize_payment_required(model)

        assert result.x402_version == 1
        assert result.accepts[0].amount == "5000"


class TestNormalizeV2:
    """Test normalization of current responses."""

    def test_passes_amount_through(self):
        body = {
            "x402Version": 2,
            "accepts": [v2_requirement("10000"), v2_requirement("20000", network="eip155:84532")],
        }

        result = normalize_payment_required(body)

        assert result.x402_version == 2
        assert [r.amount for r in result.accepts] == ["10000", "20000"]
        assert [r.network for r in result.accepts] == ["eip155:8453", "eip155:84532"]

    def test_passes_resource_and_extensions_through(self):
        extensions = {
            "bazaar": {"info": {"input": {"type": "http", "method": "GET"}}},
            "custom": [1, 2, 3],
        }
        body = {
            "x402Version": 2,
            "resource": {
                "url": "https://api.example.com/data",
                "description": "Data",
                "mimeType": "application/json",
            },
            "accepts": [v2_requirement()],
            "extensions": extensions,
        }

        result = normalize_payment_required(body)

        assert result.resource == ResourceInfo(
            url="https://api.example.com/data",
            description="Data",
            mime_type="application/json",
        )
        assert result.extensions == extensions
        assert result.extension_keys() == ["bazaar", "custom"]

    def test_v2_requirements_carry_no_legacy_fields(self):
        result = normalize_payment_required({"x402Version": 2, "accepts": [v2_requirement()]})

        requirement = result.accepts[0]
        assert requirement.resource is None
        assert requirement.description is None
        assert requirement.mime_type is None

    def test_missing_amount_raises(self):
        requirement = v2_requirement()
        del requirement["amount"]

        with pytest.raises(PaymentRequiredNormalizationError, match="missing amount"):
            normalize_payment_required({"x402Version": 2, "accepts": [requirement]})

    def test_explicit_v2_with_only_legacy_amount_raises(self):
        with pytest.raises(PaymentRequiredNormalizationError, match="missing amount"):
            normalize_payment_required({"x402Version": 2, "accepts": [v1_requirement()]})

    def test_integer_amount_is_stringified(self):
        result = normalize_payment_required(
            {"x402Version": 2, "accepts": [v2_requirement(amount=5000)]}
        )

        assert result.accepts[0].amount == "5000"

    def test_non_integer_amount_raises(self):
        with pytest.raises(PaymentRequiredNormalizationError):
            normalize_payment_required(
                {"x402Version": 2, "accepts": [v2_requirement(amount="1.5")]}
            )

    def test_challenge_only_response_has_no_requirements(self):
        body = {"x402Version": 2, "accepts": [], "extensions": {"sign-in-with-x": {"info": {}}}}

        result = normalize_payment_required(body)

        assert result.accepts == []
        assert result.extension_keys() == ["sign-in-with-x"]

    def test_non_object_extensions_raises(self):
        with pytest.raises(PaymentRequiredNormalizationError, match="extensions"):
            normalize_payment_required(
                {"x402Version": 2, "accepts": [v2_requirement()], "extensions": ["bazaar"]}
            )

    def test_accepts_parsed_v2_model(self):
        model = PaymentRequired(
            resource=ResourceInfo(url="https://api.example.com/data"),
            accepts=[PaymentRequirements.model_validate(v2_requirement("42"))],
        )

        result = normalize_payment_required(model)

        assert result.x402_version == 2
        assert result.accepts[0].amount == "42"
        assert result.resource.url == "https://api.example.com/data"

    def test_non_object_body_raises(self):
        with pytest.raises(PaymentRequiredNormalizationError, match="must be an object"):
            normalize_payment_required(["accepts"])
