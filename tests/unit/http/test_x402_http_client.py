"""Tests for x402HTTPClient header encoding and decoding."""

import base64
import json

import pytest

from x402call.client import x402Client
from x402call.http import (
    PAYMENT_REQUIRED_HEADER,
    PAYMENT_RESPONSE_HEADER,
    PAYMENT_SIGNATURE_HEADER,
    X_PAYMENT_HEADER,
    X_PAYMENT_RESPONSE_HEADER,
    decode_payment_signature_header,
    encode_payment_required_header,
    encode_payment_response_header,
    x402HTTPClient,
)
from x402call.http.utils import merge_retry_headers
from x402call.schemas import (
    PaymentPayload,
    PaymentPayloadV1,
    PaymentRequired,
    PaymentRequiredParseError,
    PaymentRequiredV1,
    PaymentRequirements,
    SettleResponse,
)

PAY_TO = "0x209693Bc6afc0C5328bA36FaF03C514EF312287C"


def make_requirements() -> PaymentRequirements:
    return PaymentRequirements(
        scheme="exact",
        network="eip155:8453",
        asset="0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913",
        amount="1000000",
        pay_to=PAY_TO,
        max_timeout_seconds=300,
    )


def v1_body() -> dict:
    return {
        "x402Version": 1,
        "error": "X-PAYMENT header is required",
        "accepts": [
            {
                "scheme": "exact",
                "network": "base",
                "maxAmountRequired": "1000",
                "resource": "https://api.example.com/data",
                "description": "",
                "mimeType": "application/json",
                "payTo": PAY_TO,
                "maxTimeoutSeconds": 60,
                "asset": "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913",
            }
        ],
    }


def headers_getter(headers: dict):
    lowered = {k.lower(): v for k, v in headers.items()}
    return lambda name: lowered.get(name.lower())


@pytest.fixture
def http_client() -> x402HTTPClient:
    return x402HTTPClient(x402Client())


class TestEncodePaymentSignatureHeader:
    """Test payment header encoding."""

    def test_v2_uses_payment_signature_header(self, http_client):
        payload = PaymentPayload(payload={"signature": "0xabc"}, accepted=make_requirements())

        headers = http_client.encode_payment_signature_header(payload)

        assert list(headers) == [PAYMENT_SIGNATURE_HEADER]
        decoded = json.loads(base64.b64decode(headers[PAYMENT_SIGNATURE_HEADER]))
        assert decoded["x402Version"] == 2
        assert decoded["accepted"]["payTo"] == PAY_TO
        assert decode_payment_signature_header(headers[PAYMENT_SIGNATURE_HEADER]) == payload

    def test_v1_uses_x_payment_header(self, http_client):
        payload = PaymentPayloadV1(
            scheme="exact", network="base", payload={"authorization": {"to": PAY_TO}}
        )

        headers = http_client.encode_payment_signature_header(payload)

        assert list(headers) == [X_PAYMENT_HEADER]
        decoded = json.loads(base64.b64decode(headers[X_PAYMENT_HEADER]))
        assert decoded == {
            "x402Version": 1,
            "scheme": "exact",
            "network": "base",
            "payload": {"authorization": {"to": PAY_TO}},
        }


class TestGetPaymentRequiredResponse:
    """Test 402 parsing."""

    def test_header_wins_over_body(self, http_client):
        payment_required = PaymentRequired(accepts=[make_requirements()])
        header = encode_payment_required_header(payment_required)

        result = http_client.get_payment_required_response(
            headers_getter({PAYMENT_REQUIRED_HEADER: header}), v1_body()
        )

        assert result == payment_required

    def test_v1_body(self, http_client):
        result = http_client.get_payment_required_response(headers_getter({}), v1_body())

        assert isinstance(result, PaymentRequiredV1)
        assert result.accepts[0].max_amount_required == "1000"

    def test_v1_body_as_bytes(self, http_client):
        result = http_client.get_payment_required_response(
            headers_getter({}), json.dumps(v1_body()).encode()
        )

        assert isinstance(result, PaymentRequiredV1)

    def test_v2_body(self, http_client):
        body = PaymentRequired(accepts=[make_requirements()]).model_dump(by_alias=True)

        result = http_client.get_payment_required_response(headers_getter({}), body)

        assert isinstance(result, PaymentRequired)
        assert result.accepts[0].amount == "1000000"

    def test_missing_information_raises(self, http_client):
        with pytest.raises(PaymentRequiredParseError):
            http_client.get_payment_required_response(headers_getter({}), None)

    def test_non_json_body_raises(self, http_client):
        with pytest.raises(PaymentRequiredParseError, match="not JSON"):
            http_client.get_payment_required_response(headers_getter({}), b"<html>")

    def test_malformed_header_raises(self, http_client):
        with pytest.raises(PaymentRequiredParseError):
            http_client.get_payment_required_response(
                headers_getter({PAYMENT_REQUIRED_HEADER: "%%%"}), None
            )

    def test_invalid_requirements_raise(self, http_client):
        body = v1_body()
        body["accepts"][0]["maxAmountRequired"] = "lots"

        with pytest.raises(PaymentRequiredParseError):
            http_client.get_payment_required_response(headers_getter({}), body)


class TestGetPaymentSettleResponse:
    """Test settlement header parsing."""

    def test_v2_header(self, http_client):
        settle = SettleResponse(success=True, transaction="0xtx", network="eip155:8453")
        header = encode_payment_response_header(settle)

        result = http_client.get_payment_settle_response(
            headers_getter({PAYMENT_RESPONSE_HEADER: header})
        )

        assert result == settle

    def test_v1_header(self, http_client):
        settle = SettleResponse(success=True, transaction="0xtx", network="base", payer="0xme")
        header = encode_payment_response_header(settle)

        result = http_client.get_payment_settle_response(
            headers_getter({X_PAYMENT_RESPONSE_HEADER: header})
        )

        assert result.payer == "0xme"

    def test_missing_header_raises(self, http_client):
        get_header = headers_getter({})

        assert http_client.has_payment_settle_response(get_header) is False
        with pytest.raises(ValueError, match="not found"):
            http_client.get_payment_settle_response(get_header)


class TestMergeRetryHeaders:
    """Test retry header merging."""

    def test_caller_cannot_override_protocol_header(self):
        merged = merge_retry_headers(
            {"payment-signature": "forged", "Authorization": "Bearer t"},
            {PAYMENT_SIGNATURE_HEADER: "real"},
        )

        assert merged == {
            "Content-Type": "application/json",
            "Authorization": "Bearer t",
            PAYMENT_SIGNATURE_HEADER: "real",
        }

    def test_caller_content_type_is_kept(self):
        merged = merge_retry_headers({"content-type": "text/plain"}, {X_PAYMENT_HEADER: "p"})

        assert merged["Content-Type"] == "text/plain"
