"""Tests for client builders and environment configuration."""

import pytest

from x402call import ClientConfig, ConfigError, create_client, create_client_from_config
from x402call.config import HTTP_TIMEOUT_ENV, PREFERRED_NETWORK_ENV, PRIVATE_KEY_ENV
from x402call.factory import EVM_WILDCARD, get_parse_client
from x402call.schemas import PaymentRequired, PaymentRequirements

PAY_TO = "0x209693Bc6afc0C5328bA36FaF03C514EF312287C"


def make_payment_required(*networks: str) -> PaymentRequired:
    return PaymentRequired(
        accepts=[
            PaymentRequirements(
                scheme="exact",
                network=network,
                asset="0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913",
                amount="1000",
                pay_to=PAY_TO,
                max_timeout_seconds=60,
                extra={"name": "USD Coin", "version": "2"},
            )
            for network in networks
        ]
    )


class TestGetParseClient:
    def test_is_cached(self):
        assert get_parse_client() is get_parse_client()

    def test_reads_every_evm_chain(self):
        schemes = get_parse_client().client.get_registered_schemes()
        assert schemes == [{"network": EVM_WILDCARD, "scheme": "exact"}]


class TestCreateClient:
    def test_registers_evm_wildcard(self, signer):
        client = create_client(signer)
        assert client.client.get_registered_schemes() == [
            {"network": EVM_WILDCARD, "scheme": "exact"}
        ]

    def test_default_timeout(self, signer):
        assert create_client(signer).timeout == 30.0

    def test_custom_timeout(self, signer):
        assert create_client(signer, timeout=5.0).timeout == 5.0

    def test_pays_with_given_signer(self, signer, test_address):
        payload = create_client(signer).create_payment_payload(
            make_payment_required("eip155:8453")
        )
        assert payload.payload["authorization"]["from"] == test_address
        assert signer.typed_data_calls == 1

    def test_preferred_network_wins(self, signer):
        payment_required = make_payment_required("eip155:84532", "eip155:8453")
        payload = create_client(signer, "eip155:8453").create_payment_payload(payment_required)
        assert payload.accepted.network == "eip155:8453"

    def test_preferred_network_accepts_v1_name(self, signer):
        payment_required = make_payment_required("eip155:84532", "eip155:8453")
        payload = create_client(signer, "base").create_payment_payload(payment_required)
        assert payload.accepted.network == "eip155:8453"

    def test_unavailable_preference_falls_back_to_first(self, signer):
        payment_required = make_payment_required("eip155:84532", "eip155:8453")
        payload = create_client(signer, "eip155:137").create_payment_payload(payment_required)
        assert payload.accepted.network == "eip155:84532"

    def test_server_order_is_not_mutated(self, signer):
        payment_required = make_payment_required("eip155:84532", "eip155:8453")
        create_client(signer, "eip155:8453").create_payment_payload(payment_required)
        assert [r.network for r in payment_required.accepts] == ["eip155:84532", "eip155:8453"]


class TestCreateClientFromConfig:
    def test_uses_configured_key_and_network(self, test_private_key, test_address):
        config = ClientConfig(private_key=test_private_key, preferred_network="eip155:8453")
        client = create_client_from_config(config)

        payload = client.create_payment_payload(
            make_payment_required("eip155:84532", "eip155:8453")
        )
        assert payload.accepted.network == "eip155:8453"
        assert payload.payload["authorization"]["from"] == test_address

    def test_carries_configured_timeout(self, test_private_key):
        config = ClientConfig(private_key=test_private_key, http_timeout=7.5)

        assert create_client_from_config(config).timeout == 7.5


class TestClientConfigFromEnv:
    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in (PRIVATE_KEY_ENV, PREFERRED_NETWORK_ENV, HTTP_TIMEOUT_ENV):
            monkeypatch.delenv(name, raising=False)

    def test_minimal(self, monkeypatch, test_private_key):
        monkeypatch.setenv(PRIVATE_KEY_ENV, test_private_key)

        config = ClientConfig.from_env(dotenv=False)

        assert config.private_key == test_private_key
        assert config.preferred_network is None
        assert config.http_timeout == 30.0

    def test_full(self, monkeypatch, test_private_key):
        monkeypatch.setenv(PRIVATE_KEY_ENV, test_private_key)
        monkeypatch.setenv(PREFERRED_NETWORK_ENV, "base-sepolia")
        monkeypatch.setenv(HTTP_TIMEOUT_ENV, "5.5")

        config = ClientConfig.from_env(dotenv=False)

        assert config.preferred_network == "eip155:84532"
        assert config.http_timeout == 5.5

    def test_missing_key(self):
        with pytest.raises(ConfigError, match="is not set"):
            ClientConfig.from_env(dotenv=False)

    def test_non_evm_network(self, monkeypatch, test_private_key):
        monkeypatch.setenv(PRIVATE_KEY_ENV, test_private_key)
        monkeypatch.setenv(PREFERRED_NETWORK_ENV, "solana:5eykt4UsFv8P8NJdTREpY1vzqKqZKvdp")

        with pytest.raises(ConfigError, match="is not an EVM network"):
            ClientConfig.from_env(dotenv=False)

    @pytest.mark.parametrize(
        "value,message",
        [
            ("soon", "is not a number"),
            ("0", "must be positive"),
            ("-1", "must be positive"),
        ],
    )
    def test_bad_timeout(self, monkeypatch, test_private_key, value, message):
        monkeypatch.setenv(PRIVATE_KEY_ENV, test_private_key)
        monkeypatch.setenv(HTTP_TIMEOUT_ENV, value)

        with pytest.raises(ConfigError, match=message):
            ClientConfig.from_env(dotenv=False)

    def test_config_error_is_value_error(self):
        assert issubclass(ConfigError, ValueError)
