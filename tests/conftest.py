"""Shared fixtures: a test account and a scripted httpx transport."""

from __future__ import annotations

from typing import Callable

import httpx
import pytest
from eth_account import Account

from x402call.mechanisms.evm.signers import EthAccountSigner

# Well-known development key (DO NOT use in production)
TEST_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
TEST_ADDRESS = Account.from_key(TEST_PRIVATE_KEY).address


class RecordingSigner(EthAccountSigner):
    """EthAccountSigner that counts signing calls."""

    def __init__(self, account):
        super().__init__(account)
        self.typed_data_calls = 0
        self.message_calls = 0

    def sign_typed_data(self, domain, types, primary_type, message):
        self.typed_data_calls += 1
        return super().sign_typed_data(domain, types, primary_type, message)

    def sign_message(self, message):
        self.message_calls += 1
        return super().sign_message(message)


class ScriptedServer:
    """Replies to each request with the next scripted response.

    Requests are recorded so tests can assert on the number of network
    calls and the headers that were sent.
    """

    def __init__(self, responses: list[httpx.Response | Callable[[httpx.Request], httpx.Response]]):
        self._responses = list(responses)
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            raise AssertionError(f"Unexpected request #{len(self.requests)}: {request.url}")
        response = self._responses.pop(0)
        if callable(response):
            return response(request)
        return response

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def test_private_key() -> str:
    return TEST_PRIVATE_KEY


@pytest.fixture
def test_address() -> str:
    return TEST_ADDRESS


@pytest.fixture
def signer() -> RecordingSigner:
    return RecordingSigner(Account.from_key(TEST_PRIVATE_KEY))


@pytest.fixture
def scripted_server() -> Callable[..., ScriptedServer]:
    """Build a ScriptedServer from responses given in order."""

    def build(*responses) -> ScriptedServer:
        return ScriptedServer(list(responses))

    return build
