"""Unit tests for the Helius client.

Requests are served by an ``httpx.MockTransport`` so no network is used.
"""

import json

import httpx
import pytest

from whalescope.clients.helius_client import HeliusClient
from whalescope.config import HeliusConfig
from whalescope.utils.error_handling import ConfigurationError, ErrorCode, HeliusAPIError
from tests.fixtures.common import SOL_MINT, WALLET

CONFIG = HeliusConfig(
    api_key="test-key",
    api_url="https://api.example.test/v0",
    rpc_url="https://rpc.example.test",
)


def make_client(handler, config=CONFIG) -> HeliusClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HeliusClient(config, http_client=http_client)


def rpc_result(result):
    return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": result})


@pytest.mark.asyncio
async def test_get_largest_token_holders():
    """Test the JSON-RPC call and the holder mapping."""
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return rpc_result({
            "context": {"slot": 1},
            "value": [
                {"address": WALLET, "amount": "2000000000000", "decimals": 9, "uiAmount": 2000.0},
                {"address": "other", "amount": "1000000000", "decimals": 9, "uiAmount": 1.0},
            ],
        })

    async with make_client(handler) as client:
        holders = await client.get_largest_token_holders(SOL_MINT, limit=1)

    assert len(holders) == 1
    assert holders[0].address == WALLET
    assert holders[0].amount == 2_000_000_000_000
    assert holders[0].ui_amount == 2000.0

    request = requests[0]
    body = json.loads(request.content)
    assert request.method == "POST"
    assert request.url.host == "rpc.example.test"
    assert request.url.params["api-key"] == "test-key"
    assert body["method"] == "getTokenLargestAccounts"
    assert body["params"] == [SOL_MINT]


@pytest.mark.asyncio
async def test_get_token_accounts_by_owner_filters_by_mint():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(json.loads(request.content))
        return rpc_result({"value": [{
            "pubkey": "token-account",
            "account": {"data": {"parsed": {"info": {
                "mint": SOL_MINT,
                "owner": WALLET,
                "tokenAmount": {"amount": "5000000000", "decimals": 9, "uiAmount": 5.0},
            }}}},
        }]})

    async with make_client(handler) as client:
        accounts = await client.get_token_accounts_by_owner(WALLET, SOL_MINT)

    assert accounts[0].address == "token-account"
    assert accounts[0].ui_amount == 5.0
    assert requests[0]["params"] == [WALLET, {"mint": SOL_MINT}, {"encoding": "jsonParsed"}]


@pytest.mark.asyncio
async def test_get_recent_transactions(sample_helius_transaction):
    """Test the enhanced transactions REST call."""
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json=[sample_helius_transaction])

    async with make_client(handler) as client:
        transactions = await client.get_recent_transactions(WALLET, limit=5)

    assert transactions[0].signature == sample_helius_transaction["signature"]
    assert transactions[0].source == "JUPITER"
    assert requests[0].url.path == f"/v0/addresses/{WALLET}/transactions"
    assert requests[0].url.params["limit"] == "5"
    assert requests[0].url.params["api-key"] == "test-key"


@pytest.mark.asyncio
async def test_parse_transactions_posts_signatures(sample_helius_transaction):
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json=[sample_helius_transaction])

    async with make_client(handler) as client:
        transactions = await client.parse_transactions(["sig-1"])

    assert len(transactions) == 1
    assert requests[0].method == "POST"
    assert json.loads(requests[0].content) == {"transactions": ["sig-1"]}


@pytest.mark.asyncio
async def test_http_error_raises_helius_api_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(429, text="rate limited")

    async with make_client(handler) as client:
        with pytest.raises(HeliusAPIError) as exc_info:
            await client.get_recent_transactions(WALLET)

    error = exc_info.value
    assert error.http_status == 429
    assert error.error_code == ErrorCode.PROVIDER_HTTP_ERROR
    assert "test-key" not in str(error)


@pytest.mark.asyncio
async def test_rpc_error_raises_helius_api_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "error": {"code": -32602, "message": "Invalid param"}})

    async with make_client(handler) as client:
        with pytest.raises(HeliusAPIError) as exc_info:
            await client.get_largest_token_holders(SOL_MINT)

    assert exc_info.value.error_code == ErrorCode.PROVIDER_RPC_ERROR
    assert "Invalid param" in exc_info.value.message


@pytest.mark.asyncio
async def test_network_error_is_wrapped():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with make_client(handler) as client:
        with pytest.raises(HeliusAPIError) as exc_info:
            await client.get_recent_transactions(WALLET)

    assert exc_info.value.error_code == ErrorCode.PROVIDER_NETWORK_ERROR
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_missing_api_key_raises_configuration_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    async with make_client(handler, HeliusConfig(api_key="")) as client:
        with pytest.raises(ConfigurationError):
            await client.get_recent_transactions(WALLET)


@pytest.mark.asyncio
async def test_get_token_metadata_returns_none_on_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="internal error")

    async with make_client(handler) as client:
        assert await client.get_token_metadata(SOL_MINT) is None


@pytest.mark.asyncio
async def test_get_token_metadata():
    def handler(request: httpx.Request) -> httpx.Response:
        return rpc_result({"context": {"slot": 1}, "value": {"amount": "1000", "decimals": 6, "uiAmount": 0.001}})

    async with make_client(handler) as client:
        metadata = await client.get_token_metadata(SOL_MINT)

    assert metadata == {"name": SOL_MINT, "symbol": "So11", "decimals": 6}


def test_create_webhook_config():
    config = HeliusClient.create_webhook_config([WALLET], "https://hooks.example.test/whales")

    assert config == {
        "webhookURL": "https://hooks.example.test/whales",
        "transactionTypes": ["Any"],
        "accountAddresses": [WALLET],
        "webhookType": "enhanced",
    }
