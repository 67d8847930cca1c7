"""
Test RPC Client with Mocks

Tests for RPC client behavior with mocked responses.
"""

import sys
from pathlib import Path
from unittest.mock import Mock, patch

import httpx
import pytest

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

ENDPOINT = "https://api.mainnet-beta.solana.com"


def _json_response(body):
    mock_response = Mock()
    mock_response.status_code = 200
    mock_response.json.return_value = body
    mock_response.raise_for_status = Mock()
    return mock_response


def test_rpc_config_defaults():
    """Test RpcClientConfig default values from global config"""
    from swap_sdk.infra.rpc import RpcClientConfig

    print("Testing RpcClientConfig defaults...")

    config = RpcClientConfig()

    assert config.timeout_seconds > 0, "Should have positive timeout"
    assert config.commitment in ("processed", "confirmed", "finalized"), "Invalid commitment"

    print("  RpcClientConfig defaults: PASSED")


def test_rpc_config_override():
    """Test RpcClientConfig with overrides"""
    from swap_sdk.infra.rpc import RpcClientConfig

    print("Testing RpcClientConfig override...")

    config = RpcClientConfig(timeout_seconds=60.0, commitment="finalized")

    assert config.timeout_seconds == 60.0, "Should use override timeout"
    assert config.commitment == "finalized", "Should use override commitment"

    print("  RpcClientConfig override: PASSED")


def test_rpc_client_init(monkeypatch):
    """Test RpcClient initialization"""
    from swap_sdk.infra.rpc import RpcClient
    from swap_sdk.errors import ConfigurationError
    from swap_sdk.config import get_config

    print("Testing RpcClient init...")

    client = RpcClient(ENDPOINT)
    assert client.endpoint == ENDPOINT
    assert client.commitment == get_config().rpc.commitment

    # No endpoint given and none configured
    monkeypatch.setattr(get_config().rpc, "url", "")
    with pytest.raises(ConfigurationError):
        RpcClient()

    print("  RpcClient init: PASSED")


def test_rpc_call_success():
    """Test successful RPC call"""
    from swap_sdk.infra.rpc import RpcClient

    print("Testing RPC call success...")

    mock_response = _json_response({
        "jsonrpc": "2.0",
        "id": 1,
        "result": {"blockhash": "test_blockhash", "lastValidBlockHeight": 12345},
    })

    with patch.object(httpx.Client, 'post', return_value=mock_response) as mock_post:
        client = RpcClient(ENDPOINT)
        result = client.call("getLatestBlockhash", [{"commitment": "confirmed"}])

    assert result["blockhash"] == "test_blockhash"
    assert mock_post.call_args[0][0] == ENDPOINT
    assert mock_post.call_args[1]["json"]["method"] == "getLatestBlockhash"

    print("  RPC call success: PASSED")


def test_rpc_call_error():
    """Test JSON-RPC error object handling"""
    from swap_sdk.infra.rpc import RpcClient
    from swap_sdk.errors import RpcError, ErrorCode

    print("Testing RPC error handling...")

    mock_response = _json_response({
        "jsonrpc": "2.0",
        "id": 1,
        "error": {"code": -32600, "message": "Invalid request"},
    })

    with patch.object(httpx.Client, 'post', return_value=mock_response):
        client = RpcClient(ENDPOINT)
        with pytest.raises(RpcError) as exc_info:
            client.call("invalidMethod", [])

    assert "Invalid request" in str(exc_info.value)
    assert exc_info.value.code == ErrorCode.RPC_ERROR_RESPONSE

    print("  RPC error handling: PASSED")


def test_rpc_timeout():
    """Test timeout handling"""
    from swap_sdk.infra.rpc import RpcClient, RpcClientConfig
    from swap_sdk.errors import RpcError

    print("Testing timeout handling...")

    with patch.object(httpx.Client, 'post', side_effect=httpx.TimeoutException("Timeout")) as mock_post:
        client = RpcClient(ENDPOINT, RpcClientConfig(timeout_seconds=1.0))
        with pytest.raises(RpcError) as exc_info:
            client.call("getSlot", [])

    assert exc_info.value.recoverable, "Timeout should be recoverable"
    assert "timed out" in str(exc_info.value).lower()
    # No retries
    assert mock_post.call_count == 1

    print("  Timeout handling: PASSED")


def test_rpc_http_error():
    """Test HTTP status error handling"""
    from swap_sdk.infra.rpc import RpcClient
    from swap_sdk.errors import RpcError

    print("Testing HTTP error handling...")

    fail_response = Mock()
    fail_response.status_code = 500
    fail_response.raise_for_status = Mock(
        side_effect=httpx.HTTPStatusError("Server Error", request=Mock(), response=fail_response)
    )

    with patch.object(httpx.Client, 'post', return_value=fail_response):
        client = RpcClient(ENDPOINT)
        with pytest.raises(RpcError) as exc_info:
            client.call("getSlot", [])

    assert "500" in str(exc_info.value)

    print("  HTTP error handling: PASSED")


def test_rpc_connection_error():
    """Test connection failure handling"""
    from swap_sdk.infra.rpc import RpcClient
    from swap_sdk.errors import RpcError, ErrorCode

    print("Testing connection error handling...")

    with patch.object(httpx.Client, 'post', side_effect=httpx.ConnectError("refused")):
        client = RpcClient(ENDPOINT)
        with pytest.raises(RpcError) as exc_info:
            client.call("getSlot", [])

    assert exc_info.value.code == ErrorCode.RPC_CONNECTION_FAILED
    assert isinstance(exc_info.value.original_error, httpx.ConnectError)

    print("  Connection error handling: PASSED")


def test_simulate_transaction_bytes():
    """Test simulate_transaction with pre-serialized bytes and defaults"""
    from swap_sdk.infra.rpc import RpcClient, RpcClientConfig

    print("Testing simulate_transaction...")

    mock_response = _json_response({"jsonrpc": "2.0", "id": 1, "result": {"value": {"err": None, "logs": ["ok"]}}})

    with patch.object(httpx.Client, 'post', return_value=mock_response) as mock_post:
        client = RpcClient(ENDPOINT, RpcClientConfig(commitment="processed"))
        outcome = client.simulate_transaction(b"\x01\x02", replace_recent_blockhash=True)

    params = mock_post.call_args[1]["json"]["params"]
    assert params[0] == "AQI="
    assert params[1]["commitment"] == "processed"
    assert params[1]["replaceRecentBlockhash"] is True
    assert outcome.is_success
    assert outcome.logs == ["ok"]

    print("  simulate_transaction: PASSED")


def test_rpc_non_json_body():
    """Test that a non-JSON body is reported as RpcError"""
    from swap_sdk.infra.rpc import RpcClient
    from swap_sdk.errors import RpcError, ErrorCode

    print("Testing non-JSON body...")

    mock_response = Mock()
    mock_response.status_code = 200
    mock_response.raise_for_status = Mock()
    mock_response.json.side_effect = ValueError("Expecting value")

    with patch.object(httpx.Client, 'post', return_value=mock_response):
        client = RpcClient(ENDPOINT)
        with pytest.raises(RpcError) as exc_info:
            client.call("getSlot", [])

    assert exc_info.value.code == ErrorCode.RPC_ERROR_RESPONSE
    assert exc_info.value.recoverable is False
    assert isinstance(exc_info.value.original_error, ValueError)

    print("  Non-JSON body: PASSED")


def test_simulate_transaction_without_value():
    """Test that a simulateTransaction result with no value is not a success"""
    from swap_sdk.infra.rpc import RpcClient
    from swap_sdk.errors import RpcError

    print("Testing simulate_transaction without value...")

    for result in ({"context": {"slot": 1}}, None):
        mock_response = _json_response({"jsonrpc": "2.0", "id": 1, "result": result})

        with patch.object(httpx.Client, 'post', return_value=mock_response):
            client = RpcClient(ENDPOINT)
            with pytest.raises(RpcError) as exc_info:
                client.simulate_transaction(b"\x01")

        assert "no value" in str(exc_info.value)

    print("  simulate_transaction without value: PASSED")
