"""
RPC Client for Solana

Minimal JSON-RPC connection used to simulate swap transactions.
One endpoint, one attempt per call; failures surface to the caller.
"""

from __future__ import annotations

import base64
import logging
import threading
from dataclasses import dataclass
from typing import Any, List, Optional, Union

import httpx
from solders.transaction import VersionedTransaction

from ..errors import RpcError, ConfigurationError
from ..config import get_config
from ..types import SimulationOutcome

logger = logging.getLogger(__name__)


@dataclass
class RpcClientConfig:
    """
    RPC client runtime configuration

    Allows per-client overrides while pulling defaults from the global
    config (swap_sdk.config.RpcConfig).

    Usage:
        config = RpcClientConfig(timeout_seconds=60, commitment="finalized")
        client = RpcClient(endpoint, config=config)
    """
    timeout_seconds: float = None
    commitment: str = None

    def __post_init__(self):
        """Apply defaults from global config for any unset values"""
        if self.timeout_seconds is None:
            self.timeout_seconds = get_config().rpc.timeout_seconds
        if self.commitment is None:
            self.commitment = get_config().rpc.commitment


class RpcClient:
    """
    Solana RPC client

    Usage:
        rpc = RpcClient("https://api.mainnet-beta.solana.com")
        outcome = rpc.simulate_transaction(tx, commitment="confirmed")

        # Custom RPC call
        slot = rpc.call("getSlot", [])
    """

    def __init__(
        self,
        endpoint: Optional[str] = None,
        config: Optional[RpcClientConfig] = None,
    ):
        """
        Initialize RPC client

        Args:
            endpoint: RPC endpoint URL (default from SOLANA_RPC_URL)
            config: RPC configuration options
        """
        self._endpoint = endpoint or get_config().rpc.url
        if not self._endpoint:
            raise ConfigurationError.missing("RPC endpoint")

        self._config = config or RpcClientConfig()
        self._client: Optional[httpx.Client] = None
        self._client_lock = threading.Lock()

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def commitment(self) -> str:
        """Default commitment level"""
        return self._config.commitment

    def _get_client(self) -> httpx.Client:
        """Get or create HTTP client (thread-safe)"""
        if self._client is None:
            with self._client_lock:
                if self._client is None:
                    self._client = httpx.Client(
                        timeout=self._config.timeout_seconds,
                        headers={"Content-Type": "application/json"},
                    )
        return self._client

    def call(self, method: str, params: List[Any]) -> Any:
        """
        Make JSON-RPC call

        Args:
            method: RPC method name
            params: RPC parameters

        Returns:
            RPC result

        Raises:
            RpcError: On transport failure, non-JSON body or JSON-RPC error object
        """
        client = self._get_client()
        body = {
            "jsonrpc": "2.0",
            "id": 1,
            "method": method,
            "params": params,
        }

        try:
            response = client.post(self._endpoint, json=body)
            response.raise_for_status()
            result = response.json()
        except httpx.TimeoutException as e:
            logger.warning(f"RPC timeout: {self._endpoint}")
            raise RpcError.timeout(self._endpoint, self._config.timeout_seconds) from e
        except httpx.HTTPStatusError as e:
            logger.warning(f"RPC HTTP error: {e}")
            raise RpcError(
                f"HTTP error {e.response.status_code}",
                endpoint=self._endpoint,
                original_error=e,
            ) from e
        except httpx.RequestError as e:
            logger.warning(f"RPC connection error: {e}")
            raise RpcError.connection_failed(self._endpoint, e) from e
        except ValueError as e:
            raise RpcError.malformed_response(self._endpoint, "body is not JSON", e) from e

        if not isinstance(result, dict):
            raise RpcError.malformed_response(self._endpoint, f"expected object, got {type(result).__name__}")
        if "error" in result:
            raise RpcError.error_response(self._endpoint, result["error"])

        return result.get("result")

    def simulate_transaction(
        self,
        transaction: Union[VersionedTransaction, bytes],
        commitment: Optional[str] = None,
        replace_recent_blockhash: bool = False,
    ) -> SimulationOutcome:
        """
        Simulate transaction execution

        Args:
            transaction: Transaction or its serialized bytes
            commitment: Commitment level
            replace_recent_blockhash: Let the node swap in a fresh blockhash

        Returns:
            Simulation outcome

        Raises:
            RpcError: Call failed or the result carries no ``value``
        """
        tx_data = base64.b64encode(bytes(transaction)).decode("ascii")

        params: List[Any] = [
            tx_data,
            {
                "commitment": commitment or self.commitment,
                "encoding": "base64",
                "sigVerify": False,
                "replaceRecentBlockhash": replace_recent_blockhash,
            },
        ]
        result = self.call("simulateTransaction", params)
        value = result.get("value") if isinstance(result, dict) else None
        if not isinstance(value, dict):
            raise RpcError.malformed_response(self._endpoint, "simulateTransaction result has no value")
        return SimulationOutcome.from_rpc(value)

    def close(self):
        """Close HTTP client"""
        if self._client:
            self._client.close()
            self._client = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
