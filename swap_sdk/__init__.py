"""
Swap SDK - client for the swap route API

Provides:
- Best swap route as a signed versioned transaction or as instructions
- Supported token list and token prices
- Transaction simulation with lock-limit detection
"""

from .client import SwapClient
from .config import DEFAULT_BASE_URL, DEFAULT_DEX_ID
from .types import (
    SwapQuoteRequest,
    RouteOptions,
    RouteHop,
    TransactionResult,
    InstructionGroup,
    InstructionResult,
    TokenInfo,
    SimulationOutcome,
)
from .errors import (
    SwapSdkError,
    ApiError,
    ResponseFormatError,
    TooManyAccountLocksError,
    RpcError,
    SignerError,
    ConfigurationError,
    ErrorCode,
)
from .infra import RpcClient, RpcClientConfig

__all__ = [
    # Client
    "SwapClient",
    "DEFAULT_BASE_URL",
    "DEFAULT_DEX_ID",
    # Types
    "SwapQuoteRequest",
    "RouteOptions",
    "RouteHop",
    "TransactionResult",
    "InstructionGroup",
    "InstructionResult",
    "TokenInfo",
    "SimulationOutcome",
    # Errors
    "SwapSdkError",
    "ApiError",
    "ResponseFormatError",
    "TooManyAccountLocksError",
    "RpcError",
    "SignerError",
    "ConfigurationError",
    "ErrorCode",
    # Infrastructure
    "RpcClient",
    "RpcClientConfig",
]

__version__ = "0.1.0"
