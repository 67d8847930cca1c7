"""
Error definitions for Swap SDK
"""

from .exceptions import (
    ErrorCode,
    SwapSdkError,
    ApiError,
    ResponseFormatError,
    TooManyAccountLocksError,
    RpcError,
    SignerError,
    ConfigurationError,
)
from .simulation import TOO_MANY_ACCOUNT_LOCKS_MARKER, raise_for_simulation_error

__all__ = [
    "ErrorCode",
    "SwapSdkError",
    "ApiError",
    "ResponseFormatError",
    "TooManyAccountLocksError",
    "RpcError",
    "SignerError",
    "ConfigurationError",
    "TOO_MANY_ACCOUNT_LOCKS_MARKER",
    "raise_for_simulation_error",
]
