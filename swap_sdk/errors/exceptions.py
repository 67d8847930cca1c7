"""
Exception definitions for Swap SDK
"""

from enum import Enum
from typing import Any, Optional


class ErrorCode(Enum):
    """
    Unified error codes for swap SDK operations

    1xxx - Swap API errors
    2xxx - Solana RPC errors
    3xxx - Simulation errors
    6xxx - Signer errors
    9xxx - Configuration errors
    """
    # Swap API errors
    API_REQUEST_FAILED = "1001"
    API_INVALID_RESPONSE = "1002"

    # RPC errors (recoverable)
    RPC_CONNECTION_FAILED = "2001"
    RPC_TIMEOUT = "2002"
    RPC_ERROR_RESPONSE = "2003"

    # Simulation errors
    TOO_MANY_ACCOUNT_LOCKS = "3001"

    # Signer errors
    SIGNER_INVALID_SECRET = "6001"
    SIGNER_NOT_REQUIRED = "6002"

    # Configuration errors
    CONFIG_INVALID = "9001"
    CONFIG_MISSING = "9002"


class SwapSdkError(Exception):
    """
    Base exception for all swap SDK errors

    Attributes:
        message: Human-readable error message
        code: Error code for programmatic handling
        recoverable: Whether the error might succeed on retry
        original_error: The underlying exception if any
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        recoverable: bool = False,
        original_error: Optional[Exception] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.recoverable = recoverable
        self.original_error = original_error
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"

    @property
    def should_retry(self) -> bool:
        """Indicate if the operation should be retried"""
        return self.recoverable


class ApiError(SwapSdkError):
    """
    Swap API returned a non-success HTTP status

    The response body is not parsed; only the status line is kept.
    """

    def __init__(
        self,
        status_text: str,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
    ):
        super().__init__(
            f"API Error: {status_text}",
            ErrorCode.API_REQUEST_FAILED,
            recoverable=False,
            details={"status_code": status_code, "url": url},
        )
        self.status_text = status_text
        self.status_code = status_code
        self.url = url


class ResponseFormatError(SwapSdkError):
    """
    Swap API response does not match the expected schema

    Raised when:
    - A required field is absent
    - A field has the wrong type or cannot be decoded
    """

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(
            message,
            ErrorCode.API_INVALID_RESPONSE,
            recoverable=False,
            original_error=original_error,
            details={"field": field_name},
        )
        self.field_name = field_name

    @classmethod
    def missing(cls, field_name: str) -> "ResponseFormatError":
        return cls(f"Missing required field in response: {field_name}", field_name=field_name)

    @classmethod
    def invalid(cls, field_name: str, reason: str, error: Exception = None) -> "ResponseFormatError":
        return cls(
            f"Invalid value for response field '{field_name}': {reason}",
            field_name=field_name,
            original_error=error,
        )


class TooManyAccountLocksError(SwapSdkError):
    """
    Simulated transaction exceeds the runtime's account lock limit

    Requesting routes with at most two hops keeps the number of locked
    accounts under the limit.
    """

    DEFAULT_MESSAGE = (
        "Too many account locks: consider using "
        "RouteOptions(reduce_to_two_hops=True) in the options when getting the routes"
    )

    def __init__(self, message: str = DEFAULT_MESSAGE, simulation_error: Any = None):
        super().__init__(
            message,
            ErrorCode.TOO_MANY_ACCOUNT_LOCKS,
            recoverable=False,
            details={"simulation_error": simulation_error},
        )
        self.simulation_error = simulation_error


class RpcError(SwapSdkError):
    """
    Solana RPC errors - typically recoverable

    Raised when:
    - Connection to RPC endpoint fails
    - Request times out
    - The node answers with a JSON-RPC error object
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.RPC_CONNECTION_FAILED,
        original_error: Optional[Exception] = None,
        endpoint: Optional[str] = None,
    ):
        super().__init__(
            message,
            code,
            recoverable=True,
            original_error=original_error,
            details={"endpoint": endpoint} if endpoint else None,
        )
        self.endpoint = endpoint

    @classmethod
    def connection_failed(cls, endpoint: str, error: Exception = None) -> "RpcError":
        return cls(
            f"Failed to connect to RPC endpoint: {endpoint}",
            ErrorCode.RPC_CONNECTION_FAILED,
            original_error=error,
            endpoint=endpoint,
        )

    @classmethod
    def timeout(cls, endpoint: str, timeout_seconds: float) -> "RpcError":
        return cls(
            f"RPC request timed out after {timeout_seconds}s",
            ErrorCode.RPC_TIMEOUT,
            endpoint=endpoint,
        )

    @classmethod
    def error_response(cls, endpoint: str, error: dict) -> "RpcError":
        rpc_error = cls(
            f"RPC error: {error.get('message', str(error))}",
            ErrorCode.RPC_ERROR_RESPONSE,
            endpoint=endpoint,
        )
        rpc_error.recoverable = False
        rpc_error.details["rpc_error_code"] = error.get("code")
        rpc_error.details["rpc_error_data"] = error.get("data")
        return rpc_error

    @classmethod
    def malformed_response(cls, endpoint: str, reason: str, error: Exception = None) -> "RpcError":
        rpc_error = cls(
            f"Malformed RPC response: {reason}",
            ErrorCode.RPC_ERROR_RESPONSE,
            original_error=error,
            endpoint=endpoint,
        )
        rpc_error.recoverable = False
        return rpc_error


class SignerError(SwapSdkError):
    """
    Signing-related errors

    Raised when:
    - A signer secret returned by the API cannot be decoded
    - A signer is not in the transaction's required signers list
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.SIGNER_INVALID_SECRET,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message, code, recoverable=False, original_error=original_error)

    @classmethod
    def invalid_secret(cls, reason: str, error: Exception = None) -> "SignerError":
        return cls(f"Cannot decode signer secret: {reason}", original_error=error)

    @classmethod
    def not_required(cls, pubkey: str, expected: list) -> "SignerError":
        return cls(
            f"Signer {pubkey} is not in the required signers list. Expected signers: {expected}",
            ErrorCode.SIGNER_NOT_REQUIRED,
        )


class ConfigurationError(SwapSdkError):
    """
    Configuration-related errors

    Raised when:
    - Required configuration is missing
    - Configuration values are invalid
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFIG_INVALID,
    ):
        super().__init__(message, code, recoverable=False)

    @classmethod
    def missing(cls, param: str) -> "ConfigurationError":
        return cls(f"Missing required configuration: {param}", ErrorCode.CONFIG_MISSING)

    @classmethod
    def invalid(cls, param: str, reason: str) -> "ConfigurationError":
        return cls(f"Invalid configuration '{param}': {reason}", ErrorCode.CONFIG_INVALID)
