"""
Type definitions for Swap SDK
"""

from .request import SwapQuoteRequest, RouteOptions, format_amount, to_pubkey
from .result import (
    RouteHop,
    TransactionResult,
    InstructionGroup,
    InstructionResult,
    TokenInfo,
    SimulationOutcome,
)
from .payload import (
    SwapRoutePayload,
    RouteHopPayload,
    InstructionGroupPayload,
    InstructionPayload,
    AccountMetaPayload,
    TokenPayload,
    TokenPricePayload,
)

__all__ = [
    # Requests
    "SwapQuoteRequest",
    "RouteOptions",
    "format_amount",
    "to_pubkey",
    # Results
    "RouteHop",
    "TransactionResult",
    "InstructionGroup",
    "InstructionResult",
    "TokenInfo",
    "SimulationOutcome",
    # Wire schemas
    "SwapRoutePayload",
    "RouteHopPayload",
    "InstructionGroupPayload",
    "InstructionPayload",
    "AccountMetaPayload",
    "TokenPayload",
    "TokenPricePayload",
]
