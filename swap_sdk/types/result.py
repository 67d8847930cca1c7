"""
Result type definitions for quotes, tokens and simulations
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional

from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.transaction import VersionedTransaction


@dataclass(frozen=True)
class RouteHop:
    """
    One token-to-token leg of a swap route

    Attributes:
        token_a: Input mint of the hop
        token_b: Output mint of the hop
        dex_id: DEX that executes the hop
    """
    token_a: Pubkey
    token_b: Pubkey
    dex_id: str

    def __str__(self) -> str:
        return f"{self.token_a} -> {self.token_b} ({self.dex_id})"


@dataclass
class TransactionResult:
    """
    Quote delivered as a ready-to-send transaction

    Attributes:
        transaction: Versioned transaction, signed by every signer the service supplied
        amount_out: Output amount in raw units
        amount_out_ui: Output amount in human-readable units
        route_plan: Hops of the selected route
        lookup_accounts: Address lookup tables referenced by the transaction
        signers: Keypairs decoded from the service response
    """
    transaction: VersionedTransaction
    amount_out: int
    amount_out_ui: Decimal
    route_plan: List[RouteHop] = field(default_factory=list)
    lookup_accounts: List[Pubkey] = field(default_factory=list)
    signers: List[Keypair] = field(default_factory=list)

    def __str__(self) -> str:
        return f"TransactionResult(amount_out={self.amount_out}, hops={len(self.route_plan)})"


@dataclass
class InstructionGroup:
    """
    Primary and cleanup instructions of one swap step

    Attributes:
        instructions: Main instructions
        cleanup_instructions: Instructions to run after the main ones
        signers: Signer secrets for this group, as returned (not decoded)
    """
    instructions: List[Instruction] = field(default_factory=list)
    cleanup_instructions: List[Instruction] = field(default_factory=list)
    signers: List[str] = field(default_factory=list)


@dataclass
class InstructionResult:
    """
    Quote delivered as instructions; the caller assembles and signs

    Attributes:
        instruction_groups: Instruction groups in execution order
        amount_out: Output amount in raw units
        amount_out_ui: Output amount in human-readable units
        route_plan: Hops of the selected route
        lookup_accounts: Address lookup tables to compile the message with
        signers: Top-level signer secrets, as returned (not decoded)
    """
    instruction_groups: List[InstructionGroup]
    amount_out: int
    amount_out_ui: Decimal
    route_plan: List[RouteHop] = field(default_factory=list)
    lookup_accounts: List[Pubkey] = field(default_factory=list)
    signers: List[str] = field(default_factory=list)

    @property
    def all_instructions(self) -> List[Instruction]:
        """Every instruction, each group's main ones followed by its cleanup ones"""
        out: List[Instruction] = []
        for group in self.instruction_groups:
            out.extend(group.instructions)
            out.extend(group.cleanup_instructions)
        return out


@dataclass(frozen=True)
class TokenInfo:
    """
    Token supported by the swap service

    Attributes:
        name: Full token name
        symbol: Token symbol
        address: Token mint
        chain_id: Chain identifier reported by the service
        decimals: Number of decimal places
        logo_url: Logo image URL
    """
    name: Optional[str]
    symbol: Optional[str]
    address: Pubkey
    chain_id: Optional[int] = None
    decimals: Optional[int] = None
    logo_url: Optional[str] = None

    def __repr__(self) -> str:
        return f"TokenInfo({self.symbol}, {str(self.address)[:8]}...)"


@dataclass
class SimulationOutcome:
    """
    Result of simulating a transaction against an RPC node

    Attributes:
        err: Error payload reported by the runtime, None on success
        logs: Program log lines
        accounts: Requested post-simulation account states
        units_consumed: Compute units consumed
        return_data: Program return data
        raw: Untouched ``value`` object of the RPC response
    """
    err: Any = None
    logs: List[str] = field(default_factory=list)
    accounts: Optional[List[Any]] = None
    units_consumed: Optional[int] = None
    return_data: Optional[Dict[str, Any]] = None
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return self.err is None

    @classmethod
    def from_rpc(cls, value: Optional[Dict[str, Any]]) -> "SimulationOutcome":
        """Build from the ``value`` object of a simulateTransaction response"""
        value = value or {}
        return cls(
            err=value.get("err"),
            logs=value.get("logs") or [],
            accounts=value.get("accounts"),
            units_consumed=value.get("unitsConsumed"),
            return_data=value.get("returnData"),
            raw=value,
        )
