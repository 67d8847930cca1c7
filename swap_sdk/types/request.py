"""
Swap request type definitions
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional, Union

from solders.pubkey import Pubkey

from ..config import get_config

AddressLike = Union[Pubkey, str]
AmountLike = Union[Decimal, int, float, str]


def to_pubkey(address: AddressLike) -> Pubkey:
    """Coerce a Pubkey or base58 string into a Pubkey (raises ValueError if invalid)"""
    if isinstance(address, Pubkey):
        return address
    return Pubkey.from_string(address)


def format_amount(amount: AmountLike) -> str:
    """
    Render a human-unit amount as a plain decimal string

    Trailing zeros and exponents are dropped: 10.0 -> "10", 0.50 -> "0.5".

    Raises:
        ValueError: If the amount is negative, not finite, or not a number
    """
    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    except InvalidOperation as e:
        raise ValueError(f"amount_in is not a number: {amount!r}") from e

    if not value.is_finite():
        raise ValueError(f"amount_in must be finite, got {amount!r}")
    if value < 0:
        raise ValueError(f"amount_in must be non-negative, got {amount!r}")

    if value == value.to_integral_value():
        return str(value.quantize(Decimal(1)))
    return format(value.normalize(), "f")


@dataclass(frozen=True)
class RouteOptions:
    """
    Routing flags forwarded to the route finder

    Attributes:
        reduce_to_two_hops: Cap routes at two hops so the transaction stays
            under the runtime's account lock limit
    """
    reduce_to_two_hops: bool = False

    def to_payload(self) -> Dict[str, Any]:
        return {"reduceToTwoHops": self.reduce_to_two_hops}


@dataclass(frozen=True)
class SwapQuoteRequest:
    """
    Parameters to request a swap route

    Attributes:
        public_key: Sender wallet
        token_a: Input token mint
        token_b: Output token mint
        amount_in: Amount of token_a to swap, in human-readable units
        dex_id: DEX identifier, forwarded as-is (default from SWAP_DEX_ID, "INVARIANT")
        options: Optional routing flags
    """
    public_key: AddressLike
    token_a: AddressLike
    token_b: AddressLike
    amount_in: AmountLike
    dex_id: str = field(default_factory=lambda: get_config().api.dex_id)
    options: Optional[RouteOptions] = None

    def __post_init__(self):
        # Fail at construction rather than at request time
        object.__setattr__(self, "public_key", to_pubkey(self.public_key))
        object.__setattr__(self, "token_a", to_pubkey(self.token_a))
        object.__setattr__(self, "token_b", to_pubkey(self.token_b))
        format_amount(self.amount_in)

    def to_payload(self) -> Dict[str, Any]:
        """JSON body for the bestSwapRoute endpoint"""
        body = {
            "publicKey": str(self.public_key),
            "tokenA": str(self.token_a),
            "tokenB": str(self.token_b),
            "amountIn": format_amount(self.amount_in),
            "dexId": self.dex_id,
        }
        if self.options is not None:
            body["options"] = self.options.to_payload()
        return body
