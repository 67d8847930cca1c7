"""
Wire schemas for swap API responses

Each model mirrors one JSON shape returned by the service. ``from_json``
validates the decoded body and turns pydantic's ValidationError into a
ResponseFormatError naming the offending JSON path. Missing or null list
fields default to empty.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional, Sequence, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, ValidationError, field_validator

from ..errors import ResponseFormatError

P = TypeVar("P", bound="WirePayload")


def _loc_path(prefix: str, loc: Sequence[Union[str, int]]) -> str:
    """("routePlan", 0, "dexId") -> "routePlan[0].dexId" """
    path = prefix
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path = f"{path}.{part}" if path else str(part)
    return path


def _format_error(error: ValidationError, prefix: str) -> ResponseFormatError:
    detail = error.errors()[0]
    field_name = _loc_path(prefix, detail["loc"]) or "body"
    if detail["type"] == "missing":
        format_error = ResponseFormatError.missing(field_name)
        format_error.original_error = error
        return format_error
    return ResponseFormatError.invalid(field_name, detail["msg"], error)


def _none_as_empty(value: Any) -> Any:
    return [] if value is None else value


class WirePayload(BaseModel):
    """Base for response schemas: camelCase aliases, read-only after decoding"""

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    @classmethod
    def from_json(cls: Type[P], data: Any, path: str = "") -> P:
        """
        Validate a decoded JSON value

        Args:
            data: Decoded JSON
            path: JSON path of ``data`` in the response, used in error messages

        Raises:
            ResponseFormatError: A field is missing or has the wrong shape
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise _format_error(e, path)


class RouteHopPayload(WirePayload):
    """One hop of ``routePlan``"""

    token_a: str = Field(alias="tokenA")
    token_b: str = Field(alias="tokenB")
    dex_id: str = Field(alias="dexId")


class AccountMetaPayload(WirePayload):
    """One entry of an instruction's ``keys``"""

    pubkey: str
    is_signer: StrictBool = Field(alias="isSigner")
    is_writable: StrictBool = Field(alias="isWritable")


class InstructionPayload(WirePayload):
    """Instruction in plain JSON form"""

    program_id: str = Field(alias="programId")
    data: bytes
    keys: List[AccountMetaPayload] = Field(default_factory=list)

    @field_validator("keys", mode="before")
    @classmethod
    def _null_keys(cls, value: Any) -> Any:
        return _none_as_empty(value)

    @field_validator("data", mode="before")
    @classmethod
    def _decode_data(cls, value: Any) -> Any:
        # Byte array, serialized Buffer ({"type": "Buffer", "data": [...]}) or UTF-8 text
        if isinstance(value, dict) and isinstance(value.get("data"), list):
            value = value["data"]
        if isinstance(value, list):
            try:
                return bytes(value)
            except (TypeError, ValueError):
                raise ValueError("byte array expected")
        if isinstance(value, str):
            return value.encode("utf-8")
        return value


class InstructionGroupPayload(WirePayload):
    """Entry of ``inXs``: primary and cleanup instructions plus their signers"""

    instructions: List[InstructionPayload] = Field(default_factory=list)
    cleanup_instructions: List[InstructionPayload] = Field(
        default_factory=list, alias="cleanupInstructions"
    )
    signers: List[str] = Field(default_factory=list)

    @field_validator("instructions", "cleanup_instructions", "signers", mode="before")
    @classmethod
    def _null_lists(cls, value: Any) -> Any:
        return _none_as_empty(value)


class SwapRoutePayload(WirePayload):
    """
    Response of POST /bestSwapRoute

    ``transaction`` is present when the service assembled the transaction,
    ``instruction_groups`` (``inXs``) when it returned the raw instructions.
    ``signers`` is None when the field was absent.

    ``amount_out`` is in base units and must be whole; both amounts arrive as
    JSON numbers or numeric strings.
    """

    amount_out: Decimal = Field(alias="amountOut")
    amount_out_ui: Decimal = Field(alias="amountOutUi")
    route_plan: List[RouteHopPayload] = Field(default_factory=list, alias="routePlan")
    lookup_accounts: List[str] = Field(default_factory=list, alias="lookUpAccounts")
    signers: Optional[List[str]] = None
    transaction: Optional[str] = None
    instruction_groups: List[InstructionGroupPayload] = Field(default_factory=list, alias="inXs")

    @field_validator("route_plan", "lookup_accounts", "instruction_groups", mode="before")
    @classmethod
    def _null_lists(cls, value: Any) -> Any:
        return _none_as_empty(value)

    @field_validator("amount_out", "amount_out_ui", mode="before")
    @classmethod
    def _parse_amount(cls, value: Any) -> Any:
        if value is None:
            return value
        # bool is an int subclass
        if isinstance(value, bool) or not isinstance(value, (str, int, float, Decimal)):
            raise ValueError(f"expected a number or numeric string, got {type(value).__name__}")
        try:
            amount = Decimal(str(value))
        except InvalidOperation:
            raise ValueError(f"not a number: {value!r}")
        if not amount.is_finite():
            raise ValueError(f"not a finite number: {value!r}")
        return amount

    @field_validator("amount_out")
    @classmethod
    def _whole_base_units(cls, value: Decimal) -> Decimal:
        if value != value.to_integral_value():
            raise ValueError(f"base-unit amount must be whole, got {value}")
        return value


class TokenPayload(WirePayload):
    """Entry of GET /tokenList"""

    address: str
    name: Optional[str] = None
    symbol: Optional[str] = None
    chain_id: Optional[int] = Field(default=None, alias="chainId")
    decimals: Optional[int] = None
    logo_url: Optional[str] = Field(default=None, alias="logoURL")


class TokenPricePayload(WirePayload):
    """Response of GET /tokenPrice/{address}"""

    price: float
