"""
SwapClient - entry point for the swap route API

Wraps the bestSwapRoute, tokenList and tokenPrice endpoints and turns their
JSON into solders objects (Pubkey, VersionedTransaction, Keypair, Instruction).
"""

from __future__ import annotations

import base64
import binascii
import logging
import threading
from typing import Any, List, Optional

import httpx
from solders.instruction import AccountMeta, Instruction
from solders.transaction import VersionedTransaction

from .config import get_config
from .errors import ApiError, ConfigurationError, ResponseFormatError, raise_for_simulation_error
from .infra.keys import decode_signer_keypair, parse_pubkey, parse_pubkeys, sign_transaction
from .types import (
    SwapQuoteRequest,
    RouteHop,
    TransactionResult,
    InstructionGroup,
    InstructionResult,
    TokenInfo,
    SimulationOutcome,
    to_pubkey,
)
from .types.payload import (
    SwapRoutePayload,
    RouteHopPayload,
    InstructionPayload,
    TokenPayload,
    TokenPricePayload,
)
from .types.request import AddressLike

logger = logging.getLogger(__name__)

SIMULATION_COMMITMENT = "confirmed"


class SwapClient:
    """
    Swap route API client

    Provides:
    - quote_as_transaction: best route as a signed VersionedTransaction
    - quote_as_instructions: best route as instruction groups
    - list_tokens: tokens supported by the service
    - get_token_price: price of a token
    - simulate: run a transaction through an RPC node's simulator

    Usage:
        from decimal import Decimal
        from swap_sdk import SwapClient, SwapQuoteRequest

        with SwapClient("http://localhost:3333") as client:
            request = SwapQuoteRequest(
                public_key="UserPublicKeyInBase58",
                token_a="GU7NS9xCwgNPiAdJ69iusFrRfawjDDPjeMBovhV1d4kn",
                token_b="CEBP3CqAbW4zdZA57H2wfaSG1QNdzQ72GiQEbQXyW9Tm",
                amount_in=Decimal("10.0"),
            )
            tx_result = client.quote_as_transaction(request)
            ix_result = client.quote_as_instructions(request)
            tokens = client.list_tokens()
            price = client.get_token_price("So11111111111111111111111111111111111111112")
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize swap client

        Args:
            base_url: API base URL (default from SWAP_API_BASE_URL)
            timeout: Request timeout in seconds (default from SWAP_API_TIMEOUT)
        """
        api_config = get_config().api
        base_url = base_url if base_url is not None else api_config.base_url
        if not base_url:
            raise ConfigurationError.missing("SWAP_API_BASE_URL")

        self._base_url = base_url.rstrip("/")
        self._timeout = timeout if timeout is not None else api_config.timeout
        self._client: Optional[httpx.Client] = None
        self._client_lock = threading.Lock()

    @property
    def base_url(self) -> str:
        return self._base_url

    def _get_client(self) -> httpx.Client:
        """Get or create HTTP client (thread-safe)"""
        if self._client is None:
            with self._client_lock:
                if self._client is None:
                    self._client = httpx.Client(timeout=self._timeout)
        return self._client

    def _url(self, path: str) -> str:
        return f"{self._base_url}/{path}"

    def _read_json(self, response: httpx.Response) -> Any:
        """Return the JSON body, or raise ApiError for a non-success status"""
        if not response.is_success:
            status_text = response.reason_phrase or httpx.codes.get_reason_phrase(response.status_code)
            logger.warning(f"Swap API error {response.status_code} {status_text}: {response.request.url}")
            raise ApiError(status_text, status_code=response.status_code, url=str(response.request.url))

        try:
            return response.json()
        except ValueError as e:
            raise ResponseFormatError.invalid("body", "response is not valid JSON", e)

    def _fetch_swap_route(self, request: SwapQuoteRequest) -> SwapRoutePayload:
        """POST the request to bestSwapRoute and decode the response"""
        body = request.to_payload()
        logger.debug(
            f"Requesting swap route {body['tokenA']} -> {body['tokenB']} "
            f"amount={body['amountIn']} dex={body['dexId']}"
        )

        response = self._get_client().post(self._url("bestSwapRoute"), json=body)
        return SwapRoutePayload.from_json(self._read_json(response))

    def quote_as_transaction(self, request: SwapQuoteRequest) -> TransactionResult:
        """
        Get the best route as a transaction signed by the service's signers

        Args:
            request: Swap parameters

        Returns:
            TransactionResult with the signed VersionedTransaction

        Raises:
            ApiError: Non-success HTTP status
            ResponseFormatError: Response missing or malformed fields
            SignerError: A returned signer cannot sign the transaction
        """
        payload = self._fetch_swap_route(request)

        if payload.transaction is None:
            raise ResponseFormatError.missing("transaction")
        if payload.signers is None:
            raise ResponseFormatError.missing("signers")

        try:
            transaction = VersionedTransaction.from_bytes(base64.b64decode(payload.transaction))
        except (binascii.Error, ValueError) as e:
            raise ResponseFormatError.invalid("transaction", "cannot deserialize versioned transaction", e)

        signers = [decode_signer_keypair(secret) for secret in payload.signers]
        transaction = sign_transaction(transaction, signers)

        amount_out = int(payload.amount_out)
        logger.debug(f"Swap route quoted: amount_out={amount_out}, signers={len(signers)}")

        return TransactionResult(
            transaction=transaction,
            amount_out=amount_out,
            amount_out_ui=payload.amount_out_ui,
            route_plan=_convert_route_plan(payload.route_plan),
            lookup_accounts=parse_pubkeys(payload.lookup_accounts, "lookUpAccounts"),
            signers=signers,
        )

    def quote_as_instructions(self, request: SwapQuoteRequest) -> InstructionResult:
        """
        Get the best route as instruction groups

        The caller assembles and signs the transaction; signers are returned
        as the service encoded them.

        Args:
            request: Swap parameters

        Returns:
            InstructionResult with converted instructions
        """
        payload = self._fetch_swap_route(request)

        instruction_groups = [
            InstructionGroup(
                instructions=[
                    _convert_instruction(inst, f"inXs[{i}].instructions[{j}]")
                    for j, inst in enumerate(group.instructions)
                ],
                cleanup_instructions=[
                    _convert_instruction(inst, f"inXs[{i}].cleanupInstructions[{j}]")
                    for j, inst in enumerate(group.cleanup_instructions)
                ],
                signers=list(group.signers),
            )
            for i, group in enumerate(payload.instruction_groups)
        ]

        return InstructionResult(
            instruction_groups=instruction_groups,
            amount_out=int(payload.amount_out),
            amount_out_ui=payload.amount_out_ui,
            route_plan=_convert_route_plan(payload.route_plan),
            lookup_accounts=parse_pubkeys(payload.lookup_accounts, "lookUpAccounts"),
            signers=list(payload.signers or []),
        )

    def list_tokens(self) -> List[TokenInfo]:
        """Get the tokens supported by the service"""
        response = self._get_client().get(self._url("tokenList"))
        data = self._read_json(response)
        if not isinstance(data, list):
            raise ResponseFormatError.invalid("tokenList", f"expected list, got {type(data).__name__}")

        tokens = []
        for i, item in enumerate(data):
            token = TokenPayload.from_json(item, f"tokenList[{i}]")
            tokens.append(TokenInfo(
                name=token.name,
                symbol=token.symbol,
                address=parse_pubkey(token.address, f"tokenList[{i}].address"),
                chain_id=token.chain_id,
                decimals=token.decimals,
                logo_url=token.logo_url,
            ))
        return tokens

    def get_token_price(self, token_address: AddressLike) -> float:
        """
        Get token price

        Args:
            token_address: Token mint (Pubkey or base58 string)

        Returns:
            Price as float
        """
        address = str(to_pubkey(token_address))
        response = self._get_client().get(self._url(f"tokenPrice/{address}"))
        return TokenPricePayload.from_json(self._read_json(response)).price

    def simulate(self, connection, transaction: VersionedTransaction) -> SimulationOutcome:
        """
        Simulate a transaction at "confirmed" commitment

        Args:
            connection: RpcClient, or any object with
                ``simulate_transaction(transaction, commitment=...)``
            transaction: Transaction to simulate

        Returns:
            Simulation outcome, including errors other than the lock limit

        Raises:
            TooManyAccountLocksError: The transaction locks too many accounts;
                request routes with RouteOptions(reduce_to_two_hops=True)
        """
        outcome = connection.simulate_transaction(transaction, commitment=SIMULATION_COMMITMENT)
        if outcome.err is not None:
            raise_for_simulation_error(outcome.err)
        return outcome

    def close(self):
        """Close HTTP client"""
        if self._client:
            self._client.close()
            self._client = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self) -> str:
        return f"SwapClient(base_url={self._base_url})"


def _convert_route_plan(hops: List[RouteHopPayload]) -> List[RouteHop]:
    return [
        RouteHop(
            token_a=parse_pubkey(hop.token_a, f"routePlan[{i}].tokenA"),
            token_b=parse_pubkey(hop.token_b, f"routePlan[{i}].tokenB"),
            dex_id=hop.dex_id,
        )
        for i, hop in enumerate(hops)
    ]


def _convert_instruction(inst: InstructionPayload, path: str) -> Instruction:
    """Converts an API instruction (plain JSON form) to a solders Instruction"""
    accounts = [
        AccountMeta(
            pubkey=parse_pubkey(key.pubkey, f"{path}.keys[{k}].pubkey"),
            is_signer=key.is_signer,
            is_writable=key.is_writable,
        )
        for k, key in enumerate(inst.keys)
    ]
    return Instruction(
        program_id=parse_pubkey(inst.program_id, f"{path}.programId"),
        data=inst.data,
        accounts=accounts,
    )
