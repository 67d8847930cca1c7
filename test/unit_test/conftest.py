"""
Shared fixtures for unit tests.

No network access: HTTP calls are answered with httpx.Response objects
patched onto httpx.Client, transactions are compiled locally with solders.
"""

import base64
import sys
from pathlib import Path
from typing import Any, List, Optional

import base58
import httpx
import pytest
from solders.hash import Hash
from solders.instruction import AccountMeta, Instruction
from solders.keypair import Keypair
from solders.message import MessageV0
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction import VersionedTransaction

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

BASE_URL = "http://swap.test:3333"

TOKEN_A = "GU7NS9xCwgNPiAdJ69iusFrRfawjDDPjeMBovhV1d4kn"
TOKEN_B = "CEBP3CqAbW4zdZA57H2wfaSG1QNdzQ72GiQEbQXyW9Tm"
WSOL = "So11111111111111111111111111111111111111112"
USDC = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
PROGRAM_ID = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"


def make_response(
    status_code: int,
    payload: Any = None,
    url: str = BASE_URL,
    method: str = "GET",
) -> httpx.Response:
    """httpx.Response bound to a request, as httpx.Client would return it"""
    request = httpx.Request(method, url)
    if payload is None:
        return httpx.Response(status_code, request=request)
    return httpx.Response(status_code, json=payload, request=request)


def build_transaction(signers: List[Keypair], payer: Optional[Keypair] = None) -> VersionedTransaction:
    """
    Compile a v0 transaction whose required signers are payer + signers,
    carrying default (empty) signatures only.
    """
    payer = payer or Keypair()
    accounts = [AccountMeta(kp.pubkey(), True, True) for kp in signers]
    accounts.append(AccountMeta(Keypair().pubkey(), False, True))
    instruction = Instruction(Pubkey.from_string(PROGRAM_ID), bytes([9, 1, 2, 3]), accounts)
    message = MessageV0.try_compile(payer.pubkey(), [instruction], [], Hash.default())
    return VersionedTransaction.populate(
        message, [Signature.default()] * message.header.num_required_signatures
    )


def encode_transaction(transaction: VersionedTransaction) -> str:
    return base64.b64encode(bytes(transaction)).decode("ascii")


def encode_secret(keypair: Keypair) -> str:
    return base58.b58encode(bytes(keypair)).decode("ascii")


@pytest.fixture
def signer_keypairs() -> List[Keypair]:
    return [Keypair(), Keypair()]


@pytest.fixture
def route_response():
    """Factory for a bestSwapRoute response body"""

    def _build(**overrides):
        body = {
            "amountOut": "500000",
            "amountOutUi": "0.5",
            "routePlan": [{"tokenA": TOKEN_A, "tokenB": TOKEN_B, "dexId": "INVARIANT"}],
            "lookUpAccounts": [],
            "signers": [],
        }
        body.update(overrides)
        return body

    return _build
