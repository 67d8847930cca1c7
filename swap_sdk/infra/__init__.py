"""
Infrastructure layer for Swap SDK

Provides:
- RpcClient: Solana JSON-RPC connection for simulations
- Key helpers: address parsing, signer decoding, transaction signing
"""

from .rpc import RpcClient, RpcClientConfig
from .keys import (
    parse_pubkey,
    parse_pubkeys,
    decode_signer_keypair,
    sign_transaction,
)

__all__ = [
    "RpcClient",
    "RpcClientConfig",
    "parse_pubkey",
    "parse_pubkeys",
    "decode_signer_keypair",
    "sign_transaction",
]
