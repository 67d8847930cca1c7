"""
Key handling helpers

Provides:
- parse_pubkey: wire address -> Pubkey, failing the whole call on bad input
- decode_signer_keypair: signer secret returned by the API -> Keypair
- sign_transaction: apply keypairs to a versioned transaction
"""

from __future__ import annotations

import base64
import binascii
import logging
from typing import List, Sequence

import base58
from solders.keypair import Keypair
from solders.message import to_bytes_versioned
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction import VersionedTransaction

from ..errors import ResponseFormatError, SignerError

logger = logging.getLogger(__name__)

SECRET_KEY_LENGTH = 64


def parse_pubkey(address: str, field_name: str) -> Pubkey:
    """
    Parse a base58 address received from the API

    Raises:
        ResponseFormatError: If the address is not a valid 32-byte key
    """
    try:
        return Pubkey.from_string(address)
    except (ValueError, TypeError) as e:
        raise ResponseFormatError.invalid(field_name, f"not a valid public key: {address!r}", e)


def parse_pubkeys(addresses: Sequence[str], field_name: str) -> List[Pubkey]:
    return [parse_pubkey(addr, f"{field_name}[{i}]") for i, addr in enumerate(addresses)]


def _decode_secret(secret: str) -> bytes:
    """base58 first (what the service emits), base64 as fallback"""
    try:
        secret_bytes = base58.b58decode(secret)
        if len(secret_bytes) == SECRET_KEY_LENGTH:
            return secret_bytes
    except ValueError:
        pass

    try:
        return base64.b64decode(secret, validate=True)
    except (binascii.Error, ValueError) as e:
        raise SignerError.invalid_secret("neither base58 nor base64", e)


def decode_signer_keypair(secret: str) -> Keypair:
    """
    Create keypair from a 64-byte secret key encoded as base58 or base64

    Raises:
        SignerError: If the secret cannot be decoded into a keypair
    """
    secret_bytes = _decode_secret(secret)
    if len(secret_bytes) != SECRET_KEY_LENGTH:
        raise SignerError.invalid_secret(
            f"expected {SECRET_KEY_LENGTH} bytes, got {len(secret_bytes)}"
        )
    try:
        return Keypair.from_bytes(secret_bytes)
    except ValueError as e:
        raise SignerError.invalid_secret(str(e), e)


def sign_transaction(
    transaction: VersionedTransaction,
    keypairs: Sequence[Keypair],
) -> VersionedTransaction:
    """
    Sign a versioned transaction with each keypair, in order

    Each signature is written to the slot of the keypair's public key among
    the message's required signers. Slots of other signers keep whatever
    signature the transaction already carries.

    Args:
        transaction: Transaction to sign (legacy or v0 message)
        keypairs: Keypairs to sign with

    Returns:
        New VersionedTransaction with the signatures applied

    Raises:
        SignerError: If a keypair is not a required signer of the message
    """
    if not keypairs:
        return transaction

    message = transaction.message
    # Signed payload carries the 0x80 version prefix for v0 messages
    message_bytes = to_bytes_versioned(message)

    num_required_signatures = message.header.num_required_signatures
    signer_keys = list(message.account_keys)[:num_required_signatures]
    signatures = list(transaction.signatures)
    if len(signatures) < num_required_signatures:
        signatures += [Signature.default()] * (num_required_signatures - len(signatures))

    for keypair in keypairs:
        pubkey = keypair.pubkey()
        try:
            signer_index = signer_keys.index(pubkey)
        except ValueError:
            raise SignerError.not_required(str(pubkey), [str(key) for key in signer_keys])

        signatures[signer_index] = keypair.sign_message(message_bytes)
        logger.debug(f"Applied signature for {pubkey} at index {signer_index}")

    return VersionedTransaction.populate(message, signatures)
