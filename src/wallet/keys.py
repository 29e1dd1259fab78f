"""
Key derivation.

Derives Ed25519 keypairs deterministically from a secret and addresses
from public keys. Both transforms are one-way hashes, so any verifier
holding only the public key can re-derive the address.

The hash-based derivation is a placeholder contract, not a real ledger
network's seed or address encoding.
"""

import hashlib
from dataclasses import dataclass
from typing import Union

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)

from wallet.errors import InvalidAddressError, InvalidSecretError

MIN_SECRET_LENGTH = 32
SEED_LENGTH = 32
PUBLIC_KEY_LENGTH = 32
SIGNATURE_LENGTH = 64

ADDRESS_PREFIX = "r"
ADDRESS_HASH_BYTES = 20


@dataclass(frozen=True)
class KeyPair:
    """An Ed25519 keypair derived from a wallet secret."""

    private_key: Ed25519PrivateKey
    public_key: bytes

    @property
    def public_key_hex(self) -> str:
        return self.public_key.hex()

    @property
    def address(self) -> str:
        """Get the account address of this keypair."""
        return address_from_public_key(self.public_key)

    def sign(self, message: bytes) -> bytes:
        """Produce a detached 64-byte signature over ``message``."""
        return self.private_key.sign(message)

    def __repr__(self) -> str:
        return f"KeyPair(public_key={self.public_key_hex!r})"


def secret_to_keypair(secret: Union[str, bytes]) -> KeyPair:
    """
    Derive a keypair from a secret.

    The Ed25519 seed is the first 32 bytes of SHA-512 over the secret.

    Args:
        secret: Wallet secret, at least 32 bytes long

    Returns:
        Deterministic keypair for the secret

    Raises:
        InvalidSecretError: If the secret is too short
    """
    secret_bytes = secret.encode("utf-8") if isinstance(secret, str) else bytes(secret)
    if len(secret_bytes) < MIN_SECRET_LENGTH:
        raise InvalidSecretError("Secret too short")

    seed = hashlib.sha512(secret_bytes).digest()[:SEED_LENGTH]
    private_key = Ed25519PrivateKey.from_private_bytes(seed)
    public_key = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw,
    )
    return KeyPair(private_key=private_key, public_key=public_key)


def public_key_bytes(public_key: Union[str, bytes]) -> bytes:
    """
    Normalize a public key given as raw bytes or hex.

    Raises:
        InvalidAddressError: If the key is not valid hex or not 32 bytes
    """
    if isinstance(public_key, str):
        key = public_key[2:] if public_key.lower().startswith("0x") else public_key
        try:
            raw = bytes.fromhex(key)
        except ValueError as e:
            raise InvalidAddressError(f"Public key is not valid hex: {e}") from e
    else:
        raw = bytes(public_key)

    if len(raw) != PUBLIC_KEY_LENGTH:
        raise InvalidAddressError(
            f"Public key must be {PUBLIC_KEY_LENGTH} bytes, got {len(raw)}"
        )
    return raw


def load_public_key(public_key: Union[str, bytes]) -> Ed25519PublicKey:
    """Load an Ed25519 verifying key from raw bytes or hex."""
    return Ed25519PublicKey.from_public_bytes(public_key_bytes(public_key))


def address_from_public_key(public_key: Union[str, bytes]) -> str:
    """
    Derive the account address for a public key.

    The address is the prefix followed by the hex of the first 20 bytes
    of SHA-256 over the raw key.
    """
    digest = hashlib.sha256(public_key_bytes(public_key)).digest()
    return ADDRESS_PREFIX + digest[:ADDRESS_HASH_BYTES].hex()
