"""
Transaction Signer - offline signing and verification.

Signs the canonical bytes of a transaction with an Ed25519 key derived
from the wallet secret, and assembles single- and multi-signature blobs.

Blob formats:
    single: hex(type\\0account\\0destination\\0amount\\0currency\\0fee\\0sequence\\0 || sig64)
    multi:  hex(canonical || u32le count || per signer [u32le len || pubkey][u32le len || sig])
"""

import json
import struct
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple, Union

import structlog
from cryptography.exceptions import InvalidSignature

from wallet.config import NetworkType
from wallet.core.transaction import Payment, SignedTransaction, Transaction
from wallet.errors import (
    DeserializationError,
    InvalidAddressError,
    InvalidTransactionError,
    SigningFailedError,
)
from wallet.keys import (
    SIGNATURE_LENGTH,
    load_public_key,
    public_key_bytes,
    secret_to_keypair,
)
from wallet.tx.encoder import to_canonical_bytes

logger = structlog.get_logger(__name__)

FIELD_DELIMITER = b"\x00"
_U32 = struct.Struct("<I")


@dataclass(frozen=True)
class MultisigBlob:
    """Decoded contents of a multisignature blob."""

    payload: bytes
    signers: List[Tuple[bytes, bytes]] = field(default_factory=list)

    @property
    def signer_count(self) -> int:
        return len(self.signers)


def _decode_hex(value: str, what: str) -> bytes:
    try:
        return bytes.fromhex(value)
    except (TypeError, ValueError) as e:
        raise SigningFailedError(f"Invalid {what} hex: {e}") from e


def _decode_fixed(value: str, length: int, what: str) -> bytes:
    """Decode hex and require an exact byte length."""
    raw = _decode_hex(value, what)
    if len(raw) != length:
        raise SigningFailedError(f"Invalid {what} length: expected {length} bytes, got {len(raw)}")
    return raw


def _decode_public_key(value: Union[str, bytes]) -> bytes:
    """Decode a public key the same way addresses are derived from it."""
    try:
        return public_key_bytes(value)
    except InvalidAddressError as e:
        raise SigningFailedError(e.message) from e


def _verify(public_key: bytes, message: bytes, signature: bytes) -> bool:
    try:
        load_public_key(public_key).verify(signature, message)
    except InvalidSignature:
        return False
    except InvalidAddressError as e:
        raise SigningFailedError(e.message) from e
    return True


class TransactionSigner:
    """
    Signs and verifies transactions offline.

    Holds only the network selector, so one instance can be shared
    across threads.
    """

    def __init__(self, network: NetworkType):
        """
        Initialize the transaction signer.

        Args:
            network: Network the signed transactions are meant for
        """
        self.network = NetworkType(network)

    def sign(self, secret: Union[str, bytes], tx: Transaction) -> SignedTransaction:
        """
        Sign a transaction.

        Args:
            secret: Wallet secret to derive the signing key from
            tx: The transaction to sign

        Returns:
            Signed transaction wrapping ``tx`` and its blob

        Raises:
            InvalidTransactionError: If account, sequence or fee is missing
            InvalidSecretError: If the secret is too short
        """
        self._check_signing_fields(tx)

        keypair = secret_to_keypair(secret)
        canonical = to_canonical_bytes(tx)
        signature = keypair.sign(canonical)
        blob = self._create_signed_blob(tx, signature)

        logger.debug(
            "transaction_signed",
            network=self.network.value,
            account=tx.account,
            sequence=tx.sequence,
            blob=blob[:16] + "...",
        )
        return SignedTransaction(blob=blob, tx=tx)

    def verify(self, public_key: str, signed_tx: SignedTransaction) -> bool:
        """
        Verify the signature of a single-signed transaction.

        The signature is the trailing 64 bytes of the blob; the payload is
        re-derived from ``signed_tx.tx``, never read from the blob.

        Returns:
            True if the signature matches, False on a cryptographic mismatch

        Raises:
            SigningFailedError: If the blob or key is malformed
        """
        blob = _decode_hex(signed_tx.blob, "blob")
        if len(blob) < SIGNATURE_LENGTH:
            raise SigningFailedError("Invalid blob format: shorter than a signature")

        signature = blob[-SIGNATURE_LENGTH:]
        key = _decode_public_key(public_key)
        canonical = to_canonical_bytes(signed_tx.tx)

        is_valid = _verify(key, canonical, signature)
        if not is_valid:
            logger.info("signature_mismatch", account=signed_tx.tx.account)
        return is_valid

    def sign_for_multisig(
        self,
        secret: Union[str, bytes],
        tx: Transaction,
    ) -> Tuple[str, str]:
        """
        Produce one signer's contribution to a multisignature.

        Returns:
            (public_key_hex, signature_hex) over the canonical bytes of ``tx``
        """
        self._check_signing_fields(tx)

        keypair = secret_to_keypair(secret)
        signature = keypair.sign(to_canonical_bytes(tx))
        return keypair.public_key_hex, signature.hex()

    def create_multisig(
        self,
        tx: Transaction,
        signatures: Sequence[Tuple[str, str]],
    ) -> SignedTransaction:
        """
        Assemble a multisignature blob.

        Quorum and signer-list policy is the caller's concern; every pair
        given is included in order.

        Args:
            tx: The transaction that was signed
            signatures: Ordered (public_key_hex, signature_hex) pairs

        Raises:
            InvalidTransactionError: If account, sequence or fee is missing
            SigningFailedError: If any key or signature is malformed
        """
        self._check_signing_fields(tx)

        pairs = [
            (
                _decode_public_key(public_key),
                _decode_fixed(signature, SIGNATURE_LENGTH, "signature"),
            )
            for public_key, signature in signatures
        ]

        blob_data = bytearray(to_canonical_bytes(tx))
        blob_data += _U32.pack(len(pairs))
        for public_key, signature in pairs:
            blob_data += _U32.pack(len(public_key)) + public_key
            blob_data += _U32.pack(len(signature)) + signature

        logger.debug(
            "multisig_assembled",
            network=self.network.value,
            account=tx.account,
            signer_count=len(pairs),
        )
        return SignedTransaction(blob=blob_data.hex(), tx=tx)

    def decode_multisig(self, blob: str) -> MultisigBlob:
        """
        Split a multisignature blob into its payload and signer pairs.

        Raises:
            SigningFailedError: If the blob is not valid hex
            DeserializationError: If the blob structure is truncated or malformed
        """
        data = _decode_hex(blob, "blob")

        # The payload is a JSON object; the binary tail is not UTF-8
        text = data.decode("utf-8", errors="surrogateescape")
        try:
            _, end = json.JSONDecoder().raw_decode(text)
        except ValueError as e:
            raise DeserializationError(f"Multisig payload is not canonical JSON: {e}") from e
        offset = len(text[:end].encode("utf-8", errors="surrogateescape"))
        payload = data[:offset]

        count, offset = self._read_u32(data, offset)
        signers = []
        for _ in range(count):
            public_key, offset = self._read_chunk(data, offset)
            signature, offset = self._read_chunk(data, offset)
            signers.append((public_key, signature))

        if offset != len(data):
            raise DeserializationError("Trailing bytes after multisig signer list")

        return MultisigBlob(payload=payload, signers=signers)

    def verify_multisig(self, signed_tx: SignedTransaction) -> List[bool]:
        """
        Verify every signer in a multisignature blob.

        Each signature is checked against the canonical bytes of
        ``signed_tx.tx``. Returns one result per signer, in blob order.
        """
        decoded = self.decode_multisig(signed_tx.blob)
        canonical = to_canonical_bytes(signed_tx.tx)

        return [
            _verify(public_key, canonical, signature)
            for public_key, signature in decoded.signers
        ]

    @staticmethod
    def _check_signing_fields(tx: Transaction) -> None:
        if not tx.account:
            raise InvalidTransactionError("Account is required")

        if tx.sequence <= 0:
            raise InvalidTransactionError("Sequence number is required")

        if not tx.fee:
            raise InvalidTransactionError("Fee is required")

    @staticmethod
    def _create_signed_blob(tx: Transaction, signature: bytes) -> str:
        destination = tx.destination if isinstance(tx, Payment) else ""
        fields = (
            tx.type_name,
            tx.account,
            destination,
            tx.amount,
            tx.currency,
            tx.fee,
            str(tx.sequence),
        )

        blob_data = bytearray()
        for value in fields:
            blob_data += value.encode("utf-8") + FIELD_DELIMITER
        blob_data += signature

        return blob_data.hex()

    @staticmethod
    def _read_u32(data: bytes, offset: int) -> Tuple[int, int]:
        end = offset + _U32.size
        if end > len(data):
            raise DeserializationError("Truncated multisig blob")
        return _U32.unpack_from(data, offset)[0], end

    @classmethod
    def _read_chunk(cls, data: bytes, offset: int) -> Tuple[bytes, int]:
        length, offset = cls._read_u32(data, offset)
        end = offset + length
        if end > len(data):
            raise DeserializationError("Truncated multisig blob")
        return data[offset:end], end
