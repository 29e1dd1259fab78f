"""
Transaction module.

Handles transaction construction, validation, canonical encoding and signing.
"""

from wallet.tx.builder import TransactionBuilder
from wallet.tx.encoder import to_canonical_bytes, transaction_from_json, transaction_to_json
from wallet.tx.signer import MultisigBlob, TransactionSigner
from wallet.tx.validator import TransactionValidator

__all__ = [
    "TransactionBuilder",
    "TransactionSigner",
    "TransactionValidator",
    "MultisigBlob",
    "to_canonical_bytes",
    "transaction_from_json",
    "transaction_to_json",
]
