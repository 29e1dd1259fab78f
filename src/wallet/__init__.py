"""
Offline Ledger Wallet

Builds, validates, canonically encodes and signs payment-style ledger
transactions offline, then hands the signed blob to a ledger node.
"""

__version__ = "0.1.0"

from wallet.client import Wallet
from wallet.config import NetworkType, WalletConfig
from wallet.core.transaction import Payment, SignedTransaction, TransactionResult, TrustSet
from wallet.keys import KeyPair, address_from_public_key, secret_to_keypair
from wallet.tx.builder import TransactionBuilder
from wallet.tx.signer import TransactionSigner
from wallet.tx.validator import TransactionValidator

__all__ = [
    "Wallet",
    "NetworkType",
    "WalletConfig",
    "Payment",
    "TrustSet",
    "SignedTransaction",
    "TransactionResult",
    "KeyPair",
    "address_from_public_key",
    "secret_to_keypair",
    "TransactionBuilder",
    "TransactionSigner",
    "TransactionValidator",
]
