"""
Core wallet data types.

This module contains the transaction variants, the signed wrapper and
the read-only ledger records parsed from node responses.
"""

from wallet.core.transaction import (
    Payment,
    SignedTransaction,
    Transaction,
    TransactionResult,
    TransactionType,
    TrustSet,
)
from wallet.core.records import (
    AccountData,
    AccountInfo,
    PaymentDetails,
    TransactionMetadata,
    TrustLine,
)

__all__ = [
    "Payment",
    "SignedTransaction",
    "Transaction",
    "TransactionResult",
    "TransactionType",
    "TrustSet",
    "AccountData",
    "AccountInfo",
    "PaymentDetails",
    "TransactionMetadata",
    "TrustLine",
]
