"""
Error taxonomy for the wallet.

Every failure raised by this package is a subclass of WalletError and carries
a stable ``kind`` so callers can match programmatically instead of parsing
messages.
"""

from typing import Optional


class WalletError(Exception):
    """Base exception for all wallet errors."""

    kind = "wallet"
    prefix = "Wallet error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.prefix}: {self.message}"


class InvalidSecretError(WalletError):
    """Raised when a secret is too short to derive a key from."""
    kind = "invalid_secret"
    prefix = "Invalid secret key"


class InvalidAddressError(WalletError):
    """Raised when an address or public key is malformed."""
    kind = "invalid_address"
    prefix = "Invalid address"


class InvalidTransactionError(WalletError):
    """Raised when a transaction is missing fields or has malformed ones."""
    kind = "invalid_transaction"
    prefix = "Invalid transaction data"


class InvalidAmountError(WalletError):
    """Raised when an amount string is empty, non-numeric or negative."""
    kind = "invalid_amount"
    prefix = "Invalid amount"


class InvalidCurrencyError(WalletError):
    """Raised when a currency code does not match the code grammar."""
    kind = "invalid_currency"
    prefix = "Invalid currency code"


class SigningFailedError(WalletError):
    """Raised on malformed keys, signatures or blobs."""
    kind = "signing_failed"
    prefix = "Signing failed"


class SerializationError(WalletError):
    """Raised when a transaction cannot be serialized."""
    kind = "serialization"
    prefix = "Serialization error"


class DeserializationError(WalletError):
    """Raised when a node response cannot be parsed into a record."""
    kind = "deserialization"
    prefix = "Deserialization error"


class TransactionFailedError(WalletError):
    """Raised when the ledger rejects a submitted transaction."""
    kind = "transaction_failed"
    prefix = "Transaction failed"


class InsufficientFundsError(WalletError):
    """Raised when an account cannot cover an amount."""
    kind = "insufficient_funds"
    prefix = "Insufficient funds"


class ApiError(WalletError):
    """Raised when the node answers with an error result."""
    kind = "api"
    prefix = "Ledger API error"

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.error_code = error_code


class NetworkError(WalletError):
    """Raised when the node cannot be reached or answers with a bad HTTP status."""
    kind = "network"
    prefix = "Network error"

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
