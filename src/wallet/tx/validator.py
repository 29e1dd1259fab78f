"""
Transaction Validator - stateless grammar checks.

Every check is a static, side-effect-free function that raises the
matching WalletError subclass on failure and returns None otherwise.
"""

import re
from decimal import Decimal, InvalidOperation

from wallet.core.transaction import Transaction
from wallet.errors import (
    InvalidAddressError,
    InvalidAmountError,
    InvalidCurrencyError,
    InvalidTransactionError,
)

ADDRESS_PREFIX = "r"
ADDRESS_MIN_LENGTH = 25
ADDRESS_MAX_LENGTH = 45

STANDARD_CURRENCY_MAX_LENGTH = 20
HEX_CURRENCY_LENGTH = 40

TRANSACTION_HASH_LENGTH = 64

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_DECIMAL_RE = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")
_FIELD_LABELS = {
    "account": "Account",
    "destination": "Destination",
    "amount": "Amount",
    "currency": "Currency",
    "issuer": "Issuer",
    "fee": "Fee",
}


def _is_hex(value: str) -> bool:
    return all(c in _HEX_DIGITS for c in value)


def is_decimal(value: str) -> bool:
    """Check whether a string is a finite decimal literal."""
    if not _DECIMAL_RE.fullmatch(value):
        return False
    try:
        return Decimal(value).is_finite()
    except InvalidOperation:
        return False


class TransactionValidator:
    """Grammar checks for transactions and their individual field types."""

    @staticmethod
    def validate(tx: Transaction) -> None:
        """
        Validate a transaction against its kind's required fields.

        Args:
            tx: Transaction to check

        Raises:
            InvalidTransactionError: If a required field is empty or amount/fee
                do not parse as numbers
        """
        missing = tx.missing_fields()
        if missing:
            raise InvalidTransactionError(f"{_FIELD_LABELS.get(missing[0], missing[0])} is required")

        if not is_decimal(tx.amount):
            raise InvalidTransactionError("Invalid amount format")

        if tx.amount.startswith("-"):
            raise InvalidTransactionError("Amount cannot be negative")

        # Fees are whole drops
        if not (tx.fee.isascii() and tx.fee.isdigit()):
            raise InvalidTransactionError("Invalid fee format")

    @staticmethod
    def validate_address(address: str) -> None:
        """Check prefix, length and character set of an address."""
        if not address.startswith(ADDRESS_PREFIX):
            raise InvalidAddressError(f"Address must start with '{ADDRESS_PREFIX}'")

        if not ADDRESS_MIN_LENGTH <= len(address) <= ADDRESS_MAX_LENGTH:
            raise InvalidAddressError("Invalid address length")

        if not (address.isascii() and address.isalnum()):
            raise InvalidAddressError("Address contains invalid characters")

    @staticmethod
    def validate_currency_code(currency: str) -> None:
        """
        Check a currency code.

        Accepts up to 20 uppercase letters/digits, or exactly 40 hex digits
        for the 160-bit form.
        """
        if not currency:
            raise InvalidCurrencyError("Currency code cannot be empty")

        if len(currency) == HEX_CURRENCY_LENGTH:
            if not _is_hex(currency):
                raise InvalidCurrencyError("Invalid hex currency format")
            return

        if len(currency) > STANDARD_CURRENCY_MAX_LENGTH:
            raise InvalidCurrencyError("Currency code too long")

        if not all(c.isascii() and (c.isupper() or c.isdigit()) for c in currency):
            raise InvalidCurrencyError("Invalid currency code format")

    @staticmethod
    def validate_amount(amount: str) -> None:
        """Check that an amount is a non-negative decimal string."""
        if not amount:
            raise InvalidAmountError("Amount cannot be empty")

        if not is_decimal(amount):
            raise InvalidAmountError("Invalid amount format")

        if amount.startswith("-"):
            raise InvalidAmountError("Amount cannot be negative")

    @staticmethod
    def validate_transaction_hash(tx_hash: str) -> None:
        """Check that a transaction hash is 64 hex characters."""
        if len(tx_hash) != TRANSACTION_HASH_LENGTH:
            raise InvalidTransactionError("Invalid transaction hash length")

        if not _is_hex(tx_hash):
            raise InvalidTransactionError("Invalid transaction hash format")
