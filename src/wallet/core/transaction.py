"""
Transaction model.

A transaction is a tagged variant: each concrete kind is a frozen dataclass
subclass carrying its own type tag and the set of fields it requires.
Instances are never mutated; use ``dataclasses.replace`` to derive a new one.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Tuple

from wallet.config import DEFAULT_FEE
from wallet.errors import InsufficientFundsError, TransactionFailedError


class TransactionType(str, Enum):
    """Supported transaction kinds."""
    PAYMENT = "Payment"
    TRUST_SET = "TrustSet"


# Payment flag: do not use the default ripple path
TF_NO_RIPPLE_DIRECT = 0x00020000

# Engine results reporting that the sender cannot cover amount, fee or reserve
INSUFFICIENT_FUNDS_RESULTS = frozenset({
    "tecUNFUNDED",
    "tecUNFUNDED_PAYMENT",
    "tecINSUF_RESERVE_LINE",
    "tecINSUFFICIENT_RESERVE",
    "tecINSUFFICIENT_FUNDS",
    "terINSUF_FEE_B",
})


@dataclass(frozen=True)
class Transaction:
    """
    Fields shared by every transaction kind.

    Attributes:
        account: Sending account address
        amount: Decimal amount string
        currency: Currency code (3-char standard or 40-char hex)
        fee: Fee in drops, as a decimal integer string
        sequence: Per-account sequence number (must be > 0 to sign)
        issuer: Issuer address for issued currencies
        flags: Transaction flags bitmask
        last_ledger_sequence: Ledger index after which the transaction expires
        source_tag: Arbitrary sender-side tag
        destination_tag: Arbitrary recipient-side tag
        invoice_id: 256-bit invoice identifier in hex
    """

    transaction_type: ClassVar[TransactionType]
    required_fields: ClassVar[Tuple[str, ...]] = ("account", "fee")

    account: str = ""
    amount: str = ""
    currency: str = ""
    fee: str = DEFAULT_FEE
    sequence: int = 0
    issuer: Optional[str] = None
    flags: Optional[int] = None
    last_ledger_sequence: Optional[int] = None
    source_tag: Optional[int] = None
    destination_tag: Optional[int] = None
    invoice_id: Optional[str] = None

    @property
    def type_name(self) -> str:
        """Get the wire name of the transaction kind."""
        return self.transaction_type.value

    def missing_fields(self) -> List[str]:
        """Return the required fields of this kind that are empty."""
        return [name for name in self.required_fields if not getattr(self, name)]


@dataclass(frozen=True)
class Payment(Transaction):
    """A value transfer from ``account`` to ``destination``."""

    transaction_type: ClassVar[TransactionType] = TransactionType.PAYMENT
    required_fields: ClassVar[Tuple[str, ...]] = (
        "account", "destination", "amount", "currency", "fee",
    )

    destination: str = ""
    paths: Optional[List[List[Dict[str, Any]]]] = None
    send_max: Optional[str] = None
    deliver_min: Optional[str] = None


@dataclass(frozen=True)
class TrustSet(Transaction):
    """
    Creates or modifies a trust line from ``account`` to ``issuer``.

    The trust limit lives in ``amount``.
    """

    transaction_type: ClassVar[TransactionType] = TransactionType.TRUST_SET
    required_fields: ClassVar[Tuple[str, ...]] = (
        "account", "amount", "currency", "issuer", "fee",
    )

    issuer: str = ""

    @property
    def limit(self) -> str:
        return self.amount


TRANSACTION_KINDS = {
    TransactionType.PAYMENT: Payment,
    TransactionType.TRUST_SET: TrustSet,
}


@dataclass(frozen=True)
class SignedTransaction:
    """
    A transaction together with its signed blob.

    Created once by the signer and never mutated. ``tx`` is the exact
    transaction that was canonicalized and signed.
    """

    blob: str
    tx: Transaction

    def to_dict(self) -> dict:
        """Convert to the submission-ready dictionary."""
        from wallet.tx.encoder import transaction_to_json

        return {
            "tx_blob": self.blob,
            "tx_json": transaction_to_json(self.tx),
        }


@dataclass(frozen=True)
class TransactionResult:
    """Outcome of a submission as reported by the ledger node."""

    hash: str
    validated: bool
    engine_result: str
    engine_result_message: str
    engine_result_code: int
    ledger_index: Optional[int] = None
    meta: Optional[Any] = None

    @property
    def is_success(self) -> bool:
        """Check if the engine accepted the transaction."""
        return self.engine_result == "tesSUCCESS"

    def raise_for_result(self) -> None:
        """
        Raise if the engine did not accept the transaction.

        Raises:
            InsufficientFundsError: If the sender cannot cover the payment
            TransactionFailedError: For any other non-success engine result
        """
        if self.is_success:
            return

        message = f"{self.engine_result}: {self.engine_result_message}"
        if self.engine_result in INSUFFICIENT_FUNDS_RESULTS:
            raise InsufficientFundsError(message)
        raise TransactionFailedError(message)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "hash": self.hash,
            "validated": self.validated,
            "ledger_index": self.ledger_index,
            "engine_result": self.engine_result,
            "engine_result_message": self.engine_result_message,
            "engine_result_code": self.engine_result_code,
            "meta": self.meta,
        }
