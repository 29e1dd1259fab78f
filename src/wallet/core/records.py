"""
Ledger records.

Read-only views of node query responses (accounts, trust lines,
transactions). Each record parses itself from the node's JSON result.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from wallet.errors import DeserializationError


def _field(data: Dict[str, Any], key: str, kind: type, record: str) -> Any:
    """Fetch a required key and check its JSON type."""
    if not isinstance(data, dict) or key not in data:
        raise DeserializationError(f"{record}: missing field '{key}'")
    value = data[key]
    # bool is a subclass of int; keep them apart
    if kind is int and isinstance(value, bool):
        raise DeserializationError(f"{record}: field '{key}' must be int")
    if not isinstance(value, kind):
        raise DeserializationError(
            f"{record}: field '{key}' must be {kind.__name__}, got {type(value).__name__}"
        )
    return value


def _optional(data: Dict[str, Any], key: str, kind: type, record: str) -> Any:
    if data.get(key) is None:
        return None
    return _field(data, key, kind, record)


def _default(data: Dict[str, Any], key: str, kind: type, record: str, default: Any) -> Any:
    """Use default only when the key is absent; a present key must have the right type."""
    if key not in data:
        return default
    return _field(data, key, kind, record)


@dataclass(frozen=True)
class AccountData:
    """Account root entry as stored on the ledger."""

    account: str
    balance: str
    flags: int
    ledger_entry_type: str
    owner_count: int
    sequence: int
    previous_txn_id: Optional[str] = None
    previous_txn_lgr_seq: Optional[int] = None
    transfer_rate: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AccountData":
        name = "AccountData"
        return cls(
            account=_field(data, "Account", str, name),
            balance=_field(data, "Balance", str, name),
            flags=_field(data, "Flags", int, name),
            ledger_entry_type=_field(data, "LedgerEntryType", str, name),
            owner_count=_field(data, "OwnerCount", int, name),
            sequence=_field(data, "Sequence", int, name),
            previous_txn_id=_optional(data, "PreviousTxnID", str, name),
            previous_txn_lgr_seq=_optional(data, "PreviousTxnLgrSeq", int, name),
            transfer_rate=_optional(data, "TransferRate", int, name),
        )


@dataclass(frozen=True)
class AccountInfo:
    """Result of an ``account_info`` query."""

    account_data: AccountData
    ledger_current_index: int
    validated: bool

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AccountInfo":
        name = "AccountInfo"
        # Validated ledgers report ledger_index, open ledgers ledger_current_index
        index_key = "ledger_current_index" if "ledger_current_index" in data else "ledger_index"
        return cls(
            account_data=AccountData.from_dict(_field(data, "account_data", dict, name)),
            ledger_current_index=_field(data, index_key, int, name),
            validated=bool(data.get("validated", False)),
        )


@dataclass(frozen=True)
class TrustLine:
    """One trust line returned by ``account_lines``."""

    account: str
    balance: str
    currency: str
    limit: str
    limit_peer: str
    quality_in: int = 0
    quality_out: int = 0
    no_ripple: bool = False
    no_ripple_peer: bool = False
    authorized: bool = False
    peer_authorized: bool = False
    freeze: bool = False
    freeze_peer: bool = False
    obligation: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TrustLine":
        name = "TrustLine"
        return cls(
            account=_field(data, "account", str, name),
            balance=_field(data, "balance", str, name),
            currency=_field(data, "currency", str, name),
            limit=_field(data, "limit", str, name),
            limit_peer=_field(data, "limit_peer", str, name),
            quality_in=_default(data, "quality_in", int, name, 0),
            quality_out=_default(data, "quality_out", int, name, 0),
            no_ripple=bool(data.get("no_ripple", False)),
            no_ripple_peer=bool(data.get("no_ripple_peer", False)),
            authorized=bool(data.get("authorized", False)),
            peer_authorized=bool(data.get("peer_authorized", False)),
            freeze=bool(data.get("freeze", False)),
            freeze_peer=bool(data.get("freeze_peer", False)),
            obligation=_optional(data, "obligation", str, name),
        )


@dataclass(frozen=True)
class PaymentDetails:
    """Payment-specific part of a ledger transaction."""

    destination: str
    amount: str
    currency: str
    issuer: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PaymentDetails":
        name = "PaymentDetails"
        destination = _field(data, "Destination", str, name)
        amount = data.get("Amount")

        # Native amounts are a bare drops string, issued ones an object
        if isinstance(amount, str):
            return cls(destination=destination, amount=amount, currency="XRP")
        if isinstance(amount, dict):
            return cls(
                destination=destination,
                amount=_field(amount, "value", str, name),
                currency=_field(amount, "currency", str, name),
                issuer=_optional(amount, "issuer", str, name),
            )
        raise DeserializationError(f"{name}: field 'Amount' must be str or object")


@dataclass(frozen=True)
class TransactionMetadata:
    """Result of a ``tx`` query."""

    transaction_type: str
    account: str
    fee: str
    sequence: int
    hash: str
    ledger_index: int
    date: int
    validated: bool
    payment: Optional[PaymentDetails] = None

    @property
    def is_payment(self) -> bool:
        return self.transaction_type == "Payment"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TransactionMetadata":
        name = "TransactionMetadata"
        transaction_type = _field(data, "TransactionType", str, name)

        payment = None
        if transaction_type == "Payment":
            payment = PaymentDetails.from_dict(data)

        return cls(
            transaction_type=transaction_type,
            account=_field(data, "Account", str, name),
            fee=_field(data, "Fee", str, name),
            sequence=_field(data, "Sequence", int, name),
            hash=_field(data, "hash", str, name),
            ledger_index=_field(data, "ledger_index", int, name),
            date=_default(data, "date", int, name, 0),
            validated=bool(data.get("validated", False)),
            payment=payment,
        )
