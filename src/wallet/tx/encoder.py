"""
Canonical encoding of transactions.

The canonical bytes are the signing payload: compact JSON of the flat
transaction projection with sorted keys. Adding, removing or renaming a
key changes every signature and is a breaking protocol change.
"""

import json
from typing import Any, Dict

from wallet.core.transaction import TRANSACTION_KINDS, Payment, Transaction, TransactionType
from wallet.errors import DeserializationError, SerializationError

# Optional projection keys, emitted only when the field is set
OPTIONAL_FIELDS = (
    ("issuer", "Issuer"),
    ("flags", "Flags"),
    ("last_ledger_sequence", "LastLedgerSequence"),
    ("source_tag", "SourceTag"),
    ("destination_tag", "DestinationTag"),
    ("invoice_id", "InvoiceID"),
)

PAYMENT_OPTIONAL_FIELDS = (
    ("send_max", "SendMax"),
    ("deliver_min", "DeliverMin"),
    ("paths", "Paths"),
)


def transaction_to_json(tx: Transaction) -> Dict[str, Any]:
    """
    Build the flat JSON projection of a transaction.

    Args:
        tx: Transaction to project

    Returns:
        Dictionary keyed by the ledger's field names
    """
    tx_json: Dict[str, Any] = {
        "TransactionType": tx.type_name,
        "Account": tx.account,
        "Destination": tx.destination if isinstance(tx, Payment) else "",
        "Amount": tx.amount,
        "Currency": tx.currency,
        "Fee": tx.fee,
        "Sequence": tx.sequence,
    }

    optional = OPTIONAL_FIELDS
    if isinstance(tx, Payment):
        optional = OPTIONAL_FIELDS + PAYMENT_OPTIONAL_FIELDS

    for attr, key in optional:
        value = getattr(tx, attr)
        if value is not None:
            tx_json[key] = value

    return tx_json


def to_canonical_bytes(tx: Transaction) -> bytes:
    """
    Serialize a transaction to its canonical signing payload.

    Raises:
        SerializationError: If a field holds a value JSON cannot represent
    """
    try:
        canonical = json.dumps(
            transaction_to_json(tx),
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError) as e:
        raise SerializationError(str(e)) from e

    return canonical.encode("utf-8")


def transaction_from_json(data: Dict[str, Any]) -> Transaction:
    """
    Rebuild a transaction from its JSON projection.

    Raises:
        DeserializationError: If the type is unknown or a field is mistyped
    """
    if not isinstance(data, dict):
        raise DeserializationError("Transaction JSON must be an object")

    try:
        kind = TRANSACTION_KINDS[TransactionType(data.get("TransactionType"))]
    except ValueError as e:
        raise DeserializationError(f"Unknown transaction type: {data.get('TransactionType')!r}") from e

    fields: Dict[str, Any] = {
        "account": data.get("Account", ""),
        "amount": data.get("Amount", ""),
        "currency": data.get("Currency", ""),
        "fee": data.get("Fee", ""),
        "sequence": data.get("Sequence", 0),
    }
    if kind is Payment:
        fields["destination"] = data.get("Destination", "")
        optional = OPTIONAL_FIELDS + PAYMENT_OPTIONAL_FIELDS
    else:
        optional = OPTIONAL_FIELDS

    for attr, key in optional:
        if key in data:
            fields[attr] = data[key]

    for attr in ("account", "amount", "currency", "fee"):
        if not isinstance(fields[attr], str):
            raise DeserializationError(f"Field '{attr}' must be a string")
    if isinstance(fields["sequence"], bool) or not isinstance(fields["sequence"], int):
        raise DeserializationError("Field 'sequence' must be an integer")

    return kind(**fields)
