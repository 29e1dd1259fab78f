"""
Transaction Builder - constructs unsigned transactions.

Fills protocol defaults for each supported transaction kind. Construction
is pure and never fails; validation is a separate step.
"""

from typing import Any, Dict, List, Optional

import structlog

from wallet.config import DEFAULT_FEE, NETWORK_IDS, NetworkType
from wallet.core.transaction import TF_NO_RIPPLE_DIRECT, Payment, TrustSet

logger = structlog.get_logger(__name__)


class TransactionBuilder:
    """
    Builds Payment and TrustSet transactions.

    Holds only the network selector; no per-session state.
    """

    def __init__(self, network: NetworkType, default_fee: str = DEFAULT_FEE):
        """
        Initialize the transaction builder.

        Args:
            network: Network the transactions are meant for
            default_fee: Fee in drops used when a call does not pass one
        """
        self.network = NetworkType(network)
        self.default_fee = default_fee

    @property
    def network_id(self) -> int:
        """Get the numeric identifier of the target network."""
        return NETWORK_IDS[self.network]

    def build_payment(
        self,
        account: str,
        destination: str,
        amount: str,
        currency: str,
        issuer: Optional[str] = None,
        fee: Optional[str] = None,
        sequence: int = 0,
        last_ledger_sequence: Optional[int] = None,
        *,
        source_tag: Optional[int] = None,
        destination_tag: Optional[int] = None,
        invoice_id: Optional[str] = None,
        paths: Optional[List[List[Dict[str, Any]]]] = None,
        send_max: Optional[str] = None,
        deliver_min: Optional[str] = None,
    ) -> Payment:
        """
        Build a payment transaction.

        Args:
            account: Sending account
            destination: Receiving account
            amount: Amount to deliver as a decimal string
            currency: Currency code
            issuer: Issuer of the currency, for issued currencies
            fee: Fee in drops (defaults to the network minimum)
            sequence: Sender's account sequence number
            last_ledger_sequence: Last ledger the transaction may appear in

        Returns:
            Unsigned payment with the no-direct-ripple flag set
        """
        tx = Payment(
            account=account,
            destination=destination,
            amount=amount,
            currency=currency,
            issuer=issuer,
            fee=fee if fee is not None else self.default_fee,
            sequence=sequence,
            flags=TF_NO_RIPPLE_DIRECT,
            last_ledger_sequence=last_ledger_sequence,
            source_tag=source_tag,
            destination_tag=destination_tag,
            invoice_id=invoice_id,
            paths=paths,
            send_max=send_max,
            deliver_min=deliver_min,
        )

        logger.debug(
            "payment_built",
            network=self.network.value,
            currency=currency,
            sequence=sequence,
        )
        return tx

    def build_trust_set(
        self,
        account: str,
        currency: str,
        issuer: str,
        limit: str,
        fee: Optional[str] = None,
        sequence: int = 0,
        last_ledger_sequence: Optional[int] = None,
    ) -> TrustSet:
        """
        Build a trust line transaction.

        The limit is carried in the transaction's amount field.
        """
        tx = TrustSet(
            account=account,
            amount=limit,
            currency=currency,
            issuer=issuer,
            fee=fee if fee is not None else self.default_fee,
            sequence=sequence,
            last_ledger_sequence=last_ledger_sequence,
        )

        logger.debug(
            "trust_set_built",
            network=self.network.value,
            currency=currency,
            sequence=sequence,
        )
        return tx
