"""
Wallet - high-level token transfer operations.

Ties the builder, validator and signer to a ledger gateway: send an
issued token, verify that a transfer happened, sign offline and submit
a blob signed elsewhere.
"""

from typing import Optional, Union

import structlog

from wallet.config import WalletConfig
from wallet.core.transaction import SignedTransaction, Transaction, TransactionResult
from wallet.keys import secret_to_keypair
from wallet.node.interface import LedgerGateway
from wallet.node.jsonrpc import JsonRpcGateway
from wallet.tx.builder import TransactionBuilder
from wallet.tx.signer import TransactionSigner
from wallet.tx.validator import TransactionValidator

logger = structlog.get_logger(__name__)


class Wallet:
    """
    Offline-capable wallet bound to one network.

    Example usage:
        ```python
        config = WalletConfig(network=NetworkType.TESTNET)
        async with Wallet(config) as wallet:
            result = await wallet.send_token(secret, dest, issuer, "USD", "10")
        ```
    """

    def __init__(
        self,
        config: WalletConfig,
        gateway: Optional[LedgerGateway] = None,
    ):
        """
        Initialize the wallet.

        Args:
            config: Wallet configuration (selects the network)
            gateway: Ledger gateway (JSON-RPC gateway if not provided)
        """
        self.config = config
        self.gateway = gateway or JsonRpcGateway(config)
        self.builder = TransactionBuilder(config.network, default_fee=config.default_fee)
        self.signer = TransactionSigner(config.network)

    async def __aenter__(self) -> "Wallet":
        await self.gateway.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.gateway.disconnect()

    def sign_transaction_offline(
        self,
        secret: Union[str, bytes],
        tx: Transaction,
    ) -> SignedTransaction:
        """
        Sign a transaction without touching the network.

        The returned blob can be submitted later, from any connection.
        """
        return self.signer.sign(secret, tx)

    async def submit_signed_transaction(self, signed_tx: SignedTransaction) -> TransactionResult:
        """Submit a previously signed transaction."""
        return await self.gateway.submit_transaction(signed_tx)

    async def send_token(
        self,
        secret: Union[str, bytes],
        destination: str,
        issuer: str,
        currency: str,
        amount: str,
    ) -> TransactionResult:
        """
        Send an issued token from the secret's account.

        Args:
            secret: Sender's wallet secret
            destination: Recipient address
            issuer: Token issuer address
            currency: Currency code
            amount: Amount to send

        Returns:
            Submission result from the node
        """
        account = secret_to_keypair(secret).address

        TransactionValidator.validate_address(destination)
        TransactionValidator.validate_address(issuer)
        TransactionValidator.validate_currency_code(currency)
        TransactionValidator.validate_amount(amount)

        sequence = await self.gateway.get_account_sequence(account)
        tx = self.builder.build_payment(
            account=account,
            destination=destination,
            amount=amount,
            currency=currency,
            issuer=issuer,
            sequence=sequence,
        )
        TransactionValidator.validate(tx)

        signed_tx = self.sign_transaction_offline(secret, tx)
        result = await self.submit_signed_transaction(signed_tx)

        logger.info(
            "token_sent",
            currency=currency,
            amount=amount,
            engine_result=result.engine_result,
        )
        return result

    async def verify_token_transfer(
        self,
        sender: str,
        destination: str,
        issuer: str,
        currency: str,
        amount: str,
        tx_hash: str,
    ) -> bool:
        """
        Check that a ledger transaction is the expected token transfer.

        Returns:
            True if the transaction is a payment matching every field
        """
        TransactionValidator.validate_transaction_hash(tx_hash)

        tx_data = await self.gateway.get_transaction(tx_hash)
        if not tx_data.is_payment or tx_data.payment is None:
            return False

        payment = tx_data.payment
        return (
            payment.amount == amount
            and payment.currency == currency
            and payment.issuer == issuer
            and tx_data.account == sender
            and payment.destination == destination
        )
