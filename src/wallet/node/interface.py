"""
Abstract interface for ledger node integration.

Defines the contract for ledger queries and signed-blob submission that
all gateway adapters must implement.
"""

from abc import ABC, abstractmethod
from typing import List

from wallet.core.records import AccountInfo, TransactionMetadata, TrustLine
from wallet.core.transaction import SignedTransaction, TransactionResult


class LedgerGateway(ABC):
    """
    Abstract interface for ledger node access.

    This interface defines the operations the wallet needs:
    - Account and trust line queries
    - Transaction lookup
    - Signed blob submission

    Retries are the caller's decision; duplicate submissions are detected
    by the ledger through the transaction hash.
    """

    @abstractmethod
    async def connect(self) -> None:
        """
        Establish connection to the node.

        Raises:
            NetworkError: If connection cannot be established
        """
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """Close connection to the node."""
        pass

    @abstractmethod
    async def get_ledger_index(self) -> int:
        """
        Get the index of the latest validated ledger.

        Returns:
            Validated ledger index
        """
        pass

    @abstractmethod
    async def get_account_info(self, address: str) -> AccountInfo:
        """
        Get the account root of an address.

        Args:
            address: Account address

        Returns:
            Account information from the validated ledger
        """
        pass

    @abstractmethod
    async def get_transaction(self, tx_hash: str) -> TransactionMetadata:
        """
        Get a transaction by hash.

        Args:
            tx_hash: 64-character transaction hash

        Returns:
            Parsed transaction record
        """
        pass

    @abstractmethod
    async def get_trust_lines(self, address: str) -> List[TrustLine]:
        """
        Get the trust lines of an account.

        Args:
            address: Account address

        Returns:
            Trust lines, empty if the account has none
        """
        pass

    @abstractmethod
    async def submit_transaction(self, signed_tx: SignedTransaction) -> TransactionResult:
        """
        Submit a signed transaction blob.

        Args:
            signed_tx: Signed transaction to submit

        Returns:
            Engine result and placement reported by the node

        Raises:
            ApiError: If the node rejects the request
            NetworkError: If the node cannot be reached
        """
        pass

    async def get_account_sequence(self, address: str) -> int:
        """Get the next sequence number of an account."""
        account_info = await self.get_account_info(address)
        return account_info.account_data.sequence

    async def get_account_balance(self, address: str) -> str:
        """Get the native balance of an account in drops."""
        account_info = await self.get_account_info(address)
        return account_info.account_data.balance

    async def __aenter__(self) -> "LedgerGateway":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.disconnect()
