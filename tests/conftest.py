"""
Pytest configuration and shared fixtures for the test suite.
"""

from typing import Dict, List, Optional

import pytest

from wallet.config import NetworkType, WalletConfig
from wallet.core.records import AccountData, AccountInfo, TransactionMetadata, TrustLine
from wallet.core.transaction import Payment, SignedTransaction, TransactionResult
from wallet.errors import ApiError
from wallet.node.interface import LedgerGateway
from wallet.tx.builder import TransactionBuilder
from wallet.tx.signer import TransactionSigner


# ============================================================================
# Test Data Generators
# ============================================================================

def generate_test_address(name: str, length: int = 34) -> str:
    """Generate a well-formed test address of the given length."""
    return ("r" + name + "0123456789" * 5)[:length]


def generate_test_tx_hash(index: int = 0) -> str:
    """Generate a deterministic test transaction hash."""
    base = "abcd1234" * 8  # 64 chars
    return base[:60] + f"{index:04d}"


ALICE = generate_test_address("Alice")
BOB = generate_test_address("Bob")
ISSUER = generate_test_address("Issuer")

ALICE_SECRET = "alice-test-secret-with-enough-entropy-0001"
BOB_SECRET = "bob-test-secret-with-enough-entropy-000002"


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def test_config() -> WalletConfig:
    """Create a test configuration."""
    return WalletConfig(
        network=NetworkType.TESTNET,
        rpc_url="http://ledger.test:51234",
        log_level="DEBUG",
    )


@pytest.fixture
def builder() -> TransactionBuilder:
    return TransactionBuilder(NetworkType.TESTNET)


@pytest.fixture
def signer() -> TransactionSigner:
    return TransactionSigner(NetworkType.TESTNET)


@pytest.fixture
def sample_payment(builder) -> Payment:
    """Create a sample issued-currency payment."""
    return builder.build_payment(
        account=ALICE,
        destination=BOB,
        amount="100.50",
        currency="USD",
        issuer=ISSUER,
        fee="12",
        sequence=5,
    )


@pytest.fixture
def sample_account_info() -> AccountInfo:
    return AccountInfo(
        account_data=AccountData(
            account=ALICE,
            balance="25000000",
            flags=0,
            ledger_entry_type="AccountRoot",
            owner_count=1,
            sequence=7,
        ),
        ledger_current_index=1000,
        validated=True,
    )


# ============================================================================
# Mock Ledger Gateway
# ============================================================================

class MockLedgerGateway(LedgerGateway):
    """Mock ledger gateway for testing."""

    def __init__(self):
        self.accounts: Dict[str, AccountInfo] = {}
        self.transactions: Dict[str, TransactionMetadata] = {}
        self.trust_lines: Dict[str, List[TrustLine]] = {}
        self.submitted: List[SignedTransaction] = []
        self.engine_result = "tesSUCCESS"
        self._connected = False

    async def connect(self) -> None:
        self._connected = True

    async def disconnect(self) -> None:
        self._connected = False

    async def get_ledger_index(self) -> int:
        return 1000

    async def get_account_info(self, address: str) -> AccountInfo:
        if address not in self.accounts:
            raise ApiError("Account not found.", error_code="actNotFound")
        return self.accounts[address]

    async def get_transaction(self, tx_hash: str) -> TransactionMetadata:
        if tx_hash not in self.transactions:
            raise ApiError("Transaction not found.", error_code="txnNotFound")
        return self.transactions[tx_hash]

    async def get_trust_lines(self, address: str) -> List[TrustLine]:
        return list(self.trust_lines.get(address, []))

    async def submit_transaction(self, signed_tx: SignedTransaction) -> TransactionResult:
        self.submitted.append(signed_tx)
        return TransactionResult(
            hash=generate_test_tx_hash(len(self.submitted)),
            validated=False,
            engine_result=self.engine_result,
            engine_result_message="The transaction was applied.",
            engine_result_code=0,
        )

    def add_account(self, info: AccountInfo) -> None:
        """Add an account to the mock."""
        self.accounts[info.account_data.account] = info

    def add_transaction(self, tx: TransactionMetadata) -> None:
        """Add a ledger transaction to the mock."""
        self.transactions[tx.hash] = tx


@pytest.fixture
def mock_gateway() -> MockLedgerGateway:
    """Create a mock ledger gateway."""
    return MockLedgerGateway()
