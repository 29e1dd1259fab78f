"""
Test suite for the high-level wallet operations.

Runs send and verify flows against the mock ledger gateway.
"""

from dataclasses import replace

import pytest

from wallet.client import Wallet
from wallet.core.records import PaymentDetails, TransactionMetadata
from wallet.core.transaction import Payment
from wallet.errors import (
    ApiError,
    InvalidAddressError,
    InvalidAmountError,
    InvalidCurrencyError,
    InvalidSecretError,
    InvalidTransactionError,
)
from wallet.keys import secret_to_keypair

from conftest import (
    ALICE,
    ALICE_SECRET,
    BOB,
    ISSUER,
    generate_test_tx_hash,
)


SENDER = secret_to_keypair(ALICE_SECRET)


def make_payment_record(**overrides) -> TransactionMetadata:
    payment = PaymentDetails(
        destination=overrides.pop("destination", BOB),
        amount=overrides.pop("amount", "100"),
        currency=overrides.pop("currency", "USD"),
        issuer=overrides.pop("issuer", ISSUER),
    )
    fields = dict(
        transaction_type="Payment",
        account=SENDER.address,
        fee="12",
        sequence=7,
        hash=generate_test_tx_hash(1),
        ledger_index=1001,
        date=0,
        validated=True,
        payment=payment,
    )
    fields.update(overrides)
    return TransactionMetadata(**fields)


@pytest.fixture
def wallet(test_config, mock_gateway, sample_account_info) -> Wallet:
    # Sender account is the one derived from ALICE_SECRET
    info = replace(
        sample_account_info,
        account_data=replace(sample_account_info.account_data, account=SENDER.address),
    )
    mock_gateway.add_account(info)
    return Wallet(test_config, gateway=mock_gateway)


# ============================================================================
# Test Send Token
# ============================================================================

class TestSendToken:
    """Tests for the send flow."""

    @pytest.mark.asyncio
    async def test_send_token(self, wallet, mock_gateway):
        async with wallet:
            result = await wallet.send_token(ALICE_SECRET, BOB, ISSUER, "USD", "100")

        assert result.is_success
        assert len(mock_gateway.submitted) == 1

        signed = mock_gateway.submitted[0]
        tx = signed.tx
        assert isinstance(tx, Payment)
        assert tx.account == SENDER.address
        assert tx.destination == BOB
        assert tx.issuer == ISSUER
        assert tx.amount == "100"
        assert tx.sequence == 7
        assert tx.fee == "12"
        assert wallet.signer.verify(SENDER.public_key_hex, signed)

    @pytest.mark.asyncio
    async def test_send_token_unknown_account(self, test_config, mock_gateway):
        wallet = Wallet(test_config, gateway=mock_gateway)
        with pytest.raises(ApiError):
            await wallet.send_token(ALICE_SECRET, BOB, ISSUER, "USD", "100")
        assert mock_gateway.submitted == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("destination,issuer,currency,amount,error", [
        ("xBadDestination1234567890123", ISSUER, "USD", "100", InvalidAddressError),
        (BOB, "rShort", "USD", "100", InvalidAddressError),
        (BOB, ISSUER, "usd", "100", InvalidCurrencyError),
        (BOB, ISSUER, "USD", "-1", InvalidAmountError),
        (BOB, ISSUER, "USD", "abc", InvalidAmountError),
    ])
    async def test_send_token_rejects_bad_input(
        self, wallet, mock_gateway, destination, issuer, currency, amount, error
    ):
        with pytest.raises(error):
            await wallet.send_token(ALICE_SECRET, destination, issuer, currency, amount)
        assert mock_gateway.submitted == []

    @pytest.mark.asyncio
    async def test_send_token_short_secret(self, wallet):
        with pytest.raises(InvalidSecretError):
            await wallet.send_token("short", BOB, ISSUER, "USD", "1")

    @pytest.mark.asyncio
    async def test_send_token_engine_failure_is_returned(self, wallet, mock_gateway):
        mock_gateway.engine_result = "tecUNFUNDED_PAYMENT"
        result = await wallet.send_token(ALICE_SECRET, BOB, ISSUER, "USD", "100")
        assert not result.is_success


# ============================================================================
# Test Offline Signing
# ============================================================================

class TestOfflineSigning:
    """Tests for the sign-now, submit-later flow."""

    @pytest.mark.asyncio
    async def test_sign_offline_then_submit(self, wallet, mock_gateway, sample_payment):
        signed = wallet.sign_transaction_offline(ALICE_SECRET, sample_payment)
        assert mock_gateway.submitted == []

        result = await wallet.submit_signed_transaction(signed)
        assert mock_gateway.submitted == [signed]
        assert result.hash == generate_test_tx_hash(1)

    def test_wallet_uses_config_network(self, test_config, mock_gateway):
        wallet = Wallet(test_config, gateway=mock_gateway)
        assert wallet.builder.network == test_config.network
        assert wallet.signer.network == test_config.network
        assert wallet.builder.default_fee == test_config.default_fee


# ============================================================================
# Test Verify Token Transfer
# ============================================================================

class TestVerifyTokenTransfer:
    """Tests for matching a ledger payment against expected fields."""

    @pytest.mark.asyncio
    async def test_matching_transfer(self, wallet, mock_gateway):
        mock_gateway.add_transaction(make_payment_record())

        assert await wallet.verify_token_transfer(
            SENDER.address, BOB, ISSUER, "USD", "100", generate_test_tx_hash(1)
        ) is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field,value", [
        ("sender", ALICE),
        ("destination", ISSUER),
        ("issuer", BOB),
        ("currency", "EUR"),
        ("amount", "100.0"),
    ])
    async def test_mismatched_field(self, wallet, mock_gateway, field, value):
        mock_gateway.add_transaction(make_payment_record())
        expected = dict(
            sender=SENDER.address,
            destination=BOB,
            issuer=ISSUER,
            currency="USD",
            amount="100",
        )
        expected[field] = value

        assert await wallet.verify_token_transfer(
            tx_hash=generate_test_tx_hash(1), **expected
        ) is False

    @pytest.mark.asyncio
    async def test_non_payment(self, wallet, mock_gateway):
        mock_gateway.add_transaction(
            make_payment_record(transaction_type="TrustSet", payment=None)
        )

        assert await wallet.verify_token_transfer(
            SENDER.address, BOB, ISSUER, "USD", "100", generate_test_tx_hash(1)
        ) is False

    @pytest.mark.asyncio
    async def test_invalid_hash(self, wallet):
        with pytest.raises(InvalidTransactionError):
            await wallet.verify_token_transfer(
                SENDER.address, BOB, ISSUER, "USD", "100", "not-a-hash"
            )

    @pytest.mark.asyncio
    async def test_unknown_transaction(self, wallet):
        with pytest.raises(ApiError):
            await wallet.verify_token_transfer(
                SENDER.address, BOB, ISSUER, "USD", "100", generate_test_tx_hash(5)
            )
