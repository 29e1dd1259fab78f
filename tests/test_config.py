"""
Test suite for configuration and the error taxonomy.
"""

import pytest
from pydantic import ValidationError

from wallet.config import NETWORK_IDS, NETWORK_URLS, NetworkType, WalletConfig
from wallet.core.transaction import TransactionResult
from wallet.errors import (
    ApiError,
    DeserializationError,
    InsufficientFundsError,
    InvalidAddressError,
    InvalidAmountError,
    InvalidCurrencyError,
    InvalidSecretError,
    InvalidTransactionError,
    NetworkError,
    SerializationError,
    SigningFailedError,
    TransactionFailedError,
    WalletError,
)


# ============================================================================
# Test Configuration
# ============================================================================

class TestWalletConfig:
    """Tests for settings loading and derived properties."""

    def test_defaults(self, monkeypatch):
        for name in ("WALLET_NETWORK", "WALLET_RPC_URL", "WALLET_SECRET", "WALLET_DEFAULT_FEE"):
            monkeypatch.delenv(name, raising=False)

        config = WalletConfig(_env_file=None)

        assert config.network == NetworkType.TESTNET
        assert config.is_testnet
        assert config.node_url == "https://s.altnet.rippletest.net:51234"
        assert config.network_id == 1024
        assert config.default_fee == "12"
        assert config.secret is None

    def test_mainnet(self):
        config = WalletConfig(network=NetworkType.MAINNET, _env_file=None)

        assert not config.is_testnet
        assert config.node_url == "https://xrplcluster.com"
        assert config.network_id == 1049344

    def test_custom_rpc_url(self, test_config):
        assert test_config.node_url == "http://ledger.test:51234"

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("WALLET_NETWORK", "mainnet")
        monkeypatch.setenv("WALLET_DEFAULT_FEE", "20")
        monkeypatch.setenv("WALLET_SECRET", "env-secret-value-with-enough-bytes-00")

        config = WalletConfig(_env_file=None)

        assert config.network == NetworkType.MAINNET
        assert config.default_fee == "20"
        assert config.secret.get_secret_value() == "env-secret-value-with-enough-bytes-00"

    def test_secret_hidden_in_repr(self):
        config = WalletConfig(secret="super-secret-value-1234567890123456", _env_file=None)
        assert "super-secret-value" not in repr(config)

    def test_rejects_bad_timeout(self):
        with pytest.raises(ValidationError):
            WalletConfig(request_timeout_seconds=0, _env_file=None)

    def test_network_tables_cover_every_network(self):
        for network in NetworkType:
            assert network in NETWORK_URLS
            assert network in NETWORK_IDS


# ============================================================================
# Test Errors
# ============================================================================

class TestErrors:
    """Tests for the error taxonomy."""

    @pytest.mark.parametrize("error_cls,kind", [
        (InvalidSecretError, "invalid_secret"),
        (InvalidAddressError, "invalid_address"),
        (InvalidTransactionError, "invalid_transaction"),
        (InvalidAmountError, "invalid_amount"),
        (InvalidCurrencyError, "invalid_currency"),
        (SigningFailedError, "signing_failed"),
        (SerializationError, "serialization"),
        (DeserializationError, "deserialization"),
        (TransactionFailedError, "transaction_failed"),
        (InsufficientFundsError, "insufficient_funds"),
        (ApiError, "api"),
        (NetworkError, "network"),
    ])
    def test_kinds(self, error_cls, kind):
        error = error_cls("details")

        assert isinstance(error, WalletError)
        assert error.kind == kind
        assert error.message == "details"

    @pytest.mark.parametrize("error,text", [
        (InvalidSecretError("Secret too short"), "Invalid secret key: Secret too short"),
        (NetworkError("timeout"), "Network error: timeout"),
        (InvalidAddressError("bad"), "Invalid address: bad"),
        (TransactionFailedError("tecPATH_DRY"), "Transaction failed: tecPATH_DRY"),
    ])
    def test_display(self, error, text):
        assert str(error) == text

    def test_api_error_code(self):
        error = ApiError("Account not found.", error_code="actNotFound")
        assert error.error_code == "actNotFound"
        assert ApiError("x").error_code is None

    def test_network_status_code(self):
        assert NetworkError("HTTP error: 503", status_code=503).status_code == 503


# ============================================================================
# Test Engine Result Mapping
# ============================================================================

class TestEngineResult:
    """Tests for turning engine results into errors."""

    def _result(self, engine_result):
        return TransactionResult(
            hash="00" * 32,
            validated=False,
            engine_result=engine_result,
            engine_result_message="details",
            engine_result_code=0,
        )

    def test_success_does_not_raise(self):
        self._result("tesSUCCESS").raise_for_result()

    @pytest.mark.parametrize("engine_result", ["tecUNFUNDED_PAYMENT", "tecINSUF_RESERVE_LINE", "terINSUF_FEE_B"])
    def test_insufficient_funds(self, engine_result):
        with pytest.raises(InsufficientFundsError, match=engine_result):
            self._result(engine_result).raise_for_result()

    @pytest.mark.parametrize("engine_result", ["tecPATH_DRY", "tefPAST_SEQ", "temBAD_AMOUNT"])
    def test_other_failures(self, engine_result):
        with pytest.raises(TransactionFailedError, match=engine_result) as exc_info:
            self._result(engine_result).raise_for_result()
        assert not isinstance(exc_info.value, InsufficientFundsError)
