"""
Configuration management for the offline wallet.

Supports configuration via environment variables and .env files.
A config instance is always handed to the components that need it;
there is no process-wide default.
"""

from enum import Enum
from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class NetworkType(str, Enum):
    """Ledger network types."""
    TESTNET = "testnet"
    MAINNET = "mainnet"


NETWORK_URLS = {
    NetworkType.TESTNET: "https://s.altnet.rippletest.net:51234",
    NetworkType.MAINNET: "https://xrplcluster.com",
}

NETWORK_IDS = {
    NetworkType.TESTNET: 1024,
    NetworkType.MAINNET: 1049344,
}

# Minimum network fee in drops
DEFAULT_FEE = "12"


class WalletConfig(BaseSettings):
    """
    Configuration settings for the wallet.

    All settings can be configured via environment variables with the WALLET_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="WALLET_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Network settings
    network: NetworkType = Field(
        default=NetworkType.TESTNET,
        description="Ledger network to connect to"
    )
    rpc_url: Optional[str] = Field(
        default=None,
        description="Custom JSON-RPC endpoint (optional)"
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout for a single JSON-RPC request"
    )

    # Signing settings
    secret: Optional[SecretStr] = Field(
        default=None,
        description="Wallet secret used when a command does not pass one"
    )

    # Transaction defaults
    default_fee: str = Field(
        default=DEFAULT_FEE,
        description="Fee in drops used when a transaction does not set one"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format"
    )

    @property
    def node_url(self) -> str:
        """Get the JSON-RPC URL for the configured network."""
        if self.rpc_url:
            return self.rpc_url
        return NETWORK_URLS[self.network]

    @property
    def network_id(self) -> int:
        """Get the numeric network identifier."""
        return NETWORK_IDS[self.network]

    @property
    def is_testnet(self) -> bool:
        return self.network == NetworkType.TESTNET
