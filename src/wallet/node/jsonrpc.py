"""
JSON-RPC adapter for ledger node integration.

Provides ledger access via the node's HTTP JSON-RPC API.
"""

from typing import Any, Dict, List, Optional

import httpx
import structlog

from wallet.config import WalletConfig
from wallet.core.records import AccountInfo, TransactionMetadata, TrustLine
from wallet.core.transaction import SignedTransaction, TransactionResult
from wallet.errors import ApiError, DeserializationError, NetworkError
from wallet.node.interface import LedgerGateway

logger = structlog.get_logger(__name__)


class JsonRpcGateway(LedgerGateway):
    """
    JSON-RPC gateway.

    Implements the LedgerGateway using ``POST {method, params}`` requests.
    """

    def __init__(
        self,
        config: WalletConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the JSON-RPC gateway.

        Args:
            config: Wallet configuration
            transport: Custom httpx transport (used by tests)
        """
        self.config = config
        self.base_url = config.node_url
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def is_testnet(self) -> bool:
        return self.config.is_testnet

    async def connect(self) -> None:
        """Establish connection (create HTTP client)."""
        if self._client is not None:
            return

        self._client = httpx.AsyncClient(
            headers={"Content-Type": "application/json"},
            timeout=self.config.request_timeout_seconds,
            transport=self._transport,
        )
        logger.info("jsonrpc_connected", url=self.base_url, network=self.config.network.value)

    async def disconnect(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.info("jsonrpc_disconnected")

    async def _request(self, method: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """
        Make a JSON-RPC call and return its ``result`` object.

        Raises:
            NetworkError: On transport failure or non-2xx status
            ApiError: If the result carries an error
            DeserializationError: If the response is not a JSON-RPC envelope
        """
        if not self._client:
            await self.connect()

        payload = {"method": method, "params": [params]}

        try:
            response = await self._client.post(self.base_url, json=payload)
        except httpx.RequestError as e:
            logger.error("rpc_request_error", method=method, error=str(e))
            raise NetworkError(f"Request to {self.base_url} failed: {e}") from e

        if not response.is_success:
            logger.error(
                "rpc_request_failed",
                method=method,
                status=response.status_code,
            )
            raise NetworkError(
                f"HTTP error: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            result = response.json()["result"]
        except (ValueError, KeyError, TypeError) as e:
            raise DeserializationError(f"Malformed {method} response: {e}") from e

        if not isinstance(result, dict):
            raise DeserializationError(f"Malformed {method} response: result is not an object")

        error = result.get("error")
        if error:
            message = result.get("error_message") or error
            logger.warning("rpc_api_error", method=method, error=error)
            raise ApiError(message, error_code=error)

        return result

    async def get_ledger_index(self) -> int:
        """Get the latest validated ledger index."""
        result = await self._request("ledger", {"ledger_index": "validated"})

        ledger_index = result.get("ledger_index")
        if isinstance(ledger_index, bool) or not isinstance(ledger_index, int):
            raise ApiError("Invalid ledger response")
        return ledger_index

    async def get_account_info(self, address: str) -> AccountInfo:
        """Get account info from the validated ledger."""
        result = await self._request(
            "account_info",
            {"account": address, "ledger_index": "validated"},
        )
        return AccountInfo.from_dict(result)

    async def get_transaction(self, tx_hash: str) -> TransactionMetadata:
        """Get transaction details."""
        result = await self._request("tx", {"transaction": tx_hash, "binary": False})
        return TransactionMetadata.from_dict(result)

    async def get_trust_lines(self, address: str) -> List[TrustLine]:
        """Get trust lines of an account."""
        result = await self._request(
            "account_lines",
            {"account": address, "ledger_index": "validated"},
        )

        lines = result.get("lines")
        if not isinstance(lines, list):
            return []

        trust_lines = [TrustLine.from_dict(line) for line in lines]
        logger.debug("trust_lines_fetched", address=address[:12] + "...", count=len(trust_lines))
        return trust_lines

    async def submit_transaction(self, signed_tx: SignedTransaction) -> TransactionResult:
        """Submit a signed transaction blob."""
        result = await self._request("submit", {"tx_blob": signed_tx.blob})

        tx_json = result.get("tx_json") or {}
        engine_result_code = result.get("engine_result_code", 0)
        if not isinstance(tx_json, dict):
            raise DeserializationError("Malformed submit response: tx_json is not an object")
        if isinstance(engine_result_code, bool) or not isinstance(engine_result_code, int):
            raise DeserializationError("Malformed submit response: engine_result_code must be int")

        ledger_index = result.get("ledger_index")

        tx_result = TransactionResult(
            hash=str(tx_json.get("hash", "")),
            validated=bool(result.get("validated", False)),
            ledger_index=ledger_index if isinstance(ledger_index, int) else None,
            engine_result=str(result.get("engine_result", "")),
            engine_result_message=str(result.get("engine_result_message", "")),
            engine_result_code=engine_result_code,
            meta=result.get("meta"),
        )

        logger.info(
            "tx_submitted",
            tx_hash=tx_result.hash[:16] + "...",
            engine_result=tx_result.engine_result,
        )
        return tx_result
