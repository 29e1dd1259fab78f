"""
Node Integration Layer.

Provides abstracted access to ledger queries and transaction submission.
"""

from wallet.node.interface import LedgerGateway
from wallet.node.jsonrpc import JsonRpcGateway

__all__ = [
    "LedgerGateway",
    "JsonRpcGateway",
]
