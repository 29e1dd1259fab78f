"""
Command-line interface for the offline wallet.

Provides commands for deriving addresses, building and signing
transactions offline, verifying signatures and talking to a node.
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

import structlog

from wallet import __version__
from wallet.config import NetworkType, WalletConfig
from wallet.core.transaction import SignedTransaction
from wallet.errors import DeserializationError, WalletError
from wallet.keys import secret_to_keypair
from wallet.node.jsonrpc import JsonRpcGateway
from wallet.tx.builder import TransactionBuilder
from wallet.tx.encoder import transaction_from_json, transaction_to_json
from wallet.tx.signer import TransactionSigner
from wallet.tx.validator import TransactionValidator


def setup_logging(level: str = "INFO", json_format: bool = False) -> None:
    """Configure structured logging."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if json_format
            else structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Logs go to stderr; stdout carries command output
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper()),
        stream=sys.stderr,
    )


def _add_payment_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--account", required=True, help="Sending account address")
    parser.add_argument("--destination", required=True, help="Receiving account address")
    parser.add_argument("--amount", required=True, help="Amount as a decimal string")
    parser.add_argument("--currency", required=True, help="Currency code")
    parser.add_argument("--issuer", help="Currency issuer address")
    parser.add_argument("--fee", help="Fee in drops (default: network minimum)")
    parser.add_argument("--sequence", type=int, required=True, help="Account sequence number")
    parser.add_argument(
        "--last-ledger-sequence",
        type=int,
        help="Last ledger index the transaction may appear in",
    )
    parser.add_argument("--destination-tag", type=int, help="Destination tag")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="wallet",
        description="Offline transaction signing wallet",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--network",
        choices=[n.value for n in NetworkType],
        default=None,
        help="Ledger network (default: from WALLET_NETWORK or testnet)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--log-json",
        action="store_true",
        help="Output logs in JSON format",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Address command
    address_parser = subparsers.add_parser("address", help="Derive public key and address from a secret")
    address_parser.add_argument("--secret", help="Wallet secret (default: WALLET_SECRET)")

    # Build command
    build_parser = subparsers.add_parser("build-payment", help="Build and validate a payment")
    _add_payment_arguments(build_parser)

    # Sign command
    sign_parser = subparsers.add_parser("sign", help="Build, validate and sign a payment offline")
    _add_payment_arguments(sign_parser)
    sign_parser.add_argument("--secret", help="Wallet secret (default: WALLET_SECRET)")

    # Verify command
    verify_parser = subparsers.add_parser("verify", help="Verify a signed transaction")
    verify_parser.add_argument("--public-key", required=True, help="Signer public key in hex")
    verify_parser.add_argument("--signed", required=True, help="Path to signed transaction JSON")

    # Submit command
    submit_parser = subparsers.add_parser("submit", help="Submit a signed transaction")
    submit_parser.add_argument("--signed", required=True, help="Path to signed transaction JSON")

    # Account command
    account_parser = subparsers.add_parser("account", help="Show account info and trust lines")
    account_parser.add_argument("address", help="Account address")

    return parser


def _resolve_secret(args: argparse.Namespace, config: WalletConfig) -> str:
    if args.secret:
        return args.secret
    if config.secret is not None:
        return config.secret.get_secret_value()
    raise WalletError("No secret given; pass --secret or set WALLET_SECRET")


def _load_signed(path: str) -> SignedTransaction:
    try:
        data = json.loads(Path(path).read_text())
        blob, tx_json = data["tx_blob"], data["tx_json"]
    except (OSError, ValueError, KeyError, TypeError) as e:
        raise DeserializationError(f"Cannot read signed transaction {path}: {e}") from e

    return SignedTransaction(blob=blob, tx=transaction_from_json(tx_json))


def _print_json(data: dict) -> None:
    print(json.dumps(data, indent=2))


def _build_payment(args: argparse.Namespace, config: WalletConfig):
    builder = TransactionBuilder(config.network, default_fee=config.default_fee)
    tx = builder.build_payment(
        account=args.account,
        destination=args.destination,
        amount=args.amount,
        currency=args.currency,
        issuer=args.issuer,
        fee=args.fee,
        sequence=args.sequence,
        last_ledger_sequence=args.last_ledger_sequence,
        destination_tag=args.destination_tag,
    )

    TransactionValidator.validate(tx)
    TransactionValidator.validate_address(tx.account)
    TransactionValidator.validate_address(tx.destination)
    TransactionValidator.validate_currency_code(tx.currency)
    TransactionValidator.validate_amount(tx.amount)
    if tx.issuer:
        TransactionValidator.validate_address(tx.issuer)
    return tx


def show_address(args: argparse.Namespace, config: WalletConfig) -> None:
    """Derive and print the keypair's public data."""
    keypair = secret_to_keypair(_resolve_secret(args, config))
    _print_json({
        "public_key": keypair.public_key_hex,
        "address": keypair.address,
    })


def build_payment(args: argparse.Namespace, config: WalletConfig) -> None:
    """Print the JSON projection of a validated payment."""
    tx = _build_payment(args, config)
    _print_json(transaction_to_json(tx))


def sign_payment(args: argparse.Namespace, config: WalletConfig) -> None:
    """Sign a payment offline and print the submission-ready JSON."""
    tx = _build_payment(args, config)
    signer = TransactionSigner(config.network)
    signed_tx = signer.sign(_resolve_secret(args, config), tx)
    _print_json(signed_tx.to_dict())


def verify_signed(args: argparse.Namespace, config: WalletConfig) -> None:
    """Verify a signed transaction file against a public key."""
    signer = TransactionSigner(config.network)
    is_valid = signer.verify(args.public_key, _load_signed(args.signed))

    print("valid" if is_valid else "invalid")
    if not is_valid:
        sys.exit(2)


async def submit_signed(args: argparse.Namespace, config: WalletConfig) -> None:
    """Submit a signed transaction file."""
    signed_tx = _load_signed(args.signed)

    async with JsonRpcGateway(config) as gateway:
        result = await gateway.submit_transaction(signed_tx)

    _print_json(result.to_dict())
    result.raise_for_result()


async def show_account(args: argparse.Namespace, config: WalletConfig) -> None:
    """Print account info and trust lines."""
    TransactionValidator.validate_address(args.address)

    async with JsonRpcGateway(config) as gateway:
        info = await gateway.get_account_info(args.address)
        lines = await gateway.get_trust_lines(args.address)

    print(f"Account:  {info.account_data.account}")
    print(f"Balance:  {info.account_data.balance} drops")
    print(f"Sequence: {info.account_data.sequence}")
    print(f"Ledger:   {info.ledger_current_index}")
    print()

    if not lines:
        print("No trust lines.")
    else:
        print(f"Found {len(lines)} trust line(s):")
        for line in lines:
            print(f"  {line.currency} / {line.account}: {line.balance} (limit {line.limit})")


def build_config(args: argparse.Namespace) -> WalletConfig:
    """Create configuration from the environment and command-line overrides."""
    overrides = {}
    if args.network:
        overrides["network"] = NetworkType(args.network)
    if args.log_level:
        overrides["log_level"] = args.log_level
    if args.log_json:
        overrides["log_json"] = True
    return WalletConfig(**overrides)


def main(argv: Optional[list] = None) -> None:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    config = build_config(args)

    # Setup logging
    setup_logging(config.log_level, config.log_json)

    # Run appropriate command
    try:
        if args.command == "address":
            show_address(args, config)
        elif args.command == "build-payment":
            build_payment(args, config)
        elif args.command == "sign":
            sign_payment(args, config)
        elif args.command == "verify":
            verify_signed(args, config)
        elif args.command == "submit":
            asyncio.run(submit_signed(args, config))
        elif args.command == "account":
            asyncio.run(show_account(args, config))
    except WalletError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
