#!/usr/bin/env python3
"""
Check balance and trust lines of an account on testnet.
"""

import asyncio
import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from wallet.config import NetworkType, WalletConfig
from wallet.errors import WalletError
from wallet.keys import secret_to_keypair
from wallet.node.jsonrpc import JsonRpcGateway


async def check_balance(address: str, network: NetworkType):
    """Check balance at an account address."""
    print(f"\n📬 Address: {address}")

    config = WalletConfig(network=network)

    async with JsonRpcGateway(config) as gateway:
        balance = await gateway.get_account_balance(address)
        lines = await gateway.get_trust_lines(address)

    print(f"\n💰 Balance: {int(balance) / 1_000_000:.6f} XRP ({balance} drops)")

    if lines:
        print(f"\n🔗 Trust lines ({len(lines)}):")
        for line in lines:
            print(f"   {line.currency:<6} {line.balance:>16} / limit {line.limit} ({line.account})")
    else:
        print("\n🔗 No trust lines")


def main():
    parser = argparse.ArgumentParser(description="Check account balance")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--address", help="Account address")
    group.add_argument("--secret-file", help="Path to a wallet.secret file")
    parser.add_argument(
        "--network",
        choices=[n.value for n in NetworkType],
        default="testnet",
    )
    args = parser.parse_args()

    address = args.address
    if args.secret_file:
        address = secret_to_keypair(Path(args.secret_file).read_text().strip()).address

    try:
        asyncio.run(check_balance(address, NetworkType(args.network)))
    except WalletError as e:
        print(f"❌ {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
