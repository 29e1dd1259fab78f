#!/usr/bin/env python3
"""
Offline signing walkthrough.

Builds a payment, validates each field, signs it without any network
access and verifies the signature with the public key alone. The
resulting JSON can be carried to an online machine and submitted with
``wallet submit --signed <file>``.
"""

import argparse
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from wallet.config import NetworkType
from wallet.errors import WalletError
from wallet.keys import secret_to_keypair
from wallet.tx.builder import TransactionBuilder
from wallet.tx.encoder import transaction_to_json
from wallet.tx.signer import TransactionSigner
from wallet.tx.validator import TransactionValidator


def sign_offline(secret: str, network: NetworkType, output: str) -> None:
    keypair = secret_to_keypair(secret)
    print(f"📬 Signing account: {keypair.address}")

    builder = TransactionBuilder(network)
    tx = builder.build_payment(
        account=keypair.address,
        destination="rDestinationAccount123456789012345678901234",
        amount="50.00",
        currency="USD",
        issuer="rIssuerAccount123456789012345678901234",
        fee="12",
        sequence=1,
        last_ledger_sequence=1000,
    )
    print("✓ Built payment transaction")

    TransactionValidator.validate(tx)
    TransactionValidator.validate_address(tx.account)
    TransactionValidator.validate_address(tx.destination)
    TransactionValidator.validate_currency_code(tx.currency)
    TransactionValidator.validate_amount(tx.amount)
    print("✓ All transaction components validated")

    print("\nTransaction JSON:")
    print(json.dumps(transaction_to_json(tx), indent=2))

    signer = TransactionSigner(network)
    signed_tx = signer.sign(secret, tx)
    print(f"\n✓ Signed (blob {len(signed_tx.blob) // 2} bytes)")

    assert signer.verify(keypair.public_key_hex, signed_tx)
    print("✓ Signature verified with public key")

    Path(output).write_text(json.dumps(signed_tx.to_dict(), indent=2))
    print(f"\n📁 Signed transaction saved to {output}")


def main():
    parser = argparse.ArgumentParser(description="Sign a sample payment offline")
    parser.add_argument("--secret", required=True, help="Wallet secret (>= 32 bytes)")
    parser.add_argument(
        "--network",
        choices=[n.value for n in NetworkType],
        default="testnet",
    )
    parser.add_argument("--output", "-o", default="signed_tx.json")
    args = parser.parse_args()

    try:
        sign_offline(args.secret, NetworkType(args.network), args.output)
    except WalletError as e:
        print(f"❌ {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
