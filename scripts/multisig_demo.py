#!/usr/bin/env python3
"""
Multi-signature walkthrough.

Three signers each sign the same payment independently; any two of the
detached signatures are combined into one multisignature blob. Which
signers and how many are required is a policy decision held outside the
blob; this script applies a 2-of-3 threshold itself.
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from wallet.config import NetworkType
from wallet.tx.builder import TransactionBuilder
from wallet.tx.signer import TransactionSigner

SIGNER_SECRETS = {
    "alice": "alice-demo-secret-0000000000000000000000",
    "bob": "bob-demo-secret-00000000000000000000000000",
    "charlie": "charlie-demo-secret-000000000000000000000",
}


def run_demo(threshold: int, network: NetworkType) -> None:
    builder = TransactionBuilder(network)
    signer = TransactionSigner(network)

    tx = builder.build_payment(
        account="rMultiSigAccount123456789012345678901234",
        destination="rDestinationAccount123456789012345678901234",
        amount="1000.00",
        currency="EUR",
        issuer="rIssuerAccount123456789012345678901234",
        fee="15",
        sequence=5,
        last_ledger_sequence=2000,
    )
    print("✓ Built base payment transaction")

    contributions = []
    for name, secret in SIGNER_SECRETS.items():
        public_key, signature = signer.sign_for_multisig(secret, tx)
        contributions.append((public_key, signature))
        print(f"  ✍️  {name} signed (key {public_key[:16]}...)")

    selected = contributions[:threshold]
    signed_tx = signer.create_multisig(tx, selected)
    print(f"\n✓ Assembled {threshold}-of-{len(SIGNER_SECRETS)} multisignature blob")

    decoded = signer.decode_multisig(signed_tx.blob)
    results = signer.verify_multisig(signed_tx)
    print(f"  Signers in blob: {decoded.signer_count}")
    print(f"  Valid signatures: {sum(results)}")

    if sum(results) >= threshold:
        print("\n✅ Threshold met")
    else:
        print("\n❌ Threshold not met")
        sys.exit(1)


def main():
    parser = argparse.ArgumentParser(description="Multi-signature demo")
    parser.add_argument("--threshold", type=int, default=2, choices=[1, 2, 3])
    parser.add_argument(
        "--network",
        choices=[n.value for n in NetworkType],
        default="testnet",
    )
    args = parser.parse_args()

    run_demo(args.threshold, NetworkType(args.network))


if __name__ == "__main__":
    main()
