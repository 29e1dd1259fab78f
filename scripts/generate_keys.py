#!/usr/bin/env python3
"""
Generate a wallet secret and its derived keys.

This script generates:
- A random wallet secret (wallet.secret)
- The derived public key and account address (key_info.json)
"""

import argparse
import json
import secrets
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from wallet.keys import secret_to_keypair


def generate_keys(output_dir: str = "./keys") -> dict:
    """
    Generate a new wallet secret.

    Args:
        output_dir: Directory to save keys

    Returns:
        Dictionary with key info and address
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    # 32 random bytes, hex encoded, clears the minimum secret length
    secret = secrets.token_hex(32)
    keypair = secret_to_keypair(secret)

    secret_path = output_path / "wallet.secret"
    secret_path.write_text(secret)
    secret_path.chmod(0o600)

    info = {
        "secret_path": str(secret_path),
        "public_key": keypair.public_key_hex,
        "address": keypair.address,
    }

    info_path = output_path / "key_info.json"
    with open(info_path, "w") as f:
        json.dump(info, f, indent=2)

    return info


def main():
    parser = argparse.ArgumentParser(description="Generate a wallet secret")
    parser.add_argument(
        "--output-dir", "-o",
        default="./keys",
        help="Output directory for keys (default: ./keys)"
    )
    parser.add_argument(
        "--force", "-f",
        action="store_true",
        help="Overwrite existing keys"
    )

    args = parser.parse_args()

    output_path = Path(args.output_dir)
    secret_path = output_path / "wallet.secret"

    if secret_path.exists() and not args.force:
        print(f"⚠️  Keys already exist at {args.output_dir}")
        print("   Use --force to overwrite")

        info_path = output_path / "key_info.json"
        if info_path.exists():
            with open(info_path) as f:
                info = json.load(f)
            print("\n📋 Existing Key Info:")
            print(f"   Address: {info['address']}")
        return

    print("🔑 Generating new wallet secret...")
    info = generate_keys(args.output_dir)

    print("\n✅ Keys generated successfully!")
    print(f"\n📁 Keys saved to: {args.output_dir}/")
    print("   - wallet.secret (KEEP SECRET!)")
    print("   - key_info.json")

    print(f"\n🔓 Public key: {info['public_key']}")
    print(f"📬 Address:    {info['address']}")

    print("\n⚠️  IMPORTANT: Keep your wallet.secret file secure!")


if __name__ == "__main__":
    main()
