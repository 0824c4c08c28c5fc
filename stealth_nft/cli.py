#!/usr/bin/env python3
"""
StealthNFT command line

Usage:
    stealth-nft public-key --private-key 0x...
    stealth-nft stealth-address --private-key 0x... --secret test
    stealth-nft stealth-address --x 0x... --y 0x... --secret test
    stealth-nft recover --private-key 0x... --published-x 0x... --published-y 0x...
    stealth-nft demo [--secret test --secret other]
    stealth-nft vectors --output test_vectors/stealth_vectors.json
"""

import argparse
import logging
import sys

from eth_account import Account

from stealth_nft.config import DEFAULT_SECRETS, load_settings
from stealth_nft.contract import StealthNFT
from stealth_nft.errors import StealthNFTError
from stealth_nft.state import PublicKey
from stealth_nft.stealth import compute_stealth_address, recover_stealth_key, scan_stealth_mints
from stealth_nft.vectors import public_key_from_private, write_vectors


def _uint(value: str) -> int:
    return int(value, 0)


def cmd_public_key(args, settings):
    public_key = public_key_from_private(args.private_key)
    account = Account.from_key(args.private_key)
    print(f"Address: {account.address}")
    print(f"x: 0x{public_key.x:064x}")
    print(f"y: 0x{public_key.y:064x}")


def cmd_stealth_address(args, settings):
    if args.private_key:
        public_key = public_key_from_private(args.private_key)
    elif args.x is not None and args.y is not None:
        public_key = PublicKey(args.x, args.y)
    else:
        raise ValueError("Provide either --private-key or both --x and --y")

    result = compute_stealth_address(public_key, args.secret)
    print(f"Stealth Address: {result.stealth_address}")
    print(f"Published Data X: 0x{result.published_data_x:064x}")
    print(f"Published Data Y: 0x{result.published_data_y:064x}")


def cmd_recover(args, settings):
    recovered = recover_stealth_key(args.private_key, args.published_x, args.published_y)
    print(f"Stealth Address: {recovered.stealth_address}")
    print(f"Stealth Private Key: 0x{recovered.private_key:064x}")


def cmd_demo(args, settings):
    secrets = args.secret or DEFAULT_SECRETS
    actors = settings.actors
    if "recipient" not in actors or len(actors) < 2:
        raise ValueError("Demo needs a 'recipient' actor and at least one other actor")

    recipient = Account.from_key(actors["recipient"]["eth_private_key"])
    other_name = next(name for name in actors if name != "recipient")
    other = Account.from_key(actors[other_name]["eth_private_key"])

    contract = StealthNFT(settings)

    print("📋 Step 1: Recipient provides public key")
    public_key = public_key_from_private(actors["recipient"]["eth_private_key"])
    contract.provide_public_key(recipient.address, public_key.x, public_key.y)
    print(f"✅ Registered {recipient.address}")

    print("📋 Step 2: Mint stealthily")
    for secret in secrets:
        minted = contract.mint_stealthily(recipient.address, secret)
        print(f"✅ Token {minted.token_id} -> {minted.stealth_address} (secret {secret!r})")

    print("📋 Step 3: Recipient scans StealthMint events")
    matches = scan_stealth_mints(actors["recipient"]["eth_private_key"], contract.events)
    for match in matches:
        print(f"✅ Recovered key for token {match.token_id} at {match.stealth_address}")

    print(f"📋 Step 4: Move recovered tokens to {other_name}")
    for match in matches:
        stealth_account = Account.from_key(match.private_key.to_bytes(32, "big"))
        contract.transfer(stealth_account.address, other.address, match.token_id)
        print(f"✅ Token {match.token_id} owner is now {contract.owner_of(match.token_id)}")

    print(f"\n🎉 Demo complete: {len(matches)}/{len(secrets)} stealth tokens recovered")


def cmd_vectors(args, settings):
    secrets = args.secret or DEFAULT_SECRETS
    vectors = write_vectors(args.output, settings.actors, secrets)
    print(f"✅ Wrote {len(vectors['stealth_address_vectors'])} vectors to {args.output}")


def build_parser():
    parser = argparse.ArgumentParser(description="Stealth address NFT tooling")
    parser.add_argument("--env-file", default=None, help="Path to a .env file")
    subparsers = parser.add_subparsers(dest="command", required=True)

    p = subparsers.add_parser("public-key", help="Show the address and public key of a private key")
    p.add_argument("--private-key", required=True)
    p.set_defaults(func=cmd_public_key)

    p = subparsers.add_parser("stealth-address", help="Derive a stealth address for a public key")
    p.add_argument("--private-key", help="Recipient private key (the public key is derived from it)")
    p.add_argument("--x", type=_uint, help="Recipient public key x coordinate")
    p.add_argument("--y", type=_uint, help="Recipient public key y coordinate")
    p.add_argument("--secret", required=True)
    p.set_defaults(func=cmd_stealth_address)

    p = subparsers.add_parser("recover", help="Recover a stealth private key from published data")
    p.add_argument("--private-key", required=True)
    p.add_argument("--published-x", type=_uint, required=True)
    p.add_argument("--published-y", type=_uint, required=True)
    p.set_defaults(func=cmd_recover)

    p = subparsers.add_parser("demo", help="Run register -> stealth mint -> recover -> transfer in memory")
    p.add_argument("--secret", action="append", help="Secret material (repeatable)")
    p.set_defaults(func=cmd_demo)

    p = subparsers.add_parser("vectors", help="Write stealth address test vectors as JSON")
    p.add_argument("--output", required=True)
    p.add_argument("--secret", action="append", help="Secret material (repeatable)")
    p.set_defaults(func=cmd_vectors)

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    try:
        settings = load_settings(args.env_file)
    except ValueError as e:
        print(f"❌ Invalid configuration: {e}")
        return 1
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        args.func(args, settings)
    except (StealthNFTError, ValueError) as e:
        print(f"❌ {type(e).__name__}: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
