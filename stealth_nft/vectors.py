"""
Stealth address test vector generator.

Produces, for every actor and secret, the full chain of intermediate
values so an independent implementation (or the on-chain contract) can
be checked step by step.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List

from eth_account import Account

from stealth_nft.curve import G
from stealth_nft.state import PublicKey
from stealth_nft.stealth import derive_stealth, private_key_to_int, recover_stealth_key

logger = logging.getLogger(__name__)


def _hex(value: int) -> str:
    return f"0x{value:064x}"


def public_key_from_private(private_key) -> PublicKey:
    return PublicKey.from_point(G.multiply(private_key_to_int(private_key)))


def generate_vector(actor_name: str, private_key: str, secret: str) -> Dict[str, Any]:
    account = Account.from_key(private_key)
    public_key = public_key_from_private(private_key)
    derivation = derive_stealth(public_key, secret)
    published = derivation.published_point
    recovered = recover_stealth_key(private_key, published.x, published.y)
    if recovered.stealth_address != derivation.stealth_address:
        raise ValueError(f"Recovered address mismatch for {actor_name}/{secret!r}")

    return {
        "actor": actor_name,
        "eth_address": account.address,
        "public_key_x": _hex(public_key.x),
        "public_key_y": _hex(public_key.y),
        "secret": secret,
        "ephemeral_scalar": _hex(derivation.ephemeral_scalar),
        "published_data_x": _hex(published.x),
        "published_data_y": _hex(published.y),
        "shared_point_x": _hex(derivation.shared_point.x),
        "shared_point_y": _hex(derivation.shared_point.y),
        "shared_secret": _hex(derivation.shared_secret),
        "stealth_public_key": "0x04" + derivation.stealth_point.to_bytes().hex(),
        "stealth_address": derivation.stealth_address,
        "stealth_private_key": _hex(recovered.private_key),
    }


def generate_stealth_vectors(actors: Dict[str, Dict[str, str]], secrets: Iterable[str]) -> Dict[str, List[Dict[str, Any]]]:
    secrets = list(secrets)
    vectors = []
    for actor_name, actor in actors.items():
        for secret in secrets:
            vectors.append(generate_vector(actor_name, actor["eth_private_key"], secret))
    logger.info("Generated %d stealth address vectors", len(vectors))
    return {"stealth_address_vectors": vectors}


def write_vectors(path, actors: Dict[str, Dict[str, str]], secrets: Iterable[str]) -> Dict[str, List[Dict[str, Any]]]:
    vectors = generate_stealth_vectors(actors, secrets)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(vectors, f, indent=2)
    return vectors
