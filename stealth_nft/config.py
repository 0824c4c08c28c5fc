# StealthNFT configuration
# Protocol constants shared by the registry, the stealth deriver and the ledger,
# plus the runtime settings read from the environment (.env is honoured).

import copy
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv

# secp256k1 domain parameters (SEC 2 v2, section 2.4.1)
FIELD_PRIME = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F
CURVE_ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
CURVE_B = 7
GENERATOR_X = 0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798
GENERATOR_Y = 0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8

# Fixed-width big-endian encoding of one uint256 word
WORD_BYTES = 32
MAX_UINT256 = 2**256 - 1

# Null account, used as the "from" of mint Transfer events and rejected as a transfer recipient
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# First tokenID handed out by a fresh ledger
DEFAULT_TOKEN_ID_ORIGIN = 0

# Default actors used by the demo and the vector generator.
# "recipient" is the 0xdeadbeef... key; alice and bob are the first two
# well-known Anvil/Hardhat development accounts.
DEFAULT_ACTORS = {
    "recipient": {
        "eth_private_key": "0xdeadbeefdeadbeefdeadbeefdeadbeefdeadbeefdeadbeefdeadbeefdeadbeef",
    },
    "alice": {
        "eth_private_key": "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80",
    },
    "bob": {
        "eth_private_key": "0x59c6995e998f97a5a0044966f0945389dc9e86dae88c7a8412f4603b6b78690d",
    },
}

# Secrets used by the vector generator when none are given
DEFAULT_SECRETS = ["test", "other"]

ENV_TOKEN_ID_ORIGIN = "STEALTH_NFT_TOKEN_ID_ORIGIN"
ENV_LOG_LEVEL = "STEALTH_NFT_LOG_LEVEL"
ENV_ACTORS_CONFIG = "STEALTH_NFT_ACTORS_CONFIG"


@dataclass
class Settings:
    """Runtime settings for a StealthNFT deployment."""
    token_id_origin: int = DEFAULT_TOKEN_ID_ORIGIN
    log_level: str = "WARNING"
    actors: Dict[str, Dict[str, str]] = field(default_factory=lambda: copy.deepcopy(DEFAULT_ACTORS))


def load_actors_config(path) -> Dict[str, Dict[str, str]]:
    """Load the actors configuration file."""
    with open(path, "r") as f:
        actors = json.load(f)["actors"]
    for name, actor in actors.items():
        if "eth_private_key" not in actor:
            raise ValueError(f"Actor {name!r} has no eth_private_key")
    return actors


def load_settings(env_file: Optional[str] = None) -> Settings:
    """Build Settings from the environment, loading a .env file first."""
    load_dotenv(env_file)

    raw_origin = os.getenv(ENV_TOKEN_ID_ORIGIN, str(DEFAULT_TOKEN_ID_ORIGIN))
    try:
        token_id_origin = int(raw_origin, 0)
    except ValueError:
        raise ValueError(f"{ENV_TOKEN_ID_ORIGIN} must be an integer, got {raw_origin!r}")
    if not 0 <= token_id_origin <= MAX_UINT256:
        raise ValueError(f"{ENV_TOKEN_ID_ORIGIN} out of uint256 range: {token_id_origin}")

    settings = Settings(
        token_id_origin=token_id_origin,
        log_level=os.getenv(ENV_LOG_LEVEL, "WARNING").upper(),
    )

    actors_path = os.getenv(ENV_ACTORS_CONFIG)
    if actors_path:
        settings.actors = load_actors_config(Path(actors_path))

    return settings
