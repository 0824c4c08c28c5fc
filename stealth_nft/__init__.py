"""
StealthNFT

Publish a secp256k1 public key once; anyone can then mint a token to a
one-time stealth address that only the key holder can recover.
"""

__version__ = "0.1.0"

from stealth_nft.contract import StealthMintResult, StealthNFT
from stealth_nft.errors import (
    DegenerateScalar,
    InvalidKey,
    InvalidRecipient,
    LedgerExhausted,
    NotOwner,
    StealthNFTError,
    UnknownToken,
    UnregisteredRecipient,
)
from stealth_nft.state import PublicKey
from stealth_nft.stealth import StealthAddress, compute_stealth_address, recover_stealth_key, scan_stealth_mints

__all__ = [
    "StealthNFT",
    "StealthMintResult",
    "StealthAddress",
    "PublicKey",
    "compute_stealth_address",
    "recover_stealth_key",
    "scan_stealth_mints",
    "StealthNFTError",
    "InvalidKey",
    "UnregisteredRecipient",
    "DegenerateScalar",
    "UnknownToken",
    "NotOwner",
    "InvalidRecipient",
    "LedgerExhausted",
    "__version__",
]
