"""
Persistent StealthNFT world state.

One LedgerState holds everything the registry and the token ledger
persist: the address -> public key map, the tokenID -> owner map and the
monotonic tokenID counter.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Dict, NamedTuple

from stealth_nft.address import address_from_point
from stealth_nft.config import DEFAULT_TOKEN_ID_ORIGIN, WORD_BYTES
from stealth_nft.curve import Point


class PublicKey(NamedTuple):
    """A registered secp256k1 public key as two uint256 coordinates."""
    x: int
    y: int

    @property
    def address(self) -> str:
        return address_from_point(self.x, self.y)

    def to_point(self) -> Point:
        return Point.from_coordinates(self.x, self.y)

    def to_bytes(self) -> bytes:
        return self.x.to_bytes(WORD_BYTES, "big") + self.y.to_bytes(WORD_BYTES, "big")

    @classmethod
    def from_point(cls, point: Point) -> PublicKey:
        x, y = point.coordinates
        return cls(x, y)


@dataclass
class LedgerState:
    public_keys: Dict[str, PublicKey] = field(default_factory=dict)
    owners: Dict[int, str] = field(default_factory=dict)
    next_token_id: int = DEFAULT_TOKEN_ID_ORIGIN

    def snapshot(self) -> LedgerState:
        """Deep copy, comparable with == against a later state."""
        return copy.deepcopy(self)
