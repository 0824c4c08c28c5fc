"""
Public key registry with self-attestation.

A key is only accepted from the account it hashes to, so nobody can bind
stealth funds to a key they do not control.
"""

import logging

from stealth_nft.address import address_from_point, normalize_address
from stealth_nft.curve import Point
from stealth_nft.errors import InvalidKey, UnregisteredRecipient
from stealth_nft.state import LedgerState, PublicKey

logger = logging.getLogger(__name__)


class KeyRegistry:
    def __init__(self, state: LedgerState):
        self._state = state

    def provide_public_key(self, sender: str, x: int, y: int) -> PublicKey:
        """Register (x, y) for sender, replacing any earlier key.

        Raises InvalidKey when the point is off-curve, the identity, or
        hashes to an address other than sender.
        """
        sender = normalize_address(sender)
        try:
            Point.from_coordinates(x, y)
        except ValueError as e:
            raise InvalidKey(str(e), x, y) from e

        derived = address_from_point(x, y)
        if derived != sender:
            raise InvalidKey(f"Public key belongs to {derived}, not {sender}", x, y)

        key = PublicKey(x, y)
        self._state.public_keys[sender] = key
        logger.info("Registered public key for %s", sender)
        return key

    def lookup(self, address: str) -> PublicKey:
        address = normalize_address(address)
        try:
            return self._state.public_keys[address]
        except KeyError:
            raise UnregisteredRecipient(address) from None

    def is_registered(self, address: str) -> bool:
        return normalize_address(address) in self._state.public_keys

    def __len__(self) -> int:
        return len(self._state.public_keys)
