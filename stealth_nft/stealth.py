"""
Stealth address derivation.

Sender side, given the recipient's registered key P and secret material:

    r = keccak256(secret) mod n        ephemeral scalar
    R = r·G                            published data, surfaced to the recipient
    S = r·P                            shared point
    c = keccak256(S.x ‖ S.y) mod n     shared secret scalar
    Q = c·G + P                        stealth public point

Recipient side, holding p with P = p·G, only R is needed: S = p·R, and
d = (p + c) mod n is the private key of Q.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, NamedTuple, Union

from eth_utils import keccak
from web3 import Web3

from stealth_nft.address import address_from_point, normalize_address
from stealth_nft.config import CURVE_ORDER
from stealth_nft.curve import G, Point, reduce_scalar
from stealth_nft.errors import DegenerateScalar, InvalidKey
from stealth_nft.events import Event
from stealth_nft.registry import KeyRegistry
from stealth_nft.state import PublicKey

logger = logging.getLogger(__name__)

Secret = Union[bytes, bytearray, str]


class StealthAddress(NamedTuple):
    stealth_address: str
    published_data_x: int
    published_data_y: int


class RecoveredKey(NamedTuple):
    stealth_address: str
    private_key: int


class StealthMatch(NamedTuple):
    token_id: int
    stealth_address: str
    private_key: int


@dataclass(frozen=True)
class StealthDerivation:
    """Every intermediate value of one derivation, for vectors and debugging."""
    ephemeral_scalar: int
    published_point: Point
    shared_point: Point
    shared_secret: int
    stealth_point: Point
    stealth_address: str

    def result(self) -> StealthAddress:
        x, y = self.published_point.coordinates
        return StealthAddress(self.stealth_address, x, y)


def encode_secret(secret: Secret) -> bytes:
    if isinstance(secret, str):
        return secret.encode("utf-8")
    if isinstance(secret, (bytes, bytearray)):
        return bytes(secret)
    raise TypeError(f"Secret must be bytes or str, not {type(secret).__name__}")


def ephemeral_scalar(secret: Secret) -> int:
    """Hash the whole secret byte string and reduce it into a scalar."""
    return reduce_scalar(keccak(encode_secret(secret)))


def shared_secret_scalar(shared_point: Point) -> int:
    """keccak256 over the packed uint256 coordinates, reduced into a scalar."""
    x, y = shared_point.coordinates
    return reduce_scalar(Web3.solidity_keccak(["uint256", "uint256"], [x, y]))


def private_key_to_int(private_key: Union[int, str, bytes]) -> int:
    """Accept an int, 0x-hex string or 32 raw bytes and check it is a valid scalar."""
    if isinstance(private_key, str):
        value = int(private_key, 16)
    elif isinstance(private_key, (bytes, bytearray)):
        value = int.from_bytes(private_key, "big")
    else:
        value = private_key
    if not isinstance(value, int) or not 0 < value < CURVE_ORDER:
        raise InvalidKey("Private key must be an integer in [1, n)")
    return value


def derive_stealth(public_key: PublicKey, secret: Secret) -> StealthDerivation:
    """Run the sender side of the protocol against a known public key."""
    try:
        recipient_point = public_key.to_point()
    except ValueError as e:
        raise InvalidKey(str(e), public_key.x, public_key.y) from e

    r = ephemeral_scalar(secret)
    if r == 0:
        raise DegenerateScalar("ephemeral scalar")
    published = G.multiply(r)
    shared = recipient_point.multiply(r)

    c = shared_secret_scalar(shared)
    if c == 0:
        raise DegenerateScalar("shared secret scalar")
    stealth_point = G.multiply(c) + recipient_point
    if stealth_point.is_identity():
        raise DegenerateScalar("stealth point")

    stealth_address = address_from_point(*stealth_point.coordinates)
    logger.debug("Derived stealth address %s", stealth_address)
    return StealthDerivation(
        ephemeral_scalar=r,
        published_point=published,
        shared_point=shared,
        shared_secret=c,
        stealth_point=stealth_point,
        stealth_address=stealth_address,
    )


def compute_stealth_address(public_key: PublicKey, secret: Secret) -> StealthAddress:
    return derive_stealth(public_key, secret).result()


def recover_stealth_key(
    private_key: Union[int, str, bytes],
    published_data_x: int,
    published_data_y: int,
) -> RecoveredKey:
    """Recompute the stealth address and its private key from published data R."""
    p = private_key_to_int(private_key)
    try:
        published = Point.from_coordinates(published_data_x, published_data_y)
    except ValueError as e:
        raise InvalidKey(str(e), published_data_x, published_data_y) from e

    c = shared_secret_scalar(published.multiply(p))
    if c == 0:
        raise DegenerateScalar("shared secret scalar")
    d = (p + c) % CURVE_ORDER
    if d == 0:
        raise DegenerateScalar("stealth private key")

    return RecoveredKey(address_from_point(*G.multiply(d).coordinates), d)


def scan_stealth_mints(private_key: Union[int, str, bytes], events: Iterable[Event]) -> List[StealthMatch]:
    """Return the StealthMint events whose stealth address this key controls."""
    p = private_key_to_int(private_key)
    matches = []
    for event in events:
        if event.name != "StealthMint":
            continue
        args = event.args
        try:
            recovered = recover_stealth_key(p, args["publishedDataX"], args["publishedDataY"])
        except (InvalidKey, DegenerateScalar):
            logger.debug("Skipping malformed StealthMint for token %s", args.get("tokenId"))
            continue
        if recovered.stealth_address == normalize_address(args["stealthAddress"]):
            matches.append(StealthMatch(args["tokenId"], recovered.stealth_address, recovered.private_key))
    return matches


class StealthDeriver:
    """Derives stealth addresses for registered recipients. Read-only."""

    def __init__(self, registry: KeyRegistry):
        self._registry = registry

    def derive(self, recipient: str, secret: Secret) -> StealthDerivation:
        return derive_stealth(self._registry.lookup(recipient), secret)

    def derive_stealth_address(self, recipient: str, secret: Secret) -> StealthAddress:
        return self.derive(recipient, secret).result()
