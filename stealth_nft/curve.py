"""
secp256k1 group arithmetic.

Scalar multiplication and point addition are delegated to libsecp256k1
through ``coincurve``. This module only deals with the identity point,
which libsecp256k1 refuses to serialise, and with the affine (x, y)
integer coordinates the registry and the ledger exchange.
"""

from __future__ import annotations

from typing import Optional, Tuple

from coincurve import PublicKey as _PK

from stealth_nft.config import CURVE_B, CURVE_ORDER, FIELD_PRIME, WORD_BYTES


def reduce_scalar(data: bytes) -> int:
    """Interpret a digest as a big-endian integer reduced modulo the group order."""
    return int.from_bytes(data, "big") % CURVE_ORDER


def scalar_to_bytes(k: int) -> bytes:
    return (k % CURVE_ORDER).to_bytes(WORD_BYTES, "big")


def is_on_curve(x: int, y: int) -> bool:
    """Check y^2 == x^3 + 7 (mod p) for canonical coordinates."""
    if not (0 <= x < FIELD_PRIME and 0 <= y < FIELD_PRIME):
        return False
    return (y * y - (x * x * x + CURVE_B)) % FIELD_PRIME == 0


class Point:
    """
    Affine point on secp256k1, or the identity.

    The identity is represented by ``_pk is None``; every other point
    wraps a ``coincurve.PublicKey``.
    """

    __slots__ = ("_pk",)

    def __init__(self, pk: Optional[_PK] = None):
        self._pk = pk

    # constructors -----------------------------------------------------------
    @classmethod
    def identity(cls) -> Point:
        return cls(None)

    @classmethod
    def generator(cls) -> Point:
        return cls.from_scalar(1)

    @classmethod
    def from_scalar(cls, k: int) -> Point:
        """Compute k·G."""
        k %= CURVE_ORDER
        if k == 0:
            return cls.identity()
        return cls(_PK.from_valid_secret(scalar_to_bytes(k)))

    @classmethod
    def from_coordinates(cls, x: int, y: int) -> Point:
        """Build a point from affine coordinates, rejecting anything off the curve."""
        if not isinstance(x, int) or not isinstance(y, int):
            raise ValueError("Point coordinates must be integers")
        if x == 0 and y == 0:
            raise ValueError("The identity point has no affine coordinates")
        if not is_on_curve(x, y):
            raise ValueError(f"Point ({hex(x)}, {hex(y)}) is not on secp256k1")
        return cls(_PK(b"\x04" + x.to_bytes(WORD_BYTES, "big") + y.to_bytes(WORD_BYTES, "big")))

    # accessors --------------------------------------------------------------
    def is_identity(self) -> bool:
        return self._pk is None

    @property
    def coordinates(self) -> Tuple[int, int]:
        if self._pk is None:
            raise ValueError("The identity point has no affine coordinates")
        return self._pk.point()

    @property
    def x(self) -> int:
        return self.coordinates[0]

    @property
    def y(self) -> int:
        return self.coordinates[1]

    def to_bytes(self) -> bytes:
        """64-byte big-endian x||y, the encoding hashed into account addresses."""
        if self._pk is None:
            raise ValueError("The identity point cannot be encoded")
        return self._pk.format(compressed=False)[1:]

    # group operations -------------------------------------------------------
    def multiply(self, k: int) -> Point:
        """Compute k·self."""
        k %= CURVE_ORDER
        if self._pk is None or k == 0:
            return Point.identity()
        return Point(self._pk.multiply(scalar_to_bytes(k)))

    def __neg__(self) -> Point:
        if self._pk is None:
            return self
        x, y = self.coordinates
        return Point.from_coordinates(x, FIELD_PRIME - y)

    def __add__(self, other: Point) -> Point:
        if not isinstance(other, Point):
            return NotImplemented
        if self._pk is None:
            return other
        if other._pk is None:
            return self
        # P + (-P)
        (x1, y1), (x2, y2) = self.coordinates, other.coordinates
        if x1 == x2 and y1 != y2:
            return Point.identity()
        return Point(_PK.combine_keys([self._pk, other._pk]))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return False
        if self._pk is None or other._pk is None:
            return self._pk is None and other._pk is None
        return self.coordinates == other.coordinates

    def __repr__(self) -> str:
        if self._pk is None:
            return "Point(identity)"
        return f"Point(x=0x{self.x:064x})"


G = Point.generator()
