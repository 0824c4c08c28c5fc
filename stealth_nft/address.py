"""
Account address encoding.

An address is the low 160 bits of keccak256 over the 64-byte uncompressed
public point, rendered in EIP-55 checksum form.
"""

from typing import Union

from eth_utils import is_address, keccak, to_checksum_address

from stealth_nft.config import WORD_BYTES, ZERO_ADDRESS

ADDRESS_BYTES = 20


def address_from_point(x: int, y: int) -> str:
    """Compute the checksummed account address of the public point (x, y)."""
    encoded = x.to_bytes(WORD_BYTES, "big") + y.to_bytes(WORD_BYTES, "big")
    return to_checksum_address(keccak(encoded)[-ADDRESS_BYTES:])


def normalize_address(value: Union[str, bytes]) -> str:
    """Return the checksummed form of an address given as hex or 20 raw bytes."""
    if isinstance(value, (bytes, bytearray)):
        if len(value) != ADDRESS_BYTES:
            raise ValueError(f"Address must be {ADDRESS_BYTES} bytes, got {len(value)}")
        return to_checksum_address(bytes(value))
    if not isinstance(value, str) or not is_address(value):
        raise ValueError(f"Invalid address: {value!r}")
    return to_checksum_address(value)


def is_zero_address(value: Union[str, bytes]) -> bool:
    return normalize_address(value) == ZERO_ADDRESS
