"""
Event log collaborator.

Each event keeps its decoded arguments and the ABI encoding a log
consumer would read off chain.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from eth_abi import decode, encode

logger = logging.getLogger(__name__)

# Event name -> ordered (argument name, ABI type) pairs
EVENT_SIGNATURES: Dict[str, Tuple[Tuple[str, str], ...]] = {
    "PublicKeyProvided": (("owner", "address"), ("x", "uint256"), ("y", "uint256")),
    "Transfer": (("from", "address"), ("to", "address"), ("tokenId", "uint256")),
    "StealthMint": (
        ("stealthAddress", "address"),
        ("tokenId", "uint256"),
        ("publishedDataX", "uint256"),
        ("publishedDataY", "uint256"),
    ),
}


@dataclass(frozen=True)
class Event:
    name: str
    args: Dict[str, Any]
    data: bytes


def encode_event(name: str, args: Dict[str, Any]) -> bytes:
    """ABI-encode event arguments in declaration order."""
    signature = EVENT_SIGNATURES[name]
    return encode([abi_type for _, abi_type in signature], [args[arg] for arg, _ in signature])


def decode_event_data(name: str, data: bytes) -> Dict[str, Any]:
    signature = EVENT_SIGNATURES[name]
    values = decode([abi_type for _, abi_type in signature], data)
    return {arg: value for (arg, _), value in zip(signature, values)}


class EventLog:
    """Append-only list of emitted events."""

    def __init__(self):
        self._events: List[Event] = []

    def build(self, name: str, **args) -> Event:
        """Encode an event without recording it."""
        if name not in EVENT_SIGNATURES:
            raise ValueError(f"Unknown event: {name}")
        return Event(name=name, args=dict(args), data=encode_event(name, args))

    def append(self, event: Event) -> Event:
        self._events.append(event)
        logger.debug("Emitted %s %s", event.name, event.args)
        return event

    def emit(self, name: str, **args) -> Event:
        return self.append(self.build(name, **args))

    def filter(self, name: str) -> List[Event]:
        return [event for event in self._events if event.name == name]

    def __iter__(self):
        return iter(list(self._events))

    def __len__(self) -> int:
        return len(self._events)
