"""
Sequential-tokenID ownership ledger.
"""

import logging

from stealth_nft.address import is_zero_address, normalize_address
from stealth_nft.config import MAX_UINT256, ZERO_ADDRESS
from stealth_nft.errors import InvalidRecipient, LedgerExhausted, NotOwner, UnknownToken
from stealth_nft.events import EventLog
from stealth_nft.state import LedgerState

logger = logging.getLogger(__name__)


class AssetLedger:
    def __init__(self, state: LedgerState, event_log: EventLog):
        self._state = state
        self._events = event_log

    def mint(self, to: str) -> int:
        """Assign the next tokenID to `to` and return it."""
        to = normalize_address(to)
        token_id = self._state.next_token_id
        if token_id > MAX_UINT256:
            raise LedgerExhausted(token_id)
        event = self._events.build("Transfer", **{"from": ZERO_ADDRESS, "to": to, "tokenId": token_id})

        self._state.owners[token_id] = to
        self._state.next_token_id = token_id + 1
        logger.info("Minted token %d to %s", token_id, to)
        self._events.append(event)
        return token_id

    def owner_of(self, token_id: int) -> str:
        try:
            return self._state.owners[token_id]
        except KeyError:
            raise UnknownToken(token_id) from None

    def exists(self, token_id: int) -> bool:
        return token_id in self._state.owners

    def transfer(self, sender: str, to: str, token_id: int) -> None:
        """Move token_id from sender to `to`; sender must be the current owner."""
        sender = normalize_address(sender)
        to = normalize_address(to)
        owner = self.owner_of(token_id)
        if owner != sender:
            raise NotOwner(sender, token_id, owner)
        if is_zero_address(to):
            raise InvalidRecipient(to)

        event = self._events.build("Transfer", **{"from": sender, "to": to, "tokenId": token_id})

        self._state.owners[token_id] = to
        logger.info("Transferred token %d from %s to %s", token_id, sender, to)
        self._events.append(event)

    def __len__(self) -> int:
        return len(self._state.owners)
