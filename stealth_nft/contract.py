"""
StealthNFT: key registry, stealth deriver and token ledger behind one
serial entry point.

Every call holds the instance lock for its full duration and validates
before it writes, so a rejected call leaves the state untouched.
"""

import logging
import threading
from typing import NamedTuple, Optional

from stealth_nft.config import Settings
from stealth_nft.events import EventLog
from stealth_nft.ledger import AssetLedger
from stealth_nft.registry import KeyRegistry
from stealth_nft.state import LedgerState, PublicKey
from stealth_nft.stealth import Secret, StealthAddress, StealthDeriver

logger = logging.getLogger(__name__)


class StealthMintResult(NamedTuple):
    stealth_address: str
    token_id: int
    published_data_x: int
    published_data_y: int


class StealthNFT:
    """
    Serial executor for one StealthNFT deployment.

    The registry, deriver and ledger take no locks of their own. This
    class stands in for the host ledger's execution environment: it owns
    the single LedgerState and runs each entry point under one lock, so
    calls apply in one total order.
    """

    def __init__(self, settings: Optional[Settings] = None, event_log: Optional[EventLog] = None):
        settings = settings or Settings()
        self.state = LedgerState(next_token_id=settings.token_id_origin)
        self.events = event_log if event_log is not None else EventLog()
        self.registry = KeyRegistry(self.state)
        self.ledger = AssetLedger(self.state, self.events)
        self.deriver = StealthDeriver(self.registry)
        self._lock = threading.RLock()

    # key registry -----------------------------------------------------------
    def provide_public_key(self, sender: str, x: int, y: int) -> None:
        with self._lock:
            key = self.registry.provide_public_key(sender, x, y)
            self.events.emit("PublicKeyProvided", owner=key.address, x=x, y=y)

    def public_key_of(self, address: str) -> PublicKey:
        with self._lock:
            return self.registry.lookup(address)

    def is_registered(self, address: str) -> bool:
        with self._lock:
            return self.registry.is_registered(address)

    # stealth derivation -----------------------------------------------------
    def get_stealth_address(self, recipient: str, secret: Secret) -> StealthAddress:
        with self._lock:
            return self.deriver.derive_stealth_address(recipient, secret)

    # minting ----------------------------------------------------------------
    def mint(self, to: str) -> int:
        with self._lock:
            return self.ledger.mint(to)

    def mint_stealthily(self, recipient: str, secret: Secret) -> StealthMintResult:
        """Mint to a fresh stealth address of recipient and publish R."""
        with self._lock:
            stealth = self.deriver.derive_stealth_address(recipient, secret)
            token_id = self.ledger.mint(stealth.stealth_address)
            self.events.emit(
                "StealthMint",
                stealthAddress=stealth.stealth_address,
                tokenId=token_id,
                publishedDataX=stealth.published_data_x,
                publishedDataY=stealth.published_data_y,
            )
            logger.info("Stealth-minted token %d for a registered recipient", token_id)
            return StealthMintResult(
                stealth.stealth_address,
                token_id,
                stealth.published_data_x,
                stealth.published_data_y,
            )

    # ownership --------------------------------------------------------------
    def owner_of(self, token_id: int) -> str:
        with self._lock:
            return self.ledger.owner_of(token_id)

    def exists(self, token_id: int) -> bool:
        with self._lock:
            return self.ledger.exists(token_id)

    def transfer(self, sender: str, to: str, token_id: int) -> None:
        with self._lock:
            self.ledger.transfer(sender, to, token_id)
