"""
StealthNFT error taxonomy.

Every failure aborts the call that raised it; no state is modified.
"""


class StealthNFTError(Exception):
    """Base class for all StealthNFT rejections."""


class InvalidKey(StealthNFTError):
    """Public key is off-curve, the identity, or not controlled by the sender."""

    def __init__(self, message, x=None, y=None):
        super().__init__(message)
        self.x = x
        self.y = y


class UnregisteredRecipient(StealthNFTError):
    def __init__(self, address):
        super().__init__(f"No public key registered for {address}")
        self.address = address


class DegenerateScalar(StealthNFTError):
    """A derived scalar or point collapsed to zero / the identity."""

    def __init__(self, stage):
        super().__init__(f"Degenerate value while deriving {stage}")
        self.stage = stage


class UnknownToken(StealthNFTError):
    def __init__(self, token_id):
        super().__init__(f"Token {token_id} has not been minted")
        self.token_id = token_id


class NotOwner(StealthNFTError):
    def __init__(self, sender, token_id, owner):
        super().__init__(f"{sender} is not the owner of token {token_id}")
        self.sender = sender
        self.token_id = token_id
        self.owner = owner


class InvalidRecipient(StealthNFTError):
    def __init__(self, address):
        super().__init__(f"Cannot transfer to {address}")
        self.address = address


class LedgerExhausted(StealthNFTError):
    """The next tokenID no longer fits in a uint256."""

    def __init__(self, token_id):
        super().__init__(f"Token id {token_id} exceeds the uint256 range")
        self.token_id = token_id
