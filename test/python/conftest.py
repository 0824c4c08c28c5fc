import pytest
from coincurve import PrivateKey as CCPrivateKey
from eth_account import Account

from stealth_nft import PublicKey, StealthNFT
from stealth_nft.config import CURVE_ORDER, Settings

RECIPIENT_KEY = 0xDEADBEEFDEADBEEFDEADBEEFDEADBEEFDEADBEEFDEADBEEFDEADBEEFDEADBEEF
USER_KEY = 0xAC0974BEC39A17E36BA4A6B4D238FF944BACB478CBED5EFCAE784D7BF4F2FF80
SECRET = "test"


def key_bytes(k):
    return (k % CURVE_ORDER).to_bytes(32, "big")


def oracle_public_key(k):
    """Public key straight from libsecp256k1, independent of stealth_nft.curve."""
    x, y = CCPrivateKey(key_bytes(k)).public_key.point()
    return PublicKey(x, y)


@pytest.fixture
def recipient():
    return Account.from_key(key_bytes(RECIPIENT_KEY))


@pytest.fixture
def user():
    return Account.from_key(key_bytes(USER_KEY))


@pytest.fixture
def recipient_public_key():
    return oracle_public_key(RECIPIENT_KEY)


@pytest.fixture
def contract():
    return StealthNFT(Settings())


@pytest.fixture
def registered_contract(contract, recipient, recipient_public_key):
    contract.provide_public_key(recipient.address, recipient_public_key.x, recipient_public_key.y)
    return contract
