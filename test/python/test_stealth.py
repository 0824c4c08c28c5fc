import pytest
from coincurve import PrivateKey as CCPrivateKey, PublicKey as CCPublicKey
from eth_abi.packed import encode_packed
from eth_account import Account
from eth_utils import keccak

import stealth_nft.stealth as stealth
from stealth_nft.config import CURVE_ORDER
from stealth_nft.curve import G
from stealth_nft.errors import DegenerateScalar, InvalidKey, UnregisteredRecipient
from stealth_nft.events import EventLog
from stealth_nft.registry import KeyRegistry
from stealth_nft.state import LedgerState
from stealth_nft.stealth import (
    StealthDeriver,
    compute_stealth_address,
    derive_stealth,
    recover_stealth_key,
    scan_stealth_mints,
)

from conftest import RECIPIENT_KEY, SECRET, USER_KEY, key_bytes, oracle_public_key


def expected_stealth(private_key, secret):
    """Reference derivation using libsecp256k1 and eth_account directly."""
    public_key = CCPrivateKey(key_bytes(private_key)).public_key
    r = int.from_bytes(keccak(secret.encode()), "big") % CURVE_ORDER
    shared_x, shared_y = public_key.multiply(key_bytes(r)).point()
    c = int.from_bytes(keccak(encode_packed(["uint256", "uint256"], [shared_x, shared_y])), "big") % CURVE_ORDER
    stealth_address = Account.from_key(key_bytes(private_key + c)).address
    published_x, published_y = CCPrivateKey(key_bytes(r)).public_key.point()
    return stealth_address, published_x, published_y


def test_concrete_scenario(recipient_public_key):
    result = compute_stealth_address(recipient_public_key, SECRET)
    assert tuple(result) == expected_stealth(RECIPIENT_KEY, SECRET)


def test_other_secret_gives_other_address(recipient_public_key):
    first = compute_stealth_address(recipient_public_key, SECRET)
    second = compute_stealth_address(recipient_public_key, "other")
    assert tuple(second) == expected_stealth(RECIPIENT_KEY, "other")
    assert first.stealth_address != second.stealth_address
    assert (first.published_data_x, first.published_data_y) != (second.published_data_x, second.published_data_y)


def test_deterministic(recipient_public_key):
    assert compute_stealth_address(recipient_public_key, SECRET) == compute_stealth_address(recipient_public_key, SECRET)


def test_str_and_bytes_secrets_agree(recipient_public_key):
    assert compute_stealth_address(recipient_public_key, "test") == compute_stealth_address(recipient_public_key, b"test")


def test_long_secret_hashed_in_full(recipient_public_key):
    prefix = "a" * 32
    long_a = compute_stealth_address(recipient_public_key, prefix + "tail-one")
    long_b = compute_stealth_address(recipient_public_key, prefix + "tail-two")
    assert long_a.stealth_address != long_b.stealth_address
    assert stealth.ephemeral_scalar(prefix + "tail-one") == int.from_bytes(keccak(b"a" * 32 + b"tail-one"), "big") % CURVE_ORDER


def test_secret_type_checked(recipient_public_key):
    with pytest.raises(TypeError):
        compute_stealth_address(recipient_public_key, 1234)


@pytest.mark.parametrize("p, r", [(RECIPIENT_KEY, 0xC0FFEE), (USER_KEY, 2**255 + 19), (1, CURVE_ORDER - 1)])
def test_ecdh_equality_and_recoverability(p, r):
    P = G.multiply(p)
    R = G.multiply(r)
    S = P.multiply(r)
    assert R.multiply(p) == S
    c = stealth.shared_secret_scalar(S)
    assert G.multiply((p + c) % CURVE_ORDER) == G.multiply(c) + P


def test_derivation_intermediates(recipient_public_key):
    derivation = derive_stealth(recipient_public_key, SECRET)
    P = recipient_public_key.to_point()
    assert derivation.published_point == G.multiply(derivation.ephemeral_scalar)
    assert derivation.shared_point == P.multiply(derivation.ephemeral_scalar)
    assert derivation.stealth_point == G.multiply(derivation.shared_secret) + P


def test_recover_stealth_key(recipient_public_key):
    result = compute_stealth_address(recipient_public_key, SECRET)
    recovered = recover_stealth_key(RECIPIENT_KEY, result.published_data_x, result.published_data_y)
    assert recovered.stealth_address == result.stealth_address
    assert Account.from_key(key_bytes(recovered.private_key)).address == result.stealth_address


def test_recover_accepts_hex_and_bytes(recipient_public_key):
    result = compute_stealth_address(recipient_public_key, SECRET)
    by_hex = recover_stealth_key(hex(RECIPIENT_KEY), result.published_data_x, result.published_data_y)
    by_bytes = recover_stealth_key(key_bytes(RECIPIENT_KEY), result.published_data_x, result.published_data_y)
    assert by_hex == by_bytes


def test_wrong_key_does_not_recover(recipient_public_key):
    result = compute_stealth_address(recipient_public_key, SECRET)
    recovered = recover_stealth_key(USER_KEY, result.published_data_x, result.published_data_y)
    assert recovered.stealth_address != result.stealth_address


@pytest.mark.parametrize("private_key", [0, CURVE_ORDER, -1])
def test_recover_rejects_invalid_private_key(private_key):
    with pytest.raises(InvalidKey):
        recover_stealth_key(private_key, G.x, G.y)


def test_recover_rejects_invalid_published_data():
    with pytest.raises(InvalidKey):
        recover_stealth_key(RECIPIENT_KEY, G.x, G.y + 1)


def test_zero_ephemeral_scalar_is_rejected(monkeypatch, recipient_public_key):
    monkeypatch.setattr(stealth, "ephemeral_scalar", lambda secret: 0)
    with pytest.raises(DegenerateScalar) as excinfo:
        compute_stealth_address(recipient_public_key, SECRET)
    assert excinfo.value.stage == "ephemeral scalar"


def test_zero_shared_secret_is_rejected(monkeypatch, recipient_public_key):
    monkeypatch.setattr(stealth, "shared_secret_scalar", lambda point: 0)
    with pytest.raises(DegenerateScalar) as excinfo:
        compute_stealth_address(recipient_public_key, SECRET)
    assert excinfo.value.stage == "shared secret scalar"


def test_identity_stealth_point_is_rejected(monkeypatch, recipient_public_key):
    # c = -p makes Q = c·G + P the identity
    monkeypatch.setattr(stealth, "shared_secret_scalar", lambda point: CURVE_ORDER - RECIPIENT_KEY % CURVE_ORDER)
    with pytest.raises(DegenerateScalar) as excinfo:
        compute_stealth_address(recipient_public_key, SECRET)
    assert excinfo.value.stage == "stealth point"


def test_deriver_uses_registry(recipient, user, recipient_public_key):
    registry = KeyRegistry(LedgerState())
    registry.provide_public_key(recipient.address, recipient_public_key.x, recipient_public_key.y)
    deriver = StealthDeriver(registry)

    assert deriver.derive_stealth_address(recipient.address, SECRET) == compute_stealth_address(recipient_public_key, SECRET)
    with pytest.raises(UnregisteredRecipient):
        deriver.derive_stealth_address(user.address, SECRET)


def test_scan_stealth_mints(recipient_public_key):
    log = EventLog()
    mine = compute_stealth_address(recipient_public_key, SECRET)
    other_key = oracle_public_key(USER_KEY)
    theirs = compute_stealth_address(other_key, SECRET)
    for token_id, result in enumerate([mine, theirs]):
        log.emit(
            "StealthMint",
            stealthAddress=result.stealth_address,
            tokenId=token_id,
            publishedDataX=result.published_data_x,
            publishedDataY=result.published_data_y,
        )
    log.emit("Transfer", **{"from": mine.stealth_address, "to": theirs.stealth_address, "tokenId": 0})

    matches = scan_stealth_mints(RECIPIENT_KEY, log)
    assert [m.token_id for m in matches] == [0]
    assert matches[0].stealth_address == mine.stealth_address
    assert Account.from_key(key_bytes(matches[0].private_key)).address == mine.stealth_address
