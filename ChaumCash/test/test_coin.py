import pytest
from ChaumCash import constants
from ChaumCash.errors import InvalidFormat, SigningError
from ChaumCash.protocol.coin import Coin, CoinState, parse_coin
from ChaumCash.utils.encoding import hash_string


def test_fresh_coin_is_blinded(authority):
    coin = Coin("alice", 20, authority.n, authority.e)
    assert coin.state is CoinState.BLINDED
    assert coin.blinded is not None
    assert coin.signature is None
    assert not coin.is_spendable()


def test_serialized_form_round_trips_hashes(authority):
    coin = Coin("alice", 20, authority.n, authority.e, k=6)
    s = str(coin)
    assert s.startswith(constants.DEFAULTS["ISSUER_TAG"] + "-20-" + coin.guid + "-")
    parsed = parse_coin(s)
    assert parsed.amount == 20
    assert parsed.guid == coin.guid
    assert parsed.left_hashes == coin.left_hashes
    assert parsed.right_hashes == coin.right_hashes
    assert coin.hashed == hash_string(s)


def test_purchaser_not_in_serialized_form(authority):
    coin = Coin("mallory", 5, authority.n, authority.e)
    assert "mallory" not in coin.to_string()


def test_parse_rejects_wrong_issuer():
    with pytest.raises(InvalidFormat):
        parse_coin("FAKE_BANK-20-abc-h1,h2-h3,h4")


@pytest.mark.parametrize("s", [
    "ELECTRONIC_PURCHASE-20-abc-h1",
    "ELECTRONIC_PURCHASE-twenty-abc-h1-h2",
])
def test_parse_rejects_bad_grammar(s):
    with pytest.raises(InvalidFormat):
        parse_coin(s)


@pytest.mark.parametrize("amount", [0, -5, 2.5, True])
def test_bad_amount_rejected(authority, amount):
    with pytest.raises(ValueError):
        Coin("alice", amount, authority.n, authority.e)


def test_signing_sequence_makes_coin_spendable(authority):
    coin = Coin("alice", 20, authority.n, authority.e)
    coin.attach_signature(authority.sign(coin.blinded))
    assert coin.state is CoinState.SIGNED
    coin.unblind()
    assert coin.state is CoinState.SPENDABLE
    assert coin.is_spendable()
    assert authority.verify(coin.signature, coin.hashed)
    assert coin.blinding_factor is None


def test_unblind_without_signature_fails(authority):
    coin = Coin("alice", 20, authority.n, authority.e)
    with pytest.raises(SigningError):
        coin.unblind()


def test_unblind_garbage_signature_fails(authority):
    coin = Coin("alice", 20, authority.n, authority.e)
    coin.attach_signature(12345)
    with pytest.raises(SigningError):
        coin.unblind()
    assert coin.signature is None


def test_tampered_digest_or_signature_fails_verification(coin):
    assert coin.verify_signature()
    good = coin.signature
    coin.signature = good + 1
    assert not coin.verify_signature()
    coin.signature = good
    coin.hashed = hash_string("something else")
    assert not coin.verify_signature()


def test_coin_embeds_bank_public_key(coin, authority):
    assert coin.public_params == authority.public_params
