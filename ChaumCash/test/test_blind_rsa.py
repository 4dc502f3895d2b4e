import pytest
from ChaumCash.crypto import blind_rsa
from ChaumCash.utils.encoding import hash_string


@pytest.fixture(scope="module")
def keypair():
    return blind_rsa.generate_keypair(1024)


def test_blind_sign_unblind_verifies(keypair):
    public, private = keypair
    digest = hash_string("some coin")
    blinded, r = blind_rsa.blind(digest, public)
    assert blinded != int(digest, 16)
    signature = blind_rsa.unblind(blind_rsa.sign(blinded, private), r, public)
    assert blind_rsa.verify(signature, digest, public)
    assert not blind_rsa.verify(signature, hash_string("other coin"), public)


def test_blinding_is_randomized(keypair):
    public, _ = keypair
    digest = hash_string("same coin")
    assert blind_rsa.blind(digest, public)[0] != blind_rsa.blind(digest, public)[0]


def test_verify_rejects_malformed_signature(keypair):
    public, _ = keypair
    digest = hash_string("x")
    assert not blind_rsa.verify(None, digest, public)
    assert not blind_rsa.verify(public.n + 1, digest, public)
    assert not blind_rsa.verify(1, "not-hex", public)


def test_sign_rejects_out_of_range(keypair):
    _, private = keypair
    with pytest.raises(ValueError):
        blind_rsa.sign(private.n, private)
