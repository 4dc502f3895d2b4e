import pytest
from ChaumCash import constants
from ChaumCash.errors import CommitmentMismatch
from ChaumCash.protocol.commitments import split_identity, verify_reveal, recover_identity
from ChaumCash.utils.encoding import hash_string, xor_hex


def test_every_share_pair_xors_to_marker_and_owner():
    c = split_identity("alice", k=8)
    marker = constants.DEFAULTS["IDENTITY_MARKER"].encode("utf-8")
    assert len(c.identity_left) == len(c.identity_right) == 8
    for left, right in zip(c.identity_left, c.identity_right):
        combined = bytes.fromhex(xor_hex(left, right))
        assert combined.startswith(marker)
        assert combined[len(marker):] == b"alice"


def test_hashes_commit_to_shares():
    c = split_identity("bob")
    assert len(c) == constants.DEFAULTS["COIN_RIS_LENGTH"]
    assert c.left_hashes == [hash_string(s) for s in c.identity_left]
    assert c.right_hashes == [hash_string(s) for s in c.identity_right]


def test_shares_are_fresh_per_split():
    a = split_identity("alice", k=4)
    b = split_identity("alice", k=4)
    assert a.identity_left != b.identity_left


@pytest.mark.parametrize("owner,k", [("", 3), ("alice", 0), ("alice", -2)])
def test_malformed_input_rejected(owner, k):
    with pytest.raises(ValueError):
        split_identity(owner, k=k)


def test_verify_reveal_names_offending_index():
    c = split_identity("alice", k=5)
    hashes = list(c.left_hashes)
    hashes[3] = hash_string("forged")
    verify_reveal(c.identity_left, c.left_hashes)
    with pytest.raises(CommitmentMismatch) as exc:
        verify_reveal(c.identity_left, hashes)
    assert exc.value.index == 3


def test_recover_identity_only_for_complementary_pair():
    c = split_identity("carol", k=2)
    assert recover_identity(c.identity_left[0], c.identity_right[0]) == "carol"
    # shares from different positions do not reconstruct the identity
    assert recover_identity(c.identity_left[0], c.identity_left[1]) is None


def test_redundancy_factor_follows_config():
    saved = dict(constants.DEFAULTS)
    try:
        constants.update_from_dict({"COIN_RIS_LENGTH": 3})
        assert constants.COIN_RIS_LENGTH == 3
        assert len(split_identity("alice")) == 3
    finally:
        constants.update_from_dict(saved)
