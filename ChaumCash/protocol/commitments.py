# protocol/commitments.py
"""
Identity commitment codec.

Each coin carries k share pairs. For every index i:

    xor(identity_left[i], identity_right[i]) == MARKER || owner_label
    hash(identity_left[i])  == left_hashes[i]
    hash(identity_right[i]) == right_hashes[i]

Shares are hex strings of random bytes. Only the hashes are published in the
coin's signed form; a merchant later sees exactly one side.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence
from Crypto.Random import get_random_bytes
from .. import constants
from ..errors import CommitmentMismatch
from ..utils.encoding import hash_string, xor_bytes, xor_hex


@dataclass
class IdentityCommitment:
    identity_left: List[str]
    identity_right: List[str]
    left_hashes: List[str]
    right_hashes: List[str]

    def __len__(self) -> int:
        return len(self.identity_left)


def identity_string(owner_label: str, marker: Optional[str] = None) -> bytes:
    if marker is None:
        marker = constants.DEFAULTS.get("IDENTITY_MARKER", "IdentityString")
    return (marker + owner_label).encode("utf-8")


def split_identity(owner_label: str, k: Optional[int] = None) -> IdentityCommitment:
    """
    Split owner_label into k complementary share pairs and commit to every share.
    """
    if not isinstance(owner_label, str) or not owner_label:
        raise ValueError("Owner label must be a non-empty string")
    if k is None:
        k = constants.DEFAULTS.get("COIN_RIS_LENGTH", 20)
    if not isinstance(k, int) or k < 1:
        raise ValueError("Redundancy factor k must be a positive integer")

    ident = identity_string(owner_label)
    left, right = [], []
    for _ in range(k):
        key = get_random_bytes(len(ident))
        left.append(key.hex())
        right.append(xor_bytes(ident, key).hex())

    return IdentityCommitment(
        identity_left=left,
        identity_right=right,
        left_hashes=[hash_string(s) for s in left],
        right_hashes=[hash_string(s) for s in right],
    )


def verify_reveal(shares: Sequence[str], hashes: Sequence[str], coin_id: Optional[str] = None):
    """
    Check every revealed share against its published hash.
    Raises CommitmentMismatch naming the first offending index.
    """
    if len(shares) != len(hashes):
        raise CommitmentMismatch(min(len(shares), len(hashes)), coin_id)
    for i, (share, expected) in enumerate(zip(shares, hashes)):
        if hash_string(share) != expected:
            raise CommitmentMismatch(i, coin_id)


def recover_identity(share_a: str, share_b: str, marker: Optional[str] = None) -> Optional[str]:
    """
    Xor two shares from the same position. Returns the owner label if the
    result carries the identity marker, else None.
    """
    if marker is None:
        marker = constants.DEFAULTS.get("IDENTITY_MARKER", "IdentityString")
    try:
        combined = bytes.fromhex(xor_hex(share_a, share_b))
    except ValueError:
        return None
    prefix = marker.encode("utf-8")
    if not combined.startswith(prefix):
        return None
    return combined[len(prefix):].decode("utf-8", errors="replace")
