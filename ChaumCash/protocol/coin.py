# protocol/coin.py
"""
Coin: the value token.

A coin fixes its identifier, amount, purchaser and the bank's public key at
construction, splits the purchaser identity into k committed share pairs and
blinds its own digest straight away. The purchaser then gets the blinded
digest signed by the bank and unblinds the result.

Lifecycle: CREATED -> BLINDED -> SIGNED -> SPENDABLE

Canonical form (fields fixed, '-' delimited):
    <ISSUER_TAG>-<amount>-<guid>-<left hashes, ','>-<right hashes, ','>
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional
from .. import constants, logger
from ..crypto import blind_rsa
from ..errors import InvalidFormat, SigningError
from ..utils.encoding import hash_string, make_guid
from .commitments import split_identity


class CoinState(Enum):
    CREATED = "created"
    BLINDED = "blinded"
    SIGNED = "signed"
    SPENDABLE = "spendable"


@dataclass
class ParsedCoin:
    issuer: str
    amount: int
    guid: str
    left_hashes: List[str]
    right_hashes: List[str]


def parse_coin(s: str) -> ParsedCoin:
    """
    Parse the canonical coin string. Raises InvalidFormat when the issuer tag,
    field count or amount is wrong.
    """
    issuer_tag = constants.DEFAULTS.get("ISSUER_TAG", "ELECTRONIC_PURCHASE")
    fields = s.split(constants.DEFAULTS.get("FIELD_SEPARATOR", "-"))
    if fields[0] != issuer_tag:
        raise InvalidFormat(f"Invalid identity string: {fields[0]} received, but {issuer_tag} expected")
    if len(fields) != 5:
        raise InvalidFormat(f"Expected 5 coin fields, got {len(fields)}")
    _, amount, guid, left, right = fields
    try:
        amount = int(amount)
    except ValueError:
        raise InvalidFormat(f"Coin amount is not an integer: {amount!r}", guid) from None
    sep = constants.DEFAULTS.get("HASH_SEPARATOR", ",")
    return ParsedCoin(
        issuer=issuer_tag,
        amount=amount,
        guid=guid,
        left_hashes=left.split(sep),
        right_hashes=right.split(sep),
    )


class Coin:
    def __init__(self, purchaser: str, amount: int, n: int, e: int, k: Optional[int] = None):
        """
        purchaser: identity label, only ever released through the share reveal
        amount: positive face value
        n, e: bank public key, copied in so any holder can verify the signature
        k: number of share pairs (defaults to COIN_RIS_LENGTH)
        """
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            raise ValueError("Coin amount must be a positive integer")
        self._purchaser = purchaser
        self._amount = amount
        self._guid = make_guid()
        self.n = int(n)
        self.e = int(e)

        commitment = split_identity(purchaser, k)
        self.identity_left = commitment.identity_left
        self.identity_right = commitment.identity_right
        self.left_hashes = commitment.left_hashes
        self.right_hashes = commitment.right_hashes

        self.hashed = hash_string(self.to_string())
        self.state = CoinState.CREATED
        self.blinded: Optional[int] = None
        self.blinding_factor: Optional[int] = None
        self.blind_signature: Optional[int] = None
        self.signature: Optional[int] = None

        self.blind()
        logger.secure_log("info", "Coin created", coin_id=self.guid, amount=amount, purchaser=purchaser)

    @property
    def guid(self) -> str:
        return self._guid

    @property
    def amount(self) -> int:
        return self._amount

    @property
    def purchaser(self) -> str:
        return self._purchaser

    @property
    def public_params(self) -> blind_rsa.PublicParams:
        return blind_rsa.PublicParams(n=self.n, e=self.e)

    def to_string(self) -> str:
        fsep = constants.DEFAULTS.get("FIELD_SEPARATOR", "-")
        hsep = constants.DEFAULTS.get("HASH_SEPARATOR", ",")
        return fsep.join([
            constants.DEFAULTS.get("ISSUER_TAG", "ELECTRONIC_PURCHASE"),
            str(self.amount),
            self.guid,
            hsep.join(self.left_hashes),
            hsep.join(self.right_hashes),
        ])

    def __str__(self) -> str:
        return self.to_string()

    def blind(self):
        if self.state is not CoinState.CREATED:
            raise SigningError(f"Cannot blind a coin in state {self.state.value}", self.guid)
        self.blinded, self.blinding_factor = blind_rsa.blind(self.hashed, self.public_params)
        self.state = CoinState.BLINDED

    def attach_signature(self, blind_signature: int):
        """Store the bank's signature over the blinded digest."""
        if self.state is not CoinState.BLINDED:
            raise SigningError(f"Cannot attach a signature to a coin in state {self.state.value}", self.guid)
        self.blind_signature = blind_signature
        self.state = CoinState.SIGNED

    def unblind(self):
        """
        Strip the blinding factor from the bank's signature. The result must
        verify against the plain digest, otherwise the coin stays unusable.
        """
        if self.state is not CoinState.SIGNED or self.blind_signature is None:
            raise SigningError("Coin has not been signed by the bank", self.guid)
        try:
            signature = blind_rsa.unblind(self.blind_signature, self.blinding_factor, self.public_params)
        except ValueError as e:
            raise SigningError(f"Malformed blind signature: {e}", self.guid) from e
        if not blind_rsa.verify(signature, self.hashed, self.public_params):
            raise SigningError("Unblinded signature does not verify", self.guid)
        self.signature = signature
        self.blinding_factor = None
        self.state = CoinState.SPENDABLE
        logger.secure_log("info", "Coin unblinded", coin_id=self.guid)

    def verify_signature(self) -> bool:
        if self.signature is None:
            return False
        return blind_rsa.verify(self.signature, self.hashed, self.public_params)

    def is_spendable(self) -> bool:
        return self.state is CoinState.SPENDABLE and self.verify_signature()
