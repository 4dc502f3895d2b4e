# protocol/merchant.py
"""
Merchant acceptance protocol.

accept_coin:
    1) verify the bank signature against the coin's embedded key and plain digest
    2) parse the published left/right hashes out of the canonical coin string
    3) draw a random side (left or right)
    4) check every share of that side against its hash
    5) return the side's full share list (the RIS)

The challenge source is injectable so tests can force either side. A Merchant
instance keeps its own generator; two merchants never share one.
"""

from enum import Enum
from typing import Callable, List, Union
import numpy as np
from .. import logger, rng
from ..errors import InvalidSignature
from . import protocol_messages as msg
from .coin import Coin, parse_coin
from .commitments import verify_reveal


class Side(Enum):
    LEFT = "left"
    RIGHT = "right"


ChallengeSource = Union[np.random.Generator, Callable[[], Side], Side, None]


def draw_side(challenge: ChallengeSource = None) -> Side:
    """
    Resolve a challenge source into one side.
    None draws from a freshly spawned generator.
    """
    if isinstance(challenge, Side):
        return challenge
    if challenge is None:
        challenge = rng.spawn_generator()
    if isinstance(challenge, np.random.Generator):
        return Side.LEFT if challenge.random() < 0.5 else Side.RIGHT
    side = challenge()
    if not isinstance(side, Side):
        raise TypeError("Challenge source must yield a Side")
    return side


def accept_coin(coin: Coin, challenge: ChallengeSource = None) -> List[str]:
    """
    Accept a coin and return the revealed identity shares for one random side.
    Raises InvalidSignature, InvalidFormat or CommitmentMismatch; no RIS is
    produced when any check fails.
    """
    if not coin.verify_signature():
        raise InvalidSignature("Invalid coin signature.", coin.guid)

    parsed = parse_coin(coin.to_string())

    side = draw_side(challenge)
    if side is Side.LEFT:
        selected, hashes = coin.identity_left, parsed.left_hashes
    else:
        selected, hashes = coin.identity_right, parsed.right_hashes

    verify_reveal(selected, hashes, coin.guid)
    logger.secure_log("debug", "Coin accepted", coin_id=coin.guid, side=side.value)
    return list(selected)


class Merchant:
    def __init__(self, merchant_id: str, challenge: ChallengeSource = None):
        """
        merchant_id: name used when depositing reveals at the bank
        challenge: optional override; by default the merchant gets its own
            generator spawned from the root seed sequence
        """
        self.merchant_id = str(merchant_id)
        self.challenge = challenge if challenge is not None else rng.spawn_generator()
        self.accepted: List[msg.RevealedShares] = []

    def accept(self, coin: Coin) -> List[str]:
        ris = accept_coin(coin, self.challenge)
        self.accepted.append(msg.RevealedShares(coin_id=coin.guid, merchant_id=self.merchant_id, ris=ris))
        logger.secure_log("info", "Merchant accepted coin", merchant=self.merchant_id, coin_id=coin.guid)
        return ris
