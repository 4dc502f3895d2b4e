# protocol/audit.py
"""
Bank-side audit of a coin that was presented twice.

determine_cheater(guid, ris1, ris2) walks both reveals in order. At the first
position where they differ the two shares are xor'ed:
 - result carries the identity marker -> the purchaser double-spent; the
   suffix is their identity
 - anything else -> one merchant fabricated or corrupted its reveal
Identical reveals mean a merchant replayed a recorded RIS instead of running
its own challenge, so the merchant is blamed.

Verdicts are return values, not exceptions. Only unequal lengths raise.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Union
from .. import logger
from ..errors import LengthMismatch
from . import protocol_messages as msg
from .commitments import recover_identity

INVALID_REVEAL = "invalid-reveal"
IDENTICAL_REVEAL = "identical-reveal"


@dataclass(frozen=True)
class PurchaserCheater:
    coin_id: str
    identity: str


@dataclass(frozen=True)
class MerchantCheater:
    coin_id: str
    reason: str


Verdict = Union[PurchaserCheater, MerchantCheater]


def determine_cheater(guid: str, ris1: Sequence[str], ris2: Sequence[str]) -> Verdict:
    if len(ris1) != len(ris2):
        raise LengthMismatch(len(ris1), len(ris2), guid)

    for i, (a, b) in enumerate(zip(ris1, ris2)):
        if a == b:
            continue
        identity = recover_identity(a, b)
        if identity is not None:
            logger.secure_log("warning", f"Double spending detected for coin {guid}", coin_id=guid, cheater=identity, index=i)
            return PurchaserCheater(coin_id=guid, identity=identity)
        logger.secure_log("warning", f"Merchant appears to be cheating for coin {guid}", coin_id=guid, index=i)
        return MerchantCheater(coin_id=guid, reason=INVALID_REVEAL)

    logger.secure_log("warning", f"RIS values are identical for coin {guid}; merchant is the cheater", coin_id=guid)
    return MerchantCheater(coin_id=guid, reason=IDENTICAL_REVEAL)


class DepositLedger:
    """
    In-memory record of merchant deposits. The first deposit of a coin is
    stored; any later deposit of the same coin triggers an audit against
    the first one.
    """

    def __init__(self):
        self.deposits: Dict[str, msg.RevealedShares] = {}
        self.verdicts: List[Verdict] = []

    def deposit(self, coin_id: str, ris: Sequence[str], merchant_id: str) -> Optional[Verdict]:
        return self.deposit_reveal(msg.RevealedShares(coin_id=coin_id, merchant_id=merchant_id, ris=list(ris)))

    def deposit_reveal(self, reveal: msg.RevealedShares) -> Optional[Verdict]:
        first = self.deposits.get(reveal.coin_id)
        if first is None:
            self.deposits[reveal.coin_id] = reveal
            logger.secure_log("info", "Coin deposited", coin_id=reveal.coin_id, merchant=reveal.merchant_id)
            return None
        logger.secure_log(
            "warning",
            "Coin deposited twice",
            coin_id=reveal.coin_id,
            first_merchant=first.merchant_id,
            second_merchant=reveal.merchant_id,
        )
        verdict = determine_cheater(reveal.coin_id, first.ris, reveal.ris)
        self.verdicts.append(verdict)
        return verdict
