# protocol/bank.py
"""
KeyAuthority: the bank's signing role.

The authority owns one keypair for its whole lifetime and signs blinded
digests without learning which coin they belong to. It is constructed and
passed around explicitly; there is no process-wide bank key.
"""

from typing import Optional
from .. import logger
from ..crypto import blind_rsa
from . import protocol_messages as msg
from .coin import Coin


class KeyAuthority:
    def __init__(self, bits: Optional[int] = None):
        self._public, self._private = blind_rsa.generate_keypair(bits)
        logger.secure_log("info", "Bank keypair generated", modulus_bits=self._public.n.bit_length())

    @property
    def public_params(self) -> blind_rsa.PublicParams:
        return self._public

    @property
    def n(self) -> int:
        return self._public.n

    @property
    def e(self) -> int:
        return self._public.e

    def sign(self, blinded: int) -> int:
        """
        Sign a blinded digest. The origin of the digest is not checked: the
        bank signs blind by construction.
        """
        blind_signature = blind_rsa.sign(blinded, self._private)
        logger.secure_log("debug", "Bank signed blinded digest")
        return blind_signature

    def handle_withdrawal(self, request: msg.WithdrawalRequest) -> msg.WithdrawalResponse:
        return msg.WithdrawalResponse(blind_signature=self.sign(request.blinded))

    def verify(self, signature: int, digest_hex: str) -> bool:
        return blind_rsa.verify(signature, digest_hex, self._public)


def withdraw_coin(authority: KeyAuthority, purchaser: str, amount: int, k: Optional[int] = None) -> Coin:
    """
    Run the purchaser side of issuance: create and blind a coin, have the
    bank sign the blinded digest, then unblind. Returns a spendable coin.
    """
    coin = Coin(purchaser, amount, authority.n, authority.e, k=k)
    response = authority.handle_withdrawal(msg.WithdrawalRequest(blinded=coin.blinded))
    coin.attach_signature(response.blind_signature)
    coin.unblind()
    return coin
