"""
blind_rsa.py

Textbook blind RSA over pycryptodome keys.

Functions:
- generate_keypair(bits) -> (PublicParams, PrivateParams)
- blind(digest_hex, public) -> (blinded, r)
- sign(blinded, private) -> blind_signature
- unblind(blind_signature, r, public) -> signature
- verify(signature, digest_hex, public) -> bool

Design notes:
- The signed message is the hex digest of the coin, read as a big integer.
  The digest (256 bits) is always smaller than the modulus.
- No padding is applied: padding would break the multiplicative blinding.
  Only digests are ever signed, never attacker-chosen plaintext.
"""

from dataclasses import dataclass
from typing import Tuple
from Crypto.PublicKey import RSA
from Crypto.Random import random
from Crypto.Util.number import GCD, inverse
from .. import constants


@dataclass(frozen=True)
class PublicParams:
    n: int
    e: int


@dataclass(frozen=True)
class PrivateParams:
    n: int
    e: int
    d: int

    def public(self) -> PublicParams:
        return PublicParams(n=self.n, e=self.e)


def generate_keypair(bits: int = None) -> Tuple[PublicParams, PrivateParams]:
    if bits is None:
        bits = constants.DEFAULTS.get("RSA_KEY_BITS", 2048)
    e = constants.DEFAULTS.get("RSA_PUBLIC_EXPONENT", 65537)
    key = RSA.generate(bits, e=e)
    private = PrivateParams(n=int(key.n), e=int(key.e), d=int(key.d))
    return private.public(), private


def digest_to_int(digest_hex: str, n: int) -> int:
    m = int(digest_hex, 16)
    if m >= n:
        raise ValueError("Digest does not fit under the modulus")
    return m


def _check_range(value: int, n: int, what: str):
    if not isinstance(value, int) or not (0 <= value < n):
        raise ValueError(f"{what} must be an integer in [0, n)")


def blind(digest_hex: str, public: PublicParams) -> Tuple[int, int]:
    """
    Hide the digest behind a random factor r: blinded = m * r^e mod n.
    Returns (blinded, r); r must stay with the purchaser.
    """
    m = digest_to_int(digest_hex, public.n)
    while True:
        r = random.randint(2, public.n - 1)
        if GCD(r, public.n) == 1:
            break
    blinded = (m * pow(r, public.e, public.n)) % public.n
    return blinded, r


def sign(blinded: int, private: PrivateParams) -> int:
    _check_range(blinded, private.n, "Blinded digest")
    return pow(blinded, private.d, private.n)


def unblind(blind_signature: int, r: int, public: PublicParams) -> int:
    _check_range(blind_signature, public.n, "Blind signature")
    return (blind_signature * inverse(r, public.n)) % public.n


def verify(signature: int, digest_hex: str, public: PublicParams) -> bool:
    if not isinstance(signature, int) or not (0 <= signature < public.n):
        return False
    try:
        m = digest_to_int(digest_hex, public.n)
    except (TypeError, ValueError):
        return False
    return pow(signature, public.e, public.n) == m
