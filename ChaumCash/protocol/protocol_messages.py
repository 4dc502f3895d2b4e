"""
protocol_messages.py

Message types exchanged between purchaser, bank and merchants
(in-memory objects for simulation).
"""

from dataclasses import dataclass
from typing import List


@dataclass
class WithdrawalRequest:
    blinded: int  # blinded coin digest; the bank never sees the real one


@dataclass
class WithdrawalResponse:
    blind_signature: int


@dataclass
class RevealedShares:
    coin_id: str
    merchant_id: str
    ris: List[str]  # one full side of the coin's identity shares
