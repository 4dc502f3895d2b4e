"""
errors.py

Error codes and exception classes for the coin protocol. Every error here is
fatal to the operation that raises it; callers decide what to do next.
"""

from enum import IntEnum
from typing import Optional


class ErrorCode(IntEnum):
    """Protocol error codes."""

    # 1xxx - Coin format
    INVALID_FORMAT = 1001

    # 2xxx - Signing
    INVALID_SIGNATURE = 2001
    SIGNING_FAILED = 2002

    # 3xxx - Identity reveal
    COMMITMENT_MISMATCH = 3001
    LENGTH_MISMATCH = 3002


class EcashError(Exception):
    """Base exception for all coin protocol errors."""

    code = ErrorCode.INVALID_FORMAT

    def __init__(self, message: str, coin_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.coin_id = coin_id

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"


class InvalidFormat(EcashError):
    """Serialized coin does not match the canonical grammar."""

    code = ErrorCode.INVALID_FORMAT


class InvalidSignature(EcashError):
    """Coin signature fails verification against the embedded bank key."""

    code = ErrorCode.INVALID_SIGNATURE


class SigningError(EcashError):
    """Coin could not be moved to the spendable state."""

    code = ErrorCode.SIGNING_FAILED


class CommitmentMismatch(EcashError):
    """A revealed share does not hash to its published commitment."""

    code = ErrorCode.COMMITMENT_MISMATCH

    def __init__(self, index: int, coin_id: Optional[str] = None):
        super().__init__(f"RIS hash mismatch at index {index}", coin_id)
        self.index = index


class LengthMismatch(EcashError):
    """Two RIS sequences of unequal length were given for reconciliation."""

    code = ErrorCode.LENGTH_MISMATCH

    def __init__(self, left_len: int, right_len: int, coin_id: Optional[str] = None):
        super().__init__(f"RIS arrays length mismatch: {left_len} != {right_len}", coin_id)
        self.lengths = (left_len, right_len)
