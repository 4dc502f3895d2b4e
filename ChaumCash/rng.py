"""
rng.py

Central RNG utilities for merchant challenge draws.

Every merchant needs its own generator: two acceptance runs for the same coin
must never share a randomness source. Generators are spawned from a root
numpy SeedSequence so a test can seed the whole tree while a default run
draws fresh OS entropy.

Usage:
    from ChaumCash import rng
    rng.set_seed(42)
    gen = rng.spawn_generator()
"""

from typing import Optional
import numpy as np
from . import constants

_root_seq: Optional[np.random.SeedSequence] = None
_current_seed: Optional[int] = None


def set_seed(seed: Optional[int]):
    """
    Reset the root seed sequence. seed=None pulls entropy from the OS.
    """
    global _root_seq, _current_seed
    _root_seq = np.random.SeedSequence(seed)
    _current_seed = int(_root_seq.entropy)


def _ensure_root() -> np.random.SeedSequence:
    if _root_seq is None:
        set_seed(constants.DEFAULTS.get("DEFAULT_SEED"))
    return _root_seq


def spawn_generator() -> np.random.Generator:
    """
    Return a fresh generator statistically independent from every other
    generator spawned from the same root.
    """
    child = _ensure_root().spawn(1)[0]
    return np.random.default_rng(child)


def current_seed() -> Optional[int]:
    return _current_seed
