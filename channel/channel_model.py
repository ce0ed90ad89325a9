# channel/channel_model.py
from __future__ import annotations
from typing import Iterable, Iterator, Tuple
import numpy as np

from common.errors import InvalidInput, InvalidConfiguration
from common.utils import word_to_bits, bits_to_word, toggle_bit

__all__ = ["flip_bits", "bsc_channel", "single_error_patterns"]

def flip_bits(word: str, positions: Iterable[int]) -> str:
    """Return a new word with every listed 0-based position toggled (a position listed twice cancels)."""
    out = word
    for p in positions:
        p = int(p)
        if not 0 <= p < len(word):
            raise InvalidInput(f"Bit index {p} is outside a {len(word)}-bit word")
        out = toggle_bit(out, p)
    return out

def bsc_channel(word: str, p: float, seed: int | None = None,
                rng: np.random.Generator | None = None) -> Tuple[str, np.ndarray]:
    """
    Binary symmetric channel: each bit flips independently with probability p.
    Returns: (received word, 0-based indices that were flipped).
    """
    p = float(p)
    if not 0.0 <= p <= 1.0:
        raise InvalidConfiguration(f"flip probability must be in [0, 1], got {p}")
    rng = rng if rng is not None else np.random.default_rng(seed)
    c = word_to_bits(word)
    if c.size == 0:
        return word, np.zeros(0, dtype=np.int64)
    mask = rng.random(c.size) < p
    c[mask] ^= 1
    return bits_to_word(c), np.flatnonzero(mask)

def single_error_patterns(word: str) -> Iterator[Tuple[int, str]]:
    """Yield (index, word with that one bit flipped) for every index."""
    for i in range(len(word)):
        yield i, toggle_bit(word, i)
