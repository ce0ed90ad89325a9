# common/utils.py
"""
General helpers: bit-word <-> array conversions, validation, random words.
"""

from __future__ import annotations
import re
import numpy as np

from common.errors import InvalidInput

_BINARY_RE = re.compile(r"[01]+")

# ----------------- Words/Bits -----------------
def word_to_bits(word: str) -> np.ndarray:
    """Convert a "0"/"1" string to a 1-D np.uint8 array. Any char other than '1' reads as 0."""
    return np.fromiter((1 if ch == "1" else 0 for ch in word), dtype=np.uint8, count=len(word))

def bits_to_word(bits: np.ndarray) -> str:
    """Convert a 1-D bits array (0/1) back to a "0"/"1" string."""
    b = np.asarray(bits, dtype=np.uint8).reshape(-1)
    return "".join("1" if x & 1 else "0" for x in b)

def is_binary_word(word, length: int | None = None) -> bool:
    if not isinstance(word, str) or not _BINARY_RE.fullmatch(word):
        return False
    return length is None or len(word) == length

def validate_data_word(word, length: int) -> str:
    """Return 'word' unchanged, or raise InvalidInput if it is not a binary string of 'length'."""
    if not is_binary_word(word, length):
        raise InvalidInput(f"Information word must consist of exactly {length} bits (0/1), got {word!r}")
    return word

def fit_to_length(word: str, length: int) -> str:
    """Truncate or right-pad with '0' so len(word) == length."""
    if len(word) >= length:
        return word[:length]
    return word + "0" * (length - len(word))

def toggle_bit(word: str, index: int) -> str:
    ch = "1" if word[index] == "0" else "0"
    return word[:index] + ch + word[index + 1:]

def differing_positions(a: str, b: str) -> list[int]:
    """Indices where a and b disagree (compared over the common prefix)."""
    return [i for i, (x, y) in enumerate(zip(a, b)) if x != y]

def random_word(length: int, rng: np.random.Generator | None = None) -> str:
    rng = rng if rng is not None else np.random.default_rng()
    return bits_to_word(rng.integers(0, 2, size=length, dtype=np.uint8))
