# common/metrics.py
import numpy as np

from common.utils import word_to_bits

def _check_lengths(a: str, b: str):
    if len(a) != len(b):
        raise ValueError(f"Length mismatch: {len(a)} vs {len(b)}")

def bit_errors(a: str, b: str) -> int:
    _check_lengths(a, b)
    return int(np.count_nonzero(word_to_bits(a) != word_to_bits(b)))

def bit_error_rate(a: str, b: str) -> float:
    """BER = differing bits / total bits (0.0 for two empty words)."""
    _check_lengths(a, b)
    if len(a) == 0:
        return 0.0
    return bit_errors(a, b) / len(a)

def word_error(a: str, b: str) -> bool:
    _check_lengths(a, b)
    return a != b

def summarize_trials(n_trials: int, n_word_errors: int, n_bit_errors: int, bits_per_word: int) -> dict:
    """
    Aggregate sweep counters into rates.
    """
    n = max(1, int(n_trials))
    return {
        "trials": int(n_trials),
        "word_errors": int(n_word_errors),
        "bit_errors": int(n_bit_errors),
        "wer": float(n_word_errors / n),
        "ber": float(n_bit_errors / max(1, n * int(bits_per_word))),
    }
