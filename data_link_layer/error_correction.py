# ==========================
# ./data_link_layer/error_correction.py
# ==========================
# Error correction codes over single bit words:
#   Hamming(7,4) / parametric Hamming(n,k) / triple repetition
# Every code takes and returns "0"/"1" strings; arrays are internal only.
# ==========================
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Tuple
import numpy as np

from common.config import MAX_K_VALUE
from common.errors import InvalidConfiguration
from common.utils import (
    word_to_bits, bits_to_word, validate_data_word, fit_to_length,
    differing_positions
)

STATUS_OK = "Помилок немає"

# ---------- Result ----------
@dataclass(frozen=True)
class CodeCheckResult:
    status: str
    corrected_word: str
    extracted_data: str

    @property
    def has_errors(self) -> bool:
        return self.status != STATUS_OK

    def error_positions(self, received: str) -> List[int]:
        """Indices of 'received' that the decoder changed."""
        return differing_positions(received, self.corrected_word)

# ---------- Coverage ----------
def hamming_parity_count(k: int) -> int:
    """Smallest r with 2^r >= k + r + 1."""
    r = 0
    while (1 << r) < (k + r + 1):
        r += 1
    return r

def hamming_coverage(n: int, r: int) -> np.ndarray:
    """
    r x n parity-check matrix H. Row i marks the 0-based positions j-1 of every
    1-based position j in [1, n] with bit i set. Parity bit i sits at 2^i - 1.
    """
    H = np.zeros((r, n), dtype=np.uint8)
    pos = np.arange(1, n + 1)
    for i in range(r):
        H[i] = (pos >> i) & 1
    return H

def _relationships_from_matrix(H: np.ndarray) -> Dict[int, Tuple[int, ...]]:
    return {(1 << i) - 1: tuple(int(j) for j in np.flatnonzero(row)) for i, row in enumerate(H)}

# ---------- Base ----------
class ErrorCorrectionCode:
    """
    Capability set every code exposes. Instances are fixed at construction
    and safe to share between callers.
    """
    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def name(self) -> str:
        raise NotImplementedError
    def data_length(self) -> int:
        raise NotImplementedError
    def code_length(self) -> int:
        raise NotImplementedError
    def encode(self, word: str) -> str:
        raise NotImplementedError
    def check_and_correct(self, word: str) -> CodeCheckResult:
        raise NotImplementedError
    def bit_relationships(self) -> Dict[int, Tuple[int, ...]]:
        raise NotImplementedError

    @property
    def code_rate(self) -> float:
        return self.data_length() / self.code_length()

    def parity_positions(self) -> List[int]:
        return sorted(self.bit_relationships())

    def data_positions(self) -> List[int]:
        keys = set(self.bit_relationships())
        return [i for i in range(self.code_length()) if i not in keys]

    def related_positions(self, index: int) -> List[int]:
        """Group keyed by 'index' plus every group that contains 'index'."""
        rel = self.bit_relationships()
        out = set(rel.get(index, ()))
        for group in rel.values():
            if index in group:
                out.update(group)
        return sorted(out)

    def _normalize(self, word) -> str:
        word = "" if word is None else str(word)
        n = self.code_length()
        if len(word) != n and self.verbose:
            print(f"[WARN] {self.name()}: codeword has {len(word)} bits, expected {n}; fitting to length")
        return fit_to_length(word, n)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(n={self.code_length()}, k={self.data_length()})"

# ---------- Hamming(7,4) ----------
class Hamming74Code(ErrorCorrectionCode):
    """
    Hamming(7,4) with codeword [p1 p2 d1 p3 d2 d3 d4]
    p1 = d1 ^ d2 ^ d4; p2 = d1 ^ d3 ^ d4; p3 = d2 ^ d3 ^ d4
    """
    _H = hamming_coverage(7, 3)

    def name(self) -> str:
        return "Код Гемінга"
    def data_length(self) -> int:
        return 4
    def code_length(self) -> int:
        return 7

    def encode(self, word: str) -> str:
        validate_data_word(word, self.data_length())
        d1, d2, d3, d4 = word_to_bits(word)
        p1 = d1 ^ d2 ^ d4
        p2 = d1 ^ d3 ^ d4
        p3 = d2 ^ d3 ^ d4
        return bits_to_word(np.array([p1, p2, d1, p3, d2, d3, d4], dtype=np.uint8))

    def check_and_correct(self, word: str) -> CodeCheckResult:
        c = word_to_bits(self._normalize(word))
        p1, p2, d1, p3, d2, d3, d4 = c
        s1 = p1 ^ d1 ^ d2 ^ d4
        s2 = p2 ^ d1 ^ d3 ^ d4
        s3 = p3 ^ d2 ^ d3 ^ d4
        err_pos = int(s3) * 4 + int(s2) * 2 + int(s1)
        if err_pos == 0:
            status = STATUS_OK
        else:
            status = f"Помилка на позиції {err_pos}"
            c[err_pos - 1] ^= 1
        corrected = bits_to_word(c)
        return CodeCheckResult(status, corrected, bits_to_word(c[[2, 4, 5, 6]]))

    def bit_relationships(self) -> Dict[int, Tuple[int, ...]]:
        # p1 -> 0,2,4,6 ; p2 -> 1,2,5,6 ; p3 -> 3,4,5,6
        return _relationships_from_matrix(self._H)

# ---------- Hamming(n,k) ----------
class DynamicHammingCode(ErrorCorrectionCode):
    """
    Hamming code for any k in [1, MAX_K_VALUE] information bits.

    r is the minimal count with 2^r >= k + r + 1 and n = k + r. Parity bits
    live at the 0-based positions 2^i - 1 (1, 2, 4, 8, ... 1-based); parity i
    covers every 1-based position whose binary form has bit i set. The
    coverage is kept once as the r x n matrix H and read by encode, decode
    and bit_relationships alike.
    """
    def __init__(self, k: int, verbose: bool = False):
        super().__init__(verbose)
        if isinstance(k, bool) or not isinstance(k, (int, np.integer)):
            raise InvalidConfiguration(f"k must be an integer, got {k!r}")
        k = int(k)
        if k <= 0:
            raise InvalidConfiguration("Кількість біт 'k' має бути > 0")
        if k > MAX_K_VALUE:
            raise InvalidConfiguration(f"Значення 'k' занадто велике (макс. {MAX_K_VALUE}).")
        self.k = k
        self.r = hamming_parity_count(k)
        self.n = k + self.r
        self._H = hamming_coverage(self.n, self.r)
        self._H.setflags(write=False)
        self._parity_idx = np.array([(1 << i) - 1 for i in range(self.r)], dtype=np.int64)
        mask = np.ones(self.n, dtype=bool)
        mask[self._parity_idx] = False
        self._data_idx = np.flatnonzero(mask)
        # H without each parity bit's own column: used when computing parity values
        self._H_enc = self._H.copy()
        self._H_enc[np.arange(self.r), self._parity_idx] = 0

    def name(self) -> str:
        return f"Гемінг ({self.n}, {self.k})"
    def data_length(self) -> int:
        return self.k
    def code_length(self) -> int:
        return self.n
    def parity_count(self) -> int:
        return self.r
    def parity_check_matrix(self) -> np.ndarray:
        return self._H.copy()

    def encode(self, word: str) -> str:
        validate_data_word(word, self.k)
        c = np.zeros(self.n, dtype=np.uint8)
        c[self._data_idx] = word_to_bits(word)
        parity = (self._H_enc.astype(np.int64) @ c) & 1
        c[self._parity_idx] = parity.astype(np.uint8)
        return bits_to_word(c)

    def check_and_correct(self, word: str) -> CodeCheckResult:
        c = word_to_bits(self._normalize(word))
        checks = (self._H.astype(np.int64) @ c) & 1
        syndrome = 0
        for i, s in enumerate(checks):
            if s:
                syndrome |= (1 << i)
        if syndrome == 0:
            status = STATUS_OK
        else:
            status = f"Помилка на позиції {syndrome}"
            # syndromes above n point outside the word: report, leave bits as-is
            if syndrome <= self.n:
                c[syndrome - 1] ^= 1
        return CodeCheckResult(status, bits_to_word(c), bits_to_word(c[self._data_idx]))

    def bit_relationships(self) -> Dict[int, Tuple[int, ...]]:
        return _relationships_from_matrix(self._H)

# ---------- Repetition ----------
class RepetitionCode(ErrorCorrectionCode):
    """Each of the 4 data bits sent three times; majority vote per 3-bit block."""
    repeat = 3

    def name(self) -> str:
        return "Код з потрійним повторенням"
    def data_length(self) -> int:
        return 4
    def code_length(self) -> int:
        return 12

    def encode(self, word: str) -> str:
        validate_data_word(word, self.data_length())
        bits = word_to_bits(word).reshape(-1, 1)
        return bits_to_word(np.repeat(bits, self.repeat, axis=1).reshape(-1))

    def check_and_correct(self, word: str) -> CodeCheckResult:
        grp = word_to_bits(self._normalize(word)).reshape(-1, self.repeat)
        ones = np.sum(grp, axis=1)
        data = (ones >= (self.repeat // 2 + 1)).astype(np.uint8)
        errors = int(np.sum(grp != data[:, None]))
        if errors == 0:
            status = STATUS_OK
        elif errors == 1:
            status = "Виявлено та виправлено 1 помилку"
        else:
            status = f"Виявлено та виправлено {errors} помилок"
        corrected = np.repeat(data.reshape(-1, 1), self.repeat, axis=1).reshape(-1)
        return CodeCheckResult(status, bits_to_word(corrected), bits_to_word(data))

    def bit_relationships(self) -> Dict[int, Tuple[int, ...]]:
        # groups are just the triples, keyed by their first index
        n, m = self.code_length(), self.repeat
        return {i: tuple(range(i, i + m)) for i in range(0, n, m)}

# ---------- Factory ----------
SCHEMES = ("hamming74", "hamming", "repeat")

def available_schemes() -> Tuple[str, ...]:
    return SCHEMES

def make_code(scheme: str, k: int | None = None, verbose: bool = False) -> ErrorCorrectionCode:
    s = str(scheme).lower()
    if s == "hamming74":     return Hamming74Code(verbose)
    if s == "repeat":        return RepetitionCode(verbose)
    if s in ("hamming", "hamming_dynamic"):
        if k is None:
            raise InvalidConfiguration("Parametric Hamming code needs k")
        return DynamicHammingCode(k, verbose)
    raise InvalidConfiguration(f"Unknown code scheme: {scheme}")
