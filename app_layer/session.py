# app_layer/session.py
"""
Session state a front end drives: pick a code (or generate a Hamming code
for a chosen k), encode an information word into the bit display, toggle
display bits to simulate noise, and read back the analysis plus which cells
to highlight. Holds no widgets; any UI can sit on top.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional

from common.config import MAX_K_VALUE
from common.errors import InvalidInput, InvalidConfiguration
from common.utils import is_binary_word, toggle_bit
from data_link_layer.error_correction import (
    ErrorCorrectionCode, CodeCheckResult, DynamicHammingCode, make_code
)

@dataclass(frozen=True)
class Analysis:
    received: str
    result: CodeCheckResult
    error_positions: List[int]

def parse_k(text) -> int:
    """Parse and range-check the generator's k field."""
    try:
        k = int(str(text).strip())
    except ValueError as e:
        raise InvalidConfiguration("Будь ласка, введіть коректне число 'k'.") from e
    if k <= 0:
        raise InvalidConfiguration("Кількість інформаційних біт 'k' має бути > 0.")
    if k > MAX_K_VALUE:
        raise InvalidConfiguration(f"Значення 'k' занадто велике (макс. {MAX_K_VALUE}).")
    return k

class CodeSession:
    def __init__(self, code: Optional[ErrorCorrectionCode] = None, verbose: bool = False):
        self.verbose = verbose
        self.code: Optional[ErrorCorrectionCode] = None
        self.word = ""
        if code is not None:
            self._set_code(code)

    # ---------- selection ----------
    def select(self, scheme: str, k: int | None = None) -> ErrorCorrectionCode:
        return self._set_code(make_code(scheme, k=k, verbose=self.verbose))

    def generate(self, k_text) -> ErrorCorrectionCode:
        return self._set_code(DynamicHammingCode(parse_k(k_text), verbose=self.verbose))

    def _set_code(self, code: ErrorCorrectionCode) -> ErrorCorrectionCode:
        self.code = code
        self.clear()
        if self.verbose:
            print(f"[session] selected {code.name()} (n={code.code_length()}, k={code.data_length()})")
        return code

    def _require_code(self) -> ErrorCorrectionCode:
        if self.code is None:
            raise InvalidConfiguration("No code selected")
        return self.code

    # ---------- display ----------
    def prompt(self) -> str:
        return f"{self._require_code().data_length()} біт(а)"

    def clear(self):
        self.word = "0" * self.code.code_length() if self.code is not None else ""

    def is_valid_data_word(self, word) -> bool:
        return is_binary_word(word, self._require_code().data_length())

    # ---------- actions ----------
    def encode(self, data_word) -> Analysis:
        code = self._require_code()
        if not self.is_valid_data_word(data_word):
            raise InvalidInput(
                f"Інформаційне слово для '{code.name()}' повинно складатися рівно з "
                f"{code.data_length()} бітів."
            )
        self.word = code.encode(data_word)
        if self.verbose:
            print(f"[session] encoded {data_word} -> {self.word}")
        return self.analyse()

    def toggle(self, index: int) -> Analysis:
        self._require_code()
        if not 0 <= index < len(self.word):
            raise InvalidInput(f"Bit index {index} is outside a {len(self.word)}-bit word")
        self.word = toggle_bit(self.word, index)
        if self.verbose:
            print(f"[session] toggled bit {index} -> {self.word}")
        return self.analyse()

    def analyse(self) -> Analysis:
        code = self._require_code()
        result = code.check_and_correct(self.word)
        errs = result.error_positions(self.word)
        if self.verbose:
            print(f"[session] {result.status} | corrected={result.corrected_word} data={result.extracted_data}")
        return Analysis(self.word, result, errs)

    def hover(self, index: int) -> List[int]:
        """Cells to highlight while pointing at bit 'index'."""
        return self._require_code().related_positions(index)
