# tests/test_error_correction.py
"""
Code variants: encode / check_and_correct / bit_relationships.

Coverage:
    - clean round trip and single-bit correction for every variant
    - parity groups agree with encode
    - minimal r for the parametric construction
    - majority vote per repetition block
    - construction and input failures
"""
import itertools

import numpy as np
import pytest

from common.errors import InvalidInput, InvalidConfiguration
from channel.channel_model import single_error_patterns
from data_link_layer.error_correction import (
    STATUS_OK,
    CodeCheckResult,
    DynamicHammingCode,
    Hamming74Code,
    RepetitionCode,
    available_schemes,
    hamming_parity_count,
    make_code,
)

ALL_4BIT = ["".join(bits) for bits in itertools.product("01", repeat=4)]
SAMPLE_K = [1, 2, 3, 4, 5, 8, 11, 12, 16, 26, 27, 32]


def _codes():
    return [Hamming74Code(), RepetitionCode()] + [DynamicHammingCode(k) for k in SAMPLE_K]


def _words(code, count=6, seed=0):
    k = code.data_length()
    if k <= 4:
        return ["".join(b) for b in itertools.product("01", repeat=k)]
    rng = np.random.default_rng(seed + k)
    words = ["0" * k, "1" * k]
    words += ["".join(str(int(x)) for x in rng.integers(0, 2, size=k)) for _ in range(count)]
    return words


@pytest.fixture(params=_codes(), ids=repr)
def code(request):
    return request.param


class TestContract:
    """Properties every variant shares."""

    def test_lengths(self, code):
        assert code.code_length() >= code.data_length() > 0
        assert len(code.encode("0" * code.data_length())) == code.code_length()

    def test_round_trip_without_noise(self, code):
        for w in _words(code):
            res = code.check_and_correct(code.encode(w))
            assert res.extracted_data == w
            assert res.status == STATUS_OK
            assert not res.has_errors

    def test_single_bit_correction(self, code):
        for w in _words(code):
            sent = code.encode(w)
            for i, received in single_error_patterns(sent):
                res = code.check_and_correct(received)
                assert res.corrected_word == sent, f"flip at {i}"
                assert res.extracted_data == w
                assert res.has_errors
                assert res.error_positions(received) == [i]

    def test_relationships_partition_positions(self, code):
        rel = code.bit_relationships()
        parity = set(code.parity_positions())
        data = set(code.data_positions())
        assert parity == set(rel)
        assert parity.isdisjoint(data)
        assert parity | data == set(range(code.code_length()))
        for group in rel.values():
            assert list(group) == sorted(group)
            assert all(0 <= j < code.code_length() for j in group)

    def test_relationships_are_fresh_copies(self, code):
        rel = code.bit_relationships()
        rel.clear()
        assert code.bit_relationships()

    @pytest.mark.parametrize("bad", ["", "0a10", "01x1", " 1", None, 1011])
    def test_encode_rejects_bad_words(self, code, bad):
        with pytest.raises(InvalidInput):
            code.encode(bad)

    def test_encode_rejects_word_one_bit_too_long(self, code):
        with pytest.raises(InvalidInput):
            code.encode("0" * (code.data_length() + 1))

    def test_check_never_raises_on_wrong_length(self, code):
        for word in ["", "1", "1" * (code.code_length() + 5)]:
            res = code.check_and_correct(word)
            assert isinstance(res, CodeCheckResult)
            assert len(res.corrected_word) == code.code_length()
            assert len(res.extracted_data) == code.data_length()

    def test_result_is_immutable(self, code):
        res = code.check_and_correct(code.encode("1" * code.data_length()))
        with pytest.raises(Exception):
            res.status = "changed"


class TestHammingParity:
    """Parity groups must describe what encode actually computes."""

    @pytest.mark.parametrize("hcode", [Hamming74Code()] + [DynamicHammingCode(k) for k in SAMPLE_K], ids=repr)
    def test_every_group_has_even_parity(self, hcode):
        for w in _words(hcode):
            c = hcode.encode(w)
            for p, group in hcode.bit_relationships().items():
                assert p in group
                assert sum(int(c[j]) for j in group) % 2 == 0

    @pytest.mark.parametrize("k", SAMPLE_K)
    def test_parity_keys_are_powers_of_two_minus_one(self, k):
        code = DynamicHammingCode(k)
        assert code.parity_positions() == [(1 << i) - 1 for i in range(code.parity_count())]


class TestHamming74:

    def test_name_and_lengths(self):
        code = Hamming74Code()
        assert code.name() == "Код Гемінга"
        assert (code.data_length(), code.code_length()) == (4, 7)

    def test_known_codeword(self):
        assert Hamming74Code().encode("1011") == "0110011"

    def test_flip_index_2_reports_position_3(self):
        res = Hamming74Code().check_and_correct("0100011")
        assert res.status == "Помилка на позиції 3"
        assert res.corrected_word == "0110011"
        assert res.extracted_data == "1011"

    def test_relationships(self):
        assert Hamming74Code().bit_relationships() == {
            0: (0, 2, 4, 6),
            1: (1, 2, 5, 6),
            3: (3, 4, 5, 6),
        }

    def test_double_error_is_miscorrected(self):
        sent = Hamming74Code().encode("1011")
        received = sent[:5] + ("1" if sent[5] == "0" else "0") + ("1" if sent[6] == "0" else "0")
        res = Hamming74Code().check_and_correct(received)
        assert res.has_errors
        assert res.extracted_data != "1011"

    def test_three_char_word_rejected(self):
        with pytest.raises(InvalidInput):
            Hamming74Code().encode("101")

    def test_short_word_warns_when_verbose(self, capsys):
        Hamming74Code(verbose=True).check_and_correct("0110")
        assert "[WARN]" in capsys.readouterr().out


class TestDynamicHamming:

    @pytest.mark.parametrize("k", range(1, 33))
    def test_r_is_minimal(self, k):
        code = DynamicHammingCode(k)
        r = code.parity_count()
        assert 2 ** r >= k + r + 1
        assert r == 0 or 2 ** (r - 1) < k + (r - 1) + 1
        assert code.code_length() == k + r

    @pytest.mark.parametrize("k,r", [(1, 2), (4, 3), (5, 4), (11, 4), (12, 5), (26, 5), (27, 6), (32, 6)])
    def test_known_parity_counts(self, k, r):
        assert hamming_parity_count(k) == r
        assert DynamicHammingCode(k).code_length() == k + r

    def test_name(self):
        assert DynamicHammingCode(11).name() == "Гемінг (15, 11)"

    @pytest.mark.parametrize("w", ALL_4BIT)
    def test_k4_matches_fixed_code(self, w):
        fixed, dyn = Hamming74Code(), DynamicHammingCode(4)
        assert dyn.encode(w) == fixed.encode(w)
        for _, received in single_error_patterns(fixed.encode(w)):
            assert dyn.check_and_correct(received) == fixed.check_and_correct(received)
        assert dyn.bit_relationships() == fixed.bit_relationships()

    def test_syndrome_outside_word_leaves_bits(self):
        code = DynamicHammingCode(5)  # n = 9
        received = "000100010"        # 1-based positions 4 and 8 -> syndrome 12
        res = code.check_and_correct(received)
        assert res.status == "Помилка на позиції 12"
        assert res.corrected_word == received

    def test_parity_check_matrix_is_a_copy(self):
        code = DynamicHammingCode(4)
        H = code.parity_check_matrix()
        assert H.shape == (3, 7)
        H[:] = 0
        assert code.parity_check_matrix().any()
        assert code.encode("1011") == "0110011"

    @pytest.mark.parametrize("k", [0, -1, 33, 100])
    def test_out_of_range_k(self, k):
        with pytest.raises(InvalidConfiguration):
            DynamicHammingCode(k)

    def test_k_33_message(self):
        with pytest.raises(InvalidConfiguration, match="макс. 32"):
            DynamicHammingCode(33)

    @pytest.mark.parametrize("k", ["4", 4.0, True, None])
    def test_non_integer_k(self, k):
        with pytest.raises(InvalidConfiguration):
            DynamicHammingCode(k)


class TestRepetition:

    def test_name_and_lengths(self):
        code = RepetitionCode()
        assert code.name() == "Код з потрійним повторенням"
        assert (code.data_length(), code.code_length()) == (4, 12)

    def test_known_codeword(self):
        assert RepetitionCode().encode("1010") == "111000111000"

    def test_one_error_in_first_block(self):
        res = RepetitionCode().check_and_correct("011000111000")
        assert res.status == "Виявлено та виправлено 1 помилку"
        assert res.corrected_word == "111000111000"
        assert res.extracted_data == "1010"

    def test_errors_in_two_blocks(self):
        res = RepetitionCode().check_and_correct("011001111000")
        assert res.status == "Виявлено та виправлено 2 помилок"
        assert res.extracted_data == "1010"

    def test_two_errors_in_one_block_are_miscorrected(self):
        res = RepetitionCode().check_and_correct("001000111000")
        assert res.extracted_data == "0010"
        assert res.status == "Виявлено та виправлено 1 помилку"

    @pytest.mark.parametrize("block", ["".join(b) for b in itertools.product("01", repeat=3)])
    def test_majority_law(self, block):
        res = RepetitionCode().check_and_correct(block + "000" * 3)
        majority = "1" if block.count("1") >= 2 else "0"
        disagree = sum(1 for b in block if b != majority)
        assert res.extracted_data == majority + "000"
        assert res.corrected_word[:3] == majority * 3
        if disagree == 0:
            assert res.status == STATUS_OK
        else:
            assert res.status == "Виявлено та виправлено 1 помилку"

    def test_blocks_of_encoded_word_are_uniform(self):
        code = RepetitionCode()
        for w in ALL_4BIT:
            c = code.encode(w)
            for group in code.bit_relationships().values():
                assert len({c[j] for j in group}) == 1

    def test_relationships(self):
        assert RepetitionCode().bit_relationships() == {
            0: (0, 1, 2), 3: (3, 4, 5), 6: (6, 7, 8), 9: (9, 10, 11),
        }


class TestFactory:

    def test_schemes(self):
        assert available_schemes() == ("hamming74", "hamming", "repeat")

    def test_make_each(self):
        assert isinstance(make_code("hamming74"), Hamming74Code)
        assert isinstance(make_code("REPEAT"), RepetitionCode)
        code = make_code("hamming", k=11)
        assert isinstance(code, DynamicHammingCode)
        assert code.code_length() == 15

    def test_parametric_needs_k(self):
        with pytest.raises(InvalidConfiguration, match="needs k"):
            make_code("hamming")

    def test_unknown_scheme(self):
        with pytest.raises(InvalidConfiguration, match="Unknown code scheme"):
            make_code("golay")

    def test_related_positions(self):
        code = make_code("hamming74")
        assert code.related_positions(0) == [0, 2, 4, 6]
        assert code.related_positions(2) == [0, 1, 2, 4, 5, 6]
        assert code.related_positions(6) == list(range(7))
        assert make_code("repeat").related_positions(4) == [3, 4, 5]

    def test_code_rate(self):
        assert make_code("hamming74").code_rate == pytest.approx(4 / 7)
        assert make_code("repeat").code_rate == pytest.approx(1 / 3)
