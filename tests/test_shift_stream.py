"""Tests for tableaus and the shift-stream key search."""

import pytest

from cipherlab.core.exceptions import InvalidKeyError
from cipherlab.services.engines.polyalphabetic.autokey import AutokeyEngine
from cipherlab.services.engines.polyalphabetic.beaufort import BeaufortEngine
from cipherlab.services.engines.polyalphabetic.bellaso import BellasoEngine
from cipherlab.services.engines.polyalphabetic.porta import PortaEngine
from cipherlab.services.engines.polyalphabetic.tableau import Tableau
from cipherlab.services.engines.polyalphabetic.vigenere import VigenereEngine
from cipherlab.services.optimization.shift_stream import ShiftStreamSolver, autokey_shift, periodic_shift

SEARCH = {"shift_max_key_length": 8}


class TestTableau:
    """Test suite for tableau construction."""

    @pytest.mark.parametrize("factory", [Tableau.vigenere, Tableau.beaufort, Tableau.bellaso, Tableau.porta])
    def test_rows_are_permutations(self, factory):
        tableau = factory(26)
        for row in tableau.encrypt_rows:
            assert sorted(row) == list(range(26))

    @pytest.mark.parametrize("factory", [Tableau.beaufort, Tableau.bellaso, Tableau.porta])
    def test_reciprocal_squares(self, factory):
        tableau = factory(26)
        assert tableau.encrypt_rows == tableau.decrypt_rows

    def test_vigenere_row(self):
        tableau = Tableau.vigenere(26)
        assert tableau.encrypt(3, 0) == 3
        assert tableau.decrypt(3, 3) == 0

    def test_porta_rows_come_in_pairs(self):
        tableau = Tableau.porta(26)
        assert tableau.encrypt_rows[0] == tableau.encrypt_rows[1]
        assert tableau.encrypt_rows[2] != tableau.encrypt_rows[1]
        # A-M and N-Z are exchanged
        assert all(cp >= 13 for cp in tableau.encrypt_rows[4][:13])

    def test_bellaso_second_half_is_reversed(self):
        tableau = Tableau.bellaso(26)
        assert tableau.encrypt_rows[13] == tableau.encrypt_rows[0][::-1]

    @pytest.mark.parametrize("factory", [Tableau.bellaso, Tableau.porta])
    def test_odd_alphabet(self, factory):
        with pytest.raises(ValueError):
            factory(25)


class TestEffectiveShift:
    def test_periodic(self):
        assert [periodic_shift([1, 2, 3], i, 3, []) for i in range(5)] == [1, 2, 3, 1, 2]

    def test_autokey(self):
        plaintext = [7, 8, 9, 10, 11]
        assert [autokey_shift([1, 2], i, 2, plaintext) for i in range(5)] == [1, 2, 7, 8, 9]


class TestShiftStreamSolver:
    """Test suite for coordinate ascent."""

    def test_sweeps_never_lower_the_score(self, english, plaintext):
        engine = VigenereEngine()
        codes = english.to_codes(engine.encrypt(plaintext, "LIGHT", english))
        solver = engine.solver(english, {})

        trial = solver.climb(codes, 5)

        assert trial.sweep_scores == sorted(trial.sweep_scores)
        assert trial.score == trial.sweep_scores[-1]
        assert english.codes_to_string(trial.key) == "LIGHT"

    def test_engine_solver_decrypts_cipher_letter_under_shift(self, english):
        # E under key B
        assert VigenereEngine().solver(english, {}).decrypt_one(4, 1) == 3
        assert BeaufortEngine().solver(english, {}).decrypt_one(4, 1) == 23
        porta = PortaEngine().solver(english, {})
        assert porta.decrypt_one(porta.decrypt_one(4, 6), 6) == 4

    def test_empty_ciphertext(self, english):
        solver = VigenereEngine().solver(english, {})
        assert solver.solve([]) == []

    def test_standalone_solver(self, english, plaintext):
        codes = english.to_codes(plaintext)
        ciphertext = [(cp + 2) % 26 for cp in codes]
        solver = ShiftStreamSolver(english, lambda cp, shift: (cp - shift) % 26, max_key_length=3)

        assert solver.solve(ciphertext) == [2]


class TestKeywordCiphers:
    """Key recovery for every tableau cipher."""

    @pytest.mark.parametrize(
        "engine_class, key",
        [
            (VigenereEngine, "LIGHT"),
            (BeaufortEngine, "HARBOR"),
            (BellasoEngine, "STORM"),
            (AutokeyEngine, "WAVE"),
        ],
    )
    def test_recovers_key(self, english, plaintext, engine_class, key):
        engine = engine_class()
        ciphertext = engine.encrypt(plaintext, key, english)

        result = engine.find_key_and_decrypt(ciphertext, english, SEARCH)

        assert result.key == key
        assert result.plaintext == plaintext
        assert result.solved

    def test_porta_recovers_plaintext(self, english, plaintext):
        engine = PortaEngine()
        ciphertext = engine.encrypt(plaintext, "SHIP", english)

        result = engine.find_key_and_decrypt(ciphertext, english, SEARCH)

        # Key letters pair up, so only the even member of each pair comes back
        assert result.key == "SGIO"
        assert result.plaintext == plaintext

    def test_reciprocal_engines_decrypt_by_encrypting(self, english, short_plaintext):
        for engine in (BeaufortEngine(), BellasoEngine(), PortaEngine()):
            ciphertext = engine.encrypt(short_plaintext, "QUILL", english)
            assert engine.encrypt(ciphertext, "QUILL", english) == short_plaintext

    def test_odd_alphabet_rejected(self, english):
        merged = english.select_variant(25)
        with pytest.raises(InvalidKeyError):
            PortaEngine().encrypt("hello", "KEY", merged)

    def test_autokey_differs_from_vigenere_after_primer(self, english):
        autokey = AutokeyEngine().encrypt("attackatdawn", "QUEEN", english)
        vigenere = VigenereEngine().encrypt("attackatdawn", "QUEEN", english)

        assert autokey[:5] == vigenere[:5]
        assert autokey == "qnxepktmdcgn"
