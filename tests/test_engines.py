"""Tests for the engine registry and the monoalphabetic engines."""

import random

import pytest

from cipherlab.core.config import get_settings
from cipherlab.core.exceptions import EngineNotFoundError, InvalidKeyError, InvalidOptionError
from cipherlab.models.schemas import CipherFamily, CipherType
from cipherlab.services.engines.monoalphabetic.affine import AffineEngine
from cipherlab.services.engines.monoalphabetic.caesar import CaesarEngine
from cipherlab.services.engines.monoalphabetic.simple_substitution import SimpleSubstitutionEngine
from cipherlab.services.engines.registry import EngineRegistry


class TestCipherRegistry:
    """Test suite for cipher registry."""

    def test_all_ciphers_registered(self):
        assert set(EngineRegistry.list_registered()) == set(CipherType)

    def test_get_engines_by_family(self):
        registry = EngineRegistry()

        mono = registry.get_engines_by_family(CipherFamily.MONOALPHABETIC)
        poly = registry.get_engines_by_family(CipherFamily.POLYALPHABETIC)
        trans = registry.get_engines_by_family(CipherFamily.TRANSPOSITION)

        assert {e.cipher_type for e in mono} == {
            CipherType.CAESAR,
            CipherType.AFFINE,
            CipherType.SIMPLE_SUBSTITUTION,
        }
        assert len(poly) == 5
        assert len(trans) == 3

    def test_engine_instances_are_shared(self):
        registry = EngineRegistry()
        assert registry.get_engine(CipherType.CAESAR) is registry.get_engine(CipherType.CAESAR)

    def test_require_unknown_engine(self, monkeypatch):
        monkeypatch.setattr(EngineRegistry, "_engines", {})
        registry = EngineRegistry()

        assert registry.get_engine(CipherType.CAESAR) is None
        with pytest.raises(EngineNotFoundError):
            registry.require_engine(CipherType.CAESAR)


class TestSearchOptions:
    """Per-request options take the type of the matching setting."""

    def test_missing_option_uses_setting(self):
        assert CaesarEngine._option({}, "shift_max_key_length") == get_settings().shift_max_key_length

    def test_numeric_strings_are_coerced(self):
        options = {"shift_max_key_length": "6", "shift_tolerance": "0.5"}

        assert CaesarEngine._option(options, "shift_max_key_length") == 6
        assert CaesarEngine._option(options, "shift_tolerance") == 0.5

    @pytest.mark.parametrize("value", ["x", None, [3], 2.5])
    def test_wrong_type_is_rejected(self, value):
        with pytest.raises(InvalidOptionError):
            CaesarEngine._option({"railfence_max_rails": value}, "railfence_max_rails")

    def test_substitution_seed_must_be_scalar(self, english, short_plaintext):
        engine = SimpleSubstitutionEngine()

        with pytest.raises(InvalidOptionError):
            engine.find_key_and_decrypt(short_plaintext, english, {"seed": [1, 2]})


class TestRoundTrips:
    """Every engine decrypts what it encrypts."""

    @pytest.mark.parametrize("cipher_type", list(CipherType))
    def test_random_key_round_trip(self, english, cipher_type):
        random.seed(cipher_type.value)
        engine = EngineRegistry().require_engine(cipher_type)
        text = "Hello, World! Ready? The quick brown fox jumps over 13 lazy dogs."

        key = engine.generate_random_key(english)
        ciphertext = engine.encrypt(text, key, english)
        result = engine.decrypt_with_key(ciphertext, key, english)

        assert result.plaintext == text
        assert not result.solved
        assert result.key == key
        assert engine.validate_key(key, english)

    @pytest.mark.parametrize("cipher_type", list(CipherType))
    def test_punctuation_and_case_stay_in_place(self, english, cipher_type):
        engine = EngineRegistry().require_engine(cipher_type)
        random.seed(0)
        text = "Dear Sir, -- it's 5 o'clock!"

        ciphertext = engine.encrypt(text, engine.generate_random_key(english), english)

        assert len(ciphertext) == len(text)
        for before, after in zip(text, ciphertext):
            assert before.isalpha() == after.isalpha()
            if before.isalpha():
                assert before.isupper() == after.isupper()
            else:
                assert before == after


class TestCaesarEngine:
    """Test suite for Caesar cipher engine."""

    @pytest.fixture
    def engine(self):
        return CaesarEngine()

    def test_encrypt_shift_7(self, engine, english):
        assert engine.encrypt("HELLO", "7", english) == "OLSSV"

    def test_decrypt_shift_7(self, engine, english):
        assert engine.decrypt_with_key("OLSSV", 7, english).plaintext == "HELLO"

    def test_dict_key(self, engine, english):
        assert engine.encrypt("abc", {"shift": 27}, english) == "bcd"

    def test_find_key_and_decrypt(self, engine, english, short_plaintext):
        ciphertext = engine.encrypt(short_plaintext, 13, english)

        result = engine.find_key_and_decrypt(ciphertext, english)

        assert result.key == "13"
        assert result.plaintext == short_plaintext
        assert result.solved
        assert "13" in result.explanation

    def test_invalid_key(self, engine, english):
        assert not engine.validate_key("seven", english)


class TestAffineEngine:
    """Test suite for affine cipher engine."""

    @pytest.fixture
    def engine(self):
        return AffineEngine()

    def test_encrypt(self, engine, english):
        # E(x) = 5x + 8: a -> i, f -> h
        assert engine.encrypt("af", "5,8", english) == "ih"

    def test_a_must_be_coprime(self, engine, english):
        with pytest.raises(InvalidKeyError):
            engine.parse_key("13,2", english)
        assert not engine.validate_key("4,1", english)
        assert engine.validate_key({"a": 7, "b": 3}, english)

    def test_brute_force(self, engine, english, short_plaintext):
        ciphertext = engine.encrypt(short_plaintext, "5,8", english)

        result = engine.find_key_and_decrypt(ciphertext, english)

        assert result.key == "5,8"
        assert result.plaintext == short_plaintext

    def test_known_plaintext(self, engine, english):
        ciphertext = engine.encrypt("et", "5,8", english)

        result = engine.find_key_and_decrypt(ciphertext, english, {"known_plaintext": "et"})

        assert result.key == "5,8"

    def test_known_plaintext_too_short(self, engine, english):
        with pytest.raises(InvalidKeyError):
            engine.find_key_and_decrypt("ct", english, {"known_plaintext": "e"})


class TestSimpleSubstitutionEngine:
    """Test suite for simple substitution engine."""

    @pytest.fixture
    def engine(self):
        return SimpleSubstitutionEngine()

    def test_keyword_expands_to_alphabet(self, engine, english):
        key = engine.parse_key("ZEBRAS", english)

        assert english.codes_to_string(key) == "ZEBRASCDFGHIJKLMNOPQTUVWXY"
        assert engine.encrypt("abc", "ZEBRAS", english) == "zeb"

    def test_invalid_keys(self, engine, english):
        assert not engine.validate_key("", english)
        assert not engine.validate_key("AB1", english)
        assert not engine.validate_key("A" * 27, english)

    def test_solve(self, engine, english, plaintext):
        key = "QWERTYUIOPASDFGHJKLZXCVBNM"
        ciphertext = engine.encrypt(plaintext, key, english)

        result = engine.find_key_and_decrypt(
            ciphertext, english, {"seed": 5, "substitution_max_restarts": 200}
        )

        # Letters seen once or never may trade places; everything else decrypts
        wrong = sum(a != b for a, b in zip(result.plaintext, plaintext))
        assert len(result.plaintext) == len(plaintext)
        assert wrong <= 3
