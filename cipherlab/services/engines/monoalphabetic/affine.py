import random
from typing import Any

import numpy as np

from cipherlab.core.exceptions import InvalidKeyError
from cipherlab.models.schemas import CipherFamily, CipherType
from cipherlab.services.engines.base import CipherEngine, RawKey
from cipherlab.services.engines.registry import EngineRegistry
from cipherlab.services.language.model import LanguageModel
from cipherlab.services.math_utils import coprimes, mod_inverse
from cipherlab.services.optimization.exhaustive import affine_solve, affine_solve_known_pair


@EngineRegistry.register
class AffineEngine(CipherEngine[tuple[int, int]]):
    """
    Affine cipher engine.

    Encrypts each letter with E(x) = (a*x + b) mod m, where ``a`` must be
    coprime with the alphabet length ``m`` so that D(x) = a^-1 * (x - b)
    exists. The key space is small enough to search exhaustively, and two
    known plaintext letters determine the key exactly.
    """

    name = "Affine Cipher"
    cipher_type = CipherType.AFFINE
    cipher_family = CipherFamily.MONOALPHABETIC
    description = (
        "A substitution cipher combining multiplication and addition modulo the "
        "alphabet length. Caesar is the special case a=1."
    )

    def parse_key(self, key: RawKey, language: LanguageModel) -> tuple[int, int]:
        """Parse a ``{"a": .., "b": ..}`` dict or an ``"a,b"`` string."""
        try:
            if isinstance(key, dict):
                a = int(key.get("a", 1))
                b = int(key.get("b", 0))
            else:
                parts = str(key).replace(" ", "").split(",")
                if len(parts) != 2:
                    raise ValueError(f"expected 'a,b', got {key!r}")
                a, b = int(parts[0]), int(parts[1])
        except (TypeError, ValueError) as e:
            raise InvalidKeyError(self.name, key, str(e)) from None

        modulus = language.length
        a %= modulus
        if mod_inverse(a, modulus) is None:
            raise InvalidKeyError(self.name, key, f"'a' must be coprime with {modulus}")
        return a, b % modulus

    def format_key(self, key: tuple[int, int], language: LanguageModel) -> str:
        return f"{key[0]},{key[1]}"

    def encrypt_codes(self, codes: np.ndarray, key: tuple[int, int], language: LanguageModel) -> np.ndarray:
        a, b = key
        return (a * codes + b) % language.length

    def decrypt_codes(self, codes: np.ndarray, key: tuple[int, int], language: LanguageModel) -> np.ndarray:
        a, b = key
        a_inv = mod_inverse(a, language.length)
        return (a_inv * (codes - b)) % language.length

    def solve(self, codes: np.ndarray, language: LanguageModel, options: dict[str, Any]) -> tuple[int, int]:
        """
        Brute force every key, or solve exactly when a known pair is given.

        ``options["known_plaintext"]`` may hold two plaintext letters that
        encrypt to the first two ciphertext letters.
        """
        known = options.get("known_plaintext")
        if known:
            plain = language.to_codes(str(known))
            if plain.size < 2 or codes.size < 2:
                raise InvalidKeyError(self.name, known, "known plaintext needs two letters")
            return affine_solve_known_pair(
                int(plain[0]), int(plain[1]), int(codes[0]), int(codes[1]), language.length
            )
        return affine_solve(codes, language)

    def random_key(self, language: LanguageModel) -> tuple[int, int]:
        return random.choice(coprimes(language.length)), random.randrange(language.length)

    def explain(self, ciphertext: str, plaintext: str, key: str) -> str:
        a, b = key.split(",")
        return (
            f"Affine cipher with a={a}, b={b}. "
            f"Decryption: D(x) = a^-1 * (x - {b}), undoing E(x) = ({a}x + {b}) "
            f"modulo the alphabet length."
        )
