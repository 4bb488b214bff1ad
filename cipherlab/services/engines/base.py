from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import numpy as np
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from cipherlab.core.config import Settings, get_settings
from cipherlab.core.exceptions import InvalidKeyError, InvalidOptionError
from cipherlab.models.schemas import CipherFamily, CipherType
from cipherlab.services.language.model import QUADGRAMS, LanguageModel

KeyT = TypeVar("KeyT")

RawKey = str | int | dict[str, Any]


@dataclass
class DecryptionResult:
    """Result of a decryption operation."""

    plaintext: str
    key: str
    score: float
    solved: bool
    explanation: str


def thread_codes(text: str, codes: Iterable[int], language: LanguageModel) -> str:
    """
    Write new code points over the letters of ``text``.

    Every letter takes the next code point in its original case; every
    other character is copied unchanged.
    """
    replacement = iter(codes)
    return "".join(
        language.update_cp(char, next(replacement)) if language.is_letter(char) else char
        for char in text
    )


def keyword_codes(key: RawKey, language: LanguageModel, engine_name: str) -> list[int]:
    """
    Read a keyword key as code points.

    Raises:
        InvalidKeyError: The key is empty or contains a non-letter
    """
    if isinstance(key, dict):
        key = key.get("keyword", key.get("key", ""))
    keyword = language.substitute(str(key).strip())
    if not keyword:
        raise InvalidKeyError(engine_name, key, "keyword is empty")
    if not all(language.is_letter(char) for char in keyword):
        raise InvalidKeyError(engine_name, key, "keyword must contain only letters of the alphabet")
    return [language.get_cp(char) for char in keyword]


class CipherEngine(ABC, Generic[KeyT]):
    """
    Abstract base class for all cipher engines.

    Engines work on code point arrays of a language's active alphabet and
    re-thread the result onto the original text, so case and punctuation
    survive. Each cipher implementation must provide:
    - parse_key() / format_key(): Convert between request keys and typed keys
    - encrypt_codes() / decrypt_codes(): The cipher transform
    - solve(): Recover the key from ciphertext alone
    - random_key(): Generate a key
    - explain(): Generate human-readable explanation
    """

    # Cipher metadata
    name: str
    cipher_type: CipherType
    cipher_family: CipherFamily
    description: str

    @abstractmethod
    def parse_key(self, key: RawKey, language: LanguageModel) -> KeyT:
        """
        Convert a request key to the engine's key type.

        Args:
            key: Key as given by the caller
            language: Language whose alphabet the key uses

        Returns:
            Typed key

        Raises:
            InvalidKeyError: The key cannot be used with this cipher
        """

    @abstractmethod
    def format_key(self, key: KeyT, language: LanguageModel) -> str:
        """Render a typed key so that :meth:`parse_key` reads it back."""

    @abstractmethod
    def encrypt_codes(self, codes: np.ndarray, key: KeyT, language: LanguageModel) -> np.ndarray:
        """
        Encrypt code points.

        Args:
            codes: Plaintext code points
            key: Typed key
            language: Language of the text

        Returns:
            Ciphertext code points, same length
        """

    @abstractmethod
    def decrypt_codes(self, codes: np.ndarray, key: KeyT, language: LanguageModel) -> np.ndarray:
        """Inverse of :meth:`encrypt_codes`."""

    @abstractmethod
    def solve(self, codes: np.ndarray, language: LanguageModel, options: dict[str, Any]) -> KeyT:
        """
        Recover the most plausible key from ciphertext alone.

        Solvers never fail on a wrong answer; they return their best key.

        Args:
            codes: Ciphertext code points
            language: Scoring model
            options: Per-request overrides of the search settings

        Returns:
            Best key found
        """

    @abstractmethod
    def random_key(self, language: LanguageModel) -> KeyT:
        """Generate a random valid key."""

    @abstractmethod
    def explain(self, ciphertext: str, plaintext: str, key: str) -> str:
        """Generate human-readable explanation of the decryption."""

    # ========================================================================
    # Text level operations
    # ========================================================================

    def encrypt(self, plaintext: str, key: RawKey, language: LanguageModel) -> str:
        """Encrypt plaintext with the given key, keeping case and punctuation."""
        typed_key = self.parse_key(key, language)
        text = language.substitute(plaintext)
        codes = language.to_codes(text)
        return thread_codes(text, self.encrypt_codes(codes, typed_key, language), language)

    def decrypt_with_key(self, ciphertext: str, key: RawKey, language: LanguageModel) -> DecryptionResult:
        """Decrypt with a known key."""
        typed_key = self.parse_key(key, language)
        return self._result(ciphertext, typed_key, language, solved=False)

    def find_key_and_decrypt(
        self,
        ciphertext: str,
        language: LanguageModel,
        options: dict[str, Any] | None = None,
    ) -> DecryptionResult:
        """Find the best key and decrypt."""
        codes = language.to_codes(ciphertext)
        typed_key = self.solve(codes, language, options or {})
        return self._result(ciphertext, typed_key, language, solved=True)

    def generate_random_key(self, language: LanguageModel) -> str:
        """Generate a random key in request form."""
        return self.format_key(self.random_key(language), language)

    def validate_key(self, key: RawKey, language: LanguageModel) -> bool:
        """Validate that a key is usable with this cipher."""
        try:
            self.parse_key(key, language)
        except (ValueError, TypeError):
            return False
        return True

    def _result(self, ciphertext: str, key: KeyT, language: LanguageModel, solved: bool) -> DecryptionResult:
        text = language.substitute(ciphertext)
        plain_codes = self.decrypt_codes(language.to_codes(text), key, language)
        plaintext = thread_codes(text, plain_codes, language)
        key_str = self.format_key(key, language)

        return DecryptionResult(
            plaintext=plaintext,
            key=key_str,
            score=language.score(plain_codes, QUADGRAMS),
            solved=solved,
            explanation=self.explain(ciphertext, plaintext, key_str),
        )

    @staticmethod
    def _option(options: dict[str, Any], name: str) -> Any:
        """
        Request option ``name``, falling back to the setting of the same name.

        Request values are coerced to the type of the setting, so ``"6"``
        is accepted for an integer option and ``"x"`` is rejected.

        Raises:
            InvalidOptionError: The value does not fit the setting's type
        """
        if name not in options:
            return getattr(get_settings(), name)

        annotation = Settings.model_fields[name].annotation
        try:
            return TypeAdapter(annotation).validate_python(options[name])
        except PydanticValidationError:
            expected = getattr(annotation, "__name__", str(annotation))
            raise InvalidOptionError(name, options[name], expected) from None
