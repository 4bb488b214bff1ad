from typing import Type

from cipherlab.core.exceptions import EngineNotFoundError
from cipherlab.models.schemas import CipherFamily, CipherType
from cipherlab.services.engines.base import CipherEngine


class EngineRegistry:
    """
    Registry for cipher engines.

    Engines register their class on import; instances are created lazily
    and shared, since engines hold no per-request state.
    """

    _engines: dict[CipherType, Type[CipherEngine]] = {}
    _instances: dict[CipherType, CipherEngine] = {}

    @classmethod
    def register(cls, engine_class: Type[CipherEngine]) -> Type[CipherEngine]:
        """
        Register a cipher engine class.

        Can be used as a decorator:
            @EngineRegistry.register
            class CaesarEngine(CipherEngine):
                ...
        """
        cls._engines[engine_class.cipher_type] = engine_class
        return engine_class

    def get_engine(self, cipher_type: CipherType) -> CipherEngine | None:
        """
        Get the shared engine instance for a cipher type.

        Args:
            cipher_type: The type of cipher

        Returns:
            Engine instance or None if not registered
        """
        if cipher_type not in self._engines:
            return None

        if cipher_type not in self._instances:
            self._instances[cipher_type] = self._engines[cipher_type]()

        return self._instances[cipher_type]

    def require_engine(self, cipher_type: CipherType) -> CipherEngine:
        """Like :meth:`get_engine` but raises EngineNotFoundError."""
        engine = self.get_engine(cipher_type)
        if engine is None:
            raise EngineNotFoundError(str(cipher_type.value))
        return engine

    def get_engines_by_family(self, family: CipherFamily) -> list[CipherEngine]:
        """All engines belonging to a cipher family, in registration order."""
        return [
            self.get_engine(cipher_type)
            for cipher_type, engine_class in self._engines.items()
            if engine_class.cipher_family == family
        ]

    @classmethod
    def list_registered(cls) -> list[CipherType]:
        return list(cls._engines.keys())


def _load_engines() -> None:
    """Load all engine modules to trigger registration."""
    from cipherlab.services.engines import monoalphabetic, polyalphabetic, transposition  # noqa: F401


_load_engines()
