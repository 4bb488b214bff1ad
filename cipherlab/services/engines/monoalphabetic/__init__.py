"""Monoalphabetic cipher engines."""

from cipherlab.services.engines.monoalphabetic.caesar import CaesarEngine
from cipherlab.services.engines.monoalphabetic.affine import AffineEngine
from cipherlab.services.engines.monoalphabetic.simple_substitution import SimpleSubstitutionEngine

__all__ = [
    "CaesarEngine",
    "AffineEngine",
    "SimpleSubstitutionEngine",
]
