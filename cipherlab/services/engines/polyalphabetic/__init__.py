"""Polyalphabetic cipher engines."""

from cipherlab.services.engines.polyalphabetic.vigenere import VigenereEngine
from cipherlab.services.engines.polyalphabetic.beaufort import BeaufortEngine
from cipherlab.services.engines.polyalphabetic.bellaso import BellasoEngine
from cipherlab.services.engines.polyalphabetic.porta import PortaEngine
from cipherlab.services.engines.polyalphabetic.autokey import AutokeyEngine

__all__ = [
    "VigenereEngine",
    "BeaufortEngine",
    "BellasoEngine",
    "PortaEngine",
    "AutokeyEngine",
]
