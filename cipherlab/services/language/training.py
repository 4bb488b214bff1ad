import logging
from pathlib import Path

from cipherlab.models.language import LanguageConfig
from cipherlab.services.language.model import LanguageModel

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parents[2] / "data"
BUNDLED_LANGUAGES = {
    "english": (DATA_DIR / "english.toml", DATA_DIR / "english_corpus.txt"),
}


def train_language(config: LanguageConfig, corpus: str) -> LanguageModel:
    """
    Train a language model from a configuration and a raw corpus.

    Raises:
        AlphabetError: An alphabet variant is malformed
        AlphabetLengthUnmatchedError: No variant has ``config.alphabet_len`` letters
        InsufficientCorpusError: The corpus has fewer than four usable letters
    """
    variants = [alphabet.to_variant() for alphabet in config.alphabets]
    logger.info(
        "Training language '%s' with %d alphabet(s) on %d characters",
        config.name,
        len(variants),
        len(corpus),
    )
    return LanguageModel.train(
        name=config.name,
        alphabet_len=config.alphabet_len,
        alphabets=variants,
        corpus=corpus,
        substitutions=config.substitutions,
    )


def train_bundled(name: str) -> LanguageModel:
    """Train one of the languages shipped with the package."""
    config_path, corpus_path = BUNDLED_LANGUAGES[name]
    config = LanguageConfig.from_toml(config_path)
    corpus = corpus_path.read_text(encoding="utf-8")
    return train_language(config, corpus)
