import logging
import zipfile
import zlib
from pathlib import Path

import numpy as np
from numpy.lib.npyio import NpzFile
from pydantic import ValidationError as PydanticValidationError

from cipherlab.core.exceptions import (
    LanguageDeserializationError,
    LanguageFileNotFoundError,
    LanguageReadError,
)
from cipherlab.models.language import AlphabetConfig, LanguageFileMeta
from cipherlab.services.language.model import NGRAM_ORDERS, LanguageModel

logger = logging.getLogger(__name__)

LANGUAGE_SUFFIX = ".npz"
TABLE_NAMES = ("unigrams", "bigrams", "trigrams", "quadgrams")


def language_path(directory: str | Path, name: str) -> Path:
    return Path(directory) / f"{name}{LANGUAGE_SUFFIX}"


def save_language(model: LanguageModel, path: str | Path) -> Path:
    """
    Write a trained model as a compressed numpy archive.

    The archive holds one array per n-gram table and a ``metadata`` string
    with the JSON encoded :class:`LanguageFileMeta`.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    meta = LanguageFileMeta(
        name=model.name,
        alphabet_len=model.alphabet_len,
        alphabets=[AlphabetConfig.from_variant(variant) for variant in model.alphabets],
        substitutions=model.substitutions,
    )
    arrays = dict(zip(TABLE_NAMES, model.tables))
    with open(path, "wb") as f:
        np.savez_compressed(f, metadata=np.array(meta.model_dump_json()), **arrays)

    logger.info("Saved language '%s' to %s", model.name, path)
    return path


def load_language(path: str | Path) -> LanguageModel:
    """
    Read a model written by :func:`save_language`.

    Every alphabet variant is validated again before the model is built.

    Raises:
        LanguageFileNotFoundError: The file does not exist
        LanguageReadError: The file exists but cannot be read
        LanguageDeserializationError: The archive or its metadata is corrupt
        AlphabetError: A stored alphabet variant is malformed
    """
    path = Path(path)
    try:
        archive = np.load(path, allow_pickle=False)
    except FileNotFoundError as e:
        raise LanguageFileNotFoundError(str(path)) from e
    except (zipfile.BadZipFile, EOFError, ValueError) as e:
        raise LanguageDeserializationError(str(path), str(e)) from e
    except OSError as e:
        raise LanguageReadError(str(path), str(e)) from e

    if not isinstance(archive, NpzFile):
        raise LanguageDeserializationError(str(path), "not a numpy archive")

    try:
        with archive:
            raw_meta = str(archive["metadata"])
            tables = [np.array(archive[table_name]) for table_name in TABLE_NAMES]
    except (zipfile.BadZipFile, zlib.error, EOFError, KeyError, ValueError) as e:
        raise LanguageDeserializationError(str(path), str(e)) from e
    except OSError as e:
        raise LanguageReadError(str(path), str(e)) from e

    try:
        meta = LanguageFileMeta.model_validate_json(raw_meta)
    except PydanticValidationError as e:
        raise LanguageDeserializationError(str(path), str(e)) from e

    variants = [alphabet.to_variant() for alphabet in meta.alphabets]

    try:
        model = LanguageModel(
            name=meta.name,
            alphabet_len=meta.alphabet_len,
            alphabets=variants,
            tables=tables,
            substitutions=meta.substitutions,
        )
    except ValueError as e:
        raise LanguageDeserializationError(str(path), str(e)) from e

    logger.info(
        "Loaded language '%s' (%d n-gram tables) from %s", model.name, len(NGRAM_ORDERS), path
    )
    return model
