from typing import Annotated

from fastapi import Depends, HTTPException, status

from cipherlab.core.config import Settings, get_settings
from cipherlab.core.exceptions import (
    AlphabetLengthUnmatchedError,
    CiphertextTooLongError,
    LanguageError,
    LanguageNotFoundError,
)
from cipherlab.services.language.model import LanguageModel
from cipherlab.services.language.store import LanguageStore, get_language_store


# Settings dependency
SettingsDep = Annotated[Settings, Depends(get_settings)]

# Trained language models
LanguageStoreDep = Annotated[LanguageStore, Depends(get_language_store)]


def resolve_language(
    store: LanguageStore,
    settings: Settings,
    name: str | None,
    alphabet_len: int | None = None,
) -> LanguageModel:
    """
    Look up a trained language for a request.

    Falls back to the default language, and switches to the alphabet variant
    of ``alphabet_len`` letters when one is asked for.

    Raises:
        HTTPException: 404 for an unknown language, 400 for a missing
            alphabet variant, 500 for a stored model that cannot be loaded
    """
    name = name or settings.default_language
    try:
        language = store.get(name)
        if alphabet_len is not None:
            language = language.select_variant(alphabet_len)
    except LanguageNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    except AlphabetLengthUnmatchedError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    except LanguageError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Language '{name}' could not be loaded: {e.message}",
        ) from e
    return language


def check_length(text: str, settings: Settings) -> None:
    """Reject text longer than the configured maximum with a 400."""
    if len(text) > settings.max_ciphertext_length:
        error = CiphertextTooLongError(len(text), settings.max_ciphertext_length)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error.message)
