from fastapi import APIRouter, HTTPException, status

from cipherlab.core.exceptions import LanguageError
from cipherlab.dependencies import LanguageStoreDep, SettingsDep
from cipherlab.models.schemas import (
    AlphabetSummary,
    ErrorResponse,
    LanguageListResponse,
    LanguageSummary,
    TrainLanguageRequest,
)
from cipherlab.services.language.model import LanguageModel
from cipherlab.services.language.training import train_language

router = APIRouter()


def summarize(language: LanguageModel) -> LanguageSummary:
    return LanguageSummary(
        name=language.name,
        alphabet_len=language.alphabet_len,
        alphabets=[
            AlphabetSummary(length=variant.length, upper=variant.upper, expected_ioc=variant.expected_ioc)
            for variant in language.alphabets
        ],
    )


@router.get(
    "",
    response_model=LanguageListResponse,
    summary="List languages",
    description="Languages that can score text, with their alphabet variants.",
)
async def list_languages(
    settings: SettingsDep,
    store: LanguageStoreDep,
) -> LanguageListResponse:
    """List every stored or bundled language; bundled ones are trained on first listing."""
    try:
        languages = [summarize(store.get(name)) for name in store.available()]
    except LanguageError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=e.message,
        ) from e

    return LanguageListResponse(languages=languages, default=settings.default_language)


@router.post(
    "",
    response_model=LanguageSummary,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid configuration or corpus"},
    },
    summary="Train a language",
    description="Train n-gram tables from a corpus and save them to the language store.",
)
async def train(
    request: TrainLanguageRequest,
    store: LanguageStoreDep,
) -> LanguageSummary:
    """Train a language from its alphabet configuration and a plaintext corpus."""
    try:
        language = train_language(request.config, request.corpus)
    except LanguageError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message,
        ) from e

    store.add(language)
    return summarize(language)
