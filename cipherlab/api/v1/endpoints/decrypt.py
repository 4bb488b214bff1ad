import logging

from fastapi import APIRouter, HTTPException, status

from cipherlab.core.exceptions import CryptanalysisError
from cipherlab.dependencies import LanguageStoreDep, SettingsDep, check_length, resolve_language
from cipherlab.models.schemas import DecryptRequest, DecryptResponse, ErrorResponse
from cipherlab.services.engines.registry import EngineRegistry

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=DecryptResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        404: {"model": ErrorResponse, "description": "Cipher type or language not supported"},
    },
    summary="Decrypt ciphertext",
    description="Decrypt ciphertext using a specified cipher type and optional key.",
)
async def decrypt_ciphertext(
    request: DecryptRequest,
    settings: SettingsDep,
    store: LanguageStoreDep,
) -> DecryptResponse:
    """
    Decrypt ciphertext with a forced cipher type.

    If no key is provided, the engine's solver searches for the key that
    makes the plaintext score best against the language model.
    """
    check_length(request.ciphertext, settings)

    # Get the appropriate engine
    registry = EngineRegistry()
    engine = registry.get_engine(request.cipher_type)

    if engine is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Cipher type '{request.cipher_type.value}' is not supported",
        )

    language = resolve_language(store, settings, request.language)

    try:
        # Decrypt with provided key or find best key
        if request.key is not None:
            result = engine.decrypt_with_key(request.ciphertext, request.key, language)
        else:
            result = engine.find_key_and_decrypt(request.ciphertext, language, request.options)
            logger.info(
                "Solved %s ciphertext of %d characters with key %s",
                request.cipher_type.value,
                len(request.ciphertext),
                result.key,
            )

        return DecryptResponse(
            plaintext=result.plaintext,
            cipher_type=request.cipher_type,
            key_used=result.key,
            score=result.score,
            solved=result.solved,
            explanation=result.explanation,
        )

    except (CryptanalysisError, ValueError) as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e
