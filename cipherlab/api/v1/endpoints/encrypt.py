from fastapi import APIRouter, HTTPException, status

from cipherlab.core.exceptions import CryptanalysisError
from cipherlab.dependencies import LanguageStoreDep, SettingsDep, check_length, resolve_language
from cipherlab.models.schemas import EncryptRequest, EncryptResponse, ErrorResponse
from cipherlab.services.engines.registry import EngineRegistry

router = APIRouter()


@router.post(
    "",
    response_model=EncryptResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        404: {"model": ErrorResponse, "description": "Cipher type or language not supported"},
    },
    summary="Encrypt plaintext",
    description="Encrypt plaintext using a specified cipher type. Educational tool for generating test ciphertexts.",
)
async def encrypt_plaintext(
    request: EncryptRequest,
    settings: SettingsDep,
    store: LanguageStoreDep,
) -> EncryptResponse:
    """
    Encrypt plaintext with a specified cipher type.

    This is an educational tool for generating ciphertexts to test
    the analysis and decryption capabilities. A random key is drawn
    when none is given.
    """
    check_length(request.plaintext, settings)

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
        # Generate key if not provided
        key = request.key
        if key is None:
            key = engine.generate_random_key(language)

        ciphertext = engine.encrypt(request.plaintext, key, language)

        return EncryptResponse(
            ciphertext=ciphertext,
            cipher_type=request.cipher_type,
            key_used=engine.format_key(engine.parse_key(key, language), language),
        )

    except (CryptanalysisError, ValueError) as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e
