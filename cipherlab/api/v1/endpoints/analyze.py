from fastapi import APIRouter, HTTPException, status

from cipherlab.core.exceptions import InsufficientInputError
from cipherlab.dependencies import LanguageStoreDep, SettingsDep, check_length, resolve_language
from cipherlab.models.schemas import AnalyzeRequest, AnalyzeResponse, ErrorResponse, StatisticsProfile
from cipherlab.services.analysis.statistics import StatisticalAnalyzer

router = APIRouter()


def explain_statistics(profile: StatisticsProfile) -> list[str]:
    """Plain language reading of a statistics profile."""
    explanations = [
        f"Index of coincidence is {profile.index_of_coincidence:.4f}; "
        f"{profile.language} text averages {profile.expected_ioc:.4f} and "
        f"uniformly random letters {profile.random_ioc:.4f}."
    ]

    midpoint = (profile.expected_ioc + profile.random_ioc) / 2
    if profile.index_of_coincidence >= midpoint:
        explanations.append(
            "Letter frequencies are as uneven as natural language, which points to "
            "a transposition or a monoalphabetic substitution."
        )
    else:
        explanations.append(
            "Letter frequencies are flattened, which points to a polyalphabetic cipher."
        )
        if profile.best_period and profile.best_period > 1:
            explanations.append(
                f"Columns taken every {profile.best_period} letters have the highest "
                f"index of coincidence, a likely key length."
            )

    explanations.append(
        f"Chi-squared against {profile.language} unigrams is {profile.chi_squared:.1f} "
        f"(p = {profile.chi_squared_p_value:.3g})."
    )
    return explanations


@router.post(
    "",
    response_model=AnalyzeResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        404: {"model": ErrorResponse, "description": "Language not found"},
    },
    summary="Analyze text",
    description=(
        "Compute the statistics used to identify a cipher: letter frequencies, "
        "index of coincidence per period, chi-squared and entropy."
    ),
)
async def analyze_text(
    request: AnalyzeRequest,
    settings: SettingsDep,
    store: LanguageStoreDep,
) -> AnalyzeResponse:
    """
    Statistical profile of a text measured against a trained language.

    Only letters of the language's active alphabet are counted.
    """
    check_length(request.text, settings)

    language = resolve_language(store, settings, request.language, request.alphabet_len)
    analyzer = StatisticalAnalyzer(language)

    try:
        statistics = analyzer.analyze(request.text, request.max_period or settings.max_ioc_period)
    except InsufficientInputError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e

    return AnalyzeResponse(
        statistics=statistics,
        explanations=explain_statistics(statistics),
    )
