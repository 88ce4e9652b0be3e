"""Letter generation endpoint.

The completer is injected with ``Depends`` so tests can swap in a fake.
Without an API key the dependency yields ``None`` and the endpoint answers
with a template letter and ``mock: true``.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from core.config import Settings, get_settings
from core.llm.completion import TextCompleter, build_completer
from letters.schemas import GenerateLetterTypeRequest, GenerateLetterTypeResponse, LetterErrorResponse
from letters.service import generate_letter, to_response

logger = logging.getLogger(__name__)

router = APIRouter()

_completers: dict[tuple[str, Optional[str]], Optional[TextCompleter]] = {}


def get_completer(settings: Settings = Depends(get_settings)) -> Optional[TextCompleter]:
    """One completer per (model, key), built on first use."""
    key = (settings.letter_model, settings.anthropic_api_key)
    if key not in _completers:
        _completers[key] = build_completer(settings)
    return _completers[key]


@router.post(
    "/letter-type",
    response_model=GenerateLetterTypeResponse,
    response_model_exclude_none=True,
    responses={500: {"model": LetterErrorResponse}},
)
async def generate_letter_type(
    request: GenerateLetterTypeRequest,
    completer: Optional[TextCompleter] = Depends(get_completer),
    settings: Settings = Depends(get_settings),
):
    """Draft a complaint letter of the requested type."""
    try:
        outcome = await generate_letter(request, completer, max_tokens=settings.letter_max_tokens)
        return to_response(outcome, request)
    except Exception:
        logger.exception("Letter generation error")
        return JSONResponse(
            status_code=500,
            content=LetterErrorResponse(error="Failed to generate letter").model_dump(),
        )
