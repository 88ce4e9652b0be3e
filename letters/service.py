"""Letter generation service.

One call path with two explicit outcomes: ``Generated`` when the completion
service produced text, ``Fallback`` when it is not configured or failed. The
caller renders both the same way; ``mock`` is true for a fallback.

Usage::

    outcome = await generate_letter(request, completer)
    body = to_response(outcome, request)
"""

import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Optional, Union

from core.config import DEFAULT_LETTER_MAX_TOKENS
from core.llm.completion import CompletionFailure, TextCompleter
from core.observability.otel_setup import create_letter_span, get_tracer
from letters.fallback import fallback_letter
from letters.prompts import build_prompt, subject_line
from letters.schemas import GenerateLetterTypeRequest, GenerateLetterTypeResponse

logger = logging.getLogger(__name__)

NOT_CONFIGURED = "not_configured"
SERVICE_ERROR = "service_error"

_SUBJECT_LINE = re.compile(r"^Subject:.*\n+", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Generated:
    letter: str


@dataclass(frozen=True)
class Fallback:
    letter: str
    reason: str
    detail: Optional[str] = None


LetterOutcome = Union[Generated, Fallback]


def clean_letter(text: str) -> str:
    """Drop a leading ``Subject:`` line the model sometimes adds."""
    return _SUBJECT_LINE.sub("", text, count=1).strip()


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

async def generate_letter(
    request: GenerateLetterTypeRequest,
    completer: Optional[TextCompleter],
    today: Optional[date] = None,
    max_tokens: int = DEFAULT_LETTER_MAX_TOKENS,
) -> LetterOutcome:
    """Generate the requested letter, falling back to a template.

    Exactly one outbound call is made when a completer is configured.
    """
    today = today or date.today()
    letter_type = request.letter_type.value

    with create_letter_span(get_tracer(), letter_type) as span:
        if completer is None:
            logger.warning("Letter service not configured, using %s template", letter_type)
            outcome = Fallback(fallback_letter(request, today), reason=NOT_CONFIGURED)
        else:
            result = await completer.complete(build_prompt(request), max_tokens)
            if isinstance(result, CompletionFailure):
                logger.warning("Letter generation failed (%s), using %s template", result.error, letter_type)
                outcome = Fallback(fallback_letter(request, today), reason=SERVICE_ERROR, detail=result.error)
            else:
                outcome = Generated(clean_letter(result.text))

        span.set_attribute("letter.mock", isinstance(outcome, Fallback))
        if isinstance(outcome, Fallback):
            span.set_attribute("letter.fallback_reason", outcome.reason)

    logger.info("Generated %s letter (mock=%s)", letter_type, isinstance(outcome, Fallback))
    return outcome


def to_response(outcome: LetterOutcome, request: GenerateLetterTypeRequest) -> GenerateLetterTypeResponse:
    if isinstance(outcome, Generated):
        return GenerateLetterTypeResponse(
            letter=outcome.letter,
            subject=subject_line(request),
            letter_type=request.letter_type,
            mock=False,
        )
    return GenerateLetterTypeResponse(
        letter=outcome.letter,
        subject=subject_line(request),
        mock=True,
    )
