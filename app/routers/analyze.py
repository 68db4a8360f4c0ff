"""
Analyze Endpoint Module.

Placeholder for the accommodations / lesson plan analysis. It accepts both
texts and echoes them back with a character count summary.
"""

import logging
from typing import Optional

from fastapi import APIRouter

from app.exceptions import AnalysisFailedError
from app.models.analyze_models import AnalyzeReceived, AnalyzeRequest, AnalyzeResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analyze", tags=["analyze"])


def summarize(accommodations: Optional[str], lesson_plan: Optional[str]) -> str:
    return (
        "Accommodations and lesson plan received "
        f"({len(accommodations or '')} / {len(lesson_plan or '')} characters)."
    )


@router.post(
    "",
    summary="Analyze accommodations against a lesson plan",
    response_description="Echo of the received input with a length summary",
    response_model=AnalyzeResponse,
)
async def analyze(payload: Optional[AnalyzeRequest] = None) -> AnalyzeResponse:
    """
    Analyze accommodations against a lesson plan.

    **Current Behavior:**
    - NOT IMPLEMENTED YET. Returns a length summary of the input.
    """
    try:
        payload = payload or AnalyzeRequest()
        return AnalyzeResponse(
            message="Analysis received.",
            summary=summarize(payload.accommodations, payload.lesson_plan),
            received=AnalyzeReceived(
                accommodations=payload.accommodations,
                lesson_plan=payload.lesson_plan,
            ),
        )
    except Exception as e:
        logger.exception("Failed to analyze input")
        raise AnalysisFailedError(str(e)) from e
