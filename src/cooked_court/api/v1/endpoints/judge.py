"""Proxy endpoint for the AI judge."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from cooked_court.schemas.judge import JudgeRequest, JudgmentResult
from cooked_court.services.judge import judge_or_fallback
from cooked_court.services.scoring import MAX_SCORE, MIN_SCORE

from ..dependencies import JudgeClientDep

router = APIRouter(prefix="/judge", tags=["judge"])


@router.post("", response_model=JudgmentResult)
async def judge_story(payload: JudgeRequest, judge: JudgeClientDep) -> JudgmentResult:
    """Score and roast a story.

    Never fails once the story is present: judge errors are replaced by a
    randomized fallback judgment.
    """
    if not payload.story.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Story is required",
        )

    result = await judge_or_fallback(judge, payload.story, payload.image_base64)
    score = max(MIN_SCORE, min(MAX_SCORE, result.cooked_score))
    return JudgmentResult(cooked_score=score, verdict=result.verdict)
