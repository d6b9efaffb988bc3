"""Judgment request/response schemas."""

from pydantic import BaseModel, Field


class JudgeRequest(BaseModel):
    """Story (and optional image) to be scored by the AI judge."""

    story: str = Field(..., description="The embarrassing story")
    image_base64: str | None = Field(
        None,
        alias="imageBase64",
        description="Data URI or raw base64 image",
    )

    model_config = {"populate_by_name": True}


class JudgmentResult(BaseModel):
    """Score and roast returned by the AI judge."""

    cooked_score: int = Field(..., description="The level of disaster from 0 to 100")
    verdict: str = Field(..., description="A short sarcastic roast or comment")
