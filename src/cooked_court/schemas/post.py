"""Post-related Pydantic schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cooked_court.models import Post, PostKind
from cooked_court.services.scoring import MAX_SCORE, MIN_SCORE, classify_band


class PostCreate(BaseModel):
    """Schema for submitting a new story."""

    kind: PostKind = Field(PostKind.SHAME, description="shame or cost")
    story: str = Field(..., min_length=1, max_length=5000, description="The story to be judged")
    image_base64: str | None = Field(None, description="Optional data URI or raw base64 image")

    @field_validator("story")
    @classmethod
    def validate_story(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Story is required")
        return v


class VoteCreate(BaseModel):
    """Schema for a cooked-score vote."""

    value: int = Field(..., ge=MIN_SCORE, le=MAX_SCORE, description="Cooked score from 0 to 100")


class CommentCreate(BaseModel):
    """Schema for adding a comment."""

    text: str = Field(..., max_length=2000)


class CommentResponse(BaseModel):
    id: str
    author: str
    text: str
    timestamp: int

    model_config = ConfigDict(from_attributes=True)


class CommunityVotesResponse(BaseModel):
    count: int
    total_score: int

    model_config = ConfigDict(from_attributes=True)


class ReactionCountsResponse(BaseModel):
    laughs: int
    respects: int
    wins: int
    losses: int

    model_config = ConfigDict(from_attributes=True)


class BandResponse(BaseModel):
    """Display band for a score."""

    score: int
    label: str
    color: str
    critical: bool


class PostResponse(BaseModel):
    """A post as seen by one viewer."""

    id: str
    kind: PostKind
    author: str
    story: str
    image_ref: str | None
    timestamp: int
    ai_score: int
    display_score: int
    verdict: str
    is_analyzing: bool
    community_votes: CommunityVotesResponse
    reactions: ReactionCountsResponse
    comments: list[CommentResponse]
    has_voted: bool = False
    has_marked_w: bool = False
    has_marked_l: bool = False
    band: BandResponse | None = None

    @classmethod
    def for_viewer(cls, post: Post, viewer: str | None = None) -> PostResponse:
        """Render ``post`` with the per-viewer flags of ``viewer``."""
        band = None
        if not post.is_analyzing:
            band = band_response(post.display_score, post.kind)
        return cls(
            id=post.id,
            kind=post.kind,
            author=post.author,
            story=post.story,
            image_ref=post.image_ref,
            timestamp=post.timestamp,
            ai_score=post.ai_score,
            display_score=post.display_score,
            verdict=post.verdict,
            is_analyzing=post.is_analyzing,
            community_votes=CommunityVotesResponse.model_validate(post.community_votes),
            reactions=ReactionCountsResponse.model_validate(post.reactions),
            comments=[CommentResponse.model_validate(c) for c in post.comments],
            has_voted=viewer is not None and post.has_voted(viewer),
            has_marked_w=viewer is not None and post.has_marked_w(viewer),
            has_marked_l=viewer is not None and post.has_marked_l(viewer),
            band=band,
        )


class ReactionResponse(BaseModel):
    """Result of a reaction click."""

    post_id: str
    reactions: ReactionCountsResponse
    marked: bool | None = Field(None, description="New W/L mark state for toggles")


def band_response(score: int, kind: PostKind) -> BandResponse:
    band = classify_band(score, kind)
    return BandResponse(score=score, label=band.label, color=band.color, critical=band.critical)
