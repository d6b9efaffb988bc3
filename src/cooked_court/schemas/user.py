"""User-related Pydantic schemas."""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

_USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]{2,32}$")


class LoginRequest(BaseModel):
    """Mocked login: a username is all it takes."""

    username: str = Field(..., description="2-32 characters: letters, digits, _ . -")

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        v = v.strip()
        if not _USERNAME_PATTERN.match(v):
            raise ValueError("Username must be 2-32 characters of letters, digits, '_', '.' or '-'")
        return v


class UserResponse(BaseModel):
    """Public view of a user record."""

    id: int
    username: str
    display_name: str
    bio: str
    avatar: str | None
    joined_at: datetime

    model_config = ConfigDict(from_attributes=True)


class LoginResponse(BaseModel):
    """Response returned after successful login."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(..., description="Token type (typically 'bearer')")
    created: bool = Field(..., description="True if a new user record was inserted")
    user: UserResponse


class ProfileUpdateRequest(BaseModel):
    """Schema for updating profile customisation."""

    display_name: str | None = Field(
        None,
        min_length=1,
        max_length=100,
        description="Optional display name (1-100 characters)",
    )
    bio: str | None = Field(None, max_length=500)
    avatar: str | None = Field(None, description="Avatar image URL or data URI")


class ScoreDistributionResponse(BaseModel):
    safe: int
    medium: int
    well_done: int
    burnt: int

    model_config = ConfigDict(from_attributes=True)


class ProfileStatsResponse(BaseModel):
    """Aggregate statistics over a user's posts."""

    username: str
    total_posts: int
    total_respects: int
    total_wins: int
    total_losses: int
    total_votes: int
    average_score: int
    distribution: ScoreDistributionResponse
    rank_title: str
