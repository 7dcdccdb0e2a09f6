"""
Pydantic models for the AI writing cache and its endpoints.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class Category(str, Enum):
    """Profile section a cached AI response belongs to."""

    ADDRESS = "Address"
    EDUCATION = "Education"
    EXPERIENCE = "Experience"
    PORTFOLIO = "Portfolio"
    AWARDS = "Awards"
    SKILLS = "Skills"


# ── Stored records ──────────────────────────────────────────────────────────


class StoredResponse(BaseModel):
    """A row of the ai_responses table."""

    model_config = {"frozen": True}

    id: int | None = None
    category: str
    prompt: str
    answer: str
    role: str | None = None
    created_at: datetime | None = None


class MatchResult(BaseModel):
    """Best cached response for a prompt, with its similarity as a percentage."""

    response: StoredResponse
    similarity_percent: int = Field(..., ge=0, le=100)


class WriteResult(BaseModel):
    """Profile text served by the writer, either cached or freshly generated."""

    answer: str
    cached: bool
    similarity: int | None = None
    response_id: int | None = None


# ── Requests ────────────────────────────────────────────────────────────────


class WriteWithAiRequest(BaseModel):
    """Body for the /ai/write-with-ai endpoint."""

    type: Category = Field(..., description="Profile section the text is written for.")
    prompt: str = Field(
        ...,
        min_length=1,
        max_length=4000,
        description="Free-text input describing what to write.",
    )
    role: str | None = Field(
        default=None,
        max_length=255,
        description="Job role context; only used for Experience.",
    )

    @field_validator("prompt")
    @classmethod
    def _prompt_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("prompt must not be blank")
        return value


# ── Responses ───────────────────────────────────────────────────────────────


class WriteWithAiResponse(BaseModel):
    """Generated or cached profile text."""

    success: bool = True
    message: str
    answer: str
    cached: bool
    similarity: int | None = None


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
    database_configured: bool = False


class ErrorResponse(BaseModel):
    detail: str
