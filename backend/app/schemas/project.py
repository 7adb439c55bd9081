"""Project Schemas: Pydantic models for project, tag and review endpoints.

Invariants:
    - title/description stripped and non-empty
    - tags accepted as one comma-separated string or a list of strings
    - tags omitted (None) leaves the tag set alone on update; "" or [] clears it
    - Response models read straight from fully-loaded ORM aggregates (from_attributes)
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.domain_types import ReviewValue


class ProjectWrite(BaseModel):
    """Project form: used for both create and full update.

    On update, an absent tags field keeps the current tags; an empty one
    removes them all.
    """
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1, max_length=20_000)
    featured_image: str | None = Field(None, max_length=255)
    demo_link: str | None = Field(None, max_length=255)
    source_link: str | None = Field(None, max_length=255)
    tags: str | list[str] | None = None

    @field_validator("title", "description")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty or whitespace")
        return v


class ReviewCreate(BaseModel):
    """A vote with optional comment."""
    value: ReviewValue
    body: str | None = Field(None, max_length=2000)


class TagOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str


class OwnerOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str | None = None
    username: str | None = None
    profile_image: str


class ReviewOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    value: ReviewValue
    body: str | None = None
    owner: OwnerOut
    created_at: datetime


class ProjectSummary(BaseModel):
    """Project as shown in listings."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: str
    featured_image: str
    demo_link: str | None = None
    source_link: str | None = None
    vote_total: int
    vote_ratio: int
    owner: OwnerOut
    tags: list[TagOut]
    created_at: datetime


class ProjectDetail(ProjectSummary):
    """Project page: summary plus reviews."""
    reviews: list[ReviewOut]
