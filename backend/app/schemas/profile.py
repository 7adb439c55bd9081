"""Profile Schemas: account editing, skills, and profile responses."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.schemas.project import TagOut


class AccountUpdate(BaseModel):
    """Editable profile fields; username changes are mirrored to the login account."""
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    username: str = Field(min_length=1, max_length=255)
    location: str | None = Field(None, max_length=255)
    short_intro: str | None = Field(None, max_length=255)
    bio: str | None = Field(None, max_length=10_000)
    profile_image: str | None = Field(None, max_length=255)
    social_github: str | None = Field(None, max_length=255)
    social_linkedin: str | None = Field(None, max_length=255)
    social_website: str | None = Field(None, max_length=255)

    @field_validator("username")
    @classmethod
    def normalize_username(cls, v: str) -> str:
        v = v.strip().lower()
        if not v:
            raise ValueError("username cannot be empty")
        return v


class SkillWrite(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = Field(None, max_length=5000)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class SkillOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str | None = None


class ProfileProjectOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: str
    featured_image: str
    vote_total: int
    vote_ratio: int
    tags: list[TagOut]


class ProfileSummary(BaseModel):
    """Profile card in listings."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str | None = None
    username: str | None = None
    short_intro: str | None = None
    location: str | None = None
    profile_image: str
    skills: list[SkillOut]


class ProfileDetail(BaseModel):
    """Full profile page."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str | None = None
    email: str | None = None
    username: str | None = None
    location: str | None = None
    short_intro: str | None = None
    bio: str | None = None
    profile_image: str
    social_github: str | None = None
    social_linkedin: str | None = None
    social_website: str | None = None
    created_at: datetime
    top_skills: list[SkillOut] = []
    other_skills: list[SkillOut] = []
    projects: list[ProfileProjectOut]
