"""Profile ORM: public-facing identity of a User.

Invariants:
    - Exactly one Profile per User (user_id unique)
    - Owns Skills (deleted with the profile) and Projects
    - Relationships are lazy="raise": queries must state their loader options
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Profile(Base):
    """Developer profile shown in listings."""
    __tablename__ = "profiles"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, unique=True,
    )
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    username: Mapped[str | None] = mapped_column(String(255), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    short_intro: Mapped[str | None] = mapped_column(String(255), nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    profile_image: Mapped[str] = mapped_column(
        String(255), nullable=False, default="profiles/user-default.png",
    )
    social_github: Mapped[str | None] = mapped_column(String(255), nullable=True)
    social_linkedin: Mapped[str | None] = mapped_column(String(255), nullable=True)
    social_website: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )

    # Relationships
    user: Mapped["User"] = relationship(
        "User", back_populates="profile", lazy="raise",
    )
    skills: Mapped[list["Skill"]] = relationship(
        "Skill", back_populates="owner",
        cascade="all, delete-orphan", lazy="raise",
        order_by="Skill.created_at",
    )
    projects: Mapped[list["Project"]] = relationship(
        "Project", back_populates="owner", lazy="raise",
        order_by="Project.created_at.desc()",
    )
