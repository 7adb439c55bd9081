"""Project ORM: a portfolio entry owned by a Profile.

Invariants:
    - owner_id always set; only the owner mutates or deletes
    - vote_total/vote_ratio are derived from reviews and used only for ordering
    - Deleting a project removes its tag associations and reviews, never Tag rows
    - Relationships are lazy="raise": queries must state their loader options
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base
from app.models.project_tag import project_tags


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Project(Base):
    """Project entity with tags and reviews."""
    __tablename__ = "projects"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    owner_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    featured_image: Mapped[str] = mapped_column(
        String(255), nullable=False, default="default.jpg",
    )
    demo_link: Mapped[str | None] = mapped_column(String(255), nullable=True)
    source_link: Mapped[str | None] = mapped_column(String(255), nullable=True)
    vote_total: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    vote_ratio: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )

    # Relationships
    owner: Mapped["Profile"] = relationship(
        "Profile", back_populates="projects", lazy="raise",
    )
    tags: Mapped[list["Tag"]] = relationship(
        "Tag", secondary=project_tags, back_populates="projects",
        lazy="raise", order_by="Tag.name", passive_deletes=True,
    )
    reviews: Mapped[list["Review"]] = relationship(
        "Review", back_populates="project", lazy="raise",
        order_by="Review.created_at.desc()", passive_deletes=True,
    )
