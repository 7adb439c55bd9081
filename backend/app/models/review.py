"""Review ORM: one profile's vote and comment on another profile's project.

Invariants:
    - At most one review per (owner_id, project_id)
    - value is "up" or "down" (ReviewValue)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base


class Review(Base):
    """Review entity."""
    __tablename__ = "reviews"
    __table_args__ = (
        UniqueConstraint("owner_id", "project_id", name="uq_reviews_owner_project"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    project_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
    )
    owner_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
    )
    body: Mapped[str | None] = mapped_column(Text, nullable=True)
    value: Mapped[str] = mapped_column(String(10), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    project: Mapped["Project"] = relationship(
        "Project", back_populates="reviews", lazy="raise",
    )
    owner: Mapped["Profile"] = relationship("Profile", lazy="raise")
