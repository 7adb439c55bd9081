"""Tag ORM: free-text label shared by many Projects.

Invariants:
    - name is UNIQUE at the storage layer; concurrent find-or-create converges on one row
    - Tags are never deleted when projects are; orphans are allowed
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base
from app.models.project_tag import project_tags


class Tag(Base):
    """Tag entity, matched by exact (case-sensitive) name."""
    __tablename__ = "tags"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    projects: Mapped[list["Project"]] = relationship(
        "Project", secondary=project_tags, back_populates="tags",
        lazy="raise", passive_deletes=True,
    )
