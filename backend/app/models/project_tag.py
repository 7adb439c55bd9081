"""project_tags association table: the Project <-> Tag many-to-many.

Invariants:
    - Composite primary key (project_id, tag_id): a tag is attached at most once
    - Rows cascade with the project, never with the tag
"""

from sqlalchemy import Column, ForeignKey, Table
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base

project_tags = Table(
    "project_tags",
    Base.metadata,
    Column(
        "project_id", UUID(as_uuid=True),
        ForeignKey("projects.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "tag_id", UUID(as_uuid=True),
        ForeignKey("tags.id"),
        primary_key=True,
    ),
)
