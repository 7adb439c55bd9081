"""Project Repository: SQLAlchemy persistence for projects, tags and reviews.

Invariants:
    - Every query states its loader options; returned aggregates are fully populated
    - find_or_create_tag is idempotent under races: INSERT .. ON CONFLICT DO NOTHING, then SELECT
    - associate_tag is idempotent: the association's composite key absorbs repeats
    - Mutating methods commit; the caller decides what happens on failure
    - delete() removes tag associations and reviews, never Tag rows
"""

from uuid import UUID

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import CompileError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload, selectinload

from app.core.pagination import page_offset
from app.models.project import Project
from app.models.project_tag import project_tags
from app.models.review import Review
from app.models.tag import Tag

_CONFLICT_INSERTS = {"postgresql": pg_insert, "sqlite": sqlite_insert}


def insert_ignoring_conflicts(db: AsyncSession, target, values: dict, index_elements: list[str]):
    """Build a dialect-specific INSERT that silently skips unique-key conflicts."""
    dialect = db.get_bind().dialect.name
    insert = _CONFLICT_INSERTS.get(dialect)
    if insert is None:
        raise CompileError(f"No conflict-tolerant insert for dialect '{dialect}'")
    return insert(target).values(**values).on_conflict_do_nothing(
        index_elements=index_elements,
    )


def _search_filter(search_query: str):
    pattern = f"%{search_query}%"
    return or_(
        Project.title.ilike(pattern),
        Project.description.ilike(pattern),
    )


class SQLProjectRepository:
    """Projects plus the Tag table and the project_tags association."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def count(self, search_query: str) -> int:
        query = select(func.count()).select_from(Project)
        if search_query:
            query = query.where(_search_filter(search_query))
        result = await self.db.execute(query)
        return result.scalar_one()

    async def find_all(
        self, search_query: str, page: int, page_size: int,
    ) -> list[Project]:
        """One page of projects with owner and tags loaded."""
        query = (
            select(Project)
            .options(joinedload(Project.owner), selectinload(Project.tags))
            .order_by(
                Project.vote_ratio.desc(),
                Project.vote_total.desc(),
                Project.title.asc(),
            )
        )
        if search_query:
            query = query.where(_search_filter(search_query))
        query = query.limit(page_size).offset(page_offset(page, page_size))
        result = await self.db.execute(query)
        return list(result.scalars().unique().all())

    async def find_by_id(self, project_id: UUID) -> Project | None:
        """Full aggregate: owner, tags, reviews with their authors."""
        result = await self.db.execute(
            select(Project)
            .where(Project.id == project_id)
            .options(
                joinedload(Project.owner),
                selectinload(Project.tags),
                selectinload(Project.reviews).joinedload(Review.owner),
            )
            .execution_options(populate_existing=True),
        )
        return result.unique().scalar_one_or_none()

    async def create(self, project: Project) -> None:
        self.db.add(project)
        await self.db.commit()

    async def update(self, project: Project) -> None:
        self.db.add(project)
        await self.db.commit()

    async def update_votes(self, project_id: UUID, vote_total: int, vote_ratio: int) -> None:
        await self.db.execute(
            update(Project)
            .where(Project.id == project_id)
            .values(vote_total=vote_total, vote_ratio=vote_ratio),
        )
        await self.db.commit()

    async def delete(self, project_id: UUID) -> None:
        await self.db.execute(
            delete(project_tags).where(project_tags.c.project_id == project_id),
        )
        await self.db.execute(
            delete(Review).where(Review.project_id == project_id),
        )
        await self.db.execute(
            delete(Project)
            .where(Project.id == project_id)
            .execution_options(synchronize_session=False),
        )
        await self.db.commit()

    # ─── Tags ────────────────────────────────────────────────────

    async def find_tag_by_name(self, name: str) -> Tag | None:
        result = await self.db.execute(select(Tag).where(Tag.name == name))
        return result.scalar_one_or_none()

    async def find_or_create_tag(self, name: str) -> Tag:
        """Return the Tag with exactly this name, creating it if absent."""
        tag = await self.find_tag_by_name(name)
        if tag is not None:
            return tag
        await self.db.execute(
            insert_ignoring_conflicts(self.db, Tag, {"name": name}, ["name"]),
        )
        tag = await self.find_tag_by_name(name)
        await self.db.commit()
        return tag

    async def associate_tag(self, project_id: UUID, tag_id: UUID) -> None:
        await self.db.execute(
            insert_ignoring_conflicts(
                self.db, project_tags,
                {"project_id": project_id, "tag_id": tag_id},
                ["project_id", "tag_id"],
            ),
        )
        await self.db.commit()

    async def clear_tags(self, project_id: UUID) -> None:
        await self.db.execute(
            delete(project_tags).where(project_tags.c.project_id == project_id),
        )
        await self.db.commit()

    async def rollback(self) -> None:
        await self.db.rollback()

    async def tag_names_for(self, project_id: UUID) -> list[str]:
        result = await self.db.execute(
            select(Tag.name)
            .join(project_tags, project_tags.c.tag_id == Tag.id)
            .where(project_tags.c.project_id == project_id)
            .order_by(Tag.name),
        )
        return list(result.scalars().all())


class SQLReviewRepository:
    """Reviews on projects."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, review: Review) -> None:
        self.db.add(review)
        await self.db.commit()

    async def exists_for(self, owner_id: UUID, project_id: UUID) -> bool:
        result = await self.db.execute(
            select(Review.id)
            .where(Review.owner_id == owner_id)
            .where(Review.project_id == project_id),
        )
        return result.first() is not None

    async def values_for(self, project_id: UUID) -> list[str]:
        result = await self.db.execute(
            select(Review.value).where(Review.project_id == project_id),
        )
        return list(result.scalars().all())
