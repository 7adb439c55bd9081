"""User, Profile and Skill Repositories: SQLAlchemy persistence for accounts.

Invariants:
    - Lookups by username/email are exact; usernames are stored lower-cased by the service
    - Profile listing searches name, short intro, bio and skill names (case-insensitive)
    - find_owned never returns a skill belonging to another profile
"""

from uuid import UUID

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.pagination import page_offset
from app.models.profile import Profile
from app.models.project import Project
from app.models.skill import Skill
from app.models.user import User


class SQLUserRepository:
    """Login accounts."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, user: User) -> None:
        self.db.add(user)
        await self.db.commit()

    async def find_by_id(self, user_id: UUID) -> User | None:
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def find_by_username(self, username: str) -> User | None:
        result = await self.db.execute(
            select(User).where(User.username == username),
        )
        return result.scalar_one_or_none()

    async def find_by_username_or_email(self, username: str, email: str) -> User | None:
        result = await self.db.execute(
            select(User)
            .where(or_(User.username == username, User.email == email))
            .limit(1),
        )
        return result.scalar_one_or_none()

    async def update(self, user: User) -> None:
        self.db.add(user)
        await self.db.commit()

    async def delete(self, user_id: UUID) -> None:
        await self.db.execute(delete(User).where(User.id == user_id))
        await self.db.commit()


def _profile_search_filter(search_query: str):
    pattern = f"%{search_query}%"
    return or_(
        Profile.name.ilike(pattern),
        Profile.short_intro.ilike(pattern),
        Profile.bio.ilike(pattern),
        Profile.skills.any(Skill.name.ilike(pattern)),
    )


class SQLProfileRepository:
    """Public profiles."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def count(self, search_query: str) -> int:
        query = select(func.count()).select_from(Profile)
        if search_query:
            query = query.where(_profile_search_filter(search_query))
        result = await self.db.execute(query)
        return result.scalar_one()

    async def find_all(
        self, search_query: str, page: int, page_size: int,
    ) -> list[Profile]:
        query = (
            select(Profile)
            .options(selectinload(Profile.skills))
            .order_by(Profile.created_at.asc())
        )
        if search_query:
            query = query.where(_profile_search_filter(search_query))
        query = query.limit(page_size).offset(page_offset(page, page_size))
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def find_by_id(self, profile_id: UUID) -> Profile | None:
        """Full aggregate: skills and projects with their tags."""
        result = await self.db.execute(
            select(Profile)
            .where(Profile.id == profile_id)
            .options(
                selectinload(Profile.skills),
                selectinload(Profile.projects).selectinload(Project.tags),
            )
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def find_by_user_id(self, user_id: UUID) -> Profile | None:
        """Bare profile row (no collections loaded)."""
        result = await self.db.execute(
            select(Profile).where(Profile.user_id == user_id),
        )
        return result.scalar_one_or_none()

    async def create(self, profile: Profile) -> None:
        self.db.add(profile)
        await self.db.commit()

    async def update(self, profile: Profile) -> None:
        self.db.add(profile)
        await self.db.commit()


class SQLSkillRepository:
    """Skills listed on a profile."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, skill: Skill) -> None:
        self.db.add(skill)
        await self.db.commit()

    async def find_owned(self, skill_id: UUID, owner_id: UUID) -> Skill | None:
        result = await self.db.execute(
            select(Skill)
            .where(Skill.id == skill_id)
            .where(Skill.owner_id == owner_id),
        )
        return result.scalar_one_or_none()

    async def update(self, skill: Skill) -> None:
        self.db.add(skill)
        await self.db.commit()

    async def delete(self, skill_id: UUID) -> None:
        await self.db.execute(delete(Skill).where(Skill.id == skill_id))
        await self.db.commit()
