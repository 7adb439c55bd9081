"""Profile Use Cases: public listing, own account, and skills.

Invariants:
    - Account edits touch only the caller's own profile
    - A username change is mirrored to the login account; collisions raise ConflictError
    - Skills are addressed through find_owned: another profile's skill reads as not found
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.core.errors import ConflictError, ResourceNotFoundError
from app.core.identity import Identity
from app.core.pagination import PaginationView, paginate
from app.core.repository_protocols import (
    ProfileRepository, SkillRepository, UserRepository,
)
from app.infrastructure.user_repository import (
    SQLProfileRepository, SQLSkillRepository, SQLUserRepository,
)
from app.models.profile import Profile
from app.models.skill import Skill
from app.schemas.profile import AccountUpdate, SkillWrite

logger = logging.getLogger(__name__)


def split_skills(skills: list[Skill]) -> tuple[list[Skill], list[Skill]]:
    """Skills with a description are featured; the rest are listed plainly."""
    top = [s for s in skills if s.description]
    other = [s for s in skills if not s.description]
    return top, other


class ProfileService:
    """Profile and skill use cases bound to one request's DB session."""

    def __init__(self, db: AsyncSession, settings: Settings):
        self.users: UserRepository = SQLUserRepository(db)
        self.profiles: ProfileRepository = SQLProfileRepository(db)
        self.skills: SkillRepository = SQLSkillRepository(db)
        self.settings = settings

    async def list_profiles(
        self, search_query: str, page: int,
    ) -> tuple[list[Profile], PaginationView]:
        page_size = self.settings.profiles_page_size
        total = await self.profiles.count(search_query)
        view = paginate(page, total, page_size)
        profiles = await self.profiles.find_all(
            search_query, view.current_page, page_size,
        )
        return profiles, view

    async def get_profile(self, profile_id: UUID) -> Profile:
        profile = await self.profiles.find_by_id(profile_id)
        if profile is None:
            raise ResourceNotFoundError("Profile", str(profile_id))
        return profile

    async def get_account(self, identity: Identity) -> Profile:
        return await self.get_profile(identity.profile_id)

    async def update_account(self, identity: Identity, data: AccountUpdate) -> Profile:
        profile = await self.get_profile(identity.profile_id)
        user = await self.users.find_by_id(identity.user_id)
        if user is None:
            raise ResourceNotFoundError("User", str(identity.user_id))

        if data.username != user.username:
            taken = await self.users.find_by_username(data.username)
            if taken is not None:
                raise ConflictError(f"Username '{data.username}' is already taken")

        profile.name = data.name
        profile.email = data.email
        profile.username = data.username
        profile.location = data.location
        profile.short_intro = data.short_intro
        profile.bio = data.bio
        profile.social_github = data.social_github
        profile.social_linkedin = data.social_linkedin
        profile.social_website = data.social_website
        if data.profile_image:
            profile.profile_image = data.profile_image
        await self.profiles.update(profile)

        if user.username != data.username:
            user.username = data.username
            await self.users.update(user)
            logger.info(
                f"Username changed to {data.username}",
                extra={"user_id": user.id},
            )
        return await self.get_profile(identity.profile_id)

    async def create_skill(self, identity: Identity, data: SkillWrite) -> Skill:
        skill = Skill(
            owner_id=identity.profile_id,
            name=data.name,
            description=data.description,
        )
        await self.skills.create(skill)
        return skill

    async def _get_owned_skill(self, identity: Identity, skill_id: UUID) -> Skill:
        skill = await self.skills.find_owned(skill_id, identity.profile_id)
        if skill is None:
            raise ResourceNotFoundError("Skill", str(skill_id))
        return skill

    async def update_skill(
        self, identity: Identity, skill_id: UUID, data: SkillWrite,
    ) -> Skill:
        skill = await self._get_owned_skill(identity, skill_id)
        skill.name = data.name
        skill.description = data.description
        await self.skills.update(skill)
        return skill

    async def delete_skill(self, identity: Identity, skill_id: UUID) -> None:
        skill = await self._get_owned_skill(identity, skill_id)
        await self.skills.delete(skill.id)
