"""Account Routes: the caller's own profile and skills.

Invariants:
    - Every handler acts on identity.profile_id; no profile id is taken from the path
    - A skill id that belongs to someone else answers 404, not 403
"""

from uuid import UUID

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_identity
from app.api.routes.profiles import profile_detail
from app.config import Settings, get_settings
from app.core.domain_types import FlashLevel
from app.core.flash import with_flash
from app.core.identity import Identity
from app.infrastructure.database import get_db
from app.schemas.profile import AccountUpdate, SkillOut, SkillWrite
from app.services.profile_service import ProfileService


async def get_account(
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    profile = await ProfileService(db, settings).get_account(identity)
    return profile_detail(profile)


async def update_account(
    body: AccountUpdate,
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    profile = await ProfileService(db, settings).update_account(identity, body)
    return with_flash(
        {"profile": profile_detail(profile)},
        FlashLevel.SUCCESS,
        "Account was updated successfully!",
    )


async def create_skill(
    body: SkillWrite,
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    skill = await ProfileService(db, settings).create_skill(identity, body)
    return with_flash(
        {"skill": SkillOut.model_validate(skill).model_dump(mode="json")},
        FlashLevel.SUCCESS,
        "Skill was added successfully!",
    )


async def update_skill(
    skill_id: UUID,
    body: SkillWrite,
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    skill = await ProfileService(db, settings).update_skill(identity, skill_id, body)
    return with_flash(
        {"skill": SkillOut.model_validate(skill).model_dump(mode="json")},
        FlashLevel.SUCCESS,
        "Skill was updated successfully!",
    )


async def delete_skill(
    skill_id: UUID,
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    await ProfileService(db, settings).delete_skill(identity, skill_id)
    return with_flash(
        {"deleted": str(skill_id)}, FlashLevel.SUCCESS, "Skill was deleted successfully!",
    )
