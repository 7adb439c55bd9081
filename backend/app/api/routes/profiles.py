"""Profile Routes: public developer listing and profile pages."""

from uuid import UUID

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.infrastructure.database import get_db
from app.models.profile import Profile
from app.schemas.profile import ProfileDetail, ProfileSummary, SkillOut
from app.services.profile_service import ProfileService, split_skills


def profile_detail(profile: Profile) -> dict:
    """Serialize a fully loaded profile with its skills split top/other."""
    top, other = split_skills(profile.skills)
    detail = ProfileDetail.model_validate(profile).model_copy(update={
        "top_skills": [SkillOut.model_validate(s) for s in top],
        "other_skills": [SkillOut.model_validate(s) for s in other],
    })
    return detail.model_dump(mode="json")


async def list_profiles(
    search_query: str = "",
    page: int = 1,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    profiles, view = await ProfileService(db, settings).list_profiles(
        search_query.strip(), page,
    )
    return {
        "profiles": [
            ProfileSummary.model_validate(p).model_dump(mode="json") for p in profiles
        ],
        "pagination": view.to_dict(),
        "search_query": search_query,
    }


async def get_profile(
    profile_id: UUID,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    profile = await ProfileService(db, settings).get_profile(profile_id)
    return profile_detail(profile)
