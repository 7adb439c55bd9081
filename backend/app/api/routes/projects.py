"""Project Routes: listing, detail, owner-only mutation and reviews.

Invariants:
    - Handlers only translate HTTP <-> ProjectService; no queries here
    - Mutations answer with a flash notice and the re-read project
    - Create/update also report which tags were attached and which were skipped
"""

from uuid import UUID

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_identity
from app.config import Settings, get_settings
from app.core.domain_types import FlashLevel
from app.core.flash import with_flash
from app.core.identity import Identity
from app.infrastructure.database import get_db
from app.schemas.project import ProjectDetail, ProjectSummary, ProjectWrite, ReviewCreate
from app.services.project_service import ProjectService
from app.services.tag_reconciler import TagReconciliation


def _tags_outcome(outcome: TagReconciliation) -> dict:
    return {"attached": outcome.attached, "failed": outcome.failed}


async def list_projects(
    search_query: str = "",
    page: int = 1,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    projects, view = await ProjectService(db, settings).list_projects(
        search_query.strip(), page,
    )
    return {
        "projects": [
            ProjectSummary.model_validate(p).model_dump(mode="json") for p in projects
        ],
        "pagination": view.to_dict(),
        "search_query": search_query,
    }


async def get_project(
    project_id: UUID,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    project = await ProjectService(db, settings).get_project(project_id)
    return ProjectDetail.model_validate(project).model_dump(mode="json")


async def create_project(
    body: ProjectWrite,
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    project, outcome = await ProjectService(db, settings).create_project(identity, body)
    return with_flash(
        {
            "project": ProjectDetail.model_validate(project).model_dump(mode="json"),
            "tags": _tags_outcome(outcome),
        },
        FlashLevel.SUCCESS,
        "Project was added successfully!",
    )


async def update_project(
    project_id: UUID,
    body: ProjectWrite,
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    project, outcome = await ProjectService(db, settings).update_project(
        identity, project_id, body,
    )
    return with_flash(
        {
            "project": ProjectDetail.model_validate(project).model_dump(mode="json"),
            "tags": _tags_outcome(outcome),
        },
        FlashLevel.SUCCESS,
        "Project was updated successfully!",
    )


async def delete_project(
    project_id: UUID,
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    await ProjectService(db, settings).delete_project(identity, project_id)
    return with_flash(
        {"deleted": str(project_id)}, FlashLevel.SUCCESS, "Project deleted successfully!",
    )


async def add_review(
    project_id: UUID,
    body: ReviewCreate,
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    project = await ProjectService(db, settings).add_review(identity, project_id, body)
    return with_flash(
        {"project": ProjectDetail.model_validate(project).model_dump(mode="json")},
        FlashLevel.SUCCESS,
        "Your review was successfully submitted!",
    )
