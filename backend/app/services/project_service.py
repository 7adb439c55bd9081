"""Project Use Cases: listing, owner-only mutation, tag reconciliation, reviews.

Invariants:
    - Only the owning profile edits or deletes a project (PermissionDeniedError otherwise)
    - The project row is committed before tags are reconciled; tag trouble never fails the call
    - Creation reconciles tags in CREATE mode, update in REPLACE mode
    - An update without a tags field leaves the tag set untouched
    - Listing counts first, then fetches the clamped page
    - Returned projects are re-read after mutation so tags/reviews reflect the database
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.core.domain_types import ReconcileMode
from app.core.errors import (
    ConflictError, PermissionDeniedError, ResourceNotFoundError,
    TagPersistenceError, ValidationError,
)
from app.core.identity import Identity
from app.core.pagination import PaginationView, paginate
from app.core.repository_protocols import ProjectRepository, ReviewRepository
from app.core.tag_names import parse_tag_names
from app.core.votes import compute_vote_tally
from app.infrastructure.project_repository import (
    SQLProjectRepository, SQLReviewRepository,
)
from app.models.project import Project
from app.models.review import Review
from app.schemas.project import ProjectWrite, ReviewCreate
from app.services.tag_reconciler import TagReconciliation, reconcile_tags

logger = logging.getLogger(__name__)


class ProjectService:
    """Project use cases bound to one request's DB session."""

    def __init__(self, db: AsyncSession, settings: Settings):
        self.projects: ProjectRepository = SQLProjectRepository(db)
        self.reviews: ReviewRepository = SQLReviewRepository(db)
        self.settings = settings

    async def list_projects(
        self, search_query: str, page: int,
    ) -> tuple[list[Project], PaginationView]:
        page_size = self.settings.projects_page_size
        total = await self.projects.count(search_query)
        view = paginate(page, total, page_size)
        projects = await self.projects.find_all(
            search_query, view.current_page, page_size,
        )
        return projects, view

    async def get_project(self, project_id: UUID) -> Project:
        project = await self.projects.find_by_id(project_id)
        if project is None:
            raise ResourceNotFoundError("Project", str(project_id))
        return project

    async def _get_owned(self, identity: Identity, project_id: UUID, action: str) -> Project:
        project = await self.get_project(project_id)
        if not identity.owns(project.owner_id):
            logger.warning(
                f"Profile {identity.profile_id} tried to {action} project {project_id}",
                extra={"profile_id": identity.profile_id, "project_id": project_id},
            )
            raise PermissionDeniedError(action, "Project")
        return project

    async def create_project(
        self, identity: Identity, data: ProjectWrite,
    ) -> tuple[Project, TagReconciliation]:
        project = Project(
            owner_id=identity.profile_id,
            title=data.title,
            description=data.description,
            featured_image=data.featured_image or self.settings.default_project_image,
            demo_link=data.demo_link,
            source_link=data.source_link,
        )
        await self.projects.create(project)
        logger.info(
            f"Project created: {project.id}",
            extra={"project_id": project.id, "profile_id": identity.profile_id},
        )
        outcome = await self._apply_tags(project.id, data.tags, ReconcileMode.CREATE)
        return await self.get_project(project.id), outcome

    async def update_project(
        self, identity: Identity, project_id: UUID, data: ProjectWrite,
    ) -> tuple[Project, TagReconciliation]:
        project = await self._get_owned(identity, project_id, "edit")
        project.title = data.title
        project.description = data.description
        project.demo_link = data.demo_link
        project.source_link = data.source_link
        if data.featured_image:
            project.featured_image = data.featured_image
        await self.projects.update(project)
        if data.tags is None:
            outcome = TagReconciliation()
        else:
            outcome = await self._apply_tags(project_id, data.tags, ReconcileMode.REPLACE)
        return await self.get_project(project_id), outcome

    async def delete_project(self, identity: Identity, project_id: UUID) -> None:
        await self._get_owned(identity, project_id, "delete")
        await self.projects.delete(project_id)
        logger.info(
            f"Project deleted: {project_id}",
            extra={"project_id": project_id, "profile_id": identity.profile_id},
        )

    async def add_review(
        self, identity: Identity, project_id: UUID, data: ReviewCreate,
    ) -> Project:
        project = await self.get_project(project_id)
        if identity.owns(project.owner_id):
            raise ValidationError("You can't review your own project", "project_id")
        if await self.reviews.exists_for(identity.profile_id, project_id):
            raise ConflictError("You have already reviewed this project")

        await self.reviews.create(Review(
            project_id=project_id,
            owner_id=identity.profile_id,
            value=data.value.value,
            body=data.body,
        ))
        vote_total, vote_ratio = compute_vote_tally(
            await self.reviews.values_for(project_id),
        )
        await self.projects.update_votes(project_id, vote_total, vote_ratio)
        return await self.get_project(project_id)

    async def _apply_tags(
        self, project_id: UUID, tags: str | list[str] | None, mode: ReconcileMode,
    ) -> TagReconciliation:
        try:
            return await reconcile_tags(self.projects, project_id, tags, mode)
        except TagPersistenceError as e:
            logger.error(
                f"Tag store unavailable for project {project_id}: {e.message}",
                extra={"project_id": project_id, "error_code": e.code},
            )
            names = parse_tag_names(tags)
            return TagReconciliation(
                attached=list(e.completed),
                failed=[n for n in names if n not in e.completed],
            )
