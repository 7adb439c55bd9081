"""Tag Reconciler: applies a free-text tag list to an already-persisted project.

Invariants:
    - Candidates come from parse_tag_names: trimmed, non-empty, distinct, case-sensitive
    - REPLACE clears the project's associations first; Tag rows are never deleted
    - Each tag is resolved with find-or-create, then associated; both steps are idempotent
    - Each tag step commits on its own: a failing tag is rolled back, logged and skipped,
      earlier tags stay attached
    - An unreachable store raises TagPersistenceError; completed associations remain

Design Decisions:
    - Best effort over all-or-nothing: the project itself is committed before
      reconciliation starts and is never unwound because of a tag
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from uuid import UUID

from sqlalchemy.exc import DBAPIError, OperationalError, SQLAlchemyError

from app.core.domain_types import ReconcileMode
from app.core.errors import TagPersistenceError
from app.core.repository_protocols import ProjectRepository
from app.core.tag_names import parse_tag_names

logger = logging.getLogger(__name__)


@dataclass
class TagReconciliation:
    """Outcome of one reconciliation pass."""
    attached: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    cleared: bool = False


def _store_unreachable(exc: SQLAlchemyError) -> bool:
    if isinstance(exc, OperationalError):
        return True
    return isinstance(exc, DBAPIError) and exc.connection_invalidated


class TagReconciler:
    """Find-or-create tags and attach them to one project."""

    def __init__(self, repo: ProjectRepository):
        self.repo = repo

    async def reconcile(
        self,
        project_id: UUID,
        tag_names: str | Iterable[str] | None,
        mode: ReconcileMode = ReconcileMode.CREATE,
    ) -> TagReconciliation:
        names = parse_tag_names(tag_names)
        outcome = TagReconciliation()

        if mode is ReconcileMode.REPLACE:
            outcome.cleared = await self._clear(project_id, outcome)

        for name in names:
            await self._attach(project_id, name, outcome)

        if outcome.failed:
            logger.warning(
                f"Tags skipped for project {project_id}: {', '.join(outcome.failed)}",
                extra={"project_id": project_id},
            )
        return outcome

    async def _clear(self, project_id: UUID, outcome: TagReconciliation) -> bool:
        try:
            await self.repo.clear_tags(project_id)
            return True
        except SQLAlchemyError as e:
            await self._rollback()
            if _store_unreachable(e):
                raise TagPersistenceError(str(e), completed=outcome.attached)
            logger.error(
                f"Failed to clear tags of project {project_id}: {e}",
                extra={"project_id": project_id},
            )
            return False

    async def _attach(
        self, project_id: UUID, name: str, outcome: TagReconciliation,
    ) -> None:
        try:
            tag = await self.repo.find_or_create_tag(name)
            if tag is None:
                outcome.failed.append(name)
                return
            await self.repo.associate_tag(project_id, tag.id)
            outcome.attached.append(name)
        except SQLAlchemyError as e:
            await self._rollback()
            if _store_unreachable(e):
                raise TagPersistenceError(str(e), completed=outcome.attached)
            logger.error(
                f"Failed to attach tag '{name}': {e}",
                extra={"project_id": project_id, "tag_name": name},
            )
            outcome.failed.append(name)

    async def _rollback(self) -> None:
        try:
            await self.repo.rollback()
        except SQLAlchemyError as e:
            logger.error(f"Rollback after tag failure also failed: {e}")


async def reconcile_tags(
    repo: ProjectRepository,
    project_id: UUID,
    tag_names: str | Iterable[str] | None,
    mode: ReconcileMode = ReconcileMode.CREATE,
) -> TagReconciliation:
    """Functional entry point; see TagReconciler.reconcile."""
    return await TagReconciler(repo).reconcile(project_id, tag_names, mode)
