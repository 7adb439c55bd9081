"""Tag reconciliation: idempotent find-or-create, REPLACE semantics, failure isolation.

Invariants:
    - Reconciling the same list twice leaves one association per distinct name
    - REPLACE with an empty list removes every association, never Tag rows
    - A name created by someone else between lookup and insert converges on one row
    - One failing tag is skipped; the others are still attached
    - An unreachable store raises TagPersistenceError without undoing earlier tags
"""

from types import SimpleNamespace
from uuid import uuid4

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, OperationalError

from app.core.domain_types import ReconcileMode
from app.core.errors import TagPersistenceError
from app.infrastructure import project_repository
from app.infrastructure.project_repository import SQLProjectRepository
from app.models.tag import Tag
from app.services.tag_reconciler import reconcile_tags


async def _tag_count(db) -> int:
    result = await db.execute(select(func.count()).select_from(Tag))
    return result.scalar_one()


async def test_create_attaches_distinct_names(test_db, seed_project):
    repo = SQLProjectRepository(test_db)
    outcome = await reconcile_tags(repo, seed_project.id, "Python, Django, Python")

    assert outcome.attached == ["Python", "Django"]
    assert outcome.failed == []
    assert await repo.tag_names_for(seed_project.id) == ["Django", "Python"]


async def test_reconciling_twice_is_idempotent(test_db, seed_project):
    repo = SQLProjectRepository(test_db)
    await reconcile_tags(repo, seed_project.id, "react, css")
    await reconcile_tags(repo, seed_project.id, "react, css")

    assert await repo.tag_names_for(seed_project.id) == ["css", "react"]
    assert await _tag_count(test_db) == 2


async def test_names_are_case_sensitive(test_db, seed_project):
    repo = SQLProjectRepository(test_db)
    await reconcile_tags(repo, seed_project.id, "Go, go")
    assert sorted(await repo.tag_names_for(seed_project.id)) == ["Go", "go"]


async def test_replace_swaps_the_tag_set(test_db, seed_project):
    repo = SQLProjectRepository(test_db)
    await reconcile_tags(repo, seed_project.id, "a, b")
    outcome = await reconcile_tags(repo, seed_project.id, "b, c", ReconcileMode.REPLACE)

    assert outcome.cleared is True
    assert await repo.tag_names_for(seed_project.id) == ["b", "c"]
    # "a" is orphaned, not deleted
    assert await _tag_count(test_db) == 3


async def test_replace_with_empty_list_clears_everything(test_db, seed_project):
    repo = SQLProjectRepository(test_db)
    await reconcile_tags(repo, seed_project.id, "a, b")
    outcome = await reconcile_tags(repo, seed_project.id, "", ReconcileMode.REPLACE)

    assert outcome.attached == []
    assert await repo.tag_names_for(seed_project.id) == []
    assert await _tag_count(test_db) == 2


async def test_create_mode_keeps_existing_tags(test_db, seed_project):
    repo = SQLProjectRepository(test_db)
    await reconcile_tags(repo, seed_project.id, "a")
    await reconcile_tags(repo, seed_project.id, "b", ReconcileMode.CREATE)
    assert await repo.tag_names_for(seed_project.id) == ["a", "b"]


async def test_racing_creator_converges_on_one_row(
    test_session_factory, seed_project, monkeypatch,
):
    """The second writer misses the tag on lookup but the insert still converges."""
    async with test_session_factory() as first:
        winner = await SQLProjectRepository(first).find_or_create_tag("rust")

    async with test_session_factory() as second:
        repo = SQLProjectRepository(second)
        real_lookup = repo.find_tag_by_name
        calls = []

        async def stale_lookup(name):
            calls.append(name)
            if len(calls) == 1:
                return None
            return await real_lookup(name)

        monkeypatch.setattr(repo, "find_tag_by_name", stale_lookup)
        loser = await repo.find_or_create_tag("rust")

        assert loser.id == winner.id
        assert len(calls) == 2
        assert await _tag_count(second) == 1


async def test_dialect_without_conflict_insert_skips_tags(
    test_db, seed_project, monkeypatch,
):
    repo = SQLProjectRepository(test_db)
    await reconcile_tags(repo, seed_project.id, "known")
    monkeypatch.delitem(project_repository._CONFLICT_INSERTS, "sqlite")

    outcome = await reconcile_tags(repo, seed_project.id, "known, fresh")

    assert outcome.attached == []
    assert outcome.failed == ["known", "fresh"]
    assert await repo.tag_names_for(seed_project.id) == ["known"]


# ─── Failure isolation (in-memory repository) ──────────────────


class FakeTagRepo:
    """ProjectRepository stand-in that can fail on chosen tag names."""

    def __init__(self, failures: dict | None = None):
        self.failures = failures or {}
        self.tags: dict[str, SimpleNamespace] = {}
        self.links: set = set()
        self.rollbacks = 0

    async def find_or_create_tag(self, name):
        if name in self.failures:
            raise self.failures[name]
        return self.tags.setdefault(name, SimpleNamespace(id=uuid4(), name=name))

    async def associate_tag(self, project_id, tag_id):
        self.links.add((project_id, tag_id))

    async def clear_tags(self, project_id):
        self.links = {link for link in self.links if link[0] != project_id}

    async def rollback(self):
        self.rollbacks += 1


def _integrity_error():
    return IntegrityError("INSERT INTO tags", {}, Exception("constraint failed"))


def _operational_error():
    return OperationalError("INSERT INTO tags", {}, Exception("connection refused"))


async def test_failing_tag_is_skipped_and_others_attached():
    repo = FakeTagRepo({"bad": _integrity_error()})
    project_id = uuid4()

    outcome = await reconcile_tags(repo, project_id, "good, bad, fine")

    assert outcome.attached == ["good", "fine"]
    assert outcome.failed == ["bad"]
    assert repo.rollbacks == 1
    assert len(repo.links) == 2


async def test_unreachable_store_raises_and_keeps_completed():
    repo = FakeTagRepo({"second": _operational_error()})
    project_id = uuid4()

    with pytest.raises(TagPersistenceError) as exc_info:
        await reconcile_tags(repo, project_id, "first, second, third")

    assert exc_info.value.completed == ["first"]
    assert len(repo.links) == 1


async def test_failed_clear_still_attaches_new_tags():
    class ClearFails(FakeTagRepo):
        async def clear_tags(self, project_id):
            raise _integrity_error()

    repo = ClearFails()
    outcome = await reconcile_tags(repo, uuid4(), "x", ReconcileMode.REPLACE)

    assert outcome.cleared is False
    assert outcome.attached == ["x"]
