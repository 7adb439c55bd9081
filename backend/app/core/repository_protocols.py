"""Boundary Protocols: contracts between the use-case layer and persistence.

Invariants:
    - Services depend on these Protocols, never on a concrete repository class
    - Every query method returns fully-populated aggregates (no lazy loading afterwards)
    - find_or_create_tag and associate_tag are idempotent at the storage layer

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async methods because implementations do IO
"""

from typing import Protocol

from app.core.domain_types import (
    MessageId, ProfileId, ProjectId, SkillId, TagId, UserId,
)


class ProjectRepository(Protocol):
    """Contract for projects, tags and the project-tag association."""
    async def count(self, search_query: str) -> int: ...
    async def find_all(
        self, search_query: str, page: int, page_size: int,
    ) -> list: ...
    async def find_by_id(self, project_id: ProjectId): ...
    async def create(self, project) -> None: ...
    async def update(self, project) -> None: ...
    async def delete(self, project_id: ProjectId) -> None: ...
    async def update_votes(
        self, project_id: ProjectId, vote_total: int, vote_ratio: int,
    ) -> None: ...
    async def find_or_create_tag(self, name: str): ...
    async def associate_tag(self, project_id: ProjectId, tag_id: TagId) -> None: ...
    async def clear_tags(self, project_id: ProjectId) -> None: ...
    async def rollback(self) -> None: ...


class ReviewRepository(Protocol):
    """Contract for project reviews."""
    async def create(self, review) -> None: ...
    async def exists_for(
        self, owner_id: ProfileId, project_id: ProjectId,
    ) -> bool: ...
    async def values_for(self, project_id: ProjectId) -> list[str]: ...


class UserRepository(Protocol):
    """Contract for login accounts."""
    async def create(self, user) -> None: ...
    async def find_by_id(self, user_id: UserId): ...
    async def find_by_username(self, username: str): ...
    async def find_by_username_or_email(self, username: str, email: str): ...
    async def update(self, user) -> None: ...
    async def delete(self, user_id: UserId) -> None: ...


class ProfileRepository(Protocol):
    """Contract for public profiles."""
    async def count(self, search_query: str) -> int: ...
    async def find_all(
        self, search_query: str, page: int, page_size: int,
    ) -> list: ...
    async def find_by_id(self, profile_id: ProfileId): ...
    async def find_by_user_id(self, user_id: UserId): ...
    async def create(self, profile) -> None: ...
    async def update(self, profile) -> None: ...


class SkillRepository(Protocol):
    """Contract for profile skills."""
    async def create(self, skill) -> None: ...
    async def find_owned(self, skill_id: SkillId, owner_id: ProfileId): ...
    async def update(self, skill) -> None: ...
    async def delete(self, skill_id: SkillId) -> None: ...


class MessageRepository(Protocol):
    """Contract for inbox messages."""
    async def create(self, message) -> None: ...
    async def find_by_recipient(self, recipient_id: ProfileId) -> list: ...
    async def find_for_recipient(
        self, message_id: MessageId, recipient_id: ProfileId,
    ): ...
    async def mark_read(self, message_id: MessageId) -> None: ...
    async def count_unread(self, recipient_id: ProfileId) -> int: ...
