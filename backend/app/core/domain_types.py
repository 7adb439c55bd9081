"""Domain Types: rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, ProfileId, ProjectId, TagId, SkillId, MessageId wrap UUIDs
    - All valid states encoded as Enums, no raw string matching
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
ProfileId = NewType("ProfileId", UUID)
ProjectId = NewType("ProjectId", UUID)
TagId = NewType("TagId", UUID)
SkillId = NewType("SkillId", UUID)
MessageId = NewType("MessageId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class ReconcileMode(str, Enum):
    """How a tag list is applied to a project."""
    CREATE = "create"     # add to whatever is attached
    REPLACE = "replace"   # clear associations first


class ReviewValue(str, Enum):
    """A review's vote."""
    UP = "up"
    DOWN = "down"


class FlashLevel(str, Enum):
    """One-time notice levels returned with mutating responses."""
    SUCCESS = "success"
    INFO = "info"
    ERROR = "error"


class RouteAuth(str, Enum):
    """Authentication requirement of a route in the route table."""
    PUBLIC = "public"
    OPTIONAL = "optional"
    REQUIRED = "required"
