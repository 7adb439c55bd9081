"""ORM Models: SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - All models imported here so string-based relationship() references
      resolve before any query runs
"""

from app.models.project_tag import project_tags  # noqa: F401
from app.models.user import User  # noqa: F401
from app.models.profile import Profile  # noqa: F401
from app.models.skill import Skill  # noqa: F401
from app.models.tag import Tag  # noqa: F401
from app.models.project import Project  # noqa: F401
from app.models.review import Review  # noqa: F401
from app.models.message import Message  # noqa: F401
