"""Identity Context: the authenticated caller, passed explicitly into use cases.

Invariants:
    - Built once per request by the API layer from a verified access token
    - Use cases never look up the caller from globals or request state
    - profile_id is the ownership key for projects, skills and inbox messages
"""

from dataclasses import dataclass

from app.core.domain_types import ProfileId, UserId


@dataclass(frozen=True)
class Identity:
    """Authenticated caller."""
    user_id: UserId
    profile_id: ProfileId
    username: str

    def owns(self, owner_profile_id) -> bool:
        return self.profile_id == owner_profile_id
