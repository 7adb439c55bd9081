"""Route Table: every HTTP endpoint declared in one data structure.

Invariants:
    - ROUTES is the single registry; build_router is the only place routes are added
    - RouteAuth.REQUIRED attaches get_identity, so an anonymous caller gets 401
      before the handler or its body validation runs
    - RouteAuth.OPTIONAL resolves the identity when a token is present
    - Paths are relative to API_PREFIX
"""

from dataclasses import dataclass, field
from typing import Callable

from fastapi import APIRouter, Depends, status

from app.api.deps import get_identity, get_optional_identity
from app.api.routes import account, auth, health, messages, profiles, projects
from app.core.domain_types import RouteAuth

API_PREFIX = "/api/v1"


@dataclass(frozen=True)
class Route:
    method: str
    path: str
    endpoint: Callable
    name: str
    status_code: int = status.HTTP_200_OK
    auth: RouteAuth = RouteAuth.PUBLIC
    tags: tuple[str, ...] = field(default=())


ROUTES: tuple[Route, ...] = (
    # Health
    Route("GET", "/health/", health.health_check, "health_check", tags=("health",)),
    Route("GET", "/health/ready", health.readiness_check, "readiness_check", tags=("health",)),
    # Auth
    Route("POST", "/auth/register", auth.register, "register",
          status.HTTP_201_CREATED, tags=("auth",)),
    Route("POST", "/auth/login", auth.login, "login", tags=("auth",)),
    # Projects
    Route("GET", "/projects", projects.list_projects, "list_projects", tags=("projects",)),
    Route("POST", "/projects", projects.create_project, "create_project",
          status.HTTP_201_CREATED, RouteAuth.REQUIRED, ("projects",)),
    Route("GET", "/projects/{project_id}", projects.get_project, "get_project",
          tags=("projects",)),
    Route("PUT", "/projects/{project_id}", projects.update_project, "update_project",
          auth=RouteAuth.REQUIRED, tags=("projects",)),
    Route("DELETE", "/projects/{project_id}", projects.delete_project, "delete_project",
          auth=RouteAuth.REQUIRED, tags=("projects",)),
    Route("POST", "/projects/{project_id}/reviews", projects.add_review, "add_review",
          status.HTTP_201_CREATED, RouteAuth.REQUIRED, ("projects",)),
    # Profiles
    Route("GET", "/profiles", profiles.list_profiles, "list_profiles", tags=("profiles",)),
    Route("GET", "/profiles/{profile_id}", profiles.get_profile, "get_profile",
          tags=("profiles",)),
    Route("POST", "/profiles/{profile_id}/messages", messages.send_message, "send_message",
          status.HTTP_201_CREATED, RouteAuth.OPTIONAL, ("messages",)),
    # Account
    Route("GET", "/account", account.get_account, "get_account",
          auth=RouteAuth.REQUIRED, tags=("account",)),
    Route("PUT", "/account", account.update_account, "update_account",
          auth=RouteAuth.REQUIRED, tags=("account",)),
    Route("POST", "/account/skills", account.create_skill, "create_skill",
          status.HTTP_201_CREATED, RouteAuth.REQUIRED, ("account",)),
    Route("PUT", "/account/skills/{skill_id}", account.update_skill, "update_skill",
          auth=RouteAuth.REQUIRED, tags=("account",)),
    Route("DELETE", "/account/skills/{skill_id}", account.delete_skill, "delete_skill",
          auth=RouteAuth.REQUIRED, tags=("account",)),
    # Inbox
    Route("GET", "/inbox", messages.inbox, "inbox",
          auth=RouteAuth.REQUIRED, tags=("messages",)),
    Route("GET", "/inbox/{message_id}", messages.read_message, "read_message",
          auth=RouteAuth.REQUIRED, tags=("messages",)),
)

_AUTH_DEPENDENCIES = {
    RouteAuth.PUBLIC: [],
    RouteAuth.OPTIONAL: [Depends(get_optional_identity)],
    RouteAuth.REQUIRED: [Depends(get_identity)],
}


def build_router(routes: tuple[Route, ...] = ROUTES, prefix: str = API_PREFIX) -> APIRouter:
    """Register every route of the table on a fresh APIRouter."""
    router = APIRouter(prefix=prefix)
    for route in routes:
        router.add_api_route(
            route.path,
            route.endpoint,
            methods=[route.method],
            name=route.name,
            status_code=route.status_code,
            dependencies=_AUTH_DEPENDENCIES[route.auth],
            tags=list(route.tags),
        )
    return router
