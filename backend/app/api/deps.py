"""API Dependencies: settings, DB session and caller identity for route handlers.

Invariants:
    - The bearer token is optional at the transport level (auto_error=False);
      get_identity turns a missing/invalid token into AuthenticationError (401)
    - Identity is resolved at most once per request (FastAPI dependency cache)
"""

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.core.errors import AuthenticationError
from app.core.identity import Identity
from app.infrastructure.database import get_db
from app.services.auth_service import AuthService

oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl="/api/v1/auth/login", auto_error=False,
)


async def get_optional_identity(
    token: str | None = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> Identity | None:
    """Caller identity, or None for anonymous/invalid tokens."""
    if not token:
        return None
    return await AuthService(db, settings).resolve_identity(token)


async def get_identity(
    identity: Identity | None = Depends(get_optional_identity),
) -> Identity:
    if identity is None:
        raise AuthenticationError()
    return identity
