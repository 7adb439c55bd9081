"""Auth Routes: registration and login, both answering with a bearer token."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.core.domain_types import FlashLevel
from app.core.flash import with_flash
from app.infrastructure.database import get_db
from app.schemas.auth import LoginRequest, RegisterRequest
from app.services.auth_service import AuthService


async def register(
    body: RegisterRequest,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    token = await AuthService(db, settings).register(body)
    return with_flash(
        token.model_dump(mode="json"), FlashLevel.SUCCESS, "User account was created!",
    )


async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    token = await AuthService(db, settings).login(body)
    return with_flash(
        token.model_dump(mode="json"), FlashLevel.SUCCESS, "User was logged in!",
    )
