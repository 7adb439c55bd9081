"""Auth Use Cases: registration, login, and access-token to Identity resolution.

Invariants:
    - Registration creates User and Profile together; a failed profile insert deletes the user
    - A duplicate username or email is a ConflictError, whether caught by lookup or by the unique index
    - Login failures never reveal whether the username exists
    - resolve_identity returns None for any invalid/expired token or vanished user
"""

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.core.domain_types import ProfileId, UserId
from app.core.errors import (
    AuthenticationError, ConflictError, ResourceNotFoundError, ValidationError,
)
from app.core.identity import Identity
from app.core.repository_protocols import ProfileRepository, UserRepository
from app.infrastructure.security import (
    create_access_token, decode_access_token, hash_password, verify_password,
)
from app.infrastructure.user_repository import SQLProfileRepository, SQLUserRepository
from app.models.profile import Profile
from app.models.user import User
from app.schemas.auth import LoginRequest, RegisterRequest, TokenResponse

logger = logging.getLogger(__name__)

_BAD_CREDENTIALS = "Username or password is incorrect"


class AuthService:
    """Account creation and credential checks."""

    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.users: UserRepository = SQLUserRepository(db)
        self.profiles: ProfileRepository = SQLProfileRepository(db)
        self.settings = settings

    async def register(self, data: RegisterRequest) -> TokenResponse:
        if data.password != data.password_confirm:
            raise ValidationError("Passwords do not match", "password_confirm")
        if await self.users.find_by_username_or_email(data.username, data.email):
            raise ConflictError("Username or email already exists")

        user = User(
            username=data.username,
            email=data.email,
            password_hash=hash_password(data.password),
        )
        try:
            await self.users.create(user)
        except IntegrityError:
            await self.db.rollback()
            logger.warning(f"Registration lost a uniqueness race: {data.username}")
            raise ConflictError("Username or email already exists")
        user_id = user.id

        profile = Profile(
            user_id=user_id,
            name=data.username,
            email=data.email,
            username=data.username,
            profile_image=self.settings.default_profile_image,
        )
        try:
            await self.profiles.create(profile)
        except SQLAlchemyError as e:
            logger.error(
                f"Profile creation failed, removing user {user_id}: {e}",
                extra={"user_id": user_id},
            )
            await self.db.rollback()
            await self.users.delete(user_id)
            raise

        logger.info(f"User registered: {user.username}", extra={"user_id": user.id})
        return self._token_for(user.id, profile.id)

    async def login(self, data: LoginRequest) -> TokenResponse:
        user = await self.users.find_by_username(data.username)
        if user is None or not verify_password(data.password, user.password_hash):
            raise AuthenticationError(_BAD_CREDENTIALS)
        profile = await self.profiles.find_by_user_id(user.id)
        if profile is None:
            raise ResourceNotFoundError("Profile", f"user:{user.id}")
        logger.info(f"User logged in: {user.username}", extra={"user_id": user.id})
        return self._token_for(user.id, profile.id)

    async def resolve_identity(self, token: str) -> Identity | None:
        payload = decode_access_token(token, self.settings.secret_key)
        if not payload or "sub" not in payload:
            return None
        try:
            user_id = UUID(payload["sub"])
        except ValueError:
            return None
        user = await self.users.find_by_id(user_id)
        if user is None:
            return None
        profile = await self.profiles.find_by_user_id(user_id)
        if profile is None:
            return None
        return Identity(
            user_id=UserId(user.id),
            profile_id=ProfileId(profile.id),
            username=user.username,
        )

    def _token_for(self, user_id: UUID, profile_id: UUID) -> TokenResponse:
        token = create_access_token(
            str(user_id),
            self.settings.secret_key,
            self.settings.access_token_ttl_minutes,
        )
        return TokenResponse(
            access_token=token, user_id=user_id, profile_id=profile_id,
        )
