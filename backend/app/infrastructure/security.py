"""Credentials: argon2 password hashing and signed access tokens.

Invariants:
    - Plain passwords are never stored or logged
    - Access tokens are HS256 JWTs with "sub" = user id and an "exp" claim
    - decode_access_token returns None for any invalid/expired token (never raises)
"""

from datetime import datetime, timedelta, timezone
from typing import Any

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerifyMismatchError
from jose import JWTError, jwt

ALGORITHM = "HS256"

_hasher = PasswordHasher()


def hash_password(password: str) -> str:
    return _hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return _hasher.verify(password_hash, password)
    except (VerifyMismatchError, InvalidHashError):
        return False


def create_access_token(
    subject: str,
    secret_key: str,
    ttl_minutes: int,
    now_utc: datetime | None = None,
) -> str:
    """Create a signed access token for subject (a user id)."""
    current_time = now_utc if now_utc is not None else datetime.now(timezone.utc)
    claims = {
        "sub": subject,
        "iat": current_time,
        "exp": current_time + timedelta(minutes=ttl_minutes),
    }
    return jwt.encode(claims, secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str, secret_key: str) -> dict[str, Any] | None:
    try:
        return jwt.decode(token, secret_key, algorithms=[ALGORITHM])
    except JWTError:
        return None
