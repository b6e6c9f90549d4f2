from datetime import datetime, timedelta, timezone

import bcrypt
from jose import jwt

from attendly.core.config import settings

ACCESS_TOKEN_TYPE = "access"


def hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode(), bcrypt.gensalt()).decode()


def verify_password(plain: str, hashed: str) -> bool:
    # An empty hash never matches
    if not hashed:
        return False
    return bcrypt.checkpw(plain.encode(), hashed.encode())


def create_access_token(
    subject: str, role: str | None = None, expires_delta: timedelta | None = None
) -> str:
    """Signed token identifying an employee; `role` is informational only."""
    issued = datetime.now(timezone.utc)
    lifetime = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    claims = {"sub": subject, "type": ACCESS_TOKEN_TYPE, "iat": issued, "exp": issued + lifetime}
    if role:
        claims["role"] = role
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_token(token: str) -> dict:
    """Decode and validate JWT. Raises JWTError on failure."""
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
