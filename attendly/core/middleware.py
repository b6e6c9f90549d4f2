"""
Bearer-token authentication dependencies.

`get_current_user` resolves the caller's `Employee`; `require_role` wraps it
for routes restricted to managers.
"""

import uuid
from typing import Callable

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from attendly.core.security import ACCESS_TOKEN_TYPE, decode_token
from attendly.db.models import Employee
from attendly.db.session import get_db

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authorized, token missing or invalid",
        headers={"WWW-Authenticate": "Bearer"},
    )


def _employee_id_from(token: str) -> uuid.UUID | None:
    """Subject of a valid access token, or None."""
    try:
        payload = decode_token(token)
    except JWTError:
        return None
    if payload.get("type") != ACCESS_TOKEN_TYPE or not payload.get("sub"):
        return None
    try:
        return uuid.UUID(str(payload["sub"]))
    except ValueError:
        return None


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> Employee:
    if credentials is None:
        raise _unauthorized()

    employee_id = _employee_id_from(credentials.credentials)
    employee = await db.get(Employee, employee_id) if employee_id else None
    if employee is None:
        raise _unauthorized()
    return employee


def require_role(*roles: str) -> Callable:
    async def role_checker(current_user: Employee = Depends(get_current_user)) -> Employee:
        if current_user.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied for role '{current_user.role}'",
            )
        return current_user

    return role_checker
