"""FastAPI authentication dependencies."""

from __future__ import annotations

import jwt
from fastapi import Depends, HTTPException, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from grantees.auth.jwt import verify_token
from grantees.auth.service import get_user_by_id
from grantees.database import get_session
from grantees.db.models import User
from grantees.functions.errors import FunctionError

_bearer = HTTPBearer(auto_error=False)


class AuthenticationError(Exception):
    """Bearer authentication failed."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


async def authenticate(
    credentials: HTTPAuthorizationCredentials | None,
    db: AsyncSession,
) -> User:
    """
    Resolve the bearer token to a User.

    Raises:
        AuthenticationError: 401 when the token is missing, invalid, or names
            an unknown user; 403 when the user is banned.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError(401, "Unauthorized")
    try:
        payload = verify_token(credentials.credentials, expected_type="access")
        user_id = int(payload["sub"])
    except (jwt.InvalidTokenError, KeyError, ValueError) as e:
        raise AuthenticationError(401, "Invalid token") from e

    user = await get_user_by_id(db, user_id)
    if user is None:
        raise AuthenticationError(401, "Invalid token")
    if user.is_banned:
        raise AuthenticationError(403, "Account is banned")
    return user


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Security(_bearer),
    db: AsyncSession = Depends(get_session),
) -> User:
    """Authenticated user for REST endpoints ({"detail": ...} errors)."""
    try:
        return await authenticate(credentials, db)
    except AuthenticationError as e:
        raise HTTPException(
            status_code=e.status_code,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"} if e.status_code == 401 else None,  # noqa: PLR2004
        ) from e


async def get_function_user(
    credentials: HTTPAuthorizationCredentials | None = Security(_bearer),
    db: AsyncSession = Depends(get_session),
) -> User:
    """Authenticated user for function endpoints ({"error": ...} errors)."""
    try:
        return await authenticate(credentials, db)
    except AuthenticationError as e:
        raise FunctionError(e.status_code, e.message) from e
