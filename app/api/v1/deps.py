"""Auth dependencies: get_current_user (valid bearer token) and require_admin."""

from typing import Annotated

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.permissions import authorize, is_admin
from app.core.security import decode_access_token
from app.schemas.auth import CurrentUser

security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> CurrentUser:
    """Dependency: require a valid Bearer JWT and return the caller from its claims. Raises 401."""
    if credentials is None:
        raise _unauthorized("Not authenticated")
    try:
        payload = decode_access_token(credentials.credentials)
    except jwt.PyJWTError:
        raise _unauthorized("Invalid or expired token")
    sub = payload.get("sub")
    role = payload.get("role")
    if not sub or not role:
        raise _unauthorized("Invalid token payload")
    return CurrentUser(id=str(sub), username=str(payload.get("name") or ""), role=str(role))


def require_admin(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency: require the Admin role. Raises 403 for other roles."""
    authorize(current_user, None, is_admin)
    return current_user
