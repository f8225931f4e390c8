"""Pydantic request/response schemas."""

from app.schemas.auth import CurrentUser, LoginRequest, TokenResponse
from app.schemas.export import ExportRequest
from app.schemas.health import HealthResponse
from app.schemas.user import UserRead, UserWrite

__all__ = [
    "CurrentUser",
    "ExportRequest",
    "HealthResponse",
    "LoginRequest",
    "TokenResponse",
    "UserRead",
    "UserWrite",
]
