"""Request/response schemas for user CRUD endpoints (camelCase on the wire)."""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class UserWrite(_CamelModel):
    """
    Body for POST /users and PUT /users/{id}.

    Any id in the body is ignored; ids are assigned by the server.
    """

    username: str = Field(..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN)
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
    is_admin: bool = False
    age: int = Field(..., ge=0, le=150)
    hobbies: list[str] = Field(...)

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Username is required")
        return v


class UserRead(_CamelModel):
    """User as returned by the API (never includes the password hash)."""

    id: str
    username: str
    is_admin: bool
    age: int
    hobbies: list[str]
