"""ORM model for application users (CRUD records, auth and RBAC)."""

import uuid

from sqlalchemy import JSON, Boolean, Column, Integer, String
from sqlalchemy.dialects.postgresql import JSONB

from app.models.base import Base


def _new_user_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    """
    User account: login identity, admin flag and profile fields.

    id is a server-generated UUID string, assigned once on insert.
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_new_user_id)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    is_admin = Column(Boolean, nullable=False, default=False)
    age = Column(Integer, nullable=False)
    hobbies = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False, default=list)
