"""User store operations: id parsing, lookups and single-row mutations."""

import logging
import uuid
from collections.abc import Mapping

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, NotFoundError, ValidationError
from app.core.security import hash_password
from app.models import User
from app.schemas.user import UserWrite
from app.services.user_filters import filter_users

logger = logging.getLogger(__name__)


def parse_user_id(raw: str) -> str:
    """Return the canonical UUID string for raw, or raise ValidationError before any store access."""
    try:
        return str(uuid.UUID(raw))
    except (TypeError, ValueError, AttributeError):
        raise ValidationError("Invalid userId format")


def list_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.username).all()


def get_user(db: Session, user_id: str) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError(f"User with ID {user_id} not found")
    return user


def _ensure_username_free(db: Session, username: str, exclude_id: str | None = None) -> None:
    query = db.query(User.id).filter(User.username == username)
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)
    if query.first() is not None:
        raise ConflictError(f"Username '{username}' is already taken")


def _commit_or_conflict(db: Session, username: str) -> None:
    # The unique index still guards against a concurrent insert of the same name
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError(f"Username '{username}' is already taken") from e


def create_user(db: Session, data: UserWrite) -> User:
    """Insert a new user; the id is generated on insert and the password is hashed."""
    _ensure_username_free(db, data.username)
    user = User(
        username=data.username,
        password_hash=hash_password(data.password),
        is_admin=data.is_admin,
        age=data.age,
        hobbies=list(data.hobbies),
    )
    db.add(user)
    _commit_or_conflict(db, data.username)
    db.refresh(user)
    logger.info("User created", extra={"user_id": user.id, "is_admin": user.is_admin})
    return user


def update_user(db: Session, user: User, data: UserWrite) -> User:
    """Overwrite every field except id."""
    _ensure_username_free(db, data.username, exclude_id=user.id)
    user.username = data.username
    user.password_hash = hash_password(data.password)
    user.is_admin = data.is_admin
    user.age = data.age
    user.hobbies = list(data.hobbies)
    _commit_or_conflict(db, data.username)
    db.refresh(user)
    logger.info("User updated", extra={"user_id": user.id})
    return user


def delete_user(db: Session, user: User) -> None:
    user_id = user.id
    db.delete(user)
    db.commit()
    logger.info("User deleted", extra={"user_id": user_id})


def search_users(db: Session, filters: Mapping[str, str]) -> list[User]:
    """Return users matching all supported filters (see user_filters)."""
    query = filter_users(db.query(User), filters)
    return query.order_by(User.username).all()
