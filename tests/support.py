"""Shared helpers for tests that need a populated user store."""

from app.core.database import SessionLocal, engine
from app.models import Base, User
from app.services.auth import issue_token
from app.services.users import create_user
from app.schemas.user import UserWrite

ADMIN_USERNAME = "shubham@gmail.com"
ADMIN_PASSWORD = "shubham@123"
USER_USERNAME = "rahul@gmail.com"
USER_PASSWORD = "rahul@123"


def reset_database() -> None:
    """Drop and recreate all tables."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


def add_user(
    username: str,
    password: str = "password123",
    *,
    is_admin: bool = False,
    age: int = 30,
    hobbies: list[str] | None = None,
) -> User:
    """Insert a user through the store service; returned instance is detached but loaded."""
    db = SessionLocal()
    try:
        return create_user(
            db,
            UserWrite(
                username=username,
                password=password,
                is_admin=is_admin,
                age=age,
                hobbies=hobbies if hobbies is not None else [],
            ),
        )
    finally:
        db.close()


def seed_users() -> tuple[User, User]:
    """Reset the store and insert one admin (age 27) and one regular user (age 30)."""
    reset_database()
    admin = add_user(
        ADMIN_USERNAME, ADMIN_PASSWORD, is_admin=True, age=27, hobbies=["Reading", "Gaming"]
    )
    regular = add_user(
        USER_USERNAME, USER_PASSWORD, is_admin=False, age=30, hobbies=["Traveling", "Photography"]
    )
    return admin, regular


def bearer(user: User) -> dict[str, str]:
    """Authorization header carrying a freshly issued token for user."""
    return {"Authorization": f"Bearer {issue_token(user)}"}
