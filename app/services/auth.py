"""Credential check and token issuance for the login endpoint."""

from sqlalchemy.orm import Session

from app.core.security import create_access_token, role_for, verify_password
from app.models import User


def authenticate(db: Session, username: str, password: str) -> User | None:
    """
    Return the user whose username matches exactly (case-sensitive) and whose
    password verifies against the stored hash; None otherwise.
    """
    user = db.query(User).filter(User.username == username).first()
    if user is None:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def issue_token(user: User) -> str:
    """Signed token for user: sub=id, name=username, role from the admin flag."""
    return create_access_token(
        sub=user.id,
        username=user.username,
        role=role_for(bool(user.is_admin)),
    )
