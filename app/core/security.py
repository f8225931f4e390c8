"""Password hashing and JWT creation/verification for authentication."""

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import bcrypt
import jwt

from app.core.config import settings
from app.core.errors import ConfigurationError

if TYPE_CHECKING:
    from app.core.config import Settings

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

# Tokens are always HMAC-SHA256 signed with the shared secret.
JWT_ALGORITHM = "HS256"

ROLE_ADMIN = "Admin"
ROLE_USER = "User"

# Min/max lengths for username and password validation.
USERNAME_MIN_LEN = 1
USERNAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def role_for(is_admin: bool) -> str:
    """Map the stored admin flag to the role claim."""
    return ROLE_ADMIN if is_admin else ROLE_USER


def ensure_signing_key(config: "Settings") -> None:
    """Fail fast when JWT_SECRET is unset or blank. Called once at startup."""
    secret = config.JWT_SECRET.get_secret_value() if config.JWT_SECRET is not None else ""
    if not secret.strip():
        raise ConfigurationError("JWT_SECRET must be set and non-empty")


def _signing_key() -> str:
    if settings.JWT_SECRET is None:
        raise ConfigurationError("JWT_SECRET must be set and non-empty")
    return settings.JWT_SECRET.get_secret_value()


def create_access_token(sub: str, username: str, role: str) -> str:
    """Create a JWT access token with sub (user id), name, role, iss, aud, iat and exp."""
    now = datetime.now(UTC)
    expire = now + timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "sub": str(sub),
        "name": username,
        "role": role,
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
        "exp": expire,
        "iat": now,
    }
    secret = _signing_key()
    return jwt.encode(
        payload,
        secret,
        algorithm=JWT_ALGORITHM,
    )


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and validate JWT; return payload (sub, name, role, iss, aud, exp, iat).
    Raises jwt.PyJWTError on invalid, expired or foreign (issuer/audience) token.
    """
    secret = _signing_key()
    return jwt.decode(
        token,
        secret,
        algorithms=[JWT_ALGORITHM],
        audience=settings.JWT_AUDIENCE,
        issuer=settings.JWT_ISSUER,
        options={"require": ["sub", "exp", "iat"]},
    )
