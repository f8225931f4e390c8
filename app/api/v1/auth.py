"""JWT login endpoint."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.errors import AuthenticationError
from app.schemas.auth import LoginRequest, TokenResponse
from app.services.auth import authenticate, issue_token

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("", response_model=TokenResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> TokenResponse:
    """
    Authenticate with username and password; returns a JWT valid for one hour.
    Include the token in the Authorization header as: Bearer <token>
    """
    user = authenticate(db, body.username, body.password)
    if user is None:
        logger.info("Login rejected", extra={"login_status": "failure"})
        raise AuthenticationError("Invalid username or password.")
    logger.info("Login succeeded", extra={"login_status": "success", "user_id": user.id})
    return TokenResponse(token=issue_token(user), token_type="bearer")
