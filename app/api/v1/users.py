"""User CRUD, filtered search and export endpoints."""

import logging
from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from app.api.v1.deps import get_current_user, require_admin
from app.core.config import get_settings
from app.core.database import get_db
from app.core.permissions import authorize, is_admin, is_owner
from app.schemas.auth import CurrentUser
from app.schemas.export import ExportRequest
from app.schemas.user import UserRead, UserWrite
from app.services import users as user_store
from app.services.export import export_users, normalize_format

logger = logging.getLogger(__name__)
router = APIRouter()

GENERIC_ERROR = "An error occurred while processing the request."

# Export footer header is not derived from the rendered document.
EXPORT_PAGE_NUMBER = "1"


@router.get("", response_model=list[UserRead])
def get_all_users(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> list[UserRead]:
    """List all users (admin only)."""
    return [UserRead.model_validate(u) for u in user_store.list_users(db)]


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_user(
    body: UserWrite,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UserRead:
    """Create a user (admin only). The id is generated by the server."""
    return UserRead.model_validate(user_store.create_user(db, body))


@router.post("/search", response_model=list[UserRead])
def search_users(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
    filters: Annotated[dict[str, str], Body()],
) -> list[UserRead]:
    """
    Filter users by supported fields (admin only).

    username: case-insensitive substring; age: exact integer (ignored if not a number).
    Unknown fields are ignored; multiple fields are combined with AND.
    """
    try:
        found = user_store.search_users(db, filters)
    except Exception as e:
        logger.exception("User search failed")
        raise HTTPException(status_code=500, detail=GENERIC_ERROR) from e
    return [UserRead.model_validate(u) for u in found]


@router.post("/export")
def export(
    body: ExportRequest,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    """
    Export users matching the same filters as /search as a PDF or Excel file (admin only).
    """
    fmt = normalize_format(body.format)
    try:
        found = user_store.search_users(db, body.filters)
        exported = export_users(found, fmt, get_settings())
    except Exception as e:
        logger.exception("User export failed", extra={"export_format": fmt})
        raise HTTPException(status_code=500, detail=GENERIC_ERROR) from e

    logger.info(
        "User export completed",
        extra={"export_format": fmt, "row_count": len(found), "byte_count": len(exported.content)},
    )
    return Response(
        content=exported.content,
        media_type=exported.media_type,
        headers={
            "Content-Disposition": f'attachment; filename="{exported.filename}"',
            "Current-Date": datetime.now(UTC).strftime("%Y-%m-%d"),
            "Page-Number": EXPORT_PAGE_NUMBER,
        },
    )


@router.get("/{user_id}", response_model=UserRead)
def get_single_user(
    user_id: str,
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserRead:
    """Fetch one user by id (any authenticated caller)."""
    canonical_id = user_store.parse_user_id(user_id)
    return UserRead.model_validate(user_store.get_user(db, canonical_id))


@router.put("/{user_id}", response_model=UserRead)
def update_user(
    user_id: str,
    body: UserWrite,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserRead:
    """
    Replace every field of a user except its id.

    Allowed for admins and for the user themself; only admins may grant the admin flag.
    """
    canonical_id = user_store.parse_user_id(user_id)
    existing = user_store.get_user(db, canonical_id)
    authorize(current_user, canonical_id, is_admin, is_owner)
    if body.is_admin and not existing.is_admin:
        authorize(current_user, canonical_id, is_admin)
    return UserRead.model_validate(user_store.update_user(db, existing, body))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: str,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    """Hard-delete a user (admin only)."""
    canonical_id = user_store.parse_user_id(user_id)
    user_store.delete_user(db, user_store.get_user(db, canonical_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
