"""
User management endpoints.

Admins may manage every account; other users only their own.
"""

import logging
from typing import List
from fastapi import APIRouter, HTTPException, Depends, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import ensure_admin, ensure_admin_or_user
from app.core.permissions import Principal
from app.core.security import create_token_for_user
from app.crud import user as user_crud
from app.schemas.user import (
    UserCreateRequest,
    UserCreateResponse,
    UserDeleteResponse,
    UserResponse,
    UserUpdateRequest,
)

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=201, response_model=UserCreateResponse)
def create_user(
    request: UserCreateRequest,
    db: Session = Depends(get_db),
    admin: Principal = Depends(ensure_admin),
):
    """
    Create a user, optionally an admin, and return a token for it.

    Authorization required: admin
    """
    if user_crud.get_by_username(db, request.username):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Duplicate username: {request.username}"
        )

    new_user = user_crud.create(db, request, is_admin=request.is_admin)
    logger.info(f"Admin {admin.username} created user {new_user.username}")

    return UserCreateResponse(
        access_token=create_token_for_user(new_user.username, new_user.is_admin),
        user=UserResponse.model_validate(new_user),
    )


@router.get("/", response_model=List[UserResponse])
def list_users(
    db: Session = Depends(get_db),
    admin: Principal = Depends(ensure_admin),
):
    """List all users. Authorization required: admin"""
    return user_crud.get_multi(db)


@router.get("/{username}", response_model=UserResponse)
def get_user(
    username: str,
    db: Session = Depends(get_db),
    principal: Principal = Depends(ensure_admin_or_user),
):
    """Authorization required: admin or same user"""
    user = user_crud.get_by_username(db, username)
    if not user:
        raise HTTPException(status_code=404, detail=f"No user: {username}")
    return user


@router.patch("/{username}", response_model=UserResponse)
def update_user(
    username: str,
    request: UserUpdateRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(ensure_admin_or_user),
):
    """
    Partially update a user: any of firstName, lastName, email, password.

    Only admins may change isAdmin.

    Authorization required: admin or same user
    """
    changes = request.changes()
    if "isAdmin" in changes and not principal.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only admins can change admin status"
        )

    user = user_crud.update(db, username, changes)
    if not user:
        raise HTTPException(status_code=404, detail=f"No user: {username}")
    return user


@router.delete("/{username}", response_model=UserDeleteResponse)
def delete_user(
    username: str,
    db: Session = Depends(get_db),
    principal: Principal = Depends(ensure_admin_or_user),
):
    """Authorization required: admin or same user"""
    deleted = user_crud.delete(db, username)
    if not deleted:
        raise HTTPException(status_code=404, detail=f"No user: {username}")

    logger.info(f"User {principal.username} deleted user {username}")
    return UserDeleteResponse(deleted=username)
