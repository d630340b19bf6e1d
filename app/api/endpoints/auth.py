"""
Authentication endpoints.

- POST /token: Exchange username/password for a JWT access token
- POST /register: Create a (non-admin) account and return a token for it
- GET /me: Profile of the logged-in user
"""

import logging
from fastapi import APIRouter, HTTPException, Depends, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import ensure_logged_in
from app.core.permissions import Principal
from app.core.security import create_token_for_user
from app.crud import user as user_crud
from app.schemas.user import UserLoginRequest, UserRegisterRequest, UserResponse, TokenResponse

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = logging.getLogger(__name__)


@router.post("/token", response_model=TokenResponse)
def login(
    request: UserLoginRequest,
    db: Session = Depends(get_db)
):
    """
    Authenticate user and return a JWT access token.
    """
    user = user_crud.authenticate(db, request.username, request.password)
    if not user:
        logger.info(f"Failed login for {request.username}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username/password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return TokenResponse(access_token=create_token_for_user(user.username, user.is_admin))


@router.post("/register", status_code=201, response_model=TokenResponse)
def register(
    request: UserRegisterRequest,
    db: Session = Depends(get_db)
):
    """
    Register a new user account.

    Registered users are never admins; admins are created via POST /users.
    Returns a JWT token for immediate login.
    """
    if user_crud.get_by_username(db, request.username):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Duplicate username: {request.username}"
        )

    new_user = user_crud.create(db, request)
    return TokenResponse(access_token=create_token_for_user(new_user.username, new_user.is_admin))


@router.get("/me", response_model=UserResponse)
def get_me(
    db: Session = Depends(get_db),
    principal: Principal = Depends(ensure_logged_in),
):
    """
    Get the profile of the user named by the access token.

    Raises:
        HTTPException 401: No valid token
        HTTPException 404: The token's user no longer exists
    """
    user = user_crud.get_by_username(db, principal.username)
    if not user:
        raise HTTPException(status_code=404, detail=f"No user: {principal.username}")
    return user
