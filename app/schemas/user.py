"""
Pydantic schemas for users and authentication.
"""

from pydantic import BaseModel, EmailStr, Field
from typing import Optional

from app.schemas.common import PartialUpdate


class UserRegisterRequest(BaseModel):
    """Request schema for self-registration. Registered users are never admins."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=5, max_length=72)  # bcrypt limit
    first_name: str = Field(..., min_length=1, max_length=30, alias="firstName")
    last_name: str = Field(..., min_length=1, max_length=30, alias="lastName")
    email: EmailStr

    class Config:
        populate_by_name = True
        extra = "forbid"


class UserCreateRequest(UserRegisterRequest):
    """Request schema for admins creating users, possibly other admins."""
    is_admin: bool = Field(False, alias="isAdmin")


class UserUpdateRequest(PartialUpdate):
    """Partial user update. Only admins may change isAdmin."""
    non_nullable = ("password", "first_name", "last_name", "email", "is_admin")

    password: Optional[str] = Field(None, min_length=5, max_length=72)
    first_name: Optional[str] = Field(None, min_length=1, max_length=30, alias="firstName")
    last_name: Optional[str] = Field(None, min_length=1, max_length=30, alias="lastName")
    email: Optional[EmailStr] = None
    is_admin: Optional[bool] = Field(None, alias="isAdmin")

    class Config:
        populate_by_name = True
        extra = "forbid"


class UserLoginRequest(BaseModel):
    """Request schema for obtaining a token."""
    username: str
    password: str


class TokenResponse(BaseModel):
    """JWT token response."""
    access_token: str
    token_type: str = "bearer"


class UserResponse(BaseModel):
    """User profile response (no password)."""
    username: str
    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    email: str
    is_admin: bool = Field(..., alias="isAdmin")

    class Config:
        from_attributes = True
        populate_by_name = True


class UserCreateResponse(TokenResponse):
    """A newly created user and a token for it."""
    user: UserResponse


class UserDeleteResponse(BaseModel):
    deleted: str
