"""
CRUD operations for User model.
"""

import logging
from typing import Any, Dict, List, Optional
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.database import dialect_name
from app.core.exceptions import InvalidInputError
from app.core.security import get_password_hash, verify_password
from app.core.sql import sql_for_partial_update
from app.models.user import User
from app.schemas.user import UserRegisterRequest

logger = logging.getLogger(__name__)

# API field name -> column name
UPDATE_COLUMNS = {
    "firstName": "first_name",
    "lastName": "last_name",
    "isAdmin": "is_admin",
}


def create(db: Session, user_data: UserRegisterRequest, is_admin: bool = False) -> User:
    """
    Create a user with a hashed password.

    Args:
        db: Database session
        user_data: Validated registration data
        is_admin: Whether the new user is an admin

    Returns:
        Created User instance

    Raises:
        InvalidInputError: If the username is already taken
    """
    db_user = User(
        username=user_data.username,
        password=get_password_hash(user_data.password),
        first_name=user_data.first_name,
        last_name=user_data.last_name,
        email=user_data.email,
        is_admin=is_admin,
    )

    db.add(db_user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise InvalidInputError(f"Duplicate username: {user_data.username}")
    db.refresh(db_user)

    logger.info(f"Created user {db_user.username} (admin={db_user.is_admin})")
    return db_user


def authenticate(db: Session, username: str, password: str) -> Optional[User]:
    """
    Check a username/password pair.

    Returns:
        The User if the password matches, None otherwise
    """
    user = get_by_username(db, username)
    if not user or not verify_password(password, user.password):
        return None
    return user


def get_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()


def get_multi(db: Session) -> List[User]:
    return db.query(User).order_by(User.username).all()


def update(db: Session, username: str, data: Dict[str, Any]) -> Optional[User]:
    """
    Partially update a user.

    A new password is hashed before it is stored.

    Returns:
        Updated User instance if found, None otherwise

    Raises:
        InvalidInputError: If `data` is empty
    """
    if data.get("password"):
        data = {**data, "password": get_password_hash(data["password"])}

    set_cols, params = sql_for_partial_update(data, UPDATE_COLUMNS).bind(dialect_name(db))
    result = db.execute(
        text(f"UPDATE users SET {set_cols} WHERE username = :username"),
        {**params, "username": username},
    )

    if result.rowcount == 0:
        db.rollback()
        return None

    db.commit()
    return get_by_username(db, username)


def delete(db: Session, username: str) -> bool:
    """
    Delete a user.

    Returns:
        True if deleted, False if not found
    """
    user = get_by_username(db, username)
    if not user:
        return False

    db.delete(user)
    db.commit()

    return True
