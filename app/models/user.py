"""
User model for authentication.

The username is both the primary key and the "sub" claim of access tokens,
which makes it the owner identifier used by admin-or-self checks.
"""

from sqlalchemy import Boolean, Column, String, Text
from app.core.database import Base


class User(Base):
    """User account."""
    __tablename__ = "users"

    username = Column(String(25), primary_key=True)

    # Authentication credentials (bcrypt hash)
    password = Column(Text, nullable=False)

    # User profile
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)

    is_admin = Column(Boolean, default=False, nullable=False)  # Admin role for protected endpoints

    def __repr__(self):
        return f"<User(username='{self.username}', is_admin={self.is_admin})>"
