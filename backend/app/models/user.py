"""
User model for user management.
"""
from sqlalchemy import Column, String, Boolean, Index
from app.db.base import BaseModel


class User(BaseModel):
    """User account. The password column only ever holds a bcrypt hash."""
    __tablename__ = "users"
    __table_args__ = (
        Index("IDX_users_email", "email"),
        Index("IDX_users_username", "username"),
        Index("IDX_users_first_name_last_name", "first_name", "last_name"),
    )

    email = Column(String(255), unique=True, nullable=False)
    username = Column(String(50), unique=True, nullable=False)
    password = Column(String(255), nullable=False)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username}>"
