"""Models package - Import all models for SQLAlchemy registration."""
from app.models.user import User

__all__ = [
    "User",
]
