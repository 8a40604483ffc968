"""
User management routes.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional
from app.db.session import get_db
from app.schemas.user import (
    MessageResponse, PaginatedUsersResponse, PasswordChange, SortOrder,
    UserCreate, UserQuery, UserResponse, UserSortField, UserUpdate
)
from app.services import user_service

router = APIRouter(prefix="/users", tags=["users"])


def get_user_query(
    page: str = Query("1", pattern=r"^\d+$", description="Page number"),
    limit: str = Query("10", pattern=r"^\d+$", description="Items per page"),
    search: Optional[str] = Query(None, description="Substring of email, username or name"),
    is_active: Optional[bool] = Query(None, alias="isActive"),
    sort_by: UserSortField = Query(UserSortField.CREATED_AT, alias="sortBy"),
    sort_order: SortOrder = Query(SortOrder.DESC, alias="sortOrder")
) -> UserQuery:
    """Collect list query parameters."""
    return UserQuery(
        page=page,
        limit=limit,
        search=search,
        is_active=is_active,
        sort_by=sort_by,
        sort_order=sort_order
    )


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(user_data: UserCreate, db: Session = Depends(get_db)):
    """Create a new user."""
    return user_service.create_user(user_data, db)


@router.get("", response_model=PaginatedUsersResponse)
def list_users(
    query: UserQuery = Depends(get_user_query),
    db: Session = Depends(get_db)
):
    """List users with pagination, search and sorting."""
    return user_service.list_users(query, db)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: str, db: Session = Depends(get_db)):
    """Get user by ID."""
    return user_service.get_user(user_id, db)


@router.patch("/{user_id}", response_model=UserResponse)
def update_user(user_id: str, user_data: UserUpdate, db: Session = Depends(get_db)):
    """Update user information."""
    return user_service.update_user(user_id, user_data, db)


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(user_id: str, db: Session = Depends(get_db)):
    """Delete user (soft delete)."""
    return user_service.deactivate_user(user_id, db)


@router.delete("/{user_id}/hard", response_model=MessageResponse)
def hard_delete_user(user_id: str, db: Session = Depends(get_db)):
    """Permanently delete user."""
    return user_service.delete_user(user_id, db)


@router.patch("/{user_id}/password", response_model=MessageResponse)
def change_password(user_id: str, password_data: PasswordChange, db: Session = Depends(get_db)):
    """Change user password."""
    return user_service.change_password(user_id, password_data, db)
