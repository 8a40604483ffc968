"""
User service for user-related business logic.

Every function takes the request's Session explicitly and raises a
ServiceError subclass on a business-rule failure, before anything is
hashed or written.
"""
import logging
import math
from typing import Dict, Optional
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from app.core.exceptions import InvalidPasswordError, UserConflictError, UserNotFoundError
from app.core.security import get_password_hash, verify_password
from app.core.utils import format_message, utcnow
from app.models.user import User
from app.schemas.user import (
    PaginatedUsersResponse, PasswordChange, SortOrder, UserCreate,
    UserQuery, UserResponse, UserSortField, UserUpdate
)

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    UserSortField.ID: User.id,
    UserSortField.EMAIL: User.email,
    UserSortField.USERNAME: User.username,
    UserSortField.FIRST_NAME: User.first_name,
    UserSortField.LAST_NAME: User.last_name,
    UserSortField.IS_ACTIVE: User.is_active,
    UserSortField.CREATED_AT: User.created_at,
    UserSortField.UPDATED_AT: User.updated_at,
}


def _get_user_or_404(user_id: str, db: Session) -> User:
    """Load a user row (active or not) or raise UserNotFoundError."""
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise UserNotFoundError(user_id)
    return user


def _is_taken(column, value: str, db: Session, exclude_id: Optional[str] = None) -> bool:
    """Check whether another row already holds value in a unique column."""
    query = db.query(User.id).filter(column == value)
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)
    return query.first() is not None


def _commit(
    db: Session,
    email: Optional[str] = None,
    username: Optional[str] = None,
    exclude_id: Optional[str] = None
):
    """
    Commit the session.

    The unique constraints on email and username are authoritative: if a
    concurrent request took a value between our pre-check and the commit,
    the IntegrityError is turned into the matching UserConflictError.
    """
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if email is not None and _is_taken(User.email, email, db, exclude_id):
            raise UserConflictError("email") from exc
        if username is not None and _is_taken(User.username, username, db, exclude_id):
            raise UserConflictError("username") from exc
        raise
    except SQLAlchemyError:
        db.rollback()
        raise


def create_user(user_data: UserCreate, db: Session) -> UserResponse:
    """Create a new user with a hashed password."""
    if _is_taken(User.email, user_data.email, db):
        logger.warning(f"Create rejected: email {user_data.email} already in use")
        raise UserConflictError("email")

    if _is_taken(User.username, user_data.username, db):
        logger.warning(f"Create rejected: username {user_data.username} already in use")
        raise UserConflictError("username")

    now = utcnow()
    user = User(
        email=user_data.email,
        username=user_data.username,
        password=get_password_hash(user_data.password),
        first_name=user_data.first_name,
        last_name=user_data.last_name,
        is_active=user_data.is_active,
        created_at=now,
        updated_at=now
    )
    db.add(user)
    _commit(db, email=user_data.email, username=user_data.username)
    db.refresh(user)

    logger.info(f"Created user {user.id} ({user.username})")
    return UserResponse.model_validate(user)


def list_users(query: UserQuery, db: Session) -> PaginatedUsersResponse:
    """List users with filtering, sorting and pagination."""
    page = max(int(query.page), 1)
    limit = max(int(query.limit), 1)
    skip = (page - 1) * limit

    users_query = db.query(User)

    if query.is_active is not None:
        users_query = users_query.filter(User.is_active == query.is_active)

    if query.search:
        users_query = users_query.filter(or_(
            User.email.contains(query.search, autoescape=True),
            User.username.contains(query.search, autoescape=True),
            User.first_name.contains(query.search, autoescape=True),
            User.last_name.contains(query.search, autoescape=True)
        ))

    total = users_query.count()

    # skip and limit are unbounded; only values below total reach the store
    if skip >= total:
        users = []
    else:
        column = SORT_COLUMNS[query.sort_by]
        order = column.asc() if query.sort_order == SortOrder.ASC else column.desc()
        # id as tie-breaker keeps pages stable when sort values repeat
        users = users_query.order_by(order, User.id.asc()).offset(skip).limit(min(limit, total)).all()

    total_pages = math.ceil(total / limit)

    return PaginatedUsersResponse(
        data=[UserResponse.model_validate(user) for user in users],
        total=total,
        page=page,
        limit=limit,
        total_pages=total_pages,
        has_next=page < total_pages,
        has_prev=page > 1
    )


def get_user(user_id: str, db: Session) -> UserResponse:
    """Get a user by id. Soft-deleted users are returned too."""
    return UserResponse.model_validate(_get_user_or_404(user_id, db))


def update_user(user_id: str, user_data: UserUpdate, db: Session) -> UserResponse:
    """Apply the fields present in user_data onto an existing user."""
    user = _get_user_or_404(user_id, db)
    changes = user_data.model_dump(exclude_unset=True)

    new_email = changes.get("email")
    if new_email is not None and new_email != user.email:
        if _is_taken(User.email, new_email, db, exclude_id=user.id):
            logger.warning(f"Update of user {user_id} rejected: email {new_email} already in use")
            raise UserConflictError("email")

    new_username = changes.get("username")
    if new_username is not None and new_username != user.username:
        if _is_taken(User.username, new_username, db, exclude_id=user.id):
            logger.warning(f"Update of user {user_id} rejected: username {new_username} already in use")
            raise UserConflictError("username")

    for field, value in changes.items():
        setattr(user, field, value)
    user.updated_at = utcnow()

    _commit(db, email=new_email, username=new_username, exclude_id=user_id)
    db.refresh(user)

    logger.info(f"Updated user {user_id}: {sorted(changes)}")
    return UserResponse.model_validate(user)


def deactivate_user(user_id: str, db: Session) -> Dict[str, str]:
    """Soft delete: mark the user inactive and keep the row."""
    user = _get_user_or_404(user_id, db)
    user.is_active = False
    user.updated_at = utcnow()
    _commit(db)

    logger.info(f"Deactivated user {user_id}")
    return format_message("User deleted successfully")


def delete_user(user_id: str, db: Session) -> Dict[str, str]:
    """Hard delete: remove the row permanently."""
    deleted = db.query(User).filter(User.id == user_id).delete(synchronize_session=False)
    if not deleted:
        db.rollback()
        raise UserNotFoundError(user_id)
    _commit(db)

    logger.info(f"Permanently deleted user {user_id}")
    return format_message("User permanently deleted")


def change_password(user_id: str, password_data: PasswordChange, db: Session) -> Dict[str, str]:
    """Replace the password hash after verifying the current password."""
    user = _get_user_or_404(user_id, db)

    if not verify_password(password_data.current_password, user.password):
        logger.warning(f"Password change for user {user_id} rejected: wrong current password")
        raise InvalidPasswordError()

    user.password = get_password_hash(password_data.new_password)
    user.updated_at = utcnow()
    _commit(db)

    logger.info(f"Changed password for user {user_id}")
    return format_message("Password changed successfully")


def get_user_by_email(email: str, db: Session) -> Optional[User]:
    """Look up a user row by email, for authentication flows."""
    return db.query(User).filter(User.email == email).first()


def check_password(user: User, plain_password: str) -> bool:
    """Verify a plain password against the user's stored hash."""
    return verify_password(plain_password, user.password)
