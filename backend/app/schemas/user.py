"""
Pydantic schemas for User entity.

Field names are snake_case in Python and camelCase on the wire.
"""
import enum
from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, Field, StrictBool, field_serializer, field_validator
from pydantic.alias_generators import to_camel
from typing import List, Optional
from datetime import datetime, timezone


def check_email(value: str) -> str:
    """Validate email syntax but keep the address exactly as given."""
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as exc:
        raise ValueError(f"value is not a valid email address: {exc}") from exc
    return value


class UserSortField(str, enum.Enum):
    """Columns the user list may be sorted by."""
    ID = "id"
    EMAIL = "email"
    USERNAME = "username"
    FIRST_NAME = "firstName"
    LAST_NAME = "lastName"
    IS_ACTIVE = "isActive"
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"


class SortOrder(str, enum.Enum):
    """Sort direction."""
    ASC = "asc"
    DESC = "desc"


class RequestBody(BaseModel):
    """Base for request bodies: camelCase aliases, unknown fields rejected."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "forbid"


class UserCreate(RequestBody):
    """Schema for user creation."""
    email: str = Field(max_length=255)
    username: str = Field(min_length=3, max_length=20)
    password: str = Field(min_length=6)
    first_name: str = Field(min_length=1, max_length=50)
    last_name: str = Field(min_length=1, max_length=50)
    is_active: StrictBool = True

    @field_validator("email")
    @classmethod
    def validate_email_format(cls, v):
        """Reject malformed addresses without normalizing valid ones."""
        return check_email(v) if v is not None else v


class UserUpdate(RequestBody):
    """Schema for user update. Password is changed through PasswordChange."""
    email: Optional[str] = Field(default=None, max_length=255)
    username: Optional[str] = Field(default=None, min_length=3, max_length=20)
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    is_active: Optional[StrictBool] = None

    @field_validator("email")
    @classmethod
    def validate_email_format(cls, v):
        """Reject malformed addresses without normalizing valid ones."""
        return check_email(v) if v is not None else v

    @field_validator("email", "username", "first_name", "last_name", "is_active", mode="before")
    @classmethod
    def reject_null(cls, v):
        """Omit a field to leave it unchanged; null is not a valid value."""
        if v is None:
            raise ValueError("must not be null")
        return v


class PasswordChange(RequestBody):
    """Schema for password change."""
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=6)


class UserQuery(BaseModel):
    """List parameters, already validated by the route's query dependency."""
    page: str = "1"
    limit: str = "10"
    search: Optional[str] = None
    is_active: Optional[bool] = None
    sort_by: UserSortField = UserSortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC


class UserResponse(BaseModel):
    """Schema for user response. Never carries the password hash."""
    id: str
    email: str
    username: str
    first_name: str
    last_name: str
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @field_serializer("created_at", "updated_at", when_used="json")
    def serialize_utc(self, value: datetime) -> str:
        """Stored values are naive UTC; emit ISO 8601 with a Z suffix."""
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value.isoformat(timespec="microseconds") + "Z"

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class PaginatedUsersResponse(BaseModel):
    """One page of users plus paging metadata."""
    data: List[UserResponse]
    total: int
    page: int
    limit: int
    total_pages: int
    has_next: bool
    has_prev: bool

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class MessageResponse(BaseModel):
    """Confirmation message."""
    message: str
