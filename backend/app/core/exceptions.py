"""
Typed service errors and the HTTP status each one maps to.
"""
from fastapi import status


class ServiceError(Exception):
    """Base class for business-rule failures raised by the service layer."""
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UserNotFoundError(ServiceError):
    """No user row with the requested id."""
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, user_id: str):
        super().__init__(f"User with ID {user_id} not found")
        self.user_id = user_id


class UserConflictError(ServiceError):
    """Email or username already belongs to another user."""
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, field: str):
        label = "Email" if field == "email" else "Username"
        super().__init__(f"{label} is already in use")
        self.field = field


class InvalidPasswordError(ServiceError):
    """Current password did not match the stored hash."""
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self):
        super().__init__("Current password is incorrect")
