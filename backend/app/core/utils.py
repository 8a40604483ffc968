"""
Utility functions for the application.
"""
from typing import Any, Dict, Optional
from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, as stored in the database."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def format_message(message: str) -> Dict[str, str]:
    """Format a confirmation response."""
    return {"message": message}


def format_error(message: str, error: Optional[str] = None, details: Any = None) -> Dict[str, Any]:
    """Format error response."""
    response = {"message": message}
    if error:
        response["error"] = error
    if details:
        response["errors"] = details
    return response
