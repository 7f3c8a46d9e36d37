"""Common output schemas for API responses.

This module contains shared Pydantic models for common API responses
like error messages and status information.
"""

from typing import Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Schema for error responses across all endpoints.

    Attributes:
        detail (str): Detailed error message.
        error_code (str, optional): Specific error code for categorization.

    Example:
        >>> error_response = ErrorResponse(
        ...     detail="PR 42 not found in acme/widgets",
        ...     error_code="PULL_REQUEST_NOT_FOUND"
        ... )
    """

    detail: str
    error_code: Optional[str] = None


class MessageResponse(BaseModel):
    """Schema for simple message responses.

    Attributes:
        message (str): Success or informational message.

    Example:
        >>> message_response = MessageResponse(message="Note deleted successfully")
    """

    message: str


class HealthResponse(BaseModel):
    """Schema for health check responses.

    Attributes:
        status (str): Service health status.
        service (str): Service name identifier.
        database (str, optional): Database connectivity status.
    """

    status: str
    service: str
    database: Optional[str] = None
