"""
Service Errors

Structured failures raised by the operation handlers. Every error carries a
stable ``code``, a human readable ``message`` and optional ``details`` that
the RPC layer returns to the caller unchanged.
"""

from typing import Any, Dict, Optional


class ServiceError(Exception):
    """Base exception for handler failures"""

    code = "INTERNAL_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(ServiceError):
    """Input failed its shape or range contract"""

    code = "VALIDATION_ERROR"


class NotFoundError(ServiceError):
    """A referenced entity does not exist (or is not visible to the caller)"""

    code = "NOT_FOUND"


class ConflictError(ServiceError):
    """Uniqueness violation, double completion or illegal status transition"""

    code = "CONFLICT"


class UnauthorizedError(ServiceError):
    """Credential mismatch"""

    code = "UNAUTHORIZED"


class IntegrityViolationError(ServiceError):
    """A stored invariant is broken. Should be unreachable."""

    code = "INTEGRITY_VIOLATION"


def create_error_response(error: ServiceError) -> Dict[str, Any]:
    """
    Create a standardized error response

    Args:
        error: The ServiceError to convert

    Returns:
        Standardized error response dictionary
    """
    return {
        "success": False,
        "error": {
            "code": error.code,
            "message": error.message,
            "details": error.details
        }
    }


def create_success_response(data: Any, message: Optional[str] = None) -> Dict[str, Any]:
    """
    Create a standardized success response

    Args:
        data: The response data
        message: Optional success message

    Returns:
        Standardized success response dictionary
    """
    response = {
        "success": True,
        "data": data
    }

    if message:
        response["message"] = message

    return response
