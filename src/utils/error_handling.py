"""Custom exceptions and helpers for consistent error responses."""

import json
from typing import Any, Dict


class AppError(Exception):
    """Base class for application errors."""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(AppError):
    """Raised when a requested resource is missing."""

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status_code=404)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str = "Invalid input"):
        super().__init__(message, status_code=422)


class UnauthorizedError(AppError):
    """Raised when a mutating request carries no actor id."""

    def __init__(self, message: str = "Actor id is required"):
        super().__init__(message, status_code=401)


class ConfigurationError(AppError):
    """Raised when required runtime settings are missing or invalid."""

    def __init__(self, message: str = "Invalid configuration"):
        super().__init__(message, status_code=500)


class StoreUnavailable(AppError):
    """Raised when the ticket store cannot be reached. Retryable."""

    def __init__(self, message: str = "Ticket store unavailable"):
        super().__init__(message, status_code=503)


class IssuanceFailed(AppError):
    """Raised when a ticket could not be persisted. Retryable."""

    def __init__(self, message: str = "Ticket issuance failed"):
        super().__init__(message, status_code=503)


class NotificationFailed(AppError):
    """Raised when the credential email could not be delivered."""

    def __init__(self, message: str = "Ticket email could not be sent"):
        super().__init__(message, status_code=502)


def to_response(error: AppError) -> Dict[str, Any]:
    """Convert an AppError into a Lambda proxy integration response."""
    return {
        "statusCode": error.status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps({"message": str(error), "status": "error"}),
    }
