from typing import Any, Mapping, Optional


class IcarError(Exception):
    """Base class for client errors.

    Attributes:
        message: human-readable message, suitable for showing to the user
        details: optional mapping with extra context (field errors, payload)
    """

    def __init__(self, message: str = "An error occurred", details: Optional[Mapping[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.details:
            payload["details"] = dict(self.details)
        return payload

    def __str__(self) -> str:
        return self.message


class ApiError(IcarError):
    """Raised when the backend cannot be reached or answers with an error status."""

    def __init__(
        self,
        message: str = "An error occurred",
        status_code: Optional[int] = None,
        payload: Any = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class ServiceAPIError(ApiError):
    """Raised by the maintenance service endpoints."""


class AuthenticationError(ApiError):
    """Raised when a call needs a token and none is stored, or the backend rejects it."""

    def __init__(self, message: str = "No authentication token found", status_code: Optional[int] = 401, payload: Any = None):
        super().__init__(message, status_code=status_code, payload=payload)


class RouteError(IcarError):
    """Raised when directions to a mechanic cannot be computed."""


class ValidationError(IcarError):
    """Raised when form input is rejected before it is sent.

    ``errors`` maps form field names to messages.
    """

    def __init__(self, errors: Mapping[str, str], message: str = "Please fill in all required fields correctly"):
        super().__init__(message, details=errors)
        self.errors = dict(errors)


class WizardError(IcarError):
    """Raised when a booking wizard action is not allowed in the current step."""
