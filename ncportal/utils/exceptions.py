# ncportal/utils/exceptions.py
# -*- coding: utf-8 -*-
"""
Custom Exception Classes for the Application.

These exceptions are used to signal specific error conditions from the service layer
to the API layer (routes), allowing for more specific error handling and
mapping to appropriate HTTP status codes.
"""

class ServiceError(Exception):
    """Base class for service layer exceptions."""
    status_code = 500  # Default to Internal Server Error
    message = "An unexpected service error occurred."

    def __init__(self, message=None, status_code=None):
        super().__init__(message or self.message)
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {"error": str(self)}


class NotFoundError(ServiceError):
    """Raised when a requested resource is not found."""
    status_code = 404
    message = "The requested resource was not found."


class ValidationError(ServiceError):
    """
    Raised for malformed or missing input.

    Carries either a single message or the full list of violated rules
    (`errors`), in which case the response body is `{"errors": [...]}`.
    """
    status_code = 400
    message = "Validation failed."

    def __init__(self, message=None, errors=None):
        self.errors = list(errors or [])
        if message is None and self.errors:
            message = "; ".join(self.errors)
        super().__init__(message or self.message, status_code=400)

    def to_dict(self):
        if self.errors:
            return {"errors": self.errors}
        return {"error": str(self)}


class ConflictError(ServiceError):
    """Raised when an operation conflicts with existing records (e.g., duplicate email)."""
    status_code = 400
    message = "A conflict occurred with the current state of the resource."


class AuthError(ServiceError):
    """Raised for authentication failures."""
    status_code = 401
    message = "Invalid credentials"


class InvalidVendorResponse(ServiceError):
    """Raised when a vendor answers with a body that is not valid JSON."""
    status_code = 500
    message = "Response is not valid JSON"

    def __init__(self, raw_text, http_status, message=None):
        super().__init__(message or self.message)
        self.raw_text = raw_text
        self.http_status = http_status

    def to_dict(self):
        return {"error": str(self), "rawResponse": self.raw_text, "status": self.http_status}


class UpstreamFailure(ServiceError):
    """The vendor itself reported a failure."""
    status_code = 400
    message = "Unknown error"

    def __init__(self, message=None, status_code=None, payload=None, unexpected=False):
        super().__init__(message, status_code=status_code)
        self.payload = payload
        self.unexpected = unexpected  # answer did not have the documented shape
