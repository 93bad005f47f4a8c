# app/exceptions.py
"""
Domain errors raised by the services layer.

Each error carries the HTTP status it is rendered with; the handlers in
``app.main`` turn them into ``{"success": false, "message": ...}`` bodies.
"""
from typing import Any, List, Optional


class PortalError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, errors: Optional[List[Any]] = None):
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)


class ValidationFailed(PortalError):
    status_code = 400
    default_message = "Validation failed"


class NotFound(PortalError):
    status_code = 404
    default_message = "User not found"


class DuplicateIdentity(PortalError):
    status_code = 400
    default_message = "User already exists with this email or mobile number"


class AlreadyRegistered(PortalError):
    status_code = 400
    default_message = "User already exists with this mobile number or email"


class InvalidCredentials(PortalError):
    status_code = 401
    default_message = "Invalid credentials"


class InvalidOrExpiredOtp(PortalError):
    status_code = 400
    default_message = "Invalid or expired OTP"


class AdminNotAllowed(PortalError):
    status_code = 400
    default_message = "Admin users do not have applicant details. Please login with a regular user account."


class InvalidTransition(PortalError):
    status_code = 400

    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(f"Payment status cannot change from {current} to {requested}")


class UploadFailed(PortalError):
    status_code = 500
    default_message = "Failed to upload document"


class NotificationFailed(PortalError):
    status_code = 502
    default_message = "Email could not be sent"


class IdentifierSpaceExhausted(PortalError):
    status_code = 500
    default_message = "No applicant ids left to allocate"
