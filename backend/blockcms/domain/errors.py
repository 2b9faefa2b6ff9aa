"""
Error taxonomy shared by repositories, services and handlers.

Every error carries the HTTP status it maps to; the Flask error handler in
``blockcms.errors`` renders it as ``{"error": message, "code": status}``.
"""


class CMSError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(CMSError):
    status_code = 400
    default_message = "Invalid request"


class DecodeError(ValidationError):
    default_message = "Payload does not match the requested shape"


class AuthError(CMSError):
    status_code = 401
    default_message = "Authentication required"


class ForbiddenError(CMSError):
    status_code = 403
    default_message = "Insufficient permissions"


class NotFoundError(CMSError):
    status_code = 404
    default_message = "Resource not found"


class ConflictError(CMSError):
    status_code = 409
    default_message = "Resource already exists"


class InternalError(CMSError):
    status_code = 500


class EncodeError(InternalError):
    default_message = "Failed to serialize payload"
