"""Domain errors raised by the stores and the crud/auth layers.

Every error carries the HTTP status it maps to, so the exception handler in
``main`` can render it without a lookup table.
"""

from fastapi import status


class CaseDeskError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailed(CaseDeskError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Required fields are missing."


class DuplicateEmail(CaseDeskError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Email already exists."


class AuthFailure(CaseDeskError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid email or password."


class InvalidRole(CaseDeskError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid role."


class NotFound(CaseDeskError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found."


class Forbidden(CaseDeskError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Admin cannot demote themselves."


class InternalError(CaseDeskError):
    pass


class HashingError(InternalError):
    default_message = "Password hashing failed."


class StoreError(InternalError):
    default_message = "Database commit failed."
