"""
Domain errors raised by the HR and payroll services.

Views catch `BusinessError` at the top of each action and turn it into a
`{"success": false, "error": ...}` response; nothing below the view layer
builds HTTP responses.
"""
from rest_framework import status


class BusinessError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Request could not be processed"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(BusinessError):
    default_message = "Invalid input"


class ConflictError(BusinessError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class AuthorizationError(BusinessError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You are not allowed to perform this action"


class NotFoundError(BusinessError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class InvalidTransitionError(BusinessError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Invalid status transition"
