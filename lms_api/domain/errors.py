"""Error taxonomy shared by every layer.

Each exception carries an ErrorKind; the HTTP boundary maps kinds to status
codes in one place (interfaces/http/errors.py).
"""
from enum import Enum


class ErrorKind(str, Enum):
    NOT_FOUND = "NotFound"
    INVALID_CREDENTIALS = "InvalidCredentials"
    FORBIDDEN = "Forbidden"
    VALIDATION = "ValidationError"
    BACKEND = "BackendFailure"


class LMSError(Exception):
    kind: ErrorKind = ErrorKind.BACKEND

    def __init__(self, message: str = ""):
        self.message = message
        super().__init__(message)


class NotFoundError(LMSError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, entity: str, entity_id: object):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


class InvalidCredentialsError(LMSError):
    kind = ErrorKind.INVALID_CREDENTIALS

    def __init__(self):
        # never say which half was wrong
        super().__init__("Invalid credentials")


class ForbiddenError(LMSError):
    kind = ErrorKind.FORBIDDEN

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message)


class InputValidationError(LMSError):
    kind = ErrorKind.VALIDATION


class BackendFailure(LMSError):
    kind = ErrorKind.BACKEND


class ConfigurationError(Exception):
    """Unrecoverable misconfiguration, raised only at process start."""
