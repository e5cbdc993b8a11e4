"""Error taxonomy shared by services and the HTTP layer.

Every error carries the HTTP status it maps to and a client-facing message.
``detail`` is diagnostic only and is not a stable contract for clients.
"""

from __future__ import annotations

from typing import Any, Optional


class RegalError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, detail: Any = None) -> None:
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(self.message)


class MissingCredential(RegalError):
    status_code = 401
    default_message = "Authorization required"


class MissingHeader(MissingCredential):
    default_message = "Authorization header missing"


class MissingToken(MissingCredential):
    default_message = "Token missing from authorization header"


class InvalidCredential(RegalError):
    status_code = 401
    default_message = "Invalid or expired token"


class NotFound(RegalError):
    status_code = 404
    default_message = "Not found"


class Forbidden(RegalError):
    status_code = 403
    default_message = "Forbidden"


class ValidationFailure(RegalError):
    status_code = 400
    default_message = "Missing required fields"


class Conflict(RegalError):
    status_code = 409
    default_message = "Resource already exists"


class DependencyFailure(RegalError):
    status_code = 500
    default_message = "Internal server error"
