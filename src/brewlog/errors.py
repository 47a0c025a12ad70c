"""Error taxonomy shared by the auth core and the drink services.

Learn: every error carries a machine-readable code, the HTTP status the
API layer should answer with, and a small context mapping. Services raise
these; main.py installs one exception handler that turns any BrewlogError
into a JSON response. Nothing in the core retries on these errors.
"""

from http import HTTPStatus
from typing import Any, Optional


class BrewlogError(Exception):
    """Base class for all structured application errors."""

    code = "brewlog_error"
    status = HTTPStatus.INTERNAL_SERVER_ERROR
    message = "Internal error"

    def __init__(self, message: Optional[str] = None, **context: Any):
        self.message = message or self.message
        self.context = context
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code, "detail": self.message}
        if self.context:
            payload["context"] = dict(self.context)
        return payload


class ConfigurationError(BrewlogError):
    """Startup-fatal misconfiguration (e.g. empty signing secret)."""

    code = "configuration_error"
    message = "Invalid configuration"


class ConflictError(BrewlogError):
    code = "conflict"
    status = HTTPStatus.CONFLICT
    message = "Resource already exists"


class NotFoundError(BrewlogError):
    code = "not_found"
    status = HTTPStatus.NOT_FOUND
    message = "Resource not found"


class AuthenticationError(BrewlogError):
    """Anything that should make the boundary answer 401."""

    code = "unauthenticated"
    status = HTTPStatus.UNAUTHORIZED
    message = "Authentication required"


class AuthenticationRequiredError(AuthenticationError):
    code = "authentication_required"


class InvalidCredentialsError(AuthenticationError):
    # Same message whether the email is unknown or the password is wrong.
    code = "invalid_credentials"
    message = "Invalid credentials"


class InvalidTokenError(AuthenticationError):
    code = "invalid_token"
    message = "Invalid token"


class ExpiredTokenError(AuthenticationError):
    code = "token_expired"
    message = "Token has expired"


class ForbiddenError(BrewlogError):
    code = "forbidden"
    status = HTTPStatus.FORBIDDEN
    message = "Only the owner may modify this resource"


class CorruptDigestError(BrewlogError):
    """Stored password hash is malformed. A server-side fault."""

    code = "corrupt_digest"
    message = "Stored credential is unreadable"
