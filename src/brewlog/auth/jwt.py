"""JWT token creation and verification.

Learn: JWT (JSON Web Token) provides stateless authentication. There is
no session table: the token itself carries the session claim
(user id, username, email) and an expiry 24 hours after issue.

The secret is passed in when the service is built (see create_app), not
read from a global, so tests can sign with whatever secret they like.
Tokens cannot be revoked before they expire.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from brewlog.auth.identity import SessionClaim
from brewlog.errors import ConfigurationError, ExpiredTokenError, InvalidTokenError

DEFAULT_LIFETIME = timedelta(hours=24)


class TokenService:
    """Issues and validates signed, time-limited identity tokens."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        lifetime: timedelta = DEFAULT_LIFETIME,
    ):
        if not secret:
            raise ConfigurationError("Token signing secret must not be empty")
        self._secret = secret
        self.algorithm = algorithm
        self.lifetime = lifetime

    def issue(self, claim: SessionClaim, now: Optional[datetime] = None) -> str:
        """Create a signed token for the claim, valid for self.lifetime."""
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            # PyJWT insists on a string subject
            "sub": str(claim.id),
            "username": claim.username,
            "email": claim.email,
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def validate(self, token: str) -> SessionClaim:
        """Verify and decode a token.

        Returns the embedded claim on success.
        Raises ExpiredTokenError or InvalidTokenError on failure.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(reason=str(e))

        try:
            user_id = int(payload["sub"])
        except (TypeError, ValueError):
            raise InvalidTokenError(reason="Malformed subject")

        return SessionClaim(
            id=user_id,
            username=payload.get("username"),
            email=payload.get("email"),
        )
