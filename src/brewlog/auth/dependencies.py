"""FastAPI auth dependencies.

Learn: These are used as Depends() in route handlers to extract
and validate the current user's claim from the request.

The token is taken from the Authorization header ("Bearer <token>")
or, failing that, from the session cookie set at login. A token that is
present but bad is always a 401, even on routes where auth is optional;
it is never quietly treated as an anonymous request.
"""

from typing import Optional

from fastapi import Depends, Header, Request

from brewlog.auth.identity import SessionClaim
from brewlog.auth.jwt import TokenService
from brewlog.errors import AuthenticationRequiredError


def get_token_service(request: Request) -> TokenService:
    """The app-wide TokenService built in create_app()."""
    return request.app.state.token_service


def _extract_token(request: Request, authorization: Optional[str]) -> Optional[str]:
    if authorization and authorization.startswith("Bearer "):
        return authorization[7:]
    cookie_name = request.app.state.settings.session_cookie_name
    return request.cookies.get(cookie_name)


async def get_current_user_optional(
    request: Request,
    authorization: Optional[str] = Header(None),
    tokens: TokenService = Depends(get_token_service),
) -> Optional[SessionClaim]:
    """Extract the current claim (optional — returns None if no token).

    Learn: This is the "soft" auth dependency. Used for endpoints that
    work both authenticated and unauthenticated. For mandatory auth,
    use get_current_user instead.
    """
    token = _extract_token(request, authorization)
    if not token:
        return None
    return tokens.validate(token)


async def get_current_user(
    claim: Optional[SessionClaim] = Depends(get_current_user_optional),
) -> SessionClaim:
    """Extract the current claim (required — 401 if no token).

    Learn: This is the "hard" auth dependency. Used for endpoints
    that require authentication.
    """
    if claim is None:
        raise AuthenticationRequiredError()
    return claim
