"""Auth API — signup, login, and the current user.

Learn: Routes for user authentication:
- POST /auth/signup → create an account, start a session
- POST /auth/login → email/password → session cookie
- POST /auth/token → email/password → bearer token in the body
- GET /auth/me → current user info
- POST /auth/logout → drop the session cookie

Signup and login answer with the public user view and put the token in
an HTTP-only cookie. /auth/token is the same login for API clients that
would rather send an Authorization header.
"""

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from brewlog.auth.dependencies import get_current_user, get_token_service
from brewlog.auth.identity import Identity, SessionClaim, public_view
from brewlog.auth.jwt import TokenService
from brewlog.db.engine import get_db
from brewlog.errors import NotFoundError
from brewlog.schemas.user import LoginRequest, SignupRequest, TokenResponse, UserRead
from brewlog.services.auth_service import AuthService
from brewlog.services.user_store import UserStore

router = APIRouter(prefix="/auth")


def _svc(request: Request, db: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(db, bcrypt_rounds=request.app.state.settings.bcrypt_rounds)


def _start_session(
    request: Request, response: Response, tokens: TokenService, identity: Identity
) -> str:
    token = tokens.issue(identity.claim())
    app_settings = request.app.state.settings
    response.set_cookie(
        app_settings.session_cookie_name,
        token,
        max_age=int(tokens.lifetime.total_seconds()),
        httponly=True,
        secure=app_settings.cookie_secure,
        samesite="lax",
    )
    return token


# ─── Signup ─────────────────────────────────────────────


@router.post("/signup", response_model=UserRead, status_code=201)
async def signup(
    body: SignupRequest,
    request: Request,
    response: Response,
    svc: AuthService = Depends(_svc),
    tokens: TokenService = Depends(get_token_service),
):
    """Create a new account and log it in."""
    identity = await svc.signup(body.email, body.password)
    _start_session(request, response, tokens, identity)
    return public_view(identity)


# ─── Login ──────────────────────────────────────────────


@router.post("/login", response_model=UserRead)
async def login(
    body: LoginRequest,
    request: Request,
    response: Response,
    svc: AuthService = Depends(_svc),
    tokens: TokenService = Depends(get_token_service),
):
    """Login with email and password → session cookie."""
    identity = await svc.login(body.email, body.password)
    _start_session(request, response, tokens, identity)
    return public_view(identity)


@router.post("/token", response_model=TokenResponse)
async def token(
    body: LoginRequest,
    svc: AuthService = Depends(_svc),
    tokens: TokenService = Depends(get_token_service),
):
    """Login with email and password → bearer token."""
    identity = await svc.login(body.email, body.password)
    return TokenResponse(
        access_token=tokens.issue(identity.claim()),
        user=UserRead(**public_view(identity)),
    )


@router.post("/logout", status_code=204)
async def logout(request: Request, response: Response):
    response.delete_cookie(request.app.state.settings.session_cookie_name)


# ─── Current user ───────────────────────────────────────


@router.get("/me", response_model=UserRead)
async def get_me(
    claim: SessionClaim = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get the current authenticated user's info."""
    identity = await UserStore(db).get(claim.id)
    if identity is None:
        raise NotFoundError("User not found", user_id=claim.id)
    return public_view(identity)
