"""Auth service — signup and password login.

Learn: login failures are deliberately indistinguishable. An unknown
email, a username-only identity with no password, and a wrong password
all raise the same InvalidCredentialsError, and all of them pay for one
bcrypt check (against a throwaway digest when there is no real one), so
neither the body nor the response time tells a caller whether an email
is registered.

bcrypt is CPU-bound, so hashing and checking run in the threadpool
instead of blocking the event loop.
"""

from functools import lru_cache
from typing import Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from brewlog.auth.identity import Identity
from brewlog.auth.password import hash_password, verify_password
from brewlog.config import settings
from brewlog.errors import InvalidCredentialsError
from brewlog.services.user_store import UserStore

logger = structlog.get_logger()


@lru_cache(maxsize=4)
def _decoy_digest(rounds: int) -> str:
    """A digest at the configured cost that no submitted password matches."""
    return hash_password("brewlog-decoy-password", rounds=rounds)


class AuthService:
    def __init__(self, db: AsyncSession, bcrypt_rounds: Optional[int] = None):
        self.db = db
        self.users = UserStore(db)
        self.bcrypt_rounds = bcrypt_rounds or settings.bcrypt_rounds

    async def signup(self, email: str, password: str) -> Identity:
        """Create an email/password identity. ConflictError if the email is taken."""
        password_hash = await run_in_threadpool(
            hash_password, password, self.bcrypt_rounds
        )
        identity = await self.users.insert(email, password_hash)
        logger.info("brewlog.user_signed_up", user_id=identity.id)
        return identity

    async def login(self, email: str, password: str) -> Identity:
        """Check an email/password pair and return the matching identity."""
        identity = await self.users.find_by_email(email)
        if identity is None or not identity.can_password_login:
            decoy = await run_in_threadpool(_decoy_digest, self.bcrypt_rounds)
            await run_in_threadpool(verify_password, password, decoy)
            logger.info("brewlog.login_failed")
            raise InvalidCredentialsError()

        if not await run_in_threadpool(
            verify_password, password, identity.password_hash
        ):
            logger.info("brewlog.login_failed", user_id=identity.id)
            raise InvalidCredentialsError()

        logger.info("brewlog.user_logged_in", user_id=identity.id)
        return identity
