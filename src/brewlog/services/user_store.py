"""Credential store — identity records and lookups.

Learn: this layer talks to the users table with plain Core statements
(INSERT ... RETURNING, SELECT) and hands back Identity values built from
the row mappings. Lookups are exact, case-sensitive matches on the stored
value; nothing is lowercased or trimmed.

Duplicate detection is left to the unique constraints: an insert either
succeeds atomically or the database rejects it, and the IntegrityError is
translated into ConflictError.
"""

from typing import Optional

import structlog
from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from brewlog.auth.identity import Identity
from brewlog.db.models import User
from brewlog.errors import ConflictError

logger = structlog.get_logger()

users = User.__table__


class UserStore:
    """Persistence for identity records."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert(self, email: str, password_hash: str) -> Identity:
        """Create an identity keyed by email."""
        stmt = (
            insert(users)
            .values(email=email, password_hash=password_hash)
            .returning(*users.c)
        )
        return await self._insert(stmt, field="email")

    async def insert_by_username(self, username: str) -> Identity:
        """Create a username-only identity (no email, no password)."""
        stmt = insert(users).values(username=username).returning(*users.c)
        return await self._insert(stmt, field="username")

    async def find_by_email(self, email: str) -> Optional[Identity]:
        return await self._find_one(users.c.email == email)

    async def find_by_username(self, username: str) -> Optional[Identity]:
        return await self._find_one(users.c.username == username)

    async def get(self, user_id: int) -> Optional[Identity]:
        return await self._find_one(users.c.id == user_id)

    # ─── Internals ──────────────────────────────────────

    async def _insert(self, stmt, field: str) -> Identity:
        try:
            result = await self.db.execute(stmt)
            row = result.mappings().one()
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.info("brewlog.identity_conflict", field=field)
            raise ConflictError(f"That {field} is already taken", field=field)
        identity = Identity.from_row(row)
        logger.info("brewlog.identity_created", user_id=identity.id, via=field)
        return identity

    async def _find_one(self, condition) -> Optional[Identity]:
        result = await self.db.execute(select(users).where(condition))
        row = result.mappings().first()
        if row is None:
            return None
        return Identity.from_row(row)
