"""Favorite service — the user ↔ drink join table."""

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from brewlog.db.models import Drink, Favorite
from brewlog.errors import ConflictError, NotFoundError

logger = structlog.get_logger()


class FavoriteService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(self, user_id: int, drink_id: int) -> Favorite:
        """Mark a drink as a favorite. ConflictError if it already is one."""
        if await self.db.get(Drink, drink_id) is None:
            raise NotFoundError("Drink not found", drink_id=drink_id)

        favorite = Favorite(user_id=user_id, drink_id=drink_id)
        self.db.add(favorite)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError(
                "Drink is already a favorite", user_id=user_id, drink_id=drink_id
            )
        logger.info("brewlog.favorite_added", user_id=user_id, drink_id=drink_id)
        return favorite

    async def list_for_user(self, user_id: int) -> list[Drink]:
        result = await self.db.execute(
            select(Drink)
            .join(Favorite, Favorite.drink_id == Drink.id)
            .where(Favorite.user_id == user_id)
            .order_by(Favorite.id)
        )
        return list(result.scalars().all())
