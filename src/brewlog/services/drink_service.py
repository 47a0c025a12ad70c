"""Drink service — posting, reading, and owner-only edits.

Learn: reads are open to everyone. Update and delete first load the
drink (404 if it doesn't exist), then ask authorize_mutation whether the
caller is the owner before touching the row. The owner (post_id) is set
once at creation and never changed by an update.
"""

from typing import Any

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from brewlog.auth.ownership import authorize_mutation
from brewlog.db.models import Drink
from brewlog.errors import NotFoundError

logger = structlog.get_logger()

# Fields a caller may set. post_id is deliberately absent.
EDITABLE_FIELDS = ("drink_name", "brew", "description", "ingredients")


class DrinkService:
    """Business logic for drinks."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, owner_id: int, fields: dict[str, Any]) -> Drink:
        drink = Drink(post_id=owner_id, **_editable(fields))
        self.db.add(drink)
        await self.db.commit()
        await self.db.refresh(drink)
        logger.info("brewlog.drink_created", drink_id=drink.id, owner_id=owner_id)
        return drink

    async def get(self, drink_id: int) -> Drink:
        drink = await self.db.get(Drink, drink_id)
        if drink is None:
            raise NotFoundError("Drink not found", drink_id=drink_id)
        return drink

    async def list_drinks(self) -> list[Drink]:
        result = await self.db.execute(select(Drink).order_by(Drink.id))
        return list(result.scalars().all())

    async def update(
        self, caller_id: int, drink_id: int, fields: dict[str, Any]
    ) -> Drink:
        """Apply a partial update. ForbiddenError unless the caller owns it."""
        drink = await self.get(drink_id)
        authorize_mutation(caller_id, drink.post_id)

        for name, value in _editable(fields).items():
            setattr(drink, name, value)
        await self.db.commit()
        logger.info("brewlog.drink_updated", drink_id=drink_id)
        return drink

    async def delete(self, caller_id: int, drink_id: int) -> Drink:
        """Delete a drink and return it. ForbiddenError unless the caller owns it."""
        drink = await self.get(drink_id)
        authorize_mutation(caller_id, drink.post_id)

        await self.db.delete(drink)
        await self.db.commit()
        logger.info("brewlog.drink_deleted", drink_id=drink_id)
        return drink


def _editable(fields: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in fields.items() if k in EDITABLE_FIELDS}
