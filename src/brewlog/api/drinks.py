"""Drink API routes.

Learn: listing and fetching drinks is open. Posting needs a logged-in
user, who becomes the drink's owner. PUT and DELETE need the owner:
anyone else gets a 403 (authenticated, just not allowed), which is
distinct from the 401 a caller without a valid token gets.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from brewlog.auth.dependencies import get_current_user
from brewlog.auth.identity import SessionClaim
from brewlog.db.engine import get_db
from brewlog.schemas.drink import DrinkCreate, DrinkRead, DrinkUpdate
from brewlog.services.drink_service import DrinkService

router = APIRouter(prefix="/drinks")


def _svc(db: AsyncSession = Depends(get_db)) -> DrinkService:
    return DrinkService(db)


@router.get("", response_model=list[DrinkRead])
async def list_drinks(svc: DrinkService = Depends(_svc)):
    return await svc.list_drinks()


@router.get("/{drink_id}", response_model=DrinkRead)
async def get_drink(drink_id: int, svc: DrinkService = Depends(_svc)):
    return await svc.get(drink_id)


@router.post("", response_model=DrinkRead, status_code=201)
async def create_drink(
    body: DrinkCreate,
    claim: SessionClaim = Depends(get_current_user),
    svc: DrinkService = Depends(_svc),
):
    """Post a drink owned by the caller."""
    return await svc.create(claim.id, body.model_dump())


@router.put("/{drink_id}", response_model=DrinkRead)
async def update_drink(
    drink_id: int,
    body: DrinkUpdate,
    claim: SessionClaim = Depends(get_current_user),
    svc: DrinkService = Depends(_svc),
):
    fields = body.model_dump(exclude_unset=True, exclude_none=True)
    return await svc.update(claim.id, drink_id, fields)


@router.delete("/{drink_id}", response_model=DrinkRead)
async def delete_drink(
    drink_id: int,
    claim: SessionClaim = Depends(get_current_user),
    svc: DrinkService = Depends(_svc),
):
    """Delete a drink. Returns the drink as it was."""
    drink = await svc.delete(claim.id, drink_id)
    return DrinkRead.model_validate(drink)
