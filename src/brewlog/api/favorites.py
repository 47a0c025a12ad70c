"""Favorites API — mark drinks and list your own favorites."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from brewlog.auth.dependencies import get_current_user
from brewlog.auth.identity import SessionClaim
from brewlog.db.engine import get_db
from brewlog.schemas.drink import FavoriteCreate, FavoriteDrink, FavoriteRead
from brewlog.services.favorite_service import FavoriteService

router = APIRouter(prefix="/favorites")


def _svc(db: AsyncSession = Depends(get_db)) -> FavoriteService:
    return FavoriteService(db)


@router.post("", response_model=FavoriteRead, status_code=201)
async def add_favorite(
    body: FavoriteCreate,
    claim: SessionClaim = Depends(get_current_user),
    svc: FavoriteService = Depends(_svc),
):
    return await svc.add(claim.id, body.drink_id)


@router.get("", response_model=list[FavoriteDrink])
async def list_favorites(
    claim: SessionClaim = Depends(get_current_user),
    svc: FavoriteService = Depends(_svc),
):
    return await svc.list_for_user(claim.id)
