"""API route aggregation.

All routers registered here get mounted in main.py.

Learn: unlike a "protect the whole router" setup, auth here is decided
per route. Drinks are readable by anyone, so the drinks router can't
carry a blanket auth dependency; each mutating handler asks for
get_current_user itself. Favorites are always per-user, so that router
is protected as a whole.
"""

from fastapi import APIRouter, Depends

from brewlog.api.auth import router as auth_router
from brewlog.api.drinks import router as drinks_router
from brewlog.api.favorites import router as favorites_router
from brewlog.api.health import router as health_router
from brewlog.auth.dependencies import get_current_user

_auth = [Depends(get_current_user)]

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])
api_router.include_router(drinks_router, tags=["drinks"])
api_router.include_router(favorites_router, tags=["favorites"], dependencies=_auth)
