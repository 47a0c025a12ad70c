"""Pydantic schemas for drinks and favorites.

Learn: Separate "Create" schemas (input) from "Read" schemas (output).
post_id only appears on the Read side; the owner always comes from the
caller's token, never from the request body.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class DrinkCreate(BaseModel):
    drink_name: str = Field(..., min_length=1, max_length=100)
    brew: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    ingredients: list[str] = Field(default_factory=list)


class DrinkUpdate(BaseModel):
    drink_name: Optional[str] = Field(None, min_length=1, max_length=100)
    brew: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    ingredients: Optional[list[str]] = None


class DrinkRead(BaseModel):
    id: int
    drink_name: str
    brew: str
    description: Optional[str] = None
    ingredients: list[str]
    post_id: int
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class FavoriteCreate(BaseModel):
    drink_id: int


class FavoriteRead(BaseModel):
    drink_id: int
    user_id: int

    model_config = {"from_attributes": True}


class FavoriteDrink(BaseModel):
    id: int
    drink_name: str

    model_config = {"from_attributes": True}
