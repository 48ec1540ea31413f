from __future__ import annotations

from pydantic import BaseModel, Field

from .state import Preference


class PreferenceRequest(BaseModel):
    product_id: str = Field(..., min_length=1)


class CategoriesRequest(BaseModel):
    categories: list[str] = Field(default_factory=list, max_length=50)


class PreferenceStateOut(BaseModel):
    liked: list[str]
    disliked: list[str]
    stated_categories: list[str]
    preferred_categories: list[str]


class PreferenceUpdateResponse(BaseModel):
    product_id: str
    preference: Preference
    message: str
