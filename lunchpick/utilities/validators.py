"""
Input validation schemas using Pydantic for restaurant, menu and recommendation data.
"""
from datetime import date as _date, datetime
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from lunchpick.utilities.constants import ISO_DATE_FORMAT


def _strip(v):
    return v.strip() if isinstance(v, str) else v


class _CamelModel(BaseModel):
    """Accepts both the camelCase wire names and the snake_case field names."""
    model_config = ConfigDict(populate_by_name=True)


class RestaurantInput(_CamelModel):
    """Schema for restaurant create/update validation."""
    name: str = Field(..., min_length=1, max_length=100)
    category: str = Field(default="", max_length=50)
    location: str = Field(..., min_length=1, max_length=200)
    price_range: str = Field(default="", alias="priceRange", max_length=20)
    operating_hours: str = Field(..., alias="operatingHours", min_length=1, max_length=50)
    is_available_for_solo: bool = Field(default=False, alias="isAvailableForSolo")
    image_urls: List[str] = Field(default_factory=list, alias="imageUrls")
    specialties: List[str] = Field(default_factory=list)

    @field_validator('name', 'location', 'operating_hours', mode='before')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace so blank values fail min_length."""
        return _strip(v)

    @field_validator('image_urls', 'specialties')
    @classmethod
    def drop_blank_entries(cls, v):
        return [item.strip() for item in v if item and item.strip()]


class MenuInput(_CamelModel):
    """Schema for menu create/update validation."""
    restaurant_id: str = Field(..., alias="restaurantId", min_length=1)
    name: str = Field(..., min_length=1, max_length=100)
    category: str = Field(default="", max_length=50)
    price: int = Field(..., ge=0)
    description: str = Field(default="", max_length=500)
    tags: List[str] = Field(default_factory=list)

    @field_validator('name', 'restaurant_id', mode='before')
    @classmethod
    def strip_whitespace(cls, v):
        return _strip(v)

    @field_validator('tags')
    @classmethod
    def dedupe_tags(cls, v):
        """Tags are a set: blank entries dropped, duplicates collapsed, entry order kept."""
        return list(dict.fromkeys(tag.strip() for tag in v if tag and tag.strip()))


class MealRecommendationInput(_CamelModel):
    restaurant_id: str = Field(default="", alias="restaurantId")
    menu_ids: List[str] = Field(default_factory=list, alias="menuIds")
    reason: str = ""


class RecommendationInput(_CamelModel):
    """Schema for a full recommendation payload (date + lunch + dinner)."""
    date: str = Field(..., pattern=r'^\d{4}-\d{2}-\d{2}$')
    lunch: MealRecommendationInput
    dinner: MealRecommendationInput

    @field_validator('date')
    @classmethod
    def validate_calendar_date(cls, v):
        """Reject well-formed but impossible dates such as 2025-02-30."""
        datetime.strptime(v, ISO_DATE_FORMAT)
        return v


class DateSelection(BaseModel):
    date: _date


class DraftFieldUpdate(BaseModel):
    field: Literal["restaurant_id", "menu_ids", "reason"]
    value: Any

    @field_validator('value')
    @classmethod
    def value_required(cls, v):
        if v is None:
            raise ValueError('value is required')
        return v


class MenuToggle(_CamelModel):
    menu_id: str = Field(..., alias="menuId", min_length=1)
    selected: bool


class MenuFilter(_CamelModel):
    """Optional criteria for the menu list; every criterion is AND-combined."""
    restaurant_id: Optional[str] = Field(default=None, alias="restaurantId")
    category: Optional[str] = None
    min_price: Optional[int] = Field(default=None, alias="minPrice", ge=0)
    max_price: Optional[int] = Field(default=None, alias="maxPrice", ge=0)
