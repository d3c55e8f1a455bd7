"""Recommendation domain: one record per calendar date with a lunch and a dinner pick.

The date string (YYYY-MM-DD) is the key; records carry no generated id.
"""
from typing import List, Optional

# Older payloads nest the meals under these keys instead of "lunch"/"dinner"
_LEGACY_KEYS = {"lunch": "lunchRecommendation", "dinner": "dinnerRecommendation"}


class MealRecommendation:
    """Restaurant + selected menus + free-text reason for a single meal."""

    def __init__(self, restaurant_id: str = "", menu_ids: Optional[List[str]] = None, reason: str = ""):
        self.restaurant_id = restaurant_id
        self.menu_ids = menu_ids[:] if menu_ids else []
        self.reason = reason

    def __str__(self) -> str:
        return f"{self.restaurant_id} {self.menu_ids} - {self.reason}"

    __repr__ = __str__

    def __eq__(self, other) -> bool:
        return (isinstance(other, MealRecommendation)
                and self.restaurant_id == other.restaurant_id
                and self.menu_ids == other.menu_ids
                and self.reason == other.reason)

    def copy(self) -> "MealRecommendation":
        return MealRecommendation(self.restaurant_id, list(self.menu_ids), self.reason)

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return MealRecommendation(
            restaurant_id=str(d.get("restaurantId", "") or ""),
            menu_ids=[str(m) for m in (d.get("menuIds") or [])],
            reason=d.get("reason", "") or "",
        )

    def to_dict(self):
        return {
            "restaurantId": self.restaurant_id,
            "menuIds": list(self.menu_ids),
            "reason": self.reason,
        }


class Recommendation:
    def __init__(self, date: str, lunch: Optional[MealRecommendation] = None,
                 dinner: Optional[MealRecommendation] = None,
                 created_at: Optional[int] = None, updated_at: Optional[int] = None):
        self.date = date
        self.lunch = lunch or MealRecommendation()
        self.dinner = dinner or MealRecommendation()
        self.created_at = created_at
        self.updated_at = updated_at

    def __str__(self) -> str:
        return f"{self.date}: lunch={self.lunch} | dinner={self.dinner}"

    __repr__ = __str__

    def meal(self, slot: str) -> MealRecommendation:
        if slot == "lunch":
            return self.lunch
        if slot == "dinner":
            return self.dinner
        raise ValueError(f"Unknown meal slot: {slot}")

    def same_meals(self, other: "Recommendation") -> bool:
        """Field equality of date and meals, ignoring server timestamps."""
        return self.date == other.date and self.lunch == other.lunch and self.dinner == other.dinner

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        meals = {}
        for slot, legacy in _LEGACY_KEYS.items():
            meals[slot] = MealRecommendation.from_dict(d.get(slot) or d.get(legacy) or {})
        return Recommendation(
            date=str(d.get("date", "")),
            lunch=meals["lunch"],
            dinner=meals["dinner"],
            created_at=d.get("createdAt"),
            updated_at=d.get("updatedAt"),
        )

    def to_payload(self):
        """Body for create/update requests: date and meals, without server timestamps."""
        return {
            "date": self.date,
            "lunch": self.lunch.to_dict(),
            "dinner": self.dinner.to_dict(),
        }

    def to_dict(self):
        out = self.to_payload()
        out["createdAt"] = self.created_at
        if self.updated_at is not None:
            out["updatedAt"] = self.updated_at
        return out
