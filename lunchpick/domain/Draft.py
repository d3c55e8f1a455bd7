"""Draft: the editable, not-yet-saved projection of a date's recommendation.

A draft has no date of its own; the view controller's cursor supplies it.
"""
from typing import Optional

from lunchpick.domain.Recommendation import MealRecommendation, Recommendation


class Draft:
    def __init__(self, lunch: Optional[MealRecommendation] = None, dinner: Optional[MealRecommendation] = None):
        self.lunch = lunch or MealRecommendation()
        self.dinner = dinner or MealRecommendation()

    def __str__(self) -> str:
        return f"Draft(lunch={self.lunch} | dinner={self.dinner})"

    __repr__ = __str__

    def __eq__(self, other) -> bool:
        return isinstance(other, Draft) and self.lunch == other.lunch and self.dinner == other.dinner

    def meal(self, slot: str) -> MealRecommendation:
        if slot == "lunch":
            return self.lunch
        if slot == "dinner":
            return self.dinner
        raise ValueError(f"Unknown meal slot: {slot}")

    def copy(self) -> "Draft":
        return Draft(self.lunch.copy(), self.dinner.copy())

    def to_recommendation(self, date: str) -> Recommendation:
        return Recommendation(date, self.lunch.copy(), self.dinner.copy())

    def to_dict(self):
        return {"lunch": self.lunch.to_dict(), "dinner": self.dinner.to_dict()}
