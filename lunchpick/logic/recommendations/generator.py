import logging
import random
from typing import Optional

from lunchpick.domain.Draft import Draft
from lunchpick.domain.Recommendation import MealRecommendation
from lunchpick.infra.Entity_Store import EntityStore
from lunchpick.utilities.constants import GENERATED_MENU_COUNT, MEAL_SLOTS, REASON_TEMPLATES
from lunchpick.utilities.errors import NoCandidatesError

logger = logging.getLogger(__name__)


class DraftGenerator:
    """Fills a candidate draft from the entity store for a human to review.

    For each meal independently: one restaurant picked uniformly at random,
    its first menus in store order, and a templated reason. Nothing is saved.
    """

    def __init__(self, store: EntityStore, rng: Optional[random.Random] = None):
        self._store = store
        self._rng = rng or random.Random()

    def generate(self) -> Draft:
        restaurants = self._store.restaurants
        if not restaurants:
            raise NoCandidatesError("No restaurants available to generate a recommendation from")
        meals = {}
        for slot in MEAL_SLOTS:
            restaurant = self._rng.choice(restaurants)
            menus = self._store.menus_of(restaurant.id)[:GENERATED_MENU_COUNT]
            reason = REASON_TEMPLATES[slot].format(
                restaurant=restaurant.name,
                menus=", ".join(m.name for m in menus),
            )
            meals[slot] = MealRecommendation(restaurant.id, [m.id for m in menus], reason)
            logger.debug("Generated %s: %s", slot, meals[slot])
        return Draft(meals["lunch"], meals["dinner"])
