"""Pure draft helpers: derivation from a record, field edits, menu toggles, validation.

None of these touch a store or a data source; the view controller calls them
and owns the resulting Draft.
"""
from typing import Any, List, Optional

from lunchpick.domain.Draft import Draft
from lunchpick.domain.Recommendation import MealRecommendation, Recommendation
from lunchpick.infra.Entity_Store import EntityStore
from lunchpick.utilities.constants import DRAFT_FIELDS, MEAL_SLOTS
from lunchpick.utilities.errors import DraftValidationError


def empty_draft(default_restaurant_id: str = "") -> Draft:
    return Draft(
        MealRecommendation(default_restaurant_id, [], ""),
        MealRecommendation(default_restaurant_id, [], ""),
    )


def derive_draft(record: Optional[Recommendation], default_restaurant_id: str = "") -> Draft:
    """Draft for a date: a deep copy of its record, or the empty template.

    Menu-id lists are copied so edits to the draft can never reach the
    repository's cached record.
    """
    if record is None:
        return empty_draft(default_restaurant_id)
    return Draft(record.lunch.copy(), record.dinner.copy())


def _check_slot(meal: str) -> None:
    if meal not in MEAL_SLOTS:
        raise ValueError(f"Unknown meal slot: {meal!r} (expected one of {', '.join(MEAL_SLOTS)})")


def apply_field(draft: Draft, meal: str, field: str, value: Any) -> None:
    """Replace one field of one meal in place.

    Switching restaurants clears the meal's menu selection, since menu ids
    from the previous restaurant would no longer be valid.
    """
    _check_slot(meal)
    if field not in DRAFT_FIELDS:
        raise ValueError(f"Unknown draft field: {field!r}")
    target = draft.meal(meal)
    if field == "restaurant_id":
        value = str(value)
        if value != target.restaurant_id:
            target.menu_ids = []
        target.restaurant_id = value
    elif field == "menu_ids":
        if isinstance(value, str) or not hasattr(value, "__iter__"):
            raise ValueError("menu_ids must be a list of menu ids")
        target.menu_ids = list(dict.fromkeys(str(v) for v in value))
    else:
        target.reason = str(value)


def toggle_menu(draft: Draft, meal: str, menu_id: str, selected: bool) -> None:
    """Add (idempotent, insertion order) or remove (no-op when absent) a menu id."""
    _check_slot(meal)
    ids = draft.meal(meal).menu_ids
    if selected:
        if menu_id not in ids:
            ids.append(menu_id)
    elif menu_id in ids:
        ids.remove(menu_id)


def draft_problems(draft: Draft, store: EntityStore) -> List[str]:
    problems = []
    for slot in MEAL_SLOTS:
        meal = draft.meal(slot)
        for menu_id in meal.menu_ids:
            menu = store.menu(menu_id)
            if menu is None:
                problems.append(f"{slot}: unknown menu {menu_id}")
            elif not menu.belongs_to(meal.restaurant_id):
                problems.append(f"{slot}: menu {menu_id} does not belong to restaurant {meal.restaurant_id}")
    return problems


def validate_draft(draft: Draft, store: EntityStore) -> None:
    """Every selected menu must exist and belong to its meal's restaurant."""
    problems = draft_problems(draft, store)
    if problems:
        raise DraftValidationError(problems)
