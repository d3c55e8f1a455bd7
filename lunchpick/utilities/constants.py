from typing import Final

ISO_DATE_FORMAT: Final[str] = "%Y-%m-%d"
MEAL_SLOTS: Final[tuple[str, ...]] = ("lunch", "dinner")
DRAFT_FIELDS: Final[tuple[str, ...]] = ("restaurant_id", "menu_ids", "reason")
UNKNOWN_LABEL: Final[str] = "Unknown"
GENERATED_MENU_COUNT: Final[int] = 2
REASON_TEMPLATES: Final[dict[str, str]] = {
    "lunch": "{restaurant} serves delicious {menus}.",
    "dinner": "{restaurant}'s {menus} make a perfect dinner.",
}
