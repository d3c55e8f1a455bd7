"""View controller for the daily recommendation editor.

Owns the date cursor and the draft for that date. Draft derivation is a
synchronous, pure step (`derive_draft`) run whenever the cursor moves or a
repository load lands, so the draft always matches the record of the date
currently selected.

Every failure is caught here and kept in `error`; the previously loaded data
stays usable.
"""
import logging
from datetime import date, datetime, timedelta
from typing import Any, Callable, Dict, Optional, Union

from lunchpick.domain.Draft import Draft
from lunchpick.domain.Recommendation import Recommendation
from lunchpick.events.Event_Bus import (
    EventBus,
    RECOMMENDATIONS_ERROR, RECOMMENDATIONS_SAVED, RECOMMENDATIONS_STATE_CHANGED,
)
from lunchpick.infra.Entity_Store import EntityStore
from lunchpick.infra.Recommendation_Repository import RecommendationRepository
from lunchpick.logic.recommendations.draft import apply_field, derive_draft, empty_draft, toggle_menu
from lunchpick.logic.recommendations.generator import DraftGenerator
from lunchpick.logic.recommendations.persistence import PersistenceMediator
from lunchpick.utilities.constants import ISO_DATE_FORMAT, MEAL_SLOTS
from lunchpick.utilities.errors import LunchPickError

logger = logging.getLogger(__name__)

# Failures recovered into `error` instead of escaping a command
RECOVERABLE = (LunchPickError, ValueError)


def parse_date(value: Union[date, str]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(str(value).strip(), ISO_DATE_FORMAT).date()


class RecommendationViewController:
    def __init__(self, store: EntityStore, repository: RecommendationRepository,
                 generator: Optional[DraftGenerator] = None, mediator: Optional[PersistenceMediator] = None,
                 bus: Optional[EventBus] = None, clock: Callable[[], date] = date.today):
        self.store = store
        self.repository = repository
        self.generator = generator or DraftGenerator(store)
        self.mediator = mediator or PersistenceMediator(repository, store)
        self.bus = bus or EventBus()
        self._clock = clock

        self.selected_date: date = clock()
        self.active_recommendation: Optional[Recommendation] = None
        self.draft: Draft = empty_draft()
        self.error: Optional[Exception] = None
        self.dirty = False
        self._in_flight = 0

    @property
    def loading(self) -> bool:
        return self._in_flight > 0

    @property
    def date_key(self) -> str:
        return self.selected_date.strftime(ISO_DATE_FORMAT)

    # -------------------- derivation --------------------
    def _derive(self, reason: str) -> None:
        self.active_recommendation = self.repository.find(self.date_key)
        self.draft = derive_draft(self.active_recommendation, self.store.first_restaurant_id())
        self.dirty = False
        self._changed(reason)

    def _changed(self, reason: str) -> None:
        self.bus.publish(RECOMMENDATIONS_STATE_CHANGED, {"reason": reason, "date": self.date_key, "dirty": self.dirty})

    def _fail(self, command: str, err: Exception) -> None:
        self.error = err
        logger.warning("%s failed: %s", command, err)
        self.bus.publish(RECOMMENDATIONS_ERROR, {"command": command, "message": str(err)})

    # -------------------- cursor --------------------
    def set_selected_date(self, value: Union[date, str]) -> bool:
        try:
            new_date = parse_date(value)
        except ValueError as e:
            self._fail("set_selected_date", e)
            return False
        self.selected_date = new_date
        self.error = None
        self._derive("date")
        return True

    def shift_date(self, step: int) -> bool:
        if step not in (1, -1):
            self._fail("shift_date", ValueError(f"step must be +1 or -1, got {step}"))
            return False
        return self.set_selected_date(self.selected_date + timedelta(days=step))

    # -------------------- draft edits --------------------
    def update_draft_field(self, meal: str, field: str, value: Any) -> bool:
        try:
            apply_field(self.draft, meal, field, value)
        except ValueError as e:
            self._fail("update_draft_field", e)
            return False
        self.error = None
        self.dirty = True
        self._changed("edit")
        return True

    def toggle_menu_selection(self, meal: str, menu_id: str, selected: bool) -> bool:
        try:
            toggle_menu(self.draft, meal, menu_id, selected)
        except ValueError as e:
            self._fail("toggle_menu_selection", e)
            return False
        self.error = None
        self.dirty = True
        self._changed("edit")
        return True

    def discard_changes(self) -> None:
        self.error = None
        self._derive("discard")

    def generate(self) -> Optional[Draft]:
        self.error = None
        try:
            candidate = self.generator.generate()
        except RECOVERABLE as e:
            self._fail("generate", e)
            return None
        self.draft = candidate
        self.dirty = True
        self._changed("generate")
        return candidate

    # -------------------- async commands --------------------
    async def start(self) -> bool:
        """Load reference data and recommendations, then derive for the cursor."""
        self.error = None
        self._in_flight += 1
        ok = True
        try:
            await self.store.load()
            await self.repository.load_all()
        except RECOVERABLE as e:
            self._fail("start", e)
            ok = False
        finally:
            self._in_flight -= 1
        self._derive("start")
        return ok

    async def refresh(self, issued_for: Optional[date] = None) -> bool:
        """Reload the repository and re-derive.

        A load superseded by a newer one is dropped. If the cursor moved while
        the load was in flight and the user has since edited the new date's
        draft, those edits are kept and only the active record is replaced from
        the new snapshot, so a following save still picks create or update
        correctly. `issued_for` lets a save pass the date it was started on.
        """
        issued_for = issued_for or self.selected_date
        self.error = None
        self._in_flight += 1
        try:
            records = await self.repository.load_all()
        except RECOVERABLE as e:
            self._fail("refresh", e)
            return False
        finally:
            self._in_flight -= 1
        if records is None:
            return False
        if self.selected_date != issued_for and self.dirty:
            # the record follows the new snapshot, only the edited draft is kept
            self.active_recommendation = self.repository.find(self.date_key)
            logger.info("Cursor moved to %s during refresh; keeping unsaved edits", self.date_key)
            self._changed("refresh")
            return True
        self._derive("refresh")
        return True

    async def save(self) -> Optional[Recommendation]:
        date_key = self.date_key
        has_existing = self.active_recommendation is not None
        self.error = None
        self._in_flight += 1
        try:
            saved = await self.mediator.save(date_key, self.draft, has_existing)
        except RECOVERABLE as e:
            # draft left as is so no edits are lost
            self._fail("save", e)
            return None
        finally:
            self._in_flight -= 1
        self.bus.publish(RECOMMENDATIONS_SAVED, {"date": date_key, "mode": "update" if has_existing else "create"})
        await self.refresh(issued_for=parse_date(date_key))
        return saved

    # -------------------- presentation --------------------
    def date_label(self, day: Optional[date] = None) -> str:
        day = day or self.selected_date
        today = self._clock()
        prefix = ""
        if day == today:
            prefix = "Today - "
        elif day == today + timedelta(days=1):
            prefix = "Tomorrow - "
        return prefix + day.strftime("%Y-%m-%d (%A)")

    def _labels(self, record: Recommendation) -> Dict[str, Any]:
        out = {}
        for slot in MEAL_SLOTS:
            meal = record.meal(slot)
            out[slot] = {
                "restaurantName": self.store.restaurant_name(meal.restaurant_id),
                "menuNames": self.store.menu_names(meal.menu_ids),
            }
        return out

    def _menu_options(self) -> Dict[str, Any]:
        out = {}
        for slot in MEAL_SLOTS:
            meal = self.draft.meal(slot)
            out[slot] = [
                {"id": m.id, "name": m.name, "price": m.price, "selected": m.id in meal.menu_ids}
                for m in self.store.menus_of(meal.restaurant_id)
            ]
        return out

    def snapshot(self) -> Dict[str, Any]:
        """Observable state for the presentation layer, JSON-ready."""
        active = self.active_recommendation
        return {
            "selectedDate": self.date_key,
            "dateLabel": self.date_label(),
            "activeRecommendation": active.to_dict() if active else None,
            "activeLabels": self._labels(active) if active else None,
            "draft": self.draft.to_dict(),
            "menuOptions": self._menu_options(),
            "dirty": self.dirty,
            "loading": self.loading,
            "error": str(self.error) if self.error else None,
        }
