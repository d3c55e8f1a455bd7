import unittest
from lunchpick.domain.Draft import Draft
from lunchpick.domain.Recommendation import MealRecommendation, Recommendation
from lunchpick.infra.Entity_Store import EntityStore
from lunchpick.infra.Data_Source import InMemoryDataSource
from lunchpick.logic.recommendations.draft import (
    apply_field, derive_draft, draft_problems, toggle_menu, validate_draft,
)
from lunchpick.utilities.errors import DraftValidationError
from lunchpick.tests.seed_data import DATE, seed


class TestDeriveDraft(unittest.TestCase):
    def setUp(self):
        self.record = Recommendation(DATE, MealRecommendation("R1", ["M1", "M2"], "lunch reason"),
                                     MealRecommendation("R2", ["M3"], "dinner reason"))

    def test_copies_record(self):
        draft = derive_draft(self.record, "R1")
        self.assertEqual(draft.lunch, self.record.lunch)
        self.assertEqual(draft.dinner, self.record.dinner)

    def test_edits_never_reach_the_record(self):
        draft = derive_draft(self.record)
        toggle_menu(draft, "lunch", "M2", False)
        apply_field(draft, "dinner", "reason", "changed")
        self.assertEqual(self.record.lunch.menu_ids, ["M1", "M2"])
        self.assertEqual(self.record.dinner.reason, "dinner reason")

    def test_empty_template(self):
        draft = derive_draft(None, "R1")
        for meal in (draft.lunch, draft.dinner):
            self.assertEqual(meal, MealRecommendation("R1", [], ""))
        self.assertEqual(derive_draft(None).lunch.restaurant_id, "")


class TestDraftEdits(unittest.TestCase):
    def setUp(self):
        self.draft = Draft(MealRecommendation("R1", [], ""), MealRecommendation("R1", [], ""))

    def test_toggle_add_is_idempotent(self):
        toggle_menu(self.draft, "lunch", "M1", True)
        once = list(self.draft.lunch.menu_ids)
        toggle_menu(self.draft, "lunch", "M1", True)
        self.assertEqual(self.draft.lunch.menu_ids, once)

    def test_toggle_keeps_insertion_order(self):
        for menu_id in ("M2", "M1"):
            toggle_menu(self.draft, "lunch", menu_id, True)
        self.assertEqual(self.draft.lunch.menu_ids, ["M2", "M1"])

    def test_remove_absent_is_noop(self):
        toggle_menu(self.draft, "dinner", "M1", True)
        toggle_menu(self.draft, "dinner", "M9", False)
        self.assertEqual(self.draft.dinner.menu_ids, ["M1"])

    def test_restaurant_change_clears_menus(self):
        toggle_menu(self.draft, "lunch", "M1", True)
        apply_field(self.draft, "lunch", "restaurant_id", "R1")
        self.assertEqual(self.draft.lunch.menu_ids, ["M1"])
        apply_field(self.draft, "lunch", "restaurant_id", "R2")
        self.assertEqual(self.draft.lunch.menu_ids, [])
        self.assertEqual(self.draft.lunch.restaurant_id, "R2")

    def test_menu_ids_replacement_dedupes(self):
        apply_field(self.draft, "lunch", "menu_ids", ["M1", "M2", "M1"])
        self.assertEqual(self.draft.lunch.menu_ids, ["M1", "M2"])
        with self.assertRaises(ValueError):
            apply_field(self.draft, "lunch", "menu_ids", "M1")

    def test_bad_slot_and_field(self):
        with self.assertRaises(ValueError):
            apply_field(self.draft, "breakfast", "reason", "x")
        with self.assertRaises(ValueError):
            apply_field(self.draft, "lunch", "price", 1)
        with self.assertRaises(ValueError):
            toggle_menu(self.draft, "brunch", "M1", True)


class TestValidateDraft(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.store = EntityStore(InMemoryDataSource(seed(), latency_ms=0))
        await self.store.load()

    def test_valid_draft(self):
        draft = Draft(MealRecommendation("R1", ["M1"], "a"), MealRecommendation("R2", ["M3"], "b"))
        validate_draft(draft, self.store)

    def test_menus_from_another_restaurant(self):
        draft = Draft(MealRecommendation("R2", ["M1"], "a"), MealRecommendation("R2", ["M9"], "b"))
        problems = draft_problems(draft, self.store)
        self.assertEqual(len(problems), 2)
        with self.assertRaises(DraftValidationError) as ctx:
            validate_draft(draft, self.store)
        self.assertEqual(ctx.exception.problems, problems)

if __name__ == '__main__':
    unittest.main()
