import asyncio
import unittest
from lunchpick.domain.Recommendation import MealRecommendation, Recommendation
from lunchpick.infra.Recommendation_Repository import RecommendationRepository
from lunchpick.utilities.errors import TransportError
from lunchpick.tests.seed_data import DATE, GatedDataSource, seed


def _record(date, restaurant="R1", menus=("M1",), reason="r"):
    return Recommendation(date, MealRecommendation(restaurant, list(menus), reason),
                          MealRecommendation("R2", ["M3"], reason + "2"))


class TestRecommendationRepository(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.source = GatedDataSource(seed(with_recommendation=True))
        self.repo = RecommendationRepository(self.source)
        await self.repo.load_all()

    def test_find_exact_date(self):
        self.assertEqual(self.repo.find(DATE).lunch.menu_ids, ["M1", "M2"])
        self.assertIsNone(self.repo.find("2025-03-28"))

    async def test_writes_need_a_reload(self):
        await self.repo.create(_record("2025-03-28"))
        self.assertIsNone(self.repo.find("2025-03-28"))
        await self.repo.load_all()
        self.assertIsNotNone(self.repo.find("2025-03-28"))

    async def test_date_key_stays_unique(self):
        await self.repo.create(_record("2025-03-28"))
        await self.repo.update("2025-03-28", _record("2025-03-28", reason="second"))
        await self.repo.update(DATE, _record(DATE, reason="third"))
        with self.assertRaises(TransportError):
            await self.repo.create(_record(DATE))
        await self.repo.load_all()
        dates = [r.date for r in self.repo.records]
        self.assertEqual(sorted(dates), sorted(set(dates)))
        self.assertEqual(self.repo.dates(), ["2025-03-27", "2025-03-28"])
        self.assertEqual(self.repo.find("2025-03-28").lunch.reason, "second")
        self.assertEqual(self.repo.find(DATE).lunch.reason, "third")

    async def test_update_keeps_path_date(self):
        saved = await self.repo.update(DATE, _record("1999-01-01"))
        self.assertEqual(saved.date, DATE)

    async def test_fetch_bypasses_cache(self):
        self.assertEqual((await self.repo.fetch(DATE)).dinner.menu_ids, ["M3"])
        self.assertIsNone(await self.repo.fetch("2030-01-01"))

    async def test_superseded_load_is_discarded(self):
        gate = self.source.hold_next_load()
        slow = asyncio.create_task(self.repo.load_all())
        await asyncio.sleep(0)
        await self.repo.create(_record("2025-03-28"))
        fresh = await self.repo.load_all()
        self.assertEqual(len(fresh), 2)
        gate.set()
        self.assertIsNone(await slow)
        self.assertIsNotNone(self.repo.find("2025-03-28"))

if __name__ == '__main__':
    unittest.main()
