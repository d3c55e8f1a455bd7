import unittest
from fastapi.testclient import TestClient

from lunchpick.api.api_run import create_app
from lunchpick.infra.Data_Source import InMemoryDataSource
from lunchpick.tests.seed_data import DATE, seed


def client_for(data):
    source = InMemoryDataSource(data, latency_ms=0)
    return TestClient(create_app(data_source=source, mock_source=source))


class TestConsoleAPI(unittest.TestCase):
    def setUp(self):
        self.client = client_for(seed(with_recommendation=True))
        self.client.__enter__()
        self.addCleanup(self.client.__exit__, None, None, None)

    def select(self, day=DATE):
        resp = self.client.post('/console/date', json={'date': day})
        self.assertEqual(resp.status_code, 200)
        return resp.json()

    def test_root_redirects_to_state(self):
        resp = self.client.get('/', follow_redirects=False)
        self.assertIn(resp.status_code, (302, 307))
        self.assertTrue(resp.headers['location'].endswith('/console/state'))

    def test_select_date_with_record(self):
        state = self.select()
        self.assertEqual(state['selectedDate'], DATE)
        self.assertEqual(state['activeRecommendation']['lunch']['menuIds'], ['M1', 'M2'])
        self.assertEqual(state['draft']['dinner']['restaurantId'], 'R2')
        self.assertFalse(state['dirty'])

    def test_next_and_previous_day(self):
        self.select()
        state = self.client.post('/console/date/next').json()
        self.assertEqual(state['selectedDate'], '2025-03-28')
        self.assertIsNone(state['activeRecommendation'])
        state = self.client.post('/console/date/prev').json()
        self.assertEqual(state['selectedDate'], DATE)

    def test_invalid_date_rejected(self):
        resp = self.client.post('/console/date', json={'date': '2025-02-30'})
        self.assertEqual(resp.status_code, 422)

    def test_edit_and_save_round_trip(self):
        self.select('2025-03-28')
        self.client.patch('/console/draft/lunch', json={'field': 'reason', 'value': 'Rainy day'})
        self.client.post('/console/draft/lunch/menus', json={'menuId': 'M1', 'selected': True})
        self.client.patch('/console/draft/dinner', json={'field': 'restaurant_id', 'value': 'R2'})
        state = self.client.post('/console/draft/dinner/menus', json={'menuId': 'M3', 'selected': True}).json()
        self.assertTrue(state['dirty'])

        state = self.client.post('/console/save').json()
        self.assertIsNone(state['error'])
        self.assertFalse(state['dirty'])
        self.assertEqual(state['activeRecommendation']['lunch'],
                         {'restaurantId': 'R1', 'menuIds': ['M1'], 'reason': 'Rainy day'})

        resp = self.client.get('/api/recommendations/2025-03-28')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()['dinner']['menuIds'], ['M3'])

    def test_invalid_draft_reported_in_state(self):
        self.select('2025-03-28')
        self.client.patch('/console/draft/lunch', json={'field': 'menu_ids', 'value': ['M3']})
        state = self.client.post('/console/save').json()
        self.assertIn('M3', state['error'])
        self.assertTrue(state['dirty'])

    def test_unknown_slot_reported_in_state(self):
        resp = self.client.patch('/console/draft/brunch', json={'field': 'reason', 'value': 'x'})
        self.assertEqual(resp.status_code, 200)
        self.assertIn('brunch', resp.json()['error'])

    def test_draft_update_needs_value(self):
        resp = self.client.patch('/console/draft/lunch', json={'field': 'reason', 'value': None})
        self.assertEqual(resp.status_code, 422)

    def test_generate_and_discard(self):
        self.select()
        state = self.client.post('/console/generate').json()
        self.assertTrue(state['dirty'])
        self.assertIn(state['draft']['lunch']['restaurantId'], ('R1', 'R2'))
        state = self.client.post('/console/discard').json()
        self.assertFalse(state['dirty'])
        self.assertEqual(state['draft']['lunch']['menuIds'], ['M1', 'M2'])

    def test_menu_filter(self):
        data = self.client.get('/console/menus', params={'restaurantId': 'R1', 'maxPrice': 4500}).json()
        self.assertEqual(data['count'], 1)
        self.assertEqual(data['total'], 3)
        self.assertEqual(data['menus'][0]['name'], 'Gimbap')
        self.assertEqual(data['menus'][0]['restaurantName'], 'Bunsik Corner')
        self.assertIn('Korean', data['categories'])

    def test_restaurant_crud(self):
        resp = self.client.post('/console/restaurants', json={
            'name': 'Noodle Bar', 'location': 'Station', 'operatingHours': '11:00-22:00'})
        self.assertEqual(resp.status_code, 200)
        created = resp.json()
        names = [r['name'] for r in self.client.get('/console/restaurants').json()['restaurants']]
        self.assertIn('Noodle Bar', names)

        resp = self.client.put(f"/console/restaurants/{created['id']}", json={'name': 'Noodle House'})
        self.assertEqual(resp.json()['name'], 'Noodle House')
        self.assertEqual(resp.json()['location'], 'Station')

        resp = self.client.delete(f"/console/restaurants/{created['id']}")
        self.assertEqual(resp.status_code, 200)
        names = [r['name'] for r in self.client.get('/console/restaurants').json()['restaurants']]
        self.assertNotIn('Noodle House', names)

    def test_restaurant_validation(self):
        resp = self.client.post('/console/restaurants', json={'name': '  ', 'location': 'x', 'operatingHours': 'y'})
        self.assertEqual(resp.status_code, 422)

    def test_menu_for_unknown_restaurant(self):
        resp = self.client.post('/console/menus', json={'restaurantId': 'R9', 'name': 'Ramen', 'price': 7000})
        self.assertEqual(resp.status_code, 400)

    def test_delete_unknown_menu(self):
        resp = self.client.delete('/console/menus/M9')
        self.assertEqual(resp.status_code, 404)

    def test_events_since(self):
        self.select()
        first = self.client.get('/console/events').json()
        self.assertTrue(first['events'])
        cursor = first['next_cursor']
        self.client.post('/console/date/next')
        later = self.client.get('/console/events', params={'since': cursor}).json()
        self.assertTrue(later['events'])
        self.assertTrue(all(e['id'] > cursor for e in later['events']))
        self.assertEqual(later['events'][-1]['date'], '2025-03-28')

    def test_each_app_keeps_its_own_events(self):
        self.select()
        self.client.post('/console/date/next')
        with client_for(seed()) as other:
            events = other.get('/console/events').json()['events']
        self.assertEqual(events[0]['id'], 1)
        self.assertEqual([e.get('reason') for e in events], ['start'])
        self.assertIsNot(other.app.state.event_log, self.client.app.state.event_log)


class TestMockAPI(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = client_for(seed(with_recommendation=True))

    def test_missing_recommendation_is_404(self):
        resp = self.client.get('/api/recommendations/1999-01-01')
        self.assertEqual(resp.status_code, 404)
        self.assertIn('error', resp.json())

    def test_second_record_for_date_conflicts(self):
        body = {'date': DATE, 'lunch': {}, 'dinner': {}}
        resp = self.client.post('/api/recommendations', json=body)
        self.assertEqual(resp.status_code, 409)

    def test_impossible_date_rejected(self):
        resp = self.client.post('/api/recommendations', json={'date': '2025-13-01', 'lunch': {}, 'dinner': {}})
        self.assertEqual(resp.status_code, 422)

    def test_restaurant_menus(self):
        data = self.client.get('/api/restaurants/R1/menus').json()
        self.assertEqual([m['id'] for m in data['menus']], ['M1', 'M2'])

if __name__ == '__main__':
    unittest.main()
