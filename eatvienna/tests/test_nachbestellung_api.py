import unittest
from fastapi.testclient import TestClient
from eatvienna.api.api_run import app
from eatvienna.events import push_observers
from eatvienna.tests.data_fixtures import TempDataMixin


class FakeSender:
    def __init__(self):
        self.sent = []

    def send_to_admins(self, payload):
        self.sent.append(payload)
        return 2


class BrokenSender:
    def send_to_admins(self, payload):
        raise RuntimeError("push service down")


class TestNachbestellungAPI(TempDataMixin, unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)
        push_observers.start()

    def setUp(self):
        super().setUp()
        self.sender = FakeSender()
        push_observers.set_sender(self.sender)
        self.event = self.client.post('/api/events', json={"name": "Donauinselfest"}).json()

    def tearDown(self):
        push_observers.set_sender(None)
        super().tearDown()

    def _create(self, **fields):
        body = {
            "event_id": self.event['id'],
            "products": [{"name": "Burger", "quantity": 20, "unit": "Stück"}],
            "ingredients": [{"name": "Bun", "quantity": 2}],
            "created_by": "office@ieatvienna.at",
        }
        body.update(fields)
        return self.client.post('/api/nachbestellungen', json=body)

    def test_create_notifies_admins(self):
        cursor = push_observers.get_notifications()['next_cursor']
        resp = self._create()
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data['event_name'], 'Donauinselfest')
        self.assertEqual(data['total_items'], 2)
        bun = [i for i in data['items'] if i['item_name'] == 'Bun'][0]
        # packaging unit taken from the packaging table
        self.assertEqual(bun['packaging_unit'], 'Packung')
        self.assertEqual(len(self.sender.sent), 1)
        self.assertIn('Donauinselfest', self.sender.sent[0]['message'])
        notes = self.client.get('/api/notifications', params={"since": cursor}).json()['notifications']
        self.assertEqual([n['type'] for n in notes], ['nachbestellung.created'])
        self.assertEqual(notes[0]['delivered'], 2)

    def test_push_failure_does_not_fail_the_request(self):
        push_observers.set_sender(BrokenSender())
        cursor = push_observers.get_notifications()['next_cursor']
        with self.assertLogs("eatvienna.events.push_observers", level="ERROR"):
            resp = self._create()
        self.assertEqual(resp.status_code, 200)
        notes = push_observers.get_notifications(cursor)['notifications']
        self.assertEqual(notes[0]['delivered'], 0)

    def test_unknown_event_and_empty_request(self):
        self.assertEqual(self._create(event_id=999).status_code, 404)
        self.assertEqual(self._create(products=[], ingredients=[]).status_code, 422)
        resp = self._create(products=[{"name": "Burger", "quantity": 0}], ingredients=[])
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(self.sender.sent, [])

    def test_status_update_is_listed_not_pushed(self):
        reorder = self._create().json()
        cursor = push_observers.get_notifications()['next_cursor']
        resp = self.client.put(f"/api/nachbestellungen/{reorder['id']}/status",
                               json={"status": "abgeschlossen", "user": "agnes@ieatvienna.at"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()['completed_by'], 'agnes@ieatvienna.at')
        self.assertEqual(len(self.sender.sent), 1)
        notes = push_observers.get_notifications(cursor)['notifications']
        self.assertEqual(notes[0]['type'], 'nachbestellung.status_changed')
        self.assertIn('abgeschlossen', notes[0]['message'])

    def test_invalid_status(self):
        reorder = self._create().json()
        resp = self.client.put(f"/api/nachbestellungen/{reorder['id']}/status", json={"status": "verloren"})
        self.assertEqual(resp.status_code, 422)

    def test_list_item_update_and_delete(self):
        reorder = self._create().json()
        self._create(created_by="agnes@ieatvienna.at")
        listed = self.client.get('/api/nachbestellungen', params={"created_by": "office@ieatvienna.at"}).json()
        self.assertEqual(listed['count'], 1)
        self.assertNotIn('items', listed['nachbestellungen'][0])
        item_id = reorder['items'][0]['id']
        resp = self.client.put(f"/api/nachbestellungen/items/{item_id}", json={"is_packed": True})
        self.assertTrue(resp.json()['is_packed'])
        self.assertEqual(self.client.delete(f"/api/nachbestellungen/{reorder['id']}").status_code, 200)
        self.assertEqual(self.client.get(f"/api/nachbestellungen/{reorder['id']}").status_code, 404)


if __name__ == '__main__':
    unittest.main()
