import io
import unittest
from fastapi.testclient import TestClient
from openpyxl import Workbook, load_workbook
from eatvienna.api.api_run import app
from eatvienna.tests.data_fixtures import TempDataMixin


class TestEventsAPI(TempDataMixin, unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def _create_event(self, **fields):
        body = {"name": "Sommerfest", "type": "Catering", "date": "2025-07-12"}
        body.update(fields)
        resp = self.client.post('/api/events', json=body)
        self.assertEqual(resp.status_code, 200)
        return resp.json()

    def test_create_and_get_event(self):
        event = self._create_event(notes="Zelt mitnehmen")
        self.assertEqual(event['date'], '12.07.2025')
        self.assertEqual(event['notes'], 'Zelt mitnehmen')
        resp = self.client.get(f"/api/events/{event['id']}")
        self.assertEqual(resp.json()['name'], 'Sommerfest')
        self.assertEqual(self.client.get('/api/events/99').status_code, 404)

    def test_flags_and_filter(self):
        event = self._create_event()
        self._create_event(name="Hochzeit")
        resp = self.client.put(f"/api/events/{event['id']}/finished", json={"value": True})
        self.assertTrue(resp.json()['finished'])
        data = self.client.get('/api/events', params={"finished": "false"}).json()
        self.assertEqual([e['name'] for e in data['events']], ['Hochzeit'])

    def test_write_add_then_set(self):
        event = self._create_event()
        url = f"/api/events/{event['id']}/products/write"
        self.client.post(url, json={"name": "Burger", "kind": "add", "amount": 10, "unit": "Stück"})
        resp = self.client.post(url, json={"name": "Burger", "kind": "add", "amount": "5"})
        self.assertEqual(resp.json()['entry'], {"quantity": 15, "unit": "Stück"})
        resp = self.client.post(url, json={"name": "Burger", "kind": "set", "amount": 4})
        self.assertEqual(resp.json()['entry']['quantity'], 4)
        resp = self.client.post(url, json={"name": "Burger", "kind": "set", "amount": 0})
        self.assertTrue(resp.json()['removed'])
        products = self.client.get(f"/api/events/{event['id']}/products").json()['products']
        self.assertEqual(products, {})

    def test_write_rejects_unknown_target(self):
        event = self._create_event()
        resp = self.client.post(f"/api/events/{event['id']}/products/write",
                                json={"name": "Burger", "target": "drinks"})
        self.assertEqual(resp.status_code, 422)

    def test_packliste_for_saved_products(self):
        event = self._create_event()
        self.client.put(f"/api/events/{event['id']}/products", json={
            "products": {"Burger": {"quantity": 24, "unit": "Stück"}, "Kuchen": {"quantity": 1}},
        })
        data = self.client.get(f"/api/events/{event['id']}/packliste").json()
        self.assertEqual(data['ingredients']['Bun']['packaging_count'], 2)
        self.assertEqual(data['warnings'], ["Kein Rezept für 'Kuchen'"])
        self.assertEqual(data['event']['id'], event['id'])

    def test_pdf_and_excel_exports(self):
        event = self._create_event()
        self.client.put(f"/api/events/{event['id']}/products", json={"products": {"Burger": {"quantity": 5}}})
        resp = self.client.get(f"/api/events/{event['id']}/pdf", params={"mode": "bestellung"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.headers['content-type'], 'application/pdf')
        self.assertTrue(resp.content.startswith(b'%PDF'))
        resp = self.client.get(f"/api/events/{event['id']}/excel")
        self.assertEqual(resp.status_code, 200)
        self.assertIn('2025-07-12_Sommerfest.xlsx', resp.headers['content-disposition'])
        self.assertEqual(self.client.get(f"/api/events/{event['id']}/pdf", params={"mode": "x"}).status_code, 422)

    def test_import_excel_creates_event(self):
        wb = Workbook()
        ws = wb.active
        for row in (["Packliste"], ["Typ", "Verkauf"], ["Event Name", "Flohmarkt"], ["Datum", "05.09.2025"],
                    ["Produkte"], ["", "Anzahl", "Produkt"], ["☐", "30 Stück", "Burger"]):
            ws.append(row)
        buf = io.BytesIO()
        wb.save(buf)
        resp = self.client.post('/api/import/excel', params={"create": "true"},
                                files={"file": ("flohmarkt.xlsx", buf.getvalue())})
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data['products'], {"Burger": {"quantity": 30, "unit": "Stück"}})
        self.assertEqual(data['event']['name'], 'Flohmarkt')
        self.assertEqual(data['event']['date'], '05.09.2025')

    def test_pdf_filename(self):
        event = self._create_event()
        resp = self.client.get(f"/api/events/{event['id']}/pdf")
        self.assertIn('filename=2025-07-12_Sommerfest.pdf', resp.headers['content-disposition'])

    def test_excel_export_lists_categories_and_manual_ingredients(self):
        event = self._create_event()
        self.client.put(f"/api/events/{event['id']}/products", json={
            "products": {"Burger": {"quantity": 5, "unit": "Stück"}, "Cola": {"quantity": 24}},
            "ingredients": {"Ketchup": {"quantity": 2, "unit": "Flasche"}},
        })
        resp = self.client.get(f"/api/events/{event['id']}/excel")
        ws = load_workbook(io.BytesIO(resp.content)).worksheets[0]
        rows = [(r[2], r[3]) for r in ws.iter_rows(values_only=True) if r[0] == "☐" and len(r) > 3 and r[3]]
        self.assertEqual(rows[:3], [("Burger", "Essen"), ("Cola", "Getränke Pet"), ("Ketchup", "Zutaten")])

        resp = self.client.post('/api/import/excel', params={"create": "true"},
                                files={"file": ("sommerfest.xlsx", resp.content)})
        data = resp.json()
        self.assertEqual(data['products'], {"Burger": {"quantity": 5, "unit": "Stück"},
                                            "Cola": {"quantity": 24, "unit": ""}})
        self.assertEqual(data['event']['ingredients'], {"Ketchup": {"quantity": 2, "unit": "Flasche"}})

    def test_import_rejects_invalid_file(self):
        resp = self.client.post('/api/import/excel', files={"file": ("notes.xlsx", b"plain text")})
        self.assertEqual(resp.status_code, 400)


if __name__ == '__main__':
    unittest.main()
