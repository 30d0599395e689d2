import unittest
from fastapi.testclient import TestClient
from eatvienna.api.api_run import app
from eatvienna.tests.data_fixtures import TempDataMixin


class TestCalculateAPI(TempDataMixin, unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def test_calculate_with_packaging(self):
        resp = self.client.post('/api/calculate', json={
            "products": {"Burger": {"quantity": 50, "unit": "Stück"}, "Pommes": {"quantity": 20}},
        })
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data['ingredients']['Bun']['total_amount'], 50)
        self.assertEqual(data['ingredients']['Bun']['packaging_count'], 5)
        self.assertEqual(data['ingredients']['Patty']['packaging'], 'Unknown')
        self.assertEqual(data['ingredients']['Pommes TK']['packaging_count'], 2)
        rows = {r['ingredient']: r for r in data['rows']}
        self.assertEqual(rows['Pommes TK']['total'], '5.0 Kg')
        self.assertEqual(rows['Bun']['packaging'], '5 Packungen à 12 Stück')
        self.assertEqual(data['warnings'], [])

    def test_unknown_product_is_reported(self):
        resp = self.client.post('/api/calculate', json={"products": {"Falafel Teller": {"quantity": 3}}})
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data['count'], 0)
        self.assertEqual(data['warnings'], ["Kein Rezept für 'Falafel Teller'"])

    def test_invalid_quantity_is_clamped(self):
        resp = self.client.post('/api/calculate', json={"products": {"Burger": {"quantity": "abc"}}})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()['ingredients']['Bun']['total_amount'], 1)

    def test_manual_ingredients_are_added(self):
        resp = self.client.post('/api/calculate', json={
            "products": {"Burger": {"quantity": 10}},
            "ingredients": {"Bun": {"quantity": 2, "unit": "Stück"}, "Servietten": {"quantity": 100}},
        })
        data = resp.json()
        self.assertEqual(data['ingredients']['Bun']['total_amount'], 12)
        self.assertEqual(data['ingredients']['Bun']['packaging_count'], 1)
        self.assertEqual(data['ingredients']['Servietten']['total_amount'], 100)

    def test_recipe_ingredients(self):
        resp = self.client.get('/api/recipes/ingredients')
        self.assertEqual(resp.json()['ingredients'], ['Bun', 'Patty', 'Pommes TK'])


if __name__ == '__main__':
    unittest.main()
