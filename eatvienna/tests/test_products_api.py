import unittest
from fastapi.testclient import TestClient
from eatvienna.api.api_run import app
from eatvienna.infra.Product_Repository import ProductRepository
from eatvienna.tests.data_fixtures import TempDataMixin


class TestProductsAPI(TempDataMixin, unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def test_list_products_with_category(self):
        data = self.client.get('/api/products').json()
        self.assertEqual([p['name'] for p in data['products']], ['Burger', 'Cola', 'Pommes', 'Servietten'])
        burger = data['products'][0]
        self.assertEqual(burger['category'], {"id": 1, "name": "Essen"})
        self.assertNotIn('category', data['products'][3])
        data = self.client.get('/api/products', params={"category_id": 2}).json()
        self.assertEqual([p['name'] for p in data['products']], ['Cola'])

    def test_product_crud(self):
        resp = self.client.post('/api/products', json={"name": " Veggie Wrap ", "unit": "Stück", "category_id": 1})
        self.assertEqual(resp.status_code, 200)
        product = resp.json()
        self.assertEqual(product['name'], 'Veggie Wrap')
        self.assertEqual(product['id'], 5)
        resp = self.client.put(f"/api/products/{product['id']}", json={"name": "Veggie Wrap", "unit": "Portion"})
        self.assertEqual(resp.json()['unit'], 'Portion')
        self.assertIsNone(resp.json()['category_id'])
        self.assertEqual(self.client.delete(f"/api/products/{product['id']}").status_code, 200)
        self.assertEqual(self.client.get(f"/api/products/{product['id']}").status_code, 404)

    def test_product_with_unknown_category(self):
        resp = self.client.post('/api/products', json={"name": "Fanta", "category_id": 42})
        self.assertEqual(resp.status_code, 400)

    def test_categories(self):
        data = self.client.get('/api/categories').json()
        self.assertEqual([c['name'] for c in data['categories']], ['Essen', 'Getränke Pet', 'Kassa'])
        created = self.client.post('/api/categories', json={"name": "Getränke Glas"}).json()
        resp = self.client.put(f"/api/categories/{created['id']}", json={"name": "Getränke Spezial"})
        self.assertEqual(resp.json()['name'], 'Getränke Spezial')
        self.assertEqual(self.client.put('/api/categories/99', json={"name": "X"}).status_code, 404)
        self.assertEqual(self.client.post('/api/categories', json={"name": ""}).status_code, 422)

    def test_deleting_category_keeps_its_products(self):
        self.assertEqual(self.client.delete('/api/categories/2').status_code, 200)
        cola = self.client.get('/api/products/3').json()
        self.assertIsNone(cola['category_id'])
        self.assertNotIn('Cola', ProductRepository().product_categories())
        self.assertEqual(self.client.delete('/api/categories/2').status_code, 404)

    def test_equipment_by_foodtruck(self):
        data = self.client.get('/api/equipment').json()
        self.assertEqual(data['count'], 2)
        data = self.client.get('/api/equipment', params={"foodtruck": "ft2"}).json()
        self.assertEqual(data['equipment'], [
            {"id": 2, "name": "Kühlbox", "foodtruck": "ft2", "foodtruck_name": "Foodtruck 2", "unit": "Stück"},
        ])


class TestProductRepository(TempDataMixin, unittest.TestCase):

    def test_product_categories(self):
        self.assertEqual(ProductRepository().product_categories(),
                         {"Burger": "Essen", "Pommes": "Essen", "Cola": "Getränke Pet"})

    def test_update_ignores_unknown_fields(self):
        repo = ProductRepository()
        product = repo.update_product(1, unit="Portion", id=99)
        self.assertEqual(product.id, 1)
        self.assertEqual(product.unit, "Portion")
        self.assertIsNone(repo.update_product(42, unit="Stück"))


if __name__ == '__main__':
    unittest.main()
