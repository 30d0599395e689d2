"""Product catalog store: categories, products and foodtruck equipment in one JSON file."""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from eatvienna.domain.Product import Category, Product, FoodtruckEquipment
from eatvienna.infra import paths
from eatvienna.infra.json_store import load_json, atomic_write_json

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now().isoformat(timespec="seconds")


def _next_id(entries: List[dict]) -> int:
    return max((int(e.get("id") or 0) for e in entries), default=0) + 1


class ProductRepository:
    def __init__(self, store_file=None):
        self.store_file = store_file or paths.PRODUCTS_FILE

    def _load(self) -> Dict[str, List[dict]]:
        raw = load_json(self.store_file, {})
        return {key: list(raw.get(key) or []) for key in ("categories", "products", "equipment")}

    def _save(self, raw: Dict[str, Any]) -> None:
        atomic_write_json(self.store_file, raw)

    # --- categories ----------------------------------------------------------
    def get_categories(self) -> List[Category]:
        categories = [Category.from_dict(c) for c in self._load()["categories"]]
        return sorted(categories, key=lambda c: c.name.lower())

    def get_category(self, category_id: int) -> Optional[Category]:
        for c in self.get_categories():
            if c.id == category_id:
                return c
        return None

    def create_category(self, name: str) -> Category:
        raw = self._load()
        ts = _now()
        category = Category(_next_id(raw["categories"]), name, ts, ts)
        raw["categories"].append(category.to_dict())
        self._save(raw)
        logger.info("Created category #%s %r", category.id, name)
        return category

    def update_category(self, category_id: int, name: str) -> Optional[Category]:
        raw = self._load()
        for entry in raw["categories"]:
            if int(entry.get("id") or 0) == category_id:
                entry.update({"name": name, "updated_at": _now()})
                self._save(raw)
                return Category.from_dict(entry)
        return None

    def delete_category(self, category_id: int) -> bool:
        '''Removes the category; its products stay in the catalog without a category.'''
        raw = self._load()
        remaining = [c for c in raw["categories"] if int(c.get("id") or 0) != category_id]
        if len(remaining) == len(raw["categories"]):
            return False
        raw["categories"] = remaining
        for p in raw["products"]:
            if p.get("category_id") == category_id:
                p["category_id"] = None
        self._save(raw)
        logger.info("Deleted category #%s", category_id)
        return True

    # --- products ------------------------------------------------------------
    def get_products(self, category_id: Optional[int] = None) -> List[Product]:
        products = [Product.from_dict(p) for p in self._load()["products"]]
        if category_id is not None:
            products = [p for p in products if p.category_id == category_id]
        return sorted(products, key=lambda p: p.name.lower())

    def get_product(self, product_id: int) -> Optional[Product]:
        for p in self.get_products():
            if p.id == product_id:
                return p
        return None

    def create_product(self, name: str, unit: str = "", category_id: Optional[int] = None) -> Product:
        raw = self._load()
        ts = _now()
        product = Product(_next_id(raw["products"]), name, unit, category_id, ts, ts)
        raw["products"].append(product.to_dict())
        self._save(raw)
        logger.info("Created product #%s %r", product.id, name)
        return product

    def update_product(self, product_id: int, **fields) -> Optional[Product]:
        raw = self._load()
        for entry in raw["products"]:
            if int(entry.get("id") or 0) == product_id:
                entry.update({k: v for k, v in fields.items() if k in ("name", "unit", "category_id")})
                entry["updated_at"] = _now()
                self._save(raw)
                return Product.from_dict(entry)
        return None

    def delete_product(self, product_id: int) -> bool:
        raw = self._load()
        remaining = [p for p in raw["products"] if int(p.get("id") or 0) != product_id]
        if len(remaining) == len(raw["products"]):
            return False
        raw["products"] = remaining
        self._save(raw)
        logger.info("Deleted product #%s", product_id)
        return True

    def product_categories(self) -> Dict[str, str]:
        """Category name of every categorized product, keyed by product name."""
        names = {c.id: c.name for c in self.get_categories()}
        return {p.name: names[p.category_id] for p in self.get_products() if p.category_id in names}

    # --- equipment -----------------------------------------------------------
    def get_equipment(self, foodtruck: Optional[str] = None) -> List[FoodtruckEquipment]:
        items = [FoodtruckEquipment.from_dict(e) for e in self._load()["equipment"]]
        if foodtruck:
            items = [e for e in items if e.foodtruck == foodtruck]
        return sorted(items, key=lambda e: e.name.lower())
