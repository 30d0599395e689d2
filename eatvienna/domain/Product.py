"""Product catalog entities: menu items grouped into categories, and foodtruck equipment."""
from typing import Optional

from eatvienna.utilities.constants import FOODTRUCK_NAMES


class Category:
    def __init__(self, id: int = 0, name: str = "", created_at: str = "", updated_at: str = ""):
        self.id = id
        self.name = name
        self.created_at = created_at
        self.updated_at = updated_at

    def __str__(self) -> str:
        return f"#{self.id} {self.name}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = data if isinstance(data, dict) else {}
        return Category(
            id=int(d.get("id") or 0),
            name=d.get("name") or "",
            created_at=d.get("created_at") or "",
            updated_at=d.get("updated_at") or "",
        )

    def to_dict(self):
        return {"id": self.id, "name": self.name, "created_at": self.created_at, "updated_at": self.updated_at}


class Product:
    def __init__(self, id: int = 0, name: str = "", unit: str = "", category_id: Optional[int] = None,
                 created_at: str = "", updated_at: str = ""):
        self.id = id
        self.name = name
        self.unit = unit
        self.category_id = category_id
        self.created_at = created_at
        self.updated_at = updated_at

    def __str__(self) -> str:
        return f"{self.name} ({self.unit or '-'})"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = data if isinstance(data, dict) else {}
        category_id = d.get("category_id")
        return Product(
            id=int(d.get("id") or 0),
            name=d.get("name") or "",
            unit=d.get("unit") or "",
            category_id=int(category_id) if category_id not in (None, "") else None,
            created_at=d.get("created_at") or "",
            updated_at=d.get("updated_at") or "",
        )

    def to_dict(self, category: Optional[Category] = None):
        data = {
            "id": self.id,
            "name": self.name,
            "unit": self.unit,
            "category_id": self.category_id,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
        if category is not None:
            data["category"] = {"id": category.id, "name": category.name}
        return data


def foodtruck_name(code: str) -> str:
    """Display name of a foodtruck or storage code; unknown codes are shown as they are."""
    return FOODTRUCK_NAMES.get(code, code)


class FoodtruckEquipment:
    def __init__(self, id: int = 0, name: str = "", foodtruck: str = "", unit: str = ""):
        self.id = id
        self.name = name
        self.foodtruck = foodtruck
        self.unit = unit

    def __str__(self) -> str:
        return f"{self.name} ({foodtruck_name(self.foodtruck)})"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = data if isinstance(data, dict) else {}
        return FoodtruckEquipment(
            id=int(d.get("id") or 0),
            name=d.get("name") or "",
            foodtruck=d.get("foodtruck") or "",
            unit=d.get("unit") or "",
        )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "foodtruck": self.foodtruck,
            "foodtruck_name": foodtruck_name(self.foodtruck),
            "unit": self.unit,
        }
