"""Nachbestellung (reorder) aggregate: a reorder request raised for an event, with its items."""
from datetime import datetime
from typing import List, Optional

from eatvienna.utilities.constants import NACHBESTELLUNG_STATUSES, ITEM_STATUSES, ITEM_TYPES


def _now() -> str:
    return datetime.now().isoformat(timespec="seconds")


class NachbestellungItem:
    def __init__(self, id: int = 0, item_type: str = "product", item_name: str = "", quantity: float = 0,
                 unit: str = "", packaging_unit: str = "", category: str = "", notes: str = "",
                 status: str = "offen", is_packed: bool = False):
        if item_type not in ITEM_TYPES:
            raise ValueError(f"Unknown item type: {item_type}")
        if status not in ITEM_STATUSES:
            raise ValueError(f"Unknown item status: {status}")
        self.id = id
        self.item_type = item_type
        self.item_name = item_name
        self.quantity = quantity
        self.unit = unit
        self.packaging_unit = packaging_unit
        self.category = category
        self.notes = notes
        self.status = status
        self.is_packed = is_packed

    def set_status(self, status: str):
        if status not in ITEM_STATUSES:
            raise ValueError(f"Unknown item status: {status}")
        self.status = status

    def __str__(self) -> str:
        return f"{self.item_name} - {self.quantity} {self.unit} ({self.packaging_unit}) [{self.status}]"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        allowed = {"id", "item_type", "item_name", "quantity", "unit", "packaging_unit",
                   "category", "notes", "status", "is_packed"}
        filtered = {k: v for k, v in d.items() if k in allowed and v is not None}
        return NachbestellungItem(**filtered)

    def to_dict(self):
        return {
            "id": self.id,
            "item_type": self.item_type,
            "item_name": self.item_name,
            "quantity": self.quantity,
            "unit": self.unit,
            "packaging_unit": self.packaging_unit,
            "category": self.category,
            "notes": self.notes,
            "status": self.status,
            "is_packed": self.is_packed,
        }


class Nachbestellung:
    def __init__(self, id: int = 0, event_id: int = 0, event_name: str = "", status: str = "offen",
                 notes: str = "", created_by: str = "", created_at: str = "", updated_at: str = "",
                 completed_at: str = "", completed_by: str = "",
                 items: Optional[List[NachbestellungItem]] = None):
        if status not in NACHBESTELLUNG_STATUSES:
            raise ValueError(f"Unknown status: {status}")
        self.id = id
        self.event_id = event_id
        self.event_name = event_name
        self.status = status
        self.notes = notes
        self.created_by = created_by
        self.created_at = created_at or _now()
        self.updated_at = updated_at or self.created_at
        self.completed_at = completed_at
        self.completed_by = completed_by
        self.items = items[:] if items else []

    @property
    def total_products(self) -> int:
        return sum(1 for i in self.items if i.item_type == "product")

    @property
    def total_ingredients(self) -> int:
        return sum(1 for i in self.items if i.item_type == "ingredient")

    @property
    def total_items(self) -> int:
        return len(self.items)

    def set_status(self, status: str, user: str = ""):
        '''Changes the status; completing a reorder records who completed it and when.'''
        if status not in NACHBESTELLUNG_STATUSES:
            raise ValueError(f"Unknown status: {status}")
        self.status = status
        self.updated_at = _now()
        if status == "abgeschlossen":
            self.completed_at = self.updated_at
            self.completed_by = user

    def get_item(self, item_id: int) -> Optional[NachbestellungItem]:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def __str__(self) -> str:
        return f"Nachbestellung #{self.id} for {self.event_name} [{self.status}] - {self.total_items} items"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return Nachbestellung(
            id=int(d.get("id") or 0),
            event_id=int(d.get("event_id") or 0),
            event_name=d.get("event_name") or "",
            status=d.get("status") or "offen",
            notes=d.get("notes") or "",
            created_by=d.get("created_by") or "",
            created_at=d.get("created_at") or "",
            updated_at=d.get("updated_at") or "",
            completed_at=d.get("completed_at") or "",
            completed_by=d.get("completed_by") or "",
            items=[NachbestellungItem.from_dict(i) for i in d.get("items", [])],
        )

    def to_dict(self, with_items: bool = True):
        data = {
            "id": self.id,
            "event_id": self.event_id,
            "event_name": self.event_name,
            "status": self.status,
            "total_items": self.total_items,
            "total_products": self.total_products,
            "total_ingredients": self.total_ingredients,
            "notes": self.notes,
            "created_by": self.created_by,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "completed_at": self.completed_at,
            "completed_by": self.completed_by,
        }
        if with_items:
            data["items"] = [i.to_dict() for i in self.items]
        return data
