"""Selection aggregate: planned quantities per product (or manual ingredient) for one event."""
from enum import Enum
from typing import Dict, Optional, Any


class SelectedProduct:
    def __init__(self, quantity: int = 0, unit: str = ""):
        self.quantity = quantity
        self.unit = unit

    def __str__(self) -> str:
        return f"{self.quantity} {self.unit}".strip()

    __repr__ = __str__

    def __eq__(self, other) -> bool:
        if not isinstance(other, SelectedProduct):
            return NotImplemented
        return self.quantity == other.quantity and self.unit == other.unit

    @staticmethod
    def from_dict(data):
        d = data if isinstance(data, dict) else {}
        return SelectedProduct(parse_quantity(d.get("quantity"), minimum=0), d.get("unit", "") or "")

    def to_dict(self):
        return {"quantity": self.quantity, "unit": self.unit}


class WriteKind(str, Enum):
    ADD = "add"
    SET = "set"


class QuantityWrite:
    """A write on a selection: ADD increments ("add N more"), SET overwrites ("set to exactly N")."""

    def __init__(self, kind: WriteKind, amount: int):
        self.kind = WriteKind(kind)
        self.amount = amount

    @classmethod
    def add(cls, amount: int) -> "QuantityWrite":
        return cls(WriteKind.ADD, amount)

    @classmethod
    def set(cls, amount: int) -> "QuantityWrite":
        return cls(WriteKind.SET, amount)

    def apply_to(self, current: Optional[int]) -> int:
        '''Returns the resulting quantity; current is None when there is no entry yet.'''
        if self.kind is WriteKind.SET:
            return self.amount
        return (current or 0) + self.amount

    def __str__(self) -> str:
        return f"{self.kind.value}({self.amount})"

    __repr__ = __str__


def parse_quantity(raw: Any, minimum: int = 0) -> int:
    """Parse user quantity input, clamping to `minimum`. Never raises."""
    if isinstance(raw, bool):
        return minimum
    try:
        value = int(float(str(raw).strip().replace(",", ".")))
    except (TypeError, ValueError, OverflowError):
        return minimum
    return max(value, minimum)


class Selection:
    def __init__(self, items: Optional[Dict[str, SelectedProduct]] = None):
        self.items: Dict[str, SelectedProduct] = dict(items) if items else {}

    def apply(self, name: str, write: QuantityWrite, unit: str = "") -> Optional[SelectedProduct]:
        '''
        Applies a quantity write to the named entry.
        An entry whose resulting quantity is <= 0 is removed; returns the entry or None.
        '''
        existing = self.items.get(name)
        new_quantity = write.apply_to(existing.quantity if existing else None)
        if new_quantity <= 0:
            self.items.pop(name, None)
            return None
        if existing is None:
            existing = SelectedProduct(new_quantity, unit)
            self.items[name] = existing
        else:
            existing.quantity = new_quantity
            # SET overwrites the unit too, ADD only fills in a missing one
            if unit and (write.kind is WriteKind.SET or not existing.unit):
                existing.unit = unit
        return existing

    def remove(self, name: str):
        self.items.pop(name, None)

    def remove_many(self, names):
        for name in list(names):
            self.items.pop(name, None)

    def get(self, name: str) -> Optional[SelectedProduct]:
        return self.items.get(name)

    def quantities(self) -> Dict[str, int]:
        return {name: p.quantity for name, p in self.items.items()}

    def __contains__(self, name) -> bool:
        return name in self.items

    def __len__(self) -> int:
        return len(self.items)

    def __str__(self) -> str:
        items_str = ",\n\t".join(f"{name}: {p}" for name, p in self.items.items())
        return f"Selection:\n\t{items_str}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data) -> "Selection":
        '''Populates a Selection from {name: {quantity, unit}}; entries with quantity <= 0 are dropped.'''
        d = data if isinstance(data, dict) else {}
        items = {}
        for name, body in d.items():
            product = SelectedProduct.from_dict(body)
            if name and product.quantity > 0:
                items[name] = product
        return Selection(items)

    def to_dict(self):
        return {name: p.to_dict() for name, p in self.items.items()}
