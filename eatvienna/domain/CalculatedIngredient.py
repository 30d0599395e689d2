"""Derived per-ingredient purchase quantity; recomputed on every selection change, never persisted."""
from eatvienna.utilities.constants import UNKNOWN_PACKAGING


class CalculatedIngredient:
    def __init__(self, total_amount: float = 0, unit: str = "", packaging: str = UNKNOWN_PACKAGING,
                 packaging_count: int = 0, amount_per_package: float = 0):
        self.total_amount = total_amount
        self.unit = unit
        self.packaging = packaging
        self.packaging_count = packaging_count
        self.amount_per_package = amount_per_package

    def __eq__(self, other) -> bool:
        if not isinstance(other, CalculatedIngredient):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __str__(self) -> str:
        return (f"{self.total_amount} {self.unit} - "
                f"{self.packaging_count} x {self.packaging} à {self.amount_per_package}")

    __repr__ = __str__

    def to_dict(self):
        return {
            "total_amount": self.total_amount,
            "unit": self.unit,
            "packaging": self.packaging,
            "packaging_count": self.packaging_count,
            "amount_per_package": self.amount_per_package,
        }
