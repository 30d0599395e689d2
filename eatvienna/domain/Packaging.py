"""Packaging unit: the fixed-size container an ingredient is purchased in."""
from typing import Dict


class PackagingUnit:
    def __init__(self, amount_per_package: float = 0, packaging_unit: str = ""):
        self.amount_per_package = amount_per_package
        self.packaging_unit = packaging_unit

    def is_configured(self) -> bool:
        try:
            return float(self.amount_per_package) > 0
        except (TypeError, ValueError):
            return False

    def __str__(self) -> str:
        return f"{self.packaging_unit} à {self.amount_per_package}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Accepts amount_per_package/packaging_unit or the legacy pro_verpackung/verpackungseinheit keys.'''
        d = data if isinstance(data, dict) else {}
        amount = d.get("amount_per_package", d.get("pro_verpackung", d.get("size", 0)))
        try:
            amount = float(amount)
        except (TypeError, ValueError):
            amount = 0.0
        if amount.is_integer():
            amount = int(amount)
        unit = d.get("packaging_unit", d.get("verpackungseinheit", "")) or ""
        return PackagingUnit(amount, unit)

    def to_dict(self):
        return {
            "amount_per_package": self.amount_per_package,
            "packaging_unit": self.packaging_unit,
        }


def packaging_table_from_dict(data) -> Dict[str, PackagingUnit]:
    if not isinstance(data, dict):
        return {}
    return {name: PackagingUnit.from_dict(body) for name, body in data.items()}
