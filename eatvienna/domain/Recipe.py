"""Recipe domain entity: per-unit ingredient amounts of one menu item."""
import logging
from typing import Dict, Optional, Any

logger = logging.getLogger(__name__)


class RecipeLine:
    """Amount of one ingredient needed for a single unit of a menu item."""

    def __init__(self, amount: float = 0, unit: str = ""):
        self.amount = amount
        self.unit = unit

    def __str__(self) -> str:
        return f"{self.amount} {self.unit}".strip()

    __repr__ = __str__

    def __eq__(self, other) -> bool:
        if not isinstance(other, RecipeLine):
            return NotImplemented
        return self.amount == other.amount and self.unit == other.unit

    @staticmethod
    def from_value(value: Any) -> "RecipeLine":
        '''Accepts a bare number or a dict using either menge/einheit or amount/unit keys.'''
        if isinstance(value, RecipeLine):
            return value
        if isinstance(value, dict):
            amount = value.get("amount", value.get("menge", 0))
            unit = value.get("unit", value.get("einheit", "")) or ""
        else:
            amount, unit = value, ""
        try:
            amount = float(amount)
        except (TypeError, ValueError):
            amount = 0.0
        if amount.is_integer():
            amount = int(amount)
        return RecipeLine(amount, unit)

    def to_dict(self):
        return {"amount": self.amount, "unit": self.unit}


class Recipe:
    def __init__(self, name: str = "", ingredients: Optional[Dict[str, RecipeLine]] = None):
        self.name = name
        self.ingredients: Dict[str, RecipeLine] = dict(ingredients) if ingredients else {}

    def __str__(self) -> str:
        parts = ", ".join(f"{ing}: {line}" for ing, line in self.ingredients.items())
        return f"{self.name} - {parts}" if parts else self.name

    __repr__ = __str__

    def is_empty(self) -> bool:
        return not self.ingredients

    def set_ingredient(self, ingredient: str, amount: float, unit: str = ""):
        self.ingredients[ingredient] = RecipeLine(amount, unit)

    def remove_ingredient(self, ingredient: str):
        self.ingredients.pop(ingredient, None)

    @staticmethod
    def from_dict(name: str, data) -> "Recipe":
        '''
        Creates a Recipe from {ingredient: amount | {menge, einheit}}. Non-dict input yields an empty recipe.
        Lines without a positive amount are skipped.
        '''
        d = data if isinstance(data, dict) else {}
        lines = {}
        for ing, value in d.items():
            if not ing:
                continue
            line = RecipeLine.from_value(value)
            if line.amount <= 0:
                logger.warning("Recipe %r: ignoring %r with non-positive amount %s", name, ing, line.amount)
                continue
            lines[str(ing)] = line
        return Recipe(name, lines)

    def to_dict(self):
        return {ing: line.to_dict() for ing, line in self.ingredients.items()}


def recipe_table_from_dict(data) -> Dict[str, Recipe]:
    """Build a recipe table {recipe name: Recipe} from its JSON form."""
    if not isinstance(data, dict):
        return {}
    return {name: Recipe.from_dict(name, body) for name, body in data.items()}
