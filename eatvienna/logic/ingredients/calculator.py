"""Ingredient calculation: aggregation + packaging for a selection.

Provides calculate_ingredients(products, recipes, packaging, manual_ingredients=None).
"""
from typing import Dict, List, Optional, Tuple

from eatvienna.domain.CalculatedIngredient import CalculatedIngredient
from eatvienna.domain.Packaging import PackagingUnit
from eatvienna.domain.Recipe import Recipe
from eatvienna.logic.ingredients.aggregator import aggregate_ingredients, SelectionLike
from eatvienna.logic.ingredients.packaging import compute_packaging

__all__ = ["IngredientCalculation", "calculate_ingredients"]


class IngredientCalculation:
    def __init__(self, ingredients: Optional[Dict[str, CalculatedIngredient]] = None,
                 warnings: Optional[List[str]] = None):
        self.ingredients: Dict[str, CalculatedIngredient] = ingredients or {}
        self.warnings: List[str] = warnings or []

    def sorted_items(self) -> List[Tuple[str, CalculatedIngredient]]:
        return sorted(self.ingredients.items(), key=lambda kv: kv[0].lower())

    def __getitem__(self, ingredient: str) -> CalculatedIngredient:
        return self.ingredients[ingredient]

    def __contains__(self, ingredient) -> bool:
        return ingredient in self.ingredients

    def __len__(self) -> int:
        return len(self.ingredients)

    def to_dict(self):
        return {
            "ingredients": {name: ci.to_dict() for name, ci in self.sorted_items()},
            "count": len(self.ingredients),
            "warnings": list(self.warnings),
        }


def calculate_ingredients(products: SelectionLike, recipes: Dict[str, Recipe],
                          packaging: Optional[Dict[str, PackagingUnit]] = None,
                          manual_ingredients: Optional[SelectionLike] = None) -> IngredientCalculation:
    """Compute per-ingredient totals and packaging counts.

    Args:
        products: ordered menu items.
        recipes: recipe table keyed by menu item name.
        packaging: packaging units keyed by ingredient name.
        manual_ingredients: ingredient quantities entered directly.

    Returns:
        IngredientCalculation; ``warnings`` names each ordered item without a recipe.
    """
    packaging = packaging or {}
    aggregation = aggregate_ingredients(products, recipes, manual_ingredients)

    ingredients: Dict[str, CalculatedIngredient] = {}
    for name, total in aggregation.totals.items():
        label, per_package, count = compute_packaging(total, packaging.get(name))
        ingredients[name] = CalculatedIngredient(
            total_amount=total,
            unit=aggregation.units.get(name, ""),
            packaging=label,
            packaging_count=count,
            amount_per_package=per_package,
        )

    warnings = [f"Kein Rezept für '{name}'" for name in aggregation.missing_recipes]
    return IngredientCalculation(ingredients, warnings)
