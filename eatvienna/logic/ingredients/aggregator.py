"""Quantity aggregator.

Sums, per ingredient, the recipe amount of every ordered menu item times
the number of units ordered. Manual ingredient entries bypass the recipe
lookup and are added to the totals as they are.
"""
import logging
from typing import Dict, List, Optional, Union

from eatvienna.domain.Recipe import Recipe
from eatvienna.domain.Selection import Selection, SelectedProduct

logger = logging.getLogger(__name__)

SelectionLike = Union[Selection, Dict[str, SelectedProduct]]

__all__ = ["Aggregation", "aggregate_ingredients"]


def _entries(selection: Optional[SelectionLike]) -> Dict[str, SelectedProduct]:
    if selection is None:
        return {}
    if isinstance(selection, Selection):
        return selection.items
    return dict(selection)


class Aggregation:
    """Per-ingredient totals plus the ordered items that had no usable recipe."""

    def __init__(self):
        self.totals: Dict[str, float] = {}
        self.units: Dict[str, str] = {}
        self.missing_recipes: List[str] = []

    def add(self, ingredient: str, amount: float, unit: str):
        if ingredient not in self.totals:
            self.totals[ingredient] = 0
            self.units[ingredient] = unit
        elif not self.units[ingredient] and unit:
            self.units[ingredient] = unit
        self.totals[ingredient] += amount

    def __contains__(self, ingredient) -> bool:
        return ingredient in self.totals


def aggregate_ingredients(products: SelectionLike, recipes: Dict[str, Recipe],
                          manual_ingredients: Optional[SelectionLike] = None) -> Aggregation:
    """Aggregate ingredient totals for the ordered products.

    Args:
        products: ordered menu items {name: SelectedProduct}.
        recipes: recipe table {menu item name: Recipe}.
        manual_ingredients: ingredient quantities entered directly {ingredient: SelectedProduct}.

    Returns:
        Aggregation with totals/units keyed by ingredient; ingredients no ordered
        item references are absent. Items without a recipe contribute nothing and
        are listed in ``missing_recipes``.
    """
    if recipes is None:
        raise TypeError("recipes must be a mapping, not None")

    result = Aggregation()
    for product_name, selected in _entries(products).items():
        if selected.quantity <= 0:
            continue
        recipe = recipes.get(product_name)
        if recipe is None or recipe.is_empty():
            logger.warning("No recipe for ordered item %r; it contributes nothing to the ingredients", product_name)
            result.missing_recipes.append(product_name)
            continue
        for ingredient, line in recipe.ingredients.items():
            result.add(ingredient, line.amount * selected.quantity, line.unit)

    for ingredient, selected in _entries(manual_ingredients).items():
        if selected.quantity <= 0:
            continue
        result.add(ingredient, selected.quantity, selected.unit)

    return result
