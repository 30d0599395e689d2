"""Recipe ingredient extractor."""
from typing import Dict, List
from eatvienna.domain.Recipe import Recipe

__all__ = ["extract_recipe_ingredients"]


def extract_recipe_ingredients(recipes: Dict[str, Recipe]) -> List[str]:
    """Return the sorted, distinct ingredient names referenced by any recipe.

    Names are case-sensitive. An empty recipe table yields an empty list.
    """
    if recipes is None:
        raise TypeError("recipes must be a mapping, not None")
    unique = set()
    for recipe in recipes.values():
        unique.update(recipe.ingredients.keys())
    return sorted(unique)
