"""Recipe store: recipe table and packaging units (read-only for the calculator)."""
import logging
from typing import Dict, Optional

from eatvienna.domain.Packaging import PackagingUnit, packaging_table_from_dict
from eatvienna.domain.Recipe import Recipe, recipe_table_from_dict
from eatvienna.infra import paths
from eatvienna.infra.json_store import load_json, atomic_write_json

logger = logging.getLogger(__name__)


class RecipeRepository:
    def __init__(self, recipes_file=None, packaging_file=None):
        self.recipes_file = recipes_file or paths.RECIPES_FILE
        self.packaging_file = packaging_file or paths.PACKAGING_FILE

    def get_recipes(self) -> Dict[str, Recipe]:
        """Read the recipe table; store failures yield an empty table."""
        recipes = recipe_table_from_dict(load_json(self.recipes_file, {}))
        logger.debug("Loaded %d recipes from %s", len(recipes), self.recipes_file)
        return recipes

    def get_recipe(self, name: str) -> Optional[Recipe]:
        return self.get_recipes().get(name)

    def save_recipe(self, recipe: Recipe) -> None:
        raw = load_json(self.recipes_file, {})
        raw[recipe.name] = recipe.to_dict()
        atomic_write_json(self.recipes_file, raw)
        logger.info("Saved recipe %r (%d ingredients)", recipe.name, len(recipe.ingredients))

    def delete_recipe(self, name: str) -> bool:
        raw = load_json(self.recipes_file, {})
        if name not in raw:
            return False
        del raw[name]
        atomic_write_json(self.recipes_file, raw)
        logger.info("Deleted recipe %r", name)
        return True

    def get_packaging(self) -> Dict[str, PackagingUnit]:
        """Read packaging units keyed by ingredient name; store failures yield an empty table."""
        return packaging_table_from_dict(load_json(self.packaging_file, {}))

    def save_packaging(self, ingredient: str, packaging: PackagingUnit) -> None:
        raw = load_json(self.packaging_file, {})
        raw[ingredient] = packaging.to_dict()
        atomic_write_json(self.packaging_file, raw)
        logger.info("Saved packaging for %r: %s", ingredient, packaging)

    def delete_packaging(self, ingredient: str) -> bool:
        raw = load_json(self.packaging_file, {})
        if ingredient not in raw:
            return False
        del raw[ingredient]
        atomic_write_json(self.packaging_file, raw)
        return True
