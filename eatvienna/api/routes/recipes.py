from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field
from typing import Dict

from eatvienna.domain.Packaging import PackagingUnit
from eatvienna.domain.Recipe import Recipe, RecipeLine
from eatvienna.infra.Recipe_Repository import RecipeRepository
from eatvienna.logic.ingredients.extractor import extract_recipe_ingredients

router = APIRouter(prefix="/api", tags=["recipes"])


class RecipeLineInput(BaseModel):
    amount: float = Field(..., gt=0)
    unit: str = ""


class PackagingInput(BaseModel):
    amount_per_package: float = Field(..., gt=0)
    packaging_unit: str = Field(..., min_length=1, max_length=50)


@router.get("/recipes")
def list_recipes():
    """Recipe table: {menu item: {ingredient: {amount, unit}}}."""
    recipes = RecipeRepository().get_recipes()
    return {"count": len(recipes), "recipes": {name: r.to_dict() for name, r in sorted(recipes.items())}}


@router.get("/recipes/ingredients")
def list_recipe_ingredients():
    """Distinct ingredient names used by any recipe, sorted."""
    names = extract_recipe_ingredients(RecipeRepository().get_recipes())
    return {"count": len(names), "ingredients": names}


@router.get("/recipes/{name}")
def get_recipe(name: str):
    recipe = RecipeRepository().get_recipe(name)
    if recipe is None:
        raise HTTPException(status_code=404, detail=f"Recipe '{name}' not found")
    return {"name": recipe.name, "ingredients": recipe.to_dict()}


@router.put("/recipes/{name}")
def save_recipe(name: str, ingredients: Dict[str, RecipeLineInput]):
    recipe = Recipe(name, {ing: RecipeLine.from_value(line.model_dump()) for ing, line in ingredients.items()})
    RecipeRepository().save_recipe(recipe)
    return {"status": "success", "name": name, "ingredients": recipe.to_dict()}


@router.delete("/recipes/{name}")
def delete_recipe(name: str):
    if not RecipeRepository().delete_recipe(name):
        raise HTTPException(status_code=404, detail=f"Recipe '{name}' not found")
    return {"status": "success"}


@router.get("/packaging")
def list_packaging():
    packaging = RecipeRepository().get_packaging()
    return {"count": len(packaging), "packaging": {name: p.to_dict() for name, p in sorted(packaging.items())}}


@router.put("/packaging/{ingredient}")
def save_packaging(ingredient: str, payload: PackagingInput):
    unit = PackagingUnit.from_dict({"amount_per_package": payload.amount_per_package,
                                    "packaging_unit": payload.packaging_unit.strip()})
    RecipeRepository().save_packaging(ingredient, unit)
    return {"status": "success", "ingredient": ingredient, "packaging": unit.to_dict()}


@router.delete("/packaging/{ingredient}")
def delete_packaging(ingredient: str):
    if not RecipeRepository().delete_packaging(ingredient):
        raise HTTPException(status_code=404, detail=f"No packaging for '{ingredient}'")
    return {"status": "success"}
