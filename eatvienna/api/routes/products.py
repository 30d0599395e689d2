from fastapi import APIRouter, HTTPException, Query
from typing import Optional

from eatvienna.domain.Product import Product
from eatvienna.infra.Product_Repository import ProductRepository
from eatvienna.utilities.validators import CategoryInput, ProductInput

router = APIRouter(prefix="/api", tags=["products"])


def _product_dict(repo: ProductRepository, product: Product) -> dict:
    category = repo.get_category(product.category_id) if product.category_id is not None else None
    return product.to_dict(category)


def _check_category(repo: ProductRepository, category_id: Optional[int]) -> None:
    if category_id is not None and repo.get_category(category_id) is None:
        raise HTTPException(status_code=400, detail=f"Category {category_id} not found")


# -------------------- Categories --------------------
@router.get("/categories")
def list_categories():
    categories = ProductRepository().get_categories()
    return {"count": len(categories), "categories": [c.to_dict() for c in categories]}


@router.post("/categories")
def create_category(payload: CategoryInput):
    return ProductRepository().create_category(payload.name).to_dict()


@router.put("/categories/{category_id}")
def update_category(category_id: int, payload: CategoryInput):
    category = ProductRepository().update_category(category_id, payload.name)
    if category is None:
        raise HTTPException(status_code=404, detail=f"Category {category_id} not found")
    return category.to_dict()


@router.delete("/categories/{category_id}")
def delete_category(category_id: int):
    if not ProductRepository().delete_category(category_id):
        raise HTTPException(status_code=404, detail=f"Category {category_id} not found")
    return {"status": "success"}


# -------------------- Products --------------------
@router.get("/products")
def list_products(category_id: Optional[int] = Query(default=None)):
    """Catalog products with their category, sorted by name."""
    repo = ProductRepository()
    products = repo.get_products(category_id)
    return {"count": len(products), "products": [_product_dict(repo, p) for p in products]}


@router.post("/products")
def create_product(payload: ProductInput):
    repo = ProductRepository()
    _check_category(repo, payload.category_id)
    product = repo.create_product(payload.name, payload.unit, payload.category_id)
    return _product_dict(repo, product)


@router.get("/products/{product_id}")
def get_product(product_id: int):
    repo = ProductRepository()
    product = repo.get_product(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail=f"Product {product_id} not found")
    return _product_dict(repo, product)


@router.put("/products/{product_id}")
def update_product(product_id: int, payload: ProductInput):
    repo = ProductRepository()
    _check_category(repo, payload.category_id)
    product = repo.update_product(product_id, **payload.model_dump())
    if product is None:
        raise HTTPException(status_code=404, detail=f"Product {product_id} not found")
    return _product_dict(repo, product)


@router.delete("/products/{product_id}")
def delete_product(product_id: int):
    if not ProductRepository().delete_product(product_id):
        raise HTTPException(status_code=404, detail=f"Product {product_id} not found")
    return {"status": "success"}


# -------------------- Equipment --------------------
@router.get("/equipment")
def list_equipment(foodtruck: Optional[str] = Query(default=None)):
    items = ProductRepository().get_equipment(foodtruck)
    return {"count": len(items), "equipment": [e.to_dict() for e in items]}
