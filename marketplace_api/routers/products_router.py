from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from marketplace_api.core.auth import require_seller
from marketplace_api.database.mongo import get_db
from marketplace_api.models.product_models import (
    ProductCreate,
    ProductPage,
    ProductResponse,
    ProductUpdate,
)
from marketplace_api.services.product_service import (
    DEFAULT_PAGE_SIZE,
    create_product,
    delete_product,
    get_product_by_id,
    get_products_by_seller,
    search_products,
    update_product,
)

router = APIRouter(tags=["Products"])


@router.get("/products", response_model=ProductPage)
@router.get("/get-products", response_model=ProductPage)
async def list_products(
    name: Optional[str] = None,
    category: Optional[str] = None,
    brand: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=100),
    sort: Optional[str] = None,
    db=Depends(get_db),
):
    """Recherche publique paginée."""
    return await search_products(db, name, category, brand, page, limit, sort)


@router.get("/get-single-product/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str, db=Depends(get_db)):
    return await get_product_by_id(db, product_id)


@router.post("/products", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
@router.post("/add-product", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def add_product(data: ProductCreate, user=Depends(require_seller), db=Depends(get_db)):
    return await create_product(db, data, user["email"])


@router.patch("/update-product/{product_id}", response_model=ProductResponse)
async def patch_product(product_id: str, data: ProductUpdate, user=Depends(require_seller), db=Depends(get_db)):
    return await update_product(db, product_id, data, user["email"])


@router.delete("/products/{product_id}")
@router.delete("/delete-product/{product_id}")
async def remove_product(product_id: str, user=Depends(require_seller), db=Depends(get_db)):
    await delete_product(db, product_id, user["email"])
    return {"message": "Product deleted successfully"}


@router.get("/seller-products", response_model=List[ProductResponse])
async def seller_products(user=Depends(require_seller), db=Depends(get_db)):
    """Produits du vendeur connecté."""
    return await get_products_by_seller(db, user["email"])
