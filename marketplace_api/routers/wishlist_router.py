from typing import List

from fastapi import APIRouter, Depends

from marketplace_api.core.auth import require_buyer
from marketplace_api.database.mongo import get_db
from marketplace_api.models.product_models import ProductIdBody, ProductResponse
from marketplace_api.services.collection_service import (
    CART,
    WISHLIST,
    add_item,
    get_items,
    remove_item,
)

router = APIRouter(tags=["Wishlist & Cart"])


# --- Wishlist ---

@router.get("/get-wishlist", response_model=List[ProductResponse])
async def get_wishlist(user=Depends(require_buyer), db=Depends(get_db)):
    return await get_items(db, user["email"], WISHLIST)


@router.patch("/add-to-wishlist")
async def add_to_wishlist(body: ProductIdBody, user=Depends(require_buyer), db=Depends(get_db)):
    return await add_item(db, user["email"], WISHLIST, body.product_id)


@router.patch("/remove-from-wishlist")
async def remove_from_wishlist(body: ProductIdBody, user=Depends(require_buyer), db=Depends(get_db)):
    return await remove_item(db, user["email"], WISHLIST, body.product_id)


# --- Panier ---

@router.get("/get-cart", response_model=List[ProductResponse])
async def get_cart(user=Depends(require_buyer), db=Depends(get_db)):
    return await get_items(db, user["email"], CART)


@router.patch("/add-cart")
async def add_to_cart(body: ProductIdBody, user=Depends(require_buyer), db=Depends(get_db)):
    # le produit doit exister pour entrer dans le panier
    return await add_item(db, user["email"], CART, body.product_id, require_product=True)


@router.patch("/remove-from-cart")
async def remove_from_cart(body: ProductIdBody, user=Depends(require_buyer), db=Depends(get_db)):
    return await remove_item(db, user["email"], CART, body.product_id)
