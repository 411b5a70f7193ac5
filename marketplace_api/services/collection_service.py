"""
Wishlist et panier d'un acheteur : listes ordonnées d'ids de produits, sans doublon.
"""
import logging
from datetime import datetime
from typing import Any, Dict, List

from marketplace_api.core.errors import BadRequest, Forbidden, NotFound
from marketplace_api.database.mongo import get_products_collection, get_users_collection
from marketplace_api.services.product_service import get_products_by_ids

logger = logging.getLogger(__name__)

WISHLIST = "wishlist"
CART = "cart"


async def _check_account(db, email: str) -> None:
    user = await get_users_collection(db).find_one({"email": email}, {"status": 1})
    if not user:
        raise NotFound("User not found")
    if user.get("status") == "banned":
        raise Forbidden("Account is banned")


async def _read_ids(db, email: str, field: str) -> List[str]:
    user = await get_users_collection(db).find_one({"email": email}, {field: 1})
    if not user:
        raise NotFound("User not found")
    return user.get(field) or []


async def add_item(db, email: str, field: str, product_id: str, require_product: bool = False) -> Dict[str, Any]:
    if not product_id:
        raise BadRequest("product_id is required")
    await _check_account(db, email)
    if require_product:
        product = await get_products_collection(db).find_one({"product_id": product_id}, {"_id": 1})
        if product is None:
            raise NotFound("Product not found")

    # écriture conditionnelle : ne matche pas si l'id est déjà présent
    result = await get_users_collection(db).update_one(
        {"email": email, field: {"$ne": product_id}},
        {"$addToSet": {field: product_id}, "$set": {"updated_at": datetime.utcnow()}},
    )
    if result.modified_count == 0:
        return {"message": f"Product already in {field}", field: await _read_ids(db, email, field)}

    logger.info("%s added %s to %s", email, product_id, field)
    return {"message": f"Product added to {field}", field: await _read_ids(db, email, field)}


async def remove_item(db, email: str, field: str, product_id: str) -> Dict[str, Any]:
    if not product_id:
        raise BadRequest("product_id is required")
    await _check_account(db, email)
    await get_users_collection(db).update_one(
        {"email": email},
        {"$pull": {field: product_id}, "$set": {"updated_at": datetime.utcnow()}},
    )
    return {"message": f"Product removed from {field}", field: await _read_ids(db, email, field)}


async def get_items(db, email: str, field: str) -> List[Dict[str, Any]]:
    return await get_products_by_ids(db, await _read_ids(db, email, field))
