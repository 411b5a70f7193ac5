import logging
import re
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from pymongo import ASCENDING, DESCENDING, ReturnDocument

from marketplace_api.core.errors import BadRequest, NotFound
from marketplace_api.database.mongo import get_products_collection
from marketplace_api.models.product_models import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 6


def _clean(doc: Optional[dict]) -> Optional[dict]:
    if doc:
        doc.pop("_id", None)
    return doc


def build_product_document(data: ProductCreate, seller_email: str) -> Dict[str, Any]:
    now = datetime.utcnow()
    doc = data.model_dump()
    doc.update({
        "product_id": str(uuid.uuid4()),
        "price": float(data.price),
        "stock": int(data.stock),
        "seller_email": seller_email,
        "ratings": [],
        "created_at": now,
        "updated_at": now,
    })
    return doc


def build_search_query(
    name: Optional[str] = None,
    category: Optional[str] = None,
    brand: Optional[str] = None,
) -> Dict[str, Any]:
    query: Dict[str, Any] = {}
    if name:
        query["name"] = {"$regex": re.escape(name), "$options": "i"}
    if category:
        query["category"] = category
    if brand:
        query["brand"] = brand
    return query


async def search_products(
    db,
    name: Optional[str] = None,
    category: Optional[str] = None,
    brand: Optional[str] = None,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    sort: Optional[str] = None,
) -> Dict[str, Any]:
    if page < 1:
        raise BadRequest("page must be >= 1")
    if limit < 1:
        raise BadRequest("limit must be >= 1")

    coll = get_products_collection(db)
    query = build_search_query(name, category, brand)

    order = None
    if sort == "asc":
        order = [("price", ASCENDING)]
    elif sort == "desc":
        order = [("price", DESCENDING)]
    cursor = coll.find(query, sort=order, skip=(page - 1) * limit, limit=limit)

    products = [_clean(doc) async for doc in cursor]
    total = await coll.count_documents(query)
    # facettes calculées sur tout le résultat filtré, pas seulement la page
    categories = sorted(c for c in await coll.distinct("category", query) if c)
    brands = sorted(b for b in await coll.distinct("brand", query) if b)

    return {
        "products": products,
        "categories": categories,
        "brands": brands,
        "totalProducts": total,
    }


async def get_product_by_id(db, product_id: str) -> Dict[str, Any]:
    product = await get_products_collection(db).find_one({"product_id": product_id})
    if not product:
        raise NotFound("Product not found")
    return _clean(product)


async def create_product(db, data: ProductCreate, seller_email: str) -> Dict[str, Any]:
    doc = build_product_document(data, seller_email)
    await get_products_collection(db).insert_one(doc)
    logger.info("Product %s created by %s", doc["product_id"], seller_email)
    return _clean(doc)


async def update_product(db, product_id: str, data: ProductUpdate, seller_email: str) -> Dict[str, Any]:
    fields = data.model_dump(exclude_unset=True, exclude_none=True)
    if not fields:
        raise BadRequest("No fields to update")
    if "price" in fields:
        fields["price"] = float(fields["price"])
    if "stock" in fields:
        fields["stock"] = int(fields["stock"])
    fields["updated_at"] = datetime.utcnow()

    # même 404 pour "inexistant" et "pas le propriétaire"
    updated = await get_products_collection(db).find_one_and_update(
        {"product_id": product_id, "seller_email": seller_email},
        {"$set": fields},
        return_document=ReturnDocument.AFTER,
    )
    if updated is None:
        raise NotFound("Product not found")
    logger.info("Product %s updated by %s", product_id, seller_email)
    return _clean(updated)


async def delete_product(db, product_id: str, seller_email: str) -> None:
    result = await get_products_collection(db).delete_one(
        {"product_id": product_id, "seller_email": seller_email}
    )
    if result.deleted_count == 0:
        raise NotFound("Product not found")
    logger.info("Product %s deleted by %s", product_id, seller_email)


async def get_products_by_seller(db, seller_email: str) -> List[Dict[str, Any]]:
    cursor = get_products_collection(db).find({"seller_email": seller_email}, sort=[("created_at", DESCENDING)])
    return [_clean(doc) async for doc in cursor]


async def get_products_by_ids(db, product_ids: List[str]) -> List[Dict[str, Any]]:
    """Matérialise les ids dans l'ordre donné; les ids sans produit sont ignorés."""
    if not product_ids:
        return []
    cursor = get_products_collection(db).find({"product_id": {"$in": product_ids}})
    found = {doc["product_id"]: _clean(doc) async for doc in cursor}
    return [found[pid] for pid in product_ids if pid in found]
