import logging
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from pymongo import ASCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError

from marketplace_api.core.config import Settings
from marketplace_api.core.errors import Conflict, Forbidden, NotFound
from marketplace_api.core.security import hash_password, verify_password
from marketplace_api.database.mongo import get_users_collection
from marketplace_api.models.user_models import UserCreate

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def public_user(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Retire les champs internes avant envoi au client."""
    d = dict(doc)
    d.pop("_id", None)
    d.pop("password_hash", None)
    return d


def build_user_document(
    name: str,
    email: str,
    password: str,
    role: str,
    image: Optional[str] = None,
) -> Dict[str, Any]:
    now = datetime.utcnow()
    doc = {
        "user_id": str(uuid.uuid4()),
        "name": name.strip(),
        "email": normalize_email(email),
        "password_hash": hash_password(password),
        "role": role,
        "status": "unbanned",
        "image": image,
        "created_at": now,
        "updated_at": now,
    }
    if role == "buyer":
        doc["wishlist"] = []
        doc["cart"] = []
    return doc


async def find_user_by_email(db, email: str) -> Optional[Dict[str, Any]]:
    return await get_users_collection(db).find_one({"email": normalize_email(email)})


async def resolve_account(db, email: str) -> Dict[str, Any]:
    """Source de vérité pour le rôle et le statut (jamais le token)."""
    user = await find_user_by_email(db, email)
    if not user:
        raise NotFound("User not found")
    return user


async def register_user(db, data: UserCreate, settings: Settings) -> Optional[Dict[str, Any]]:
    """Crée le compte. Retourne None pour l'email admin (déjà amorcé)."""
    email = normalize_email(data.email)
    if email == normalize_email(settings.ADMIN_EMAIL):
        return None
    if data.role == "admin":
        raise Forbidden("Admin accounts cannot be self-registered")

    doc = build_user_document(data.name, email, data.password, data.role, data.image)
    try:
        await get_users_collection(db).insert_one(doc)
    except DuplicateKeyError:
        raise Conflict("Email already exists")
    logger.info("Registered %s account %s", data.role, email)
    return public_user(doc)


async def authenticate_user(db, email: str, password: str) -> Optional[Dict[str, Any]]:
    user = await find_user_by_email(db, email)
    if not user or not verify_password(password, user.get("password_hash", "")):
        return None
    return user


async def list_users(db) -> List[Dict[str, Any]]:
    cursor = get_users_collection(db).find({}, sort=[("created_at", ASCENDING)])
    return [public_user(doc) async for doc in cursor]


async def change_role(db, user_id: str, role: str) -> Dict[str, Any]:
    coll = get_users_collection(db)
    updated = await coll.find_one_and_update(
        {"user_id": user_id, "status": {"$ne": "banned"}},
        {"$set": {"role": role, "updated_at": datetime.utcnow()}},
        return_document=ReturnDocument.AFTER,
    )
    if updated is None:
        if await coll.find_one({"user_id": user_id}) is None:
            raise NotFound("User not found")
        raise Forbidden("User is banned")
    logger.info("Role of %s changed to %s", updated["email"], role)
    return public_user(updated)


async def set_ban_status(db, user_id: str, banned: bool) -> None:
    status = "banned" if banned else "unbanned"
    result = await get_users_collection(db).update_one(
        {"user_id": user_id},
        {"$set": {"status": status, "updated_at": datetime.utcnow()}},
    )
    if result.modified_count == 0:
        raise NotFound("User not found")
    logger.info("User %s is now %s", user_id, status)


async def bootstrap_admin_if_needed(db, settings: Settings) -> Optional[Dict[str, Any]]:
    """Crée le compte admin configuré s'il n'existe pas encore.

    Contrôlé par ADMIN_EMAIL / ADMIN_PASSWORD. Sans mot de passe, rien n'est créé.
    """
    email = normalize_email(settings.ADMIN_EMAIL)
    password = settings.ADMIN_PASSWORD
    if not email or not password:
        return None
    if await find_user_by_email(db, email):
        return None

    doc = build_user_document("Admin", email, password, "admin")
    try:
        await get_users_collection(db).insert_one(doc)
    except DuplicateKeyError:
        # un autre worker l'a créé entre-temps
        return None
    logger.info("Bootstrap admin %s created", email)
    return public_user(doc)
