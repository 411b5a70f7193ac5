from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient
import logging

logger = logging.getLogger(__name__)


class MongoDB:
    """Client Mongo possédé par l'application (app.state.mongodb)."""

    def __init__(self, url: str | None = None, database_name: str = "marketplace", client=None):
        self.url = url
        self.database_name = database_name
        self.client = client
        self.db = client[database_name] if client is not None else None
        self._owns_client = client is None

    # 🔌 Connexion au démarrage de FastAPI
    async def connect(self):
        if self.client is not None:
            # client injecté (tests)
            return
        try:
            self.client = AsyncIOMotorClient(self.url)
            self.db = self.client[self.database_name]

            # Ping pour vérifier connexion
            await self.client.admin.command("ping")

            logger.info("✅ Connected to MongoDB (%s)", self.database_name)

        except Exception:
            logger.error("❌ MongoDB connection failed", exc_info=True)
            raise

    # 🔌 Fermeture propre
    async def close(self):
        if self.client is not None and self._owns_client:
            self.client.close()
            logger.info("🔌 MongoDB connection closed")


async def ensure_indexes(db):
    await db["users"].create_index("email", unique=True)
    await db["users"].create_index("user_id", unique=True)
    await db["products"].create_index("product_id", unique=True)
    await db["products"].create_index("seller_email")


def get_db(request: Request):
    """Dépendance FastAPI : base de données de l'application."""
    return request.app.state.mongodb.db


# 📦 Collections centralisées
def get_users_collection(db):
    return db["users"]


def get_products_collection(db):
    return db["products"]
