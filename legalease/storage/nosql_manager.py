"""Optional MongoDB and Redis connections for the document store"""
import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient
from beanie import init_beanie
import redis.asyncio as redis

from ..config import MONGODB_URL, MONGODB_DATABASE, REDIS_URL
from .nosql_models import UserDocument, LegalDocumentRecord, AnalysisDocument

logger = logging.getLogger(__name__)

DOCUMENT_MODELS = [UserDocument, LegalDocumentRecord, AnalysisDocument]


class NoSQLManager:
    """
    Holds the MongoDB and Redis clients.

    A backend is only contacted when its URL is configured; a failed connection
    leaves it marked unavailable and the store keeps working in memory.
    """

    def __init__(self, mongodb_url: Optional[str] = None, redis_url: Optional[str] = None,
                 database_name: str = MONGODB_DATABASE):
        self.mongodb_url = mongodb_url
        self.redis_url = redis_url
        self.database_name = database_name
        self.mongodb_client = None
        self.redis_client = None
        self.mongodb_available = False
        self.redis_available = False

    async def connect_mongodb(self):
        if not self.mongodb_url:
            logger.info("MONGODB_URL not set, documents stay in memory")
            return

        try:
            client = AsyncIOMotorClient(self.mongodb_url, serverSelectionTimeoutMS=5000)
            await client.admin.command('ping')
            await init_beanie(database=client[self.database_name], document_models=DOCUMENT_MODELS)
        except Exception as e:
            logger.warning(f"⚠️ MongoDB unavailable ({e}), documents stay in memory")
            return

        self.mongodb_client = client
        self.mongodb_available = True
        logger.info(f"✅ MongoDB ready (database: {self.database_name})")

    async def connect_redis(self):
        if not self.redis_url:
            logger.info("REDIS_URL not set, analytics are not cached")
            return

        client = redis.from_url(self.redis_url, decode_responses=True, socket_connect_timeout=5)
        try:
            await client.ping()
        except Exception as e:
            logger.warning(f"⚠️ Redis unavailable ({e}), analytics are not cached")
            await client.aclose()
            return

        self.redis_client = client
        self.redis_available = True
        logger.info("✅ Redis ready for analytics caching")

    async def initialize(self):
        await self.connect_mongodb()
        await self.connect_redis()
        return {'mongodb_available': self.mongodb_available, 'redis_available': self.redis_available}

    async def close_connections(self):
        if self.mongodb_client:
            self.mongodb_client.close()
        if self.redis_client:
            await self.redis_client.aclose()


_nosql_manager: Optional[NoSQLManager] = None

async def get_nosql_manager() -> NoSQLManager:
    """Connect on first use and reuse the manager afterwards"""
    global _nosql_manager
    if _nosql_manager is None:
        _nosql_manager = NoSQLManager(MONGODB_URL, REDIS_URL)
        await _nosql_manager.initialize()
    return _nosql_manager
