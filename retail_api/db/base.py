"""Process-wide MongoDB handle with an explicit connect/close lifecycle."""

import logging

from fastapi import Depends
from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase

from retail_api.core.config import settings

logger = logging.getLogger(__name__)

CUSTOMERS_COLLECTION = "customers"


class MongoDatabase:
    def __init__(self, uri: str, name: str, timeout_ms: int):
        self.uri = uri
        self.name = name
        self.timeout_ms = timeout_ms
        self.client: AsyncMongoClient | None = None

    async def connect(self) -> None:
        """Open the client and ping the server. Raises if it is unreachable."""
        client = AsyncMongoClient(
            self.uri,
            timeoutMS=self.timeout_ms,
            serverSelectionTimeoutMS=self.timeout_ms,
            tz_aware=True,
        )
        try:
            await client.admin.command("ping")
        except Exception:
            logger.exception("Failed to connect to MongoDB database %s", self.name)
            await client.close()
            raise
        self.client = client
        logger.info("Connected to MongoDB database %s", self.name)

    async def close(self) -> None:
        if self.client is not None:
            await self.client.close()
            self.client = None
            logger.info("MongoDB connection closed")

    @property
    def db(self) -> AsyncDatabase:
        if self.client is None:
            raise RuntimeError("MongoDB client is not connected")
        return self.client[self.name]


mongo = MongoDatabase(
    settings.MONGO_URI,
    settings.MONGODB_NAME,
    settings.MONGO_TIMEOUT_MS,
)


def get_db() -> AsyncDatabase:
    return mongo.db


def get_customers_collection(db: AsyncDatabase = Depends(get_db)) -> AsyncCollection:
    return db[CUSTOMERS_COLLECTION]
