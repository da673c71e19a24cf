"""
MongoDB document store using Motor (async driver).
Maps the hierarchical document tree onto one MongoDB collection:
every document's _id is its full path and _parent is its collection path.
"""

import re
from typing import Any, Dict, List, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

from core.config import Settings, get_settings
from core.document_store import (
    DocumentStoreError,
    IDocumentStore,
    StoredDocument,
    document_id,
    path_depth,
)
from core.logger import logger

_RESERVED_FIELDS = ("_id", "_parent")
_SORT_PRESENT_FIELD = "_sort_present"


def _mask_url(url: str) -> str:
    """Mask password in URL for logging."""
    if "@" not in url or "://" not in url:
        return url
    credentials, host = url.split("@", 1)
    protocol, user_info = credentials.split("://", 1)
    user = user_info.split(":", 1)[0]
    return f"{protocol}://{user}:****@{host}"


class MongoDocumentStore(IDocumentStore):
    """MongoDB implementation of IDocumentStore with async support."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.client: Optional[AsyncIOMotorClient] = None
        self.db: Optional[AsyncIOMotorDatabase] = None
        logger.debug("MongoDocumentStore initialized")

    async def connect(self) -> None:
        """
        Establish connection to MongoDB.

        Raises:
            DocumentStoreError: If connection fails
        """
        try:
            logger.info(f"📝 Connecting to MongoDB: {_mask_url(self.settings.mongodb_url)}")

            self.client = AsyncIOMotorClient(
                self.settings.mongodb_connection_url,
                maxPoolSize=self.settings.mongodb_max_pool_size,
                minPoolSize=self.settings.mongodb_min_pool_size,
                serverSelectionTimeoutMS=5000,
                connectTimeoutMS=10000,
                socketTimeoutMS=10000,
                tz_aware=True,
            )
            await self.client.admin.command("ping")
            self.db = self.client[self.settings.mongodb_database]

            logger.info(f"✅ Connected to MongoDB database: {self.settings.mongodb_database}")
            logger.debug(
                f"Connection pool: min={self.settings.mongodb_min_pool_size}, "
                f"max={self.settings.mongodb_max_pool_size}"
            )

        except PyMongoError as e:
            logger.error(f"❌ Failed to connect to MongoDB: {e}")
            logger.exception("MongoDB connection error details:")
            raise DocumentStoreError(f"MongoDB connection failed: {e}") from e

    async def disconnect(self) -> None:
        """Close MongoDB connection. Safe to call even if not connected."""
        if self.client:
            logger.info("📝 Disconnecting from MongoDB...")
            self.client.close()
            self.client = None
            self.db = None
            logger.info("✅ Disconnected from MongoDB")
        else:
            logger.debug("MongoDB client not initialized, nothing to disconnect")

    async def health_check(self) -> bool:
        """
        Check if MongoDB connection is healthy.

        Returns:
            True if connection is healthy, False otherwise
        """
        if not self.client:
            logger.warning("⚠️ MongoDB client not initialized")
            return False

        try:
            await self.client.admin.command("ping")
            logger.debug("✅ MongoDB health check passed")
            return True
        except PyMongoError as e:
            logger.error(f"❌ MongoDB health check failed: {e}")
            return False

    async def create_indexes(self) -> None:
        """Create the _parent index used by collection listings."""
        try:
            logger.info("📝 Creating MongoDB indexes...")
            await self._collection().create_index("_parent")
            logger.info("✅ MongoDB indexes created successfully")
        except (PyMongoError, DocumentStoreError) as e:
            # Listing still works without the index, only slower
            logger.error(f"❌ Failed to create indexes: {e}")

    def _collection(self) -> AsyncIOMotorCollection:
        if self.db is None:
            raise DocumentStoreError("Database not connected. Call connect() first.")
        return self.db[self.settings.documents_collection]

    @staticmethod
    def _to_document(raw: Dict[str, Any]) -> StoredDocument:
        path = raw["_id"]
        data = {k: v for k, v in raw.items() if k not in _RESERVED_FIELDS}
        return StoredDocument(id=document_id(path), path=path, data=data)

    @staticmethod
    def _check_fields(data: Dict[str, Any]) -> None:
        reserved = [k for k in data if k in _RESERVED_FIELDS]
        if reserved:
            raise DocumentStoreError(f"Reserved field names in document: {reserved}")

    async def get(self, path: str) -> Optional[StoredDocument]:
        try:
            raw = await self._collection().find_one({"_id": path})
        except PyMongoError as e:
            raise DocumentStoreError(f"get {path} failed: {e}") from e
        return self._to_document(raw) if raw else None

    async def list(self, collection_path: str) -> List[StoredDocument]:
        try:
            cursor = self._collection().find({"_parent": collection_path})
            return [self._to_document(raw) async for raw in cursor]
        except PyMongoError as e:
            raise DocumentStoreError(f"list {collection_path} failed: {e}") from e

    @staticmethod
    def _order_by_pipeline(
        collection_path: str, field: str, direction: str
    ) -> List[Dict[str, Any]]:
        """
        Aggregation that sorts on `field` and puts documents missing it
        (or holding null) last in either direction.
        """
        if not field or field.startswith("$") or field in _RESERVED_FIELDS:
            raise DocumentStoreError(f"Invalid sort field: {field!r}")
        sort_direction = DESCENDING if direction.lower() == "desc" else ASCENDING
        return [
            {"$match": {"_parent": collection_path}},
            {"$addFields": {_SORT_PRESENT_FIELD: {"$gt": [f"${field}", None]}}},
            {"$sort": {_SORT_PRESENT_FIELD: DESCENDING, field: sort_direction}},
            {"$project": {_SORT_PRESENT_FIELD: 0}},
        ]

    async def order_by(
        self, collection_path: str, field: str, direction: str = "asc"
    ) -> List[StoredDocument]:
        pipeline = self._order_by_pipeline(collection_path, field, direction)
        try:
            cursor = self._collection().aggregate(pipeline)
            return [self._to_document(raw) async for raw in cursor]
        except PyMongoError as e:
            raise DocumentStoreError(
                f"order_by {collection_path}.{field} failed: {e}"
            ) from e

    async def add(self, collection_path: str, data: Dict[str, Any]) -> str:
        self._check_fields(data)
        new_id = str(ObjectId())
        path = f"{collection_path}/{new_id}"
        try:
            await self._collection().insert_one(
                {**data, "_id": path, "_parent": collection_path}
            )
        except PyMongoError as e:
            raise DocumentStoreError(f"add to {collection_path} failed: {e}") from e
        logger.debug(f"Created document: {path}")
        return new_id

    async def update(self, path: str, partial_data: Dict[str, Any]) -> bool:
        self._check_fields(partial_data)
        if not partial_data:
            return await self.get(path) is not None
        try:
            result = await self._collection().update_one(
                {"_id": path}, {"$set": partial_data}
            )
        except PyMongoError as e:
            raise DocumentStoreError(f"update {path} failed: {e}") from e
        return result.matched_count > 0

    async def delete(self, path: str) -> bool:
        try:
            result = await self._collection().delete_one({"_id": path})
        except PyMongoError as e:
            raise DocumentStoreError(f"delete {path} failed: {e}") from e
        return result.deleted_count > 0

    async def recursive_delete(self, path: str) -> int:
        collection = self._collection()
        try:
            cursor = collection.find(
                {"_id": {"$regex": f"^{re.escape(path)}/"}}, projection={"_id": 1}
            )
            descendants = [raw["_id"] async for raw in cursor]

            # Deepest first so a parent never outlives its children
            by_depth: Dict[int, List[str]] = {}
            for descendant in descendants:
                by_depth.setdefault(path_depth(descendant), []).append(descendant)

            removed = 0
            for depth in sorted(by_depth, reverse=True):
                result = await collection.delete_many({"_id": {"$in": by_depth[depth]}})
                removed += result.deleted_count

            result = await collection.delete_one({"_id": path})
            removed += result.deleted_count
        except PyMongoError as e:
            raise DocumentStoreError(f"recursive_delete {path} failed: {e}") from e

        logger.debug(f"Recursively deleted {removed} documents under {path}")
        return removed


# Global instance
_store: Optional[MongoDocumentStore] = None


def get_database() -> MongoDocumentStore:
    """
    Get or create the global MongoDB document store.
    The returned store is not connected yet; call connect() during startup.
    """
    global _store

    if _store is None:
        logger.info("📝 Initializing MongoDB document store...")
        _store = MongoDocumentStore()

    return _store

