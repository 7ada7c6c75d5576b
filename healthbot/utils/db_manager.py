import re
import asyncio
from datetime import datetime, timezone
from functools import wraps
from typing import Any, Dict, Iterable, List, Optional, Set

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.errors import ConnectionFailure, DuplicateKeyError, PyMongoError, ServerSelectionTimeoutError

from healthbot.utils.errors import DatabaseError
from healthbot.utils.indian_states import normalize_name
from healthbot.utils.logger import get_db_logger
from healthbot.utils.settings import settings

logger = get_db_logger()

_NO_ID = {"_id": 0}


def _utcnow():
    return datetime.now(timezone.utc)


def db_operation(func):
    """Connect lazily and surface driver failures as DatabaseError"""
    @wraps(func)
    async def wrapper(self, *args, **kwargs):
        try:
            if self.db is None:
                await self.connect_with_retry()
            return await func(self, *args, **kwargs)
        except PyMongoError as e:
            logger.error(f"{func.__name__} failed: {e}")
            raise DatabaseError(f"{func.__name__} failed: {e}") from e
    return wrapper


class DatabaseManager:
    """
    MongoDB store for users, sessions, alert preferences, the outbreak cache,
    canonical states, the known-disease ledger, alert history and answer feedback.
    """

    def __init__(self, mongo_uri: Optional[str] = None, db_name: Optional[str] = None):
        self.mongo_uri = mongo_uri or settings.MONGODB_URI
        self.db_name = db_name or settings.DB_NAME
        self.client = None
        self.db = None

        self.users_collection_name = settings.USER_TABLE
        self.sessions_collection_name = settings.SESSION_TABLE
        self.preferences_collection_name = settings.ALERT_PREFERENCES_TABLE
        self.cache_collection_name = settings.OUTBREAK_CACHE_TABLE
        self.states_collection_name = settings.STATES_TABLE
        self.diseases_collection_name = settings.ACTIVE_DISEASES_TABLE
        self.history_collection_name = settings.ALERT_HISTORY_TABLE
        self.feedback_collection_name = settings.FEEDBACK_TABLE

    async def connect(self):
        """Create a connection to MongoDB"""
        if self.client is not None:
            return self.db

        try:
            self.client = AsyncIOMotorClient(
                self.mongo_uri,
                tz_aware=True,
                serverSelectionTimeoutMS=5000,
                connectTimeoutMS=10000,
                socketTimeoutMS=45000,
                maxPoolSize=100
            )
            await self.client.admin.command('ping')

            self.db = self.client[self.db_name]
            logger.info(f"Connected to MongoDB: {self.db_name}")

            await self._create_indexes()
            return self.db
        except Exception as e:
            logger.error(f"MongoDB connection error: {str(e)}")
            self.client = None
            self.db = None
            raise

    async def connect_with_retry(self, max_retries=5, retry_delay=2):
        """Connect to MongoDB with retry logic"""
        retries = 0
        while retries < max_retries:
            try:
                return await self.connect()
            except (ConnectionFailure, ServerSelectionTimeoutError) as e:
                retries += 1
                logger.warning(f"Connection attempt {retries} failed: {str(e)}")
                if retries >= max_retries:
                    logger.error("Max retries reached. Could not connect to MongoDB.")
                    raise
                await asyncio.sleep(retry_delay)

    async def close(self):
        if self.client is not None:
            self.client.close()
            self.client = None
            self.db = None
            logger.info("MongoDB connection closed")

    async def ping(self) -> bool:
        try:
            await self.connect()
            await self.client.admin.command('ping')
            return True
        except Exception as e:
            logger.error(f"MongoDB ping failed: {e}")
            return False

    async def _create_indexes(self):
        """Create the uniqueness constraints the services rely on"""
        try:
            await self.db[self.users_collection_name].create_index("phone_number", unique=True)
            await self.db[self.sessions_collection_name].create_index("phone_number", unique=True)
            await self.db[self.preferences_collection_name].create_index("phone_number", unique=True)
            await self.db[self.preferences_collection_name].create_index("alert_enabled")
            await self.db[self.cache_collection_name].create_index(
                [("cache_type", ASCENDING), ("state_name", ASCENDING), ("query_date", ASCENDING)],
                unique=True
            )
            await self.db[self.states_collection_name].create_index("id", unique=True)
            await self.db[self.states_collection_name].create_index("name_normalized")
            await self.db[self.diseases_collection_name].create_index("name_normalized", unique=True)
            await self.db[self.history_collection_name].create_index([("phone_number", ASCENDING), ("sent_at", DESCENDING)])
            await self.db[self.feedback_collection_name].create_index("created_at")

            logger.info("Database indexes created successfully")
        except Exception as e:
            logger.error(f"Error creating indexes: {str(e)}")

    # Canonical states

    @db_operation
    async def seed_states(self, states: Iterable[Dict[str, Any]]) -> int:
        inserted = 0
        for state in states:
            doc = dict(state, name_normalized=normalize_name(state["name"]))
            result = await self.db[self.states_collection_name].update_one(
                {"id": state["id"]}, {"$setOnInsert": doc}, upsert=True
            )
            if result.upserted_id is not None:
                inserted += 1
        if inserted:
            logger.info(f"Seeded {inserted} canonical states")
        return inserted

    @db_operation
    async def list_states(self, search: Optional[str] = None) -> List[Dict[str, Any]]:
        query = {}
        if search:
            query["name"] = {"$regex": re.escape(search.strip()), "$options": "i"}
        cursor = self.db[self.states_collection_name].find(query, _NO_ID).sort("name", ASCENDING)
        return [self._strip_state(doc) for doc in await cursor.to_list(length=None)]

    @db_operation
    async def get_state(self, state_id: int) -> Optional[Dict[str, Any]]:
        doc = await self.db[self.states_collection_name].find_one({"id": state_id}, _NO_ID)
        return self._strip_state(doc) if doc else None

    @db_operation
    async def find_state_by_name(self, name: str) -> Optional[Dict[str, Any]]:
        doc = await self.db[self.states_collection_name].find_one(
            {"name_normalized": normalize_name(name)}, _NO_ID
        )
        return self._strip_state(doc) if doc else None

    @staticmethod
    def _strip_state(doc):
        doc.pop("name_normalized", None)
        return doc

    # Alert preferences

    @db_operation
    async def get_alert_preference(self, phone_number: str) -> Optional[Dict[str, Any]]:
        return await self.db[self.preferences_collection_name].find_one({"phone_number": phone_number}, _NO_ID)

    @db_operation
    async def upsert_alert_preference(self, phone_number: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        now = _utcnow()
        defaults = {"phone_number": phone_number, "created_at": now, "alert_frequency": "daily", "alert_enabled": True}
        for key in fields:
            defaults.pop(key, None)
        return await self.db[self.preferences_collection_name].find_one_and_update(
            {"phone_number": phone_number},
            {"$set": dict(fields, updated_at=now), "$setOnInsert": defaults},
            upsert=True,
            projection=_NO_ID,
            return_document=ReturnDocument.AFTER,
        )

    @db_operation
    async def set_alert_enabled(self, phone_number: str, enabled: bool) -> bool:
        result = await self.db[self.preferences_collection_name].update_one(
            {"phone_number": phone_number},
            {"$set": {"alert_enabled": enabled, "updated_at": _utcnow()}},
        )
        return result.matched_count > 0

    @db_operation
    async def delete_alert_preference(self, phone_number: str) -> bool:
        result = await self.db[self.preferences_collection_name].delete_one({"phone_number": phone_number})
        return result.deleted_count > 0

    @db_operation
    async def list_enabled_alert_preferences(self) -> List[Dict[str, Any]]:
        cursor = self.db[self.preferences_collection_name].find({"alert_enabled": True}, _NO_ID)
        return await cursor.to_list(length=None)

    @db_operation
    async def mark_alert_sent(self, phone_number: str, sent_at: datetime) -> None:
        await self.db[self.preferences_collection_name].update_one(
            {"phone_number": phone_number}, {"$set": {"last_alert_sent": sent_at}}
        )

    # Outbreak cache

    @db_operation
    async def get_cache_entry(self, cache_type: str, state_name: Optional[str], query_date: str) -> Optional[Dict[str, Any]]:
        return await self.db[self.cache_collection_name].find_one(
            {"cache_type": cache_type, "state_name": state_name, "query_date": query_date}, _NO_ID
        )

    @db_operation
    async def upsert_cache_entry(self, entry: Dict[str, Any]) -> bool:
        """Write the row for its key, replacing any earlier one; True when a new row was created"""
        key = {k: entry[k] for k in ("cache_type", "state_name", "query_date")}
        collection = self.db[self.cache_collection_name]
        try:
            result = await collection.update_one(key, {"$set": entry}, upsert=True)
        except DuplicateKeyError:
            # Lost an upsert race on the unique index; the row exists now
            await collection.update_one(key, {"$set": entry})
            return False
        return result.upserted_id is not None

    @db_operation
    async def delete_cache_entries_before(self, query_date: str) -> int:
        result = await self.db[self.cache_collection_name].delete_many({"query_date": {"$lt": query_date}})
        return result.deleted_count

    @db_operation
    async def list_cache_entries(self) -> List[Dict[str, Any]]:
        cursor = self.db[self.cache_collection_name].find(
            {}, {"_id": 0, "cache_type": 1, "state_name": 1, "query_date": 1, "created_at": 1}
        )
        return await cursor.to_list(length=None)

    # Known-disease ledger

    @db_operation
    async def get_active_disease_names(self) -> Set[str]:
        cursor = self.db[self.diseases_collection_name].find({"is_active": True}, {"_id": 0, "name_normalized": 1})
        return {doc["name_normalized"] for doc in await cursor.to_list(length=None)}

    @db_operation
    async def upsert_active_disease(self, disease: Dict[str, Any], seen_at: datetime) -> None:
        name_normalized = normalize_name(disease["name"])
        await self.db[self.diseases_collection_name].update_one(
            {"name_normalized": name_normalized},
            {
                "$set": dict(disease, name_normalized=name_normalized, is_active=True, last_updated=seen_at),
                "$setOnInsert": {"first_seen": seen_at},
            },
            upsert=True,
        )

    @db_operation
    async def deactivate_diseases_before(self, cutoff: datetime) -> int:
        result = await self.db[self.diseases_collection_name].update_many(
            {"is_active": True, "last_updated": {"$lt": cutoff}}, {"$set": {"is_active": False}}
        )
        return result.modified_count

    # Alert history

    @db_operation
    async def insert_alert_history(self, record: Dict[str, Any]) -> None:
        await self.db[self.history_collection_name].insert_one(dict(record))

    @db_operation
    async def delete_alert_history_before(self, cutoff: datetime) -> int:
        result = await self.db[self.history_collection_name].delete_many({"sent_at": {"$lt": cutoff}})
        return result.deleted_count

    # Users and sessions

    @db_operation
    async def get_or_create_user(self, phone_number: str, default_language: str = "en") -> Dict[str, Any]:
        now = _utcnow()
        return await self.db[self.users_collection_name].find_one_and_update(
            {"phone_number": phone_number},
            {
                "$set": {"last_active_at": now},
                "$setOnInsert": {"phone_number": phone_number, "preferred_language": default_language, "created_at": now},
            },
            upsert=True,
            projection=_NO_ID,
            return_document=ReturnDocument.AFTER,
        )

    @db_operation
    async def get_user(self, phone_number: str) -> Optional[Dict[str, Any]]:
        return await self.db[self.users_collection_name].find_one({"phone_number": phone_number}, _NO_ID)

    @db_operation
    async def update_user(self, phone_number: str, fields: Dict[str, Any]) -> None:
        await self.db[self.users_collection_name].update_one(
            {"phone_number": phone_number}, {"$set": dict(fields, updated_at=_utcnow())}
        )

    @db_operation
    async def get_session(self, phone_number: str) -> Optional[Dict[str, Any]]:
        return await self.db[self.sessions_collection_name].find_one({"phone_number": phone_number}, _NO_ID)

    @db_operation
    async def set_session(self, phone_number: str, session_state: str, context: Optional[Dict[str, Any]] = None) -> None:
        await self.db[self.sessions_collection_name].update_one(
            {"phone_number": phone_number},
            {"$set": {"session_state": session_state, "context": context or {}, "updated_at": _utcnow()}},
            upsert=True,
        )

    # Feedback

    @db_operation
    async def insert_feedback(self, record: Dict[str, Any]) -> None:
        await self.db[self.feedback_collection_name].insert_one(dict(record))

    @db_operation
    async def list_feedback_since(self, cutoff: datetime) -> List[Dict[str, Any]]:
        cursor = self.db[self.feedback_collection_name].find({"created_at": {"$gte": cutoff}}, _NO_ID)
        return await cursor.to_list(length=None)
