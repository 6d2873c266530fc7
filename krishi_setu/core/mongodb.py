import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING

from krishi_setu.core.config import settings

logger = logging.getLogger(__name__)

USER_COLLECTION = "user"
FARM_COLLECTION = "farm"
CULTIVATION_GUIDE_COLLECTION = "cultivation_guide"
TRANSACTION_COLLECTION = "transaction"

_client: AsyncIOMotorClient = None
_database: AsyncIOMotorDatabase = None


def _get_database() -> AsyncIOMotorDatabase:
    global _client, _database
    if _database is None:
        if _client is None:
            _client = AsyncIOMotorClient(
                settings.MONGO_DIRECT_URI or settings.MONGO_URI,
                uuidRepresentation="standard",
            )
        _database = _client[settings.MONGO_DB_NAME]
    return _database


async def _ensure_indexes(database: AsyncIOMotorDatabase) -> None:
    # Every document outside `user` is read by owner; guides and entries newest first.
    await database[USER_COLLECTION].create_index("phone", unique=True)
    await database[FARM_COLLECTION].create_index("farmer_id")
    await database[CULTIVATION_GUIDE_COLLECTION].create_index(
        [("farmer_id", ASCENDING), ("created_at", DESCENDING)]
    )
    await database[TRANSACTION_COLLECTION].create_index(
        [("farmer_id", ASCENDING), ("date", DESCENDING), ("created_at", DESCENDING)]
    )


async def init_mongo_client() -> None:
    database = _get_database()
    await _ensure_indexes(database)
    logger.info("Connected to MongoDB database %s", settings.MONGO_DB_NAME)


async def close_mongo_client() -> None:
    global _client, _database
    if _client is not None:
        _client.close()
    _client = None
    _database = None


def get_user_collection() -> AsyncIOMotorCollection:
    return _get_database()[USER_COLLECTION]


def get_farm_collection() -> AsyncIOMotorCollection:
    return _get_database()[FARM_COLLECTION]


def get_cultivation_guide_collection() -> AsyncIOMotorCollection:
    return _get_database()[CULTIVATION_GUIDE_COLLECTION]


def get_transaction_collection() -> AsyncIOMotorCollection:
    return _get_database()[TRANSACTION_COLLECTION]
