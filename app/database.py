import logging

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from app.config import settings

logger = logging.getLogger(__name__)

class Database:
    client: AsyncIOMotorClient = None

    def connect(self):
        self.client = AsyncIOMotorClient(settings.MONGO_URI, tz_aware=True)
        logger.info("Connected to MongoDB at %s", settings.MONGO_URI)

    def close(self):
        if self.client:
            self.client.close()
            self.client = None
            logger.info("Disconnected from MongoDB")

    def get_db(self):
        return self.client[settings.MONGO_DB_NAME]

    def get_collection(self, name: str):
        return self.get_db()[name]

db = Database()

def get_zipcode_collection():
    return db.get_collection(settings.MONGO_COLL_ZIPCODES)

def get_event_collection():
    return db.get_collection(settings.MONGO_COLL_EVENTS)

async def ensure_indexes():
    try:
        await get_zipcode_collection().create_index("zipcode", unique=True)
        await get_event_collection().create_index(
            [("zipcode", ASCENDING), ("start_datetime", ASCENDING)]
        )
    except PyMongoError as e:
        logger.warning("Error creating indexes: %s", e)
