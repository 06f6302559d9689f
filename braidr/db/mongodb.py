from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING
from braidr.core.config import settings
import logging

logger = logging.getLogger(__name__)

class Database:
    client: AsyncIOMotorClient = None
    db: AsyncIOMotorDatabase = None

db = Database()

async def connect_to_mongo():
    """Connect to MongoDB."""
    try:
        logger.info("Connecting to MongoDB...")
        db.client = AsyncIOMotorClient(settings.MONGO_URI)
        db.db = db.client[settings.DB_NAME]
        logger.info("Connected to MongoDB.")

        await create_indexes()

    except Exception as e:
        logger.error(f"Could not connect to MongoDB: {e}")
        raise e

async def close_mongo_connection():
    """Close MongoDB connection."""
    if db.client:
        logger.info("Closing MongoDB connection...")
        db.client.close()
        logger.info("MongoDB connection closed.")

async def get_database() -> AsyncIOMotorDatabase:
    """Get MongoDB database instance."""
    return db.db

async def create_indexes():
    """Create indexes for collections."""
    try:
        # Stylist Directory: stylists are addressed by their user id
        await db.db.stylists.create_index("userId", unique=True)

        # Service Catalog
        await db.db.services.create_index([("stylistId", ASCENDING), ("isActive", ASCENDING)])

        # Booking Store: the conflict read filters on stylist, day and status
        await db.db.bookings.create_index(
            [("stylistId", ASCENDING), ("date", ASCENDING), ("status", ASCENDING)]
        )
        await db.db.bookings.create_index(
            [("customerId", ASCENDING), ("status", ASCENDING), ("date", DESCENDING)]
        )

        logger.info("MongoDB indexes created successfully.")
    except Exception as e:
        logger.error(f"Failed to create MongoDB indexes: {e}")
