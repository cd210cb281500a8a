"""

songbook/core/database.py

"""


from motor.motor_asyncio import AsyncIOMotorClient
from songbook.core.config import settings
import logging

logger = logging.getLogger(__name__)

class Database:
    client: AsyncIOMotorClient = None
    db = None

db = Database()

async def connect_to_mongo():
    """Create database connection."""
    try:
        db.client = AsyncIOMotorClient(settings.MONGODB_URL)
        db.db = db.client[settings.DATABASE_NAME]

        await create_indexes()

        logger.info("Connected to MongoDB")
    except Exception as e:
        logger.error(f"Could not connect to MongoDB: {e}")
        raise

async def close_mongo_connection():
    """Close database connection."""
    if db.client:
        db.client.close()
        logger.info("Disconnected from MongoDB")

async def create_indexes():
    """Create the uniqueness constraints the catalogue relies on"""
    # Song display sequence
    await db.db.songs.create_index([("order", 1)], name="songs_order_unique", unique=True)
    await db.db.songs.create_index(
        [("title", 1), ("artist", 1)],
        name="songs_title_artist_unique",
        unique=True,
    )

    # Concert lookup by slug
    await db.db.concerts.create_index([("slug", 1)], name="concerts_slug_unique", unique=True)

    logger.info("Database indexes created")

def get_database():
    """Get database instance"""
    return db.db

def get_client():
    """Get the client, needed to open sessions for transactions"""
    return db.client
