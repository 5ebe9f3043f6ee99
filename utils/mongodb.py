from pymongo import MongoClient
from config.settings import Config
from utils.logger import get_logger

logger = get_logger(__name__)

_client = None


def get_client():
    """Create the MongoDB client on first use."""
    global _client
    if _client is None:
        try:
            _client = MongoClient(Config.MONGO_URI)
            logger.info(f"Connected to MongoDB database: {Config.DB_NAME}")
        except Exception:
            logger.error("Failed to connect to MongoDB", exc_info=True)
            raise
    return _client


def get_db():
    """Return the database instance."""
    return get_client()[Config.DB_NAME]
