import logging
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import ConnectionFailure, PyMongoError

from domain.model.errors import StoreError

logger = logging.getLogger(__name__)

# Suppress verbose PyMongo logs
pymongo_logger = logging.getLogger('pymongo')
pymongo_logger.setLevel(logging.WARNING)

DEFAULT_DATABASE_NAME = 'lenslocked_dev'


def connect(mongo_url: str | None, database_name: str = DEFAULT_DATABASE_NAME) -> Database:
    """Open a MongoDB client and return the named database.

    The connection is verified with a ping so that configuration problems
    surface here, at construction time, instead of on the first request.

    Raises:
        StoreError: MONGO_URL missing or the server is unreachable
    """
    if not mongo_url:
        logger.error("[MONGODB] MONGO_URL not configured.")
        raise StoreError("MongoDB connection string is not configured")

    try:
        client = MongoClient(
            mongo_url,
            serverSelectionTimeoutMS=5000,  # 5s timeout for server selection
            connectTimeoutMS=5000,  # 5s timeout for initial connection
            socketTimeoutMS=30000,  # 30s timeout for operations
            maxPoolSize=10,
            minPoolSize=0,
            maxIdleTimeMS=30000,
            waitQueueTimeoutMS=10000,
            # Failures surface to the caller; the driver must not retry writes
            retryWrites=False,
            retryReads=False,
            compressors=['zlib'],
            zlibCompressionLevel=1,
        )
        client.admin.command('ping')
    except (ConnectionFailure, PyMongoError) as e:
        error_msg = str(e)[:200]
        logger.error(f"[MONGODB] Initial connection failed: {error_msg}")
        raise StoreError(f"MongoDB connection failed: {error_msg}") from e

    logger.info(f"[MONGODB] Connected successfully to {database_name}")
    return client[database_name]
