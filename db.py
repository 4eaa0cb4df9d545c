# db.py
import logging
from pymongo import MongoClient, ASCENDING
from pymongo.errors import ServerSelectionTimeoutError
from pymongo.database import Database

from config import MONGO_URI, MONGO_DB_NAME, MONGO_TIMEOUT_MS, MOVIES_COLLECTION, USERS_COLLECTION

logger = logging.getLogger(__name__)

# pymongo connects lazily, so importing this module never blocks on the server
client = MongoClient(MONGO_URI, serverSelectionTimeoutMS=MONGO_TIMEOUT_MS)
db = client[MONGO_DB_NAME]


def get_db() -> Database:
    """FastAPI dependency handing the shared database to a request."""
    return db


def movies_collection(database: Database):
    return database[MOVIES_COLLECTION]


def users_collection(database: Database):
    return database[USERS_COLLECTION]


def ensure_indexes(database: Database):
    """Create the lookup indexes and the unique username constraint."""
    index_specs = [
        (users_collection(database), [("username", ASCENDING)], {"unique": True}),
        (movies_collection(database), [("title", ASCENDING)], {}),
        (movies_collection(database), [("genre.name", ASCENDING)], {}),
        (movies_collection(database), [("director.name", ASCENDING)], {}),
    ]
    for collection, keys, options in index_specs:
        try:
            collection.create_index(keys, **options)
        except ServerSelectionTimeoutError as e:
            logger.warning(f"MongoDB unreachable, skipping index creation: {e}")
            return False
        except Exception as e:
            logger.warning(f"Index creation failed for {collection.name} {keys}: {e}")
    return True


def ping(database: Database) -> bool:
    try:
        database.client.admin.command("ping")
        return True
    except Exception as e:
        logger.error(f"MongoDB ping failed: {e}")
        return False
