"""
MongoDB Connection Utility

MongoDB stores:
- Interview experiences (round narrative, tips, result)
- Interview questions (question text, answer, topic)

Both are append-only documents attached to a company id.
"""
import logging

from pymongo import MongoClient, DESCENDING
from pymongo.database import Database
from pymongo.collection import Collection
from placement_tracker.core.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None
_db: Database = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = MongoClient(settings.mongodb_uri, tz_aware=True)
    return _client


def get_mongo_db() -> Database:
    """Get the placement_docs database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[settings.mongodb_db]
    return _db


def get_collection(name: str) -> Collection:
    db = get_mongo_db()
    return db[name]


def test_mongo_connection() -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        client = get_mongo_client()
        # ping command checks connection
        client.admin.command('ping')
        return True
    except Exception as e:
        logger.error("MongoDB connection failed: %s", e)
        return False


# Collection name constants (avoid typos)
COLLECTIONS = {
    "experiences": "interview_experiences",
    "questions": "interview_questions",
}


def init_mongo_indexes():
    """
    Create indexes for the per-company, newest-first listings.
    Call this once during app startup.
    """
    db = get_mongo_db()

    for name in COLLECTIONS.values():
        db[name].create_index([("company_id", 1), ("created_at", DESCENDING)])

    # Selected-applicant lookup filters on result text per company
    db[COLLECTIONS["experiences"]].create_index([("company_id", 1), ("user_id", 1)])

    logger.info("MongoDB indexes created successfully")
