import logging
from pymongo import MongoClient

from storefront.config import MONGO_URI, DB_NAME

logger = logging.getLogger(__name__)

client = None
db = None


def init_database(database=None):
    """
    Initialise la connexion MongoDB.
    Une base déjà construite (ex: mongomock dans les tests) peut être injectée.
    """
    global client, db
    if database is not None:
        db = database
        return db

    client = MongoClient(MONGO_URI, serverSelectionTimeoutMS=5000)
    db = client[DB_NAME]
    logger.info(f"MongoDB client configured for database '{DB_NAME}'")
    return db


def get_database():
    """Retourne l'instance de la base de données MongoDB"""
    if db is None:
        init_database()
    return db


def get_collection(name: str):
    return get_database()[name]
