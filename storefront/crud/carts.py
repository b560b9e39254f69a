from typing import Optional
from datetime import datetime
import logging
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError
from storefront.database import get_collection
from storefront.errors import StorageError

logger = logging.getLogger(__name__)


def _carts():
    return get_collection("carts")


def get_cart_by_user(user_id: str) -> Optional[dict]:
    """
    Renvoie le panier d'un utilisateur (un seul par utilisateur).
    """
    try:
        return _carts().find_one({"user": user_id})
    except PyMongoError as e:
        logger.error(f"Error getting cart for user {user_id}: {e}")
        raise StorageError(f"Unable to read cart: {e}")


def save_cart(user_id: str, cart_data: dict) -> dict:
    """
    Crée ou met à jour le panier d'un utilisateur avec les champs fournis.
    """
    cart_data = dict(cart_data)
    cart_data.pop("_id", None)
    cart_data.pop("user", None)
    now = datetime.utcnow()
    cart_data["updatedAt"] = now
    try:
        return _carts().find_one_and_update(
            {"user": user_id},
            {"$set": cart_data, "$setOnInsert": {"user": user_id, "createdAt": now}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
    except PyMongoError as e:
        logger.error(f"Error saving cart for user {user_id}: {e}")
        raise StorageError(f"Unable to save cart: {e}")


def delete_cart_by_user(user_id: str) -> int:
    """
    Supprime le panier d'un utilisateur.
    Idempotent : retourne 0 si aucun panier n'existait.
    """
    try:
        result = _carts().delete_one({"user": user_id})
    except PyMongoError as e:
        logger.error(f"Error deleting cart for user {user_id}: {e}")
        raise StorageError(f"Unable to delete cart: {e}")
    return result.deleted_count
