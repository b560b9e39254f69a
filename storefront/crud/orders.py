from typing import List, Optional
from collections import defaultdict
from datetime import datetime
import logging
from bson.objectid import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError
from storefront.database import get_collection
from storefront.errors import StorageError

logger = logging.getLogger(__name__)


def _orders():
    return get_collection("orders")


def create_order(order_data: dict) -> dict:
    """
    Insère une nouvelle commande.
    Retourne le document tel que stocké (avec _id, createdAt, updatedAt).
    """
    order_data = dict(order_data)
    order_data.pop("_id", None)
    now = datetime.utcnow()
    order_data["createdAt"] = now
    order_data["updatedAt"] = now
    try:
        result = _orders().insert_one(order_data)
    except PyMongoError as e:
        logger.error(f"Error creating order: {e}")
        raise StorageError(f"Unable to create order: {e}")
    order_data["_id"] = result.inserted_id
    return order_data


def get_order_by_id(order_id: str) -> Optional[dict]:
    """
    Renvoie une commande correspondant à l'_id MongoDB.
    Un identifiant mal formé est traité comme une commande inexistante.
    """
    try:
        oid = ObjectId(order_id)
    except Exception:
        return None
    try:
        return _orders().find_one({"_id": oid})
    except PyMongoError as e:
        logger.error(f"Error getting order {order_id}: {e}")
        raise StorageError(f"Unable to read order: {e}")


def get_orders_by_user(user_id: str) -> List[dict]:
    """
    Renvoie toutes les commandes d'un utilisateur.
    """
    try:
        return list(_orders().find({"user": user_id}).sort("createdAt", -1))
    except PyMongoError as e:
        logger.error(f"Error listing orders for user {user_id}: {e}")
        raise StorageError(f"Unable to list orders: {e}")


def get_all_orders() -> List[dict]:
    """
    Renvoie toutes les commandes (pour l'admin).
    """
    try:
        return list(_orders().find().sort("createdAt", -1))
    except PyMongoError as e:
        logger.error(f"Error listing orders: {e}")
        raise StorageError(f"Unable to list orders: {e}")


def update_order(order_id, fields: dict) -> Optional[dict]:
    """
    Met à jour uniquement les champs fournis ($set) et updatedAt.
    Retourne le document après mise à jour, ou None si la commande n'existe plus.
    """
    try:
        oid = ObjectId(str(order_id))
    except Exception:
        return None

    update_data = dict(fields)
    update_data.pop("_id", None)
    update_data["updatedAt"] = datetime.utcnow()
    try:
        return _orders().find_one_and_update(
            {"_id": oid},
            {"$set": update_data},
            return_document=ReturnDocument.AFTER,
        )
    except PyMongoError as e:
        logger.error(f"Error updating order {order_id}: {e}")
        raise StorageError(f"Unable to update order: {e}")


def get_order_summary() -> dict:
    """
    Statistiques pour le tableau de bord admin : commandes, utilisateurs,
    ventes par jour et répartition des produits par catégorie.
    """
    try:
        orders = list(_orders().find({}, {"totalPrice": 1, "createdAt": 1}))
        num_users = get_collection("users").count_documents({})
        products = list(get_collection("products").find({}, {"category": 1}))
    except PyMongoError as e:
        logger.error(f"Error building order summary: {e}")
        raise StorageError(f"Unable to build summary: {e}")

    # --- Totaux ---
    orders_total = []
    if orders:
        orders_total.append({
            "_id": None,
            "numOrders": len(orders),
            "totalSales": sum(order.get("totalPrice", 0) for order in orders),
        })

    users_total = [{"_id": None, "numUsers": num_users}] if num_users else []

    # --- Commandes par jour ---
    daily_data = defaultdict(lambda: {"orders": 0, "sales": 0})
    for order in orders:
        created_at = order.get("createdAt")
        if not created_at:
            continue
        date_key = created_at.strftime("%Y-%m-%d")
        daily_data[date_key]["orders"] += 1
        daily_data[date_key]["sales"] += order.get("totalPrice", 0)

    daily_orders = [
        {"_id": date, **data}
        for date, data in sorted(daily_data.items())
    ]

    # --- Produits par catégorie ---
    categories = defaultdict(int)
    for product in products:
        categories[product.get("category")] += 1

    product_categories = [
        {"_id": category, "count": count}
        for category, count in categories.items()
    ]

    return {
        "orders": orders_total,
        "users": users_total,
        "dailyOrders": daily_orders,
        "productCategories": product_categories,
    }
