"""Fixtures pytest des tests storefront."""

from datetime import datetime

import mongomock
import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

import storefront.database as database
from storefront.auth import generate_token
from storefront.models.user import Principal


@pytest.fixture
def db():
    """Base MongoDB en mémoire, injectée dans storefront."""
    test_db = mongomock.MongoClient()["storefront_test"]
    database.init_database(test_db)
    yield test_db
    database.db = None


@pytest.fixture
def client(db):
    from storefront.main import app

    return TestClient(app)


def _create_user(db, name, email, is_admin=False):
    user = {"name": name, "email": email, "isAdmin": is_admin}
    user["_id"] = db["users"].insert_one(user).inserted_id
    return user


@pytest.fixture
def user(db):
    return _create_user(db, "Test User", "test@example.com")


@pytest.fixture
def other_user(db):
    return _create_user(db, "Other User", "other@example.com")


@pytest.fixture
def admin_user(db):
    return _create_user(db, "Admin User", "admin@example.com", is_admin=True)


@pytest.fixture
def principal(user):
    return Principal(id=str(user["_id"]), name=user["name"], email=user["email"])


@pytest.fixture
def admin(admin_user):
    return Principal(id=str(admin_user["_id"]), name=admin_user["name"], email=admin_user["email"], is_admin=True)


@pytest.fixture
def user_headers(user):
    return {"Authorization": f"Bearer {generate_token(user)}"}


@pytest.fixture
def other_headers(other_user):
    return {"Authorization": f"Bearer {generate_token(other_user)}"}


@pytest.fixture
def admin_headers(admin_user):
    return {"Authorization": f"Bearer {generate_token(admin_user)}"}


def order_payload(**overrides):
    """Payload de commande tel qu'envoyé par le frontend."""
    payload = {
        "orderItems": [
            {
                "_id": str(ObjectId()),
                "slug": "test-product",
                "name": "Test Product",
                "quantity": 2,
                "image": "/images/test.jpg",
                "price": 100000,
            }
        ],
        "shippingAddress": {
            "fullName": "Test User",
            "address": "123 Test Street",
            "city": "Test City",
            "postalCode": "12345",
            "country": "Vietnam",
        },
        "paymentMethod": "PayPal",
        "itemsPrice": 200000,
        "shippingPrice": 30000,
        "taxPrice": 20000,
        "totalPrice": 250000,
    }
    payload.update(overrides)
    return payload


def insert_order(db, user_id, **overrides):
    """Insère une commande directement, sans passer par les règles du cycle de vie."""
    now = datetime.utcnow()
    order = order_payload()
    item = order["orderItems"][0]
    item["product"] = item.pop("_id")
    order.update({
        "user": str(user_id),
        "isPaid": False,
        "paidAt": None,
        "paymentResult": None,
        "isDelivered": False,
        "deliveredAt": None,
        "status": "Pending",
        "createdAt": now,
        "updatedAt": now,
    })
    order.update(overrides)
    order["_id"] = db["orders"].insert_one(order).inserted_id
    return order


def insert_cart(db, user_id):
    cart = {
        "user": str(user_id),
        "cartItems": [
            {
                "_id": str(ObjectId()),
                "name": "Test Product",
                "slug": "test-product",
                "image": "/images/test.jpg",
                "price": 100000,
                "quantity": 2,
                "countInStock": 10,
            }
        ],
        "shippingAddress": {},
        "paymentMethod": "PayPal",
    }
    cart["_id"] = db["carts"].insert_one(cart).inserted_id
    return cart
