"""Tests de l'authentification par jeton."""

from datetime import timedelta

import jwt
import pytest

from storefront.auth import authenticate, generate_token, require_role
from storefront.config import JWT_ALGORITHM
from storefront.errors import UnauthenticatedError
from storefront.models.user import Principal

USER = {"_id": "507f1f77bcf86cd799439011", "name": "Alice", "email": "alice@example.com", "isAdmin": False}


def test_round_trip_identity():
    principal = authenticate(generate_token(USER))

    assert principal.id == USER["_id"]
    assert principal.email == "alice@example.com"
    assert principal.is_admin is False


def test_admin_flag():
    principal = authenticate(generate_token(dict(USER, isAdmin=True)))

    assert require_role(principal, "admin") is True


def test_non_admin_has_no_admin_role():
    principal = Principal(id="u1")

    assert require_role(principal, "admin") is False


def test_missing_token():
    with pytest.raises(UnauthenticatedError) as exc_info:
        authenticate(None)

    assert exc_info.value.message == "No Token"


def test_expired_token():
    token = generate_token(USER, expires_in=timedelta(seconds=-10))

    with pytest.raises(UnauthenticatedError) as exc_info:
        authenticate(token)

    assert exc_info.value.message == "Invalid Token"


def test_token_signed_with_other_secret():
    token = jwt.encode({"_id": USER["_id"]}, "another-secret", algorithm=JWT_ALGORITHM)

    with pytest.raises(UnauthenticatedError):
        authenticate(token)


def test_bearer_scheme_is_required(client):
    token = generate_token(USER)

    response = client.get("/api/orders/mine", headers={"Authorization": f"Token {token}"})

    assert response.status_code == 401
    assert response.json()["message"] == "No Token"


def test_service_endpoints(client):
    assert client.get("/api/health").json() == {"status": "OK", "message": "Backend is running"}
    assert client.get("/api/keys/paypal").text == "sb"
    assert client.get("/").json()["status"] == "healthy"
