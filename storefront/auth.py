"""
Authentification par jeton JWT (Bearer).
Le jeton porte l'identité de l'utilisateur : _id, name, email, isAdmin.
"""

import jwt
from datetime import datetime, timedelta
from typing import Optional
import logging

from fastapi import Request

from storefront.config import JWT_SECRET, JWT_ALGORITHM, JWT_EXPIRY_DAYS
from storefront.errors import UnauthenticatedError, ForbiddenError
from storefront.models.user import Principal

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"


def generate_token(user: dict, expires_in: Optional[timedelta] = None) -> str:
    """
    Génère un jeton JWT signé pour un utilisateur.

    Args:
        user: Document utilisateur (_id, name, email, isAdmin)
        expires_in: Durée de validité (JWT_EXPIRY_DAYS par défaut)

    Returns:
        Jeton JWT signé
    """
    expires_in = expires_in or timedelta(days=JWT_EXPIRY_DAYS)
    payload = {
        "_id": str(user["_id"]),
        "name": user.get("name", ""),
        "email": user.get("email", ""),
        "isAdmin": bool(user.get("isAdmin", False)),
        "exp": datetime.utcnow() + expires_in,
        "iat": datetime.utcnow()
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def authenticate(token: Optional[str]) -> Principal:
    """
    Vérifie un jeton et retourne l'identité correspondante.

    Raises:
        UnauthenticatedError: jeton absent, invalide ou expiré
    """
    if not token:
        raise UnauthenticatedError("No Token")

    try:
        payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        logger.warning("Token has expired")
        raise UnauthenticatedError("Invalid Token")
    except jwt.InvalidTokenError as e:
        logger.warning(f"Invalid token: {str(e)}")
        raise UnauthenticatedError("Invalid Token")

    if not payload.get("_id"):
        logger.warning("Token without user id")
        raise UnauthenticatedError("Invalid Token")

    return Principal(
        id=str(payload["_id"]),
        name=payload.get("name", ""),
        email=payload.get("email", ""),
        is_admin=bool(payload.get("isAdmin", False)),
    )


def require_role(principal: Principal, role: str) -> bool:
    """Vérifie que l'appelant possède le rôle demandé."""
    if role == ADMIN_ROLE:
        return principal.is_admin
    return False


def ensure_admin(principal: Principal) -> None:
    if not require_role(principal, ADMIN_ROLE):
        logger.warning(f"Admin access denied for user {principal.id}")
        raise ForbiddenError("Invalid Admin Token")


def extract_bearer_token(request: Request) -> Optional[str]:
    """Extrait le jeton de l'en-tête 'Authorization: Bearer <token>'."""
    authorization = request.headers.get("authorization")
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


# === Dépendances FastAPI ===

async def get_current_principal(request: Request) -> Principal:
    """
    Dépendance FastAPI : identité de l'appelant.
    À utiliser avec Depends() dans les routes protégées.
    """
    return authenticate(extract_bearer_token(request))


async def require_admin(request: Request) -> Principal:
    """Dépendance FastAPI : l'appelant doit être administrateur."""
    principal = authenticate(extract_bearer_token(request))
    ensure_admin(principal)
    return principal
