"""Exceptions métier de la boutique."""
from typing import List, Optional


class StorefrontError(Exception):
    """Exception de base pour toutes les erreurs de la boutique."""

    message = "Internal Server Error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.message
        super().__init__(self.message)


class UnauthenticatedError(StorefrontError):
    """Jeton absent, invalide ou expiré."""

    message = "Invalid Token"


class ForbiddenError(StorefrontError):
    """Appelant authentifié mais sans le rôle requis."""

    message = "Forbidden"


class NotFoundError(StorefrontError):
    """La commande demandée n'existe pas."""

    message = "Order Not Found"


class ValidationError(StorefrontError):
    """Entrée structurellement invalide (adresse incomplète, statut inconnu...)."""

    message = "Invalid Input"

    def __init__(self, message: Optional[str] = None, details: Optional[List[dict]] = None):
        self.details = details or []
        super().__init__(message)


class StorageError(StorefrontError):
    """Échec de la base de données, opaque pour la logique métier."""

    message = "Storage Error"
