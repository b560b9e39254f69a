"""
Configuration de l'application, lue depuis les variables d'environnement (.env).
"""
import os
from dotenv import load_dotenv

load_dotenv()

MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017/")
DB_NAME = os.getenv("MONGO_DB", "storefront")

JWT_SECRET = os.getenv("JWT_SECRET", "CHANGE_ME_IN_PRODUCTION")
JWT_ALGORITHM = "HS256"
JWT_EXPIRY_DAYS = int(os.getenv("JWT_EXPIRY_DAYS", "30"))

# Origines autorisées pour CORS, séparées par des virgules
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")
ALLOWED_ORIGINS = [origin.strip() for origin in FRONTEND_URL.split(",") if origin.strip()]

PAYPAL_CLIENT_ID = os.getenv("PAYPAL_CLIENT_ID", "sb")

# Durcissement optionnel : seul le propriétaire (ou un admin) peut lire ou payer une commande
ENFORCE_ORDER_OWNERSHIP = os.getenv("ENFORCE_ORDER_OWNERSHIP", "false").lower() in ("1", "true", "yes")
