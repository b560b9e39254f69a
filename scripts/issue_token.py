#!/usr/bin/env python3
"""
Génère un jeton JWT pour appeler l'API en local.

Usage:
    python scripts/issue_token.py --email alice@example.com [--name Alice] [--admin]
    python scripts/issue_token.py --user-id 507f1f77bcf86cd799439011 [--admin]

Sans --user-id, l'utilisateur est cherché par email dans la collection "users"
(et créé s'il n'existe pas).
"""
import os
import sys
import argparse
from datetime import datetime

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from storefront.auth import generate_token  # noqa: E402
from storefront.database import get_collection  # noqa: E402


def find_or_create_user(email: str, name: str, is_admin: bool) -> dict:
    users = get_collection("users")
    user = users.find_one({"email": email.lower()})
    if user:
        print(f"✅ Utilisateur existant: {user['_id']}")
        return user

    user = {
        "name": name,
        "email": email.lower(),
        "isAdmin": is_admin,
        "createdAt": datetime.utcnow(),
    }
    result = users.insert_one(user)
    user["_id"] = result.inserted_id
    print(f"🎉 Utilisateur créé: {user['_id']}")
    return user


def main():
    parser = argparse.ArgumentParser(description="Génère un jeton JWT de test")
    parser.add_argument("--user-id", help="Identifiant utilisateur (pas d'accès base)")
    parser.add_argument("--email", help="Email de l'utilisateur")
    parser.add_argument("--name", default="Test User")
    parser.add_argument("--admin", action="store_true", help="Jeton administrateur")
    args = parser.parse_args()

    if args.user_id:
        user = {"_id": args.user_id, "name": args.name, "email": args.email or "", "isAdmin": args.admin}
    elif args.email:
        try:
            user = find_or_create_user(args.email, args.name, args.admin)
        except Exception as e:
            print(f"❌ Erreur MongoDB: {e}")
            return 1
    else:
        parser.error("--user-id ou --email est requis")

    print(generate_token(user))
    return 0


if __name__ == "__main__":
    sys.exit(main())
