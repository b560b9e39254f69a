"""
Point d'entrée serverless (Vercel / AWS Lambda).
"""
import os
import sys

from mangum import Mangum

# Ajouter le dossier parent au path pour que les imports fonctionnent sur Vercel
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from storefront.main import app  # noqa: E402

# L'application FastAPI est détectée par Vercel via le nom 'app' ;
# 'handler' sert pour les déploiements Lambda
handler = Mangum(app)
