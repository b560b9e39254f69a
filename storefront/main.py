from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
import logging

from storefront.config import ALLOWED_ORIGINS, PAYPAL_CLIENT_ID
from storefront.errors import (
    StorefrontError,
    UnauthenticatedError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
    StorageError,
)
from storefront.routes import orders, cart

# Configuration du logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Storefront API",
    description="API de la boutique : commandes et paniers",
    version="1.0.0"
)

# Si on utilise "*" (wildcard), désactiver credentials
allow_credentials = "*" not in ALLOWED_ORIGINS

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Correspondance exception métier -> code HTTP
ERROR_STATUS_CODES = {
    UnauthenticatedError: 401,
    ForbiddenError: 403,
    NotFoundError: 404,
    ValidationError: 400,
    StorageError: 500,
}


@app.exception_handler(StorefrontError)
async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    status_code = ERROR_STATUS_CODES.get(type(exc), 500)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    content = {"message": exc.message, "error_type": type(exc).__name__}
    if isinstance(exc, ValidationError) and exc.details:
        content["details"] = exc.details
    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return JSONResponse(status_code=status_code, content=content, headers=headers)


app.include_router(orders.router, prefix="/api/orders", tags=["orders"])
app.include_router(cart.router, prefix="/api/cart", tags=["cart"])


@app.get("/api/health")
def health_check():
    return {"status": "OK", "message": "Backend is running"}


@app.get("/api/keys/paypal", response_class=PlainTextResponse)
def paypal_client_id():
    """Identifiant client PayPal pour le SDK du frontend."""
    return PAYPAL_CLIENT_ID


@app.get("/")
async def root():
    return {
        "message": "Storefront API - FastAPI",
        "status": "healthy",
        "endpoints": {
            "orders": "/api/orders",
            "cart": "/api/cart",
            "health": "/api/health"
        }
    }


@app.get("/api")
async def api_root():
    return await root()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("storefront.main:app", host="0.0.0.0", port=5000, reload=True)
