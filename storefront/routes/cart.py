from fastapi import APIRouter, Depends, Response
from storefront.auth import get_current_principal
from storefront.crud import carts as carts_crud
from storefront.models.cart import CartUpdate
from storefront.models.user import Principal

router = APIRouter()


def serialize_cart(raw: dict) -> dict:
    raw["_id"] = str(raw["_id"])
    return raw


@router.get("")
def get_cart(principal: Principal = Depends(get_current_principal)):
    """
    Retourne le panier de l'utilisateur, ou un panier vide.
    """
    cart = carts_crud.get_cart_by_user(principal.id)
    if not cart:
        return {"cartItems": [], "shippingAddress": {}, "paymentMethod": ""}
    return serialize_cart(cart)


@router.post("")
def save_cart(cart: CartUpdate, response: Response, principal: Principal = Depends(get_current_principal)):
    """
    Crée (201) ou met à jour (200) le panier de l'utilisateur.
    """
    existing = carts_crud.get_cart_by_user(principal.id)
    cart_data = cart.model_dump(by_alias=True, exclude_none=True)
    if not existing:
        cart_data.setdefault("cartItems", [])
        cart_data.setdefault("shippingAddress", {})
        cart_data.setdefault("paymentMethod", "")
        response.status_code = 201

    saved = carts_crud.save_cart(principal.id, cart_data)
    return serialize_cart(saved)


@router.delete("")
def clear_cart(principal: Principal = Depends(get_current_principal)):
    """
    Vide le panier de l'utilisateur.
    """
    if carts_crud.delete_cart_by_user(principal.id):
        return {"message": "Cart cleared"}
    return {"message": "Cart already empty"}
