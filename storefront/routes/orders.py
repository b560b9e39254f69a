from fastapi import APIRouter, Body, Depends
from typing import Any, List
from storefront.auth import get_current_principal, require_admin
from storefront.models.user import Principal
from storefront.services import order_lifecycle

router = APIRouter()


def serialize_order(raw: dict) -> dict:
    """
    Convertit l'ObjectId MongoDB en string pour le frontend.
    """
    raw["_id"] = str(raw["_id"])
    return raw


@router.post("", status_code=201)
def create_order(order_data: Any = Body(...), principal: Principal = Depends(get_current_principal)):
    """
    Crée une commande pour l'utilisateur connecté.
    """
    order = order_lifecycle.create_order(principal, order_data)
    return {"message": "New Order Created", "order": serialize_order(order)}


@router.get("", response_model=List[dict])
def list_orders(principal: Principal = Depends(require_admin)):
    """
    Retourne toutes les commandes (admin uniquement).
    """
    orders = order_lifecycle.list_all_orders(principal)
    return [serialize_order(order) for order in orders]


@router.get("/mine", response_model=List[dict])
def list_my_orders(principal: Principal = Depends(get_current_principal)):
    """
    Retourne les commandes de l'utilisateur connecté.
    """
    orders = order_lifecycle.list_my_orders(principal)
    return [serialize_order(order) for order in orders]


@router.get("/summary")
def get_summary(principal: Principal = Depends(require_admin)):
    """
    Statistiques du tableau de bord admin.
    """
    return order_lifecycle.get_order_summary(principal)


@router.get("/{order_id}", response_model=dict)
def get_order(order_id: str, principal: Principal = Depends(get_current_principal)):
    """
    Retourne une commande par son ID.
    """
    order = order_lifecycle.get_order(principal, order_id)
    return serialize_order(order)


@router.put("/{order_id}/pay")
def pay_order(order_id: str, payment_data: Any = Body(...), principal: Principal = Depends(get_current_principal)):
    """
    Confirme le paiement d'une commande (retour PayPal).
    """
    order = order_lifecycle.pay_order(principal, order_id, payment_data)
    return {"message": "Order Paid", "order": serialize_order(order)}


@router.put("/{order_id}/status")
def update_order_status(order_id: str, status_data: Any = Body(...), principal: Principal = Depends(require_admin)):
    """
    Met à jour le statut d'une commande (admin uniquement).
    """
    new_status = status_data.get("status") if isinstance(status_data, dict) else None
    order = order_lifecycle.update_order_status(principal, order_id, new_status)
    return {"message": "Order Status Updated", "order": serialize_order(order)}
