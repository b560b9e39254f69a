"""
Cycle de vie des commandes : création, paiement, changement de statut.

Toutes les règles métier sur les commandes sont ici ; les routes ne font
qu'authentifier l'appelant et sérialiser le résultat.

Invariants maintenus par ce module :
- isPaid, paidAt et paymentResult sont posés ensemble ;
- passer en "Delivered" pose isDelivered et deliveredAt ;
- une commande COD livrée est toujours marquée payée (paymentResult.id == "COD") ;
- le propriétaire (user) est fixé à la création et ne change plus.
"""
from datetime import datetime
from typing import Any, Callable, Dict, List
import logging

from pydantic import ValidationError as PydanticValidationError

from storefront import config
from storefront.auth import ensure_admin
from storefront.crud import carts as carts_crud
from storefront.crud import orders as orders_crud
from storefront.errors import ForbiddenError, NotFoundError, ValidationError
from storefront.models.order import (
    OrderCreate,
    OrderStatus,
    PaymentMethod,
    PaymentResult,
    is_cash_on_delivery,
)
from storefront.models.user import Principal

logger = logging.getLogger(__name__)


def _validation_details(exc: PydanticValidationError) -> List[dict]:
    return [
        {"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
        for err in exc.errors()
    ]


def _load_order(order_id: str) -> dict:
    order = orders_crud.get_order_by_id(order_id)
    if not order:
        raise NotFoundError("Order Not Found")
    return order


def _ensure_can_access(principal: Principal, order: dict) -> None:
    """Contrôle de propriété, actif seulement si ENFORCE_ORDER_OWNERSHIP."""
    if not config.ENFORCE_ORDER_OWNERSHIP:
        return
    if principal.is_admin or order.get("user") == principal.id:
        return
    logger.warning(f"User {principal.id} denied access to order {order['_id']}")
    raise ForbiddenError("Not Allowed To Access This Order")


def _clear_cart(user_id: str) -> None:
    deleted = carts_crud.delete_cart_by_user(user_id)
    if deleted:
        logger.info(f"Cart cleared for user {user_id}")


def _save_fields(order_id: str, fields: dict) -> dict:
    """Écrit seulement les champs touchés par l'opération ; le reste du document est préservé."""
    saved = orders_crud.update_order(order_id, fields)
    if not saved:
        raise NotFoundError("Order Not Found")
    return saved


def create_order(principal: Principal, payload: Any) -> dict:
    """
    Crée une commande "Pending", non payée, non livrée.
    Le propriétaire est toujours l'appelant, quel que soit le contenu du payload.
    """
    if not isinstance(payload, dict):
        raise ValidationError("Invalid Order Data", details=[{"field": "body", "message": "must be a JSON object"}])
    try:
        data = OrderCreate.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError("Invalid Order Data", details=_validation_details(e))

    order = data.model_dump()
    order.update({
        "user": principal.id,
        "isPaid": False,
        "paidAt": None,
        "paymentResult": None,
        "isDelivered": False,
        "deliveredAt": None,
        "status": OrderStatus.PENDING.value,
    })

    created = orders_crud.create_order(order)
    logger.info(
        f"Order {created['_id']} created by user {principal.id} "
        f"({data.paymentMethod}, total={data.totalPrice})"
    )
    return created


def pay_order(principal: Principal, order_id: str, payment: Any) -> dict:
    """
    Confirme le paiement d'une commande et vide le panier de l'appelant.

    La confirmation est enregistrée telle quelle, sans vérification auprès du
    prestataire. Un second paiement écrase le premier (paidAt, paymentResult).
    Seuls isPaid, paidAt et paymentResult sont écrits.
    """
    order = _load_order(order_id)
    _ensure_can_access(principal, order)

    if payment is None:
        payment = {}
    if not isinstance(payment, dict):
        raise ValidationError("Invalid Payment Data", details=[{"field": "body", "message": "must be a JSON object"}])
    try:
        payment_result = PaymentResult.model_validate(payment)
    except PydanticValidationError as e:
        raise ValidationError("Invalid Payment Data", details=_validation_details(e))

    saved = _save_fields(order_id, {
        "isPaid": True,
        "paidAt": datetime.utcnow(),
        "paymentResult": payment_result.model_dump(),
    })
    logger.info(f"Order {order_id} paid (payment id={payment_result.id})")

    _clear_cart(principal.id)
    return saved


def _mark_delivered(order: dict, now: datetime) -> dict:
    fields = {"isDelivered": True, "deliveredAt": now}

    if is_cash_on_delivery(order.get("paymentMethod")):
        # Le paiement COD est encaissé à la livraison
        fields["isPaid"] = True
        if not order.get("paidAt"):
            fields["paidAt"] = now
        fields["paymentResult"] = {
            "id": PaymentMethod.COD.value,
            "status": "PAID",
            "update_time": now.isoformat(),
            "email_address": "",
        }
    return fields


# Effets de bord appliqués à l'entrée dans un statut : champs supplémentaires à écrire.
# Les transitions ne sont pas restreintes : tout statut peut mener à tout autre.
STATUS_HOOKS: Dict[OrderStatus, Callable[[dict, datetime], dict]] = {
    OrderStatus.DELIVERED: _mark_delivered,
}


def update_order_status(principal: Principal, order_id: str, new_status: Any) -> dict:
    """
    Change le statut d'une commande (admin uniquement).

    Seul "Delivered" a des effets de bord ; annuler une commande ne touche
    ni au paiement ni à la livraison.
    """
    ensure_admin(principal)
    order = _load_order(order_id)

    try:
        status = OrderStatus(new_status)
    except ValueError:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise ValidationError(
            f"Invalid Status: {new_status}",
            details=[{"field": "status", "message": f"must be one of: {allowed}"}],
        )

    fields = {"status": status.value}
    hook = STATUS_HOOKS.get(status)
    if hook:
        fields.update(hook(order, datetime.utcnow()))

    saved = _save_fields(order_id, fields)
    logger.info(f"Order {order_id} status {order.get('status')} -> {status.value} by admin {principal.id}")

    if status is OrderStatus.DELIVERED and is_cash_on_delivery(order.get("paymentMethod")):
        _clear_cart(order["user"])
    return saved


def get_order(principal: Principal, order_id: str) -> dict:
    order = _load_order(order_id)
    _ensure_can_access(principal, order)
    return order


def list_my_orders(principal: Principal) -> List[dict]:
    return orders_crud.get_orders_by_user(principal.id)


def list_all_orders(principal: Principal) -> List[dict]:
    ensure_admin(principal)
    return orders_crud.get_all_orders()


def get_order_summary(principal: Principal) -> dict:
    ensure_admin(principal)
    return orders_crud.get_order_summary()
