from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
from enum import Enum


class OrderStatus(str, Enum):
    PENDING = "Pending"
    PROCESSING = "Processing"
    SHIPPING = "Shipping"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


class PaymentMethod(str, Enum):
    """
    Moyens de paiement connus.
    Seul COD a un comportement particulier ; toute autre valeur est traitée
    comme un paiement externe immédiat (PayPal, ...).
    """
    PAYPAL = "PayPal"
    COD = "COD"


def is_cash_on_delivery(payment_method: Optional[str]) -> bool:
    return payment_method == PaymentMethod.COD.value


class OrderItem(BaseModel):
    # Le panier envoie l'identifiant produit sous "_id"
    product: Optional[str] = Field(None, validation_alias=AliasChoices("product", "_id"))
    name: str
    slug: str
    image: str
    price: float
    quantity: int


class ShippingAddress(BaseModel):
    fullName: str
    address: str
    city: str
    postalCode: str
    country: str

    @field_validator("fullName", "address", "city", "postalCode", "country")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class OrderCreate(BaseModel):
    """
    Données envoyées par le client au checkout.
    Les montants sont acceptés tels quels, sans recalcul côté serveur.
    Un éventuel champ "user" est ignoré : le propriétaire vient du jeton.
    """
    orderItems: List[OrderItem] = Field(default_factory=list)
    shippingAddress: ShippingAddress
    paymentMethod: str = Field(..., min_length=1)
    itemsPrice: float
    shippingPrice: float
    taxPrice: float
    totalPrice: float


class PaymentResult(BaseModel):
    """Confirmation de paiement (format PayPal) ou synthétique pour COD."""
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: Optional[str] = None
    status: Optional[str] = None
    update_time: Optional[str] = None
    email_address: Optional[str] = None
