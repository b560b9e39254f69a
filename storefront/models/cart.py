from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class CartItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    name: str
    slug: str
    image: str
    price: float
    quantity: int
    countInStock: int


class CartShippingAddress(BaseModel):
    fullName: str = ""
    address: str = ""
    city: str = ""
    postalCode: str = ""
    country: str = ""


class CartUpdate(BaseModel):
    """Champs absents = valeur précédente conservée."""
    cartItems: Optional[List[CartItem]] = None
    shippingAddress: Optional[CartShippingAddress] = None
    paymentMethod: Optional[str] = None
