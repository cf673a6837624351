# app/domain/schemas.py
from typing import Any, Dict, Optional
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class _CamelIn(BaseModel):
    """Request bodies use the storefront's camelCase keys but accept snake_case too."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Envelope(BaseModel):
    """Uniform response wrapper; HTTP status mirrors `status`."""

    status: int
    message: str
    data: Any = Field(default_factory=dict)


# ---- cart ----

class CartItemIn(_CamelIn):
    product_id: Optional[str] = Field(None, alias="productId")
    quantity: Optional[int] = None
    weight_option: Optional[str] = Field(None, alias="weightOption")
    price: Optional[Decimal] = None


class CartActionIn(CartItemIn):
    """`{action, data: {...}}`, or the item fields inline next to `action`."""

    action: Optional[str] = None
    data: Optional[CartItemIn] = None

    @property
    def item(self) -> CartItemIn:
        if self.data is not None:
            return self.data
        return CartItemIn(
            product_id=self.product_id,
            quantity=self.quantity,
            weight_option=self.weight_option,
            price=self.price,
        )


# ---- rewards ----

class RewardActionIn(_CamelIn):
    action: Optional[str] = None
    user_id: Optional[str] = Field(None, alias="userId")
    cart_total: Optional[Decimal] = Field(None, alias="cartTotal")
    points: Optional[int] = None
    order_id: Optional[str] = Field(None, alias="orderId")


class RewardAdjustIn(_CamelIn):
    user_id: Optional[str] = Field(None, alias="userId")
    amount: Optional[int] = None
    reason: Optional[str] = None


# ---- notifications ----

class NotificationCreateIn(_CamelIn):
    user_id: Optional[str] = Field(None, alias="userId")
    type: Optional[str] = None
    title: Optional[str] = None
    message: Optional[str] = None
    data: Optional[Dict[str, Any]] = None


class MarkReadIn(_CamelIn):
    notification_id: Optional[str] = Field(None, alias="notificationId")
    is_read: bool = Field(True, alias="isRead")


class MarkAllReadIn(_CamelIn):
    user_id: Optional[str] = Field(None, alias="userId")


# ---- wishlist ----

class WishlistItemIn(_CamelIn):
    product_id: Optional[str] = Field(None, alias="productId")
    recipe_id: Optional[str] = Field(None, alias="recipeId")


# ---- auth ----

class RegisterIn(_CamelIn):
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None


class LoginIn(_CamelIn):
    phone: Optional[str] = None
    # clients send the code as "otp" or "OTP", string or number
    otp: Optional[Any] = None
    otp_upper: Optional[Any] = Field(None, alias="OTP")

    @property
    def code(self) -> Optional[str]:
        value = self.otp or self.otp_upper
        return str(value) if value is not None else None


# ---- order tracking ----

class OrderLogIn(_CamelIn):
    order_id: Optional[str] = Field(None, alias="orderId")
    status: Optional[str] = None
