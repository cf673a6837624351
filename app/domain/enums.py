# app/domain/enums.py
from enum import Enum


class RecordStatus(str, Enum):
    ACTIVE = "active"
    DELETED = "deleted"


class NotificationType(str, Enum):
    ORDER = "order"
    DELIVERY = "delivery"
    OFFER = "offer"
    SUBSCRIPTION = "subscription"
    REWARD = "reward"
    GENERAL = "general"


class RewardTransactionType(str, Enum):
    EARNED = "earned"
    REDEEMED = "redeemed"
    ADJUSTED = "adjusted"
    EXPIRED = "expired"


class CartAction(str, Enum):
    ADD = "add"
    UPDATE = "update"
    REMOVE = "remove"
    CLEAR = "clear"


class OrderLogStatus(str, Enum):
    PLACED = "Order Placed"
    CONFIRMED = "Order Confirmed"
    SHIPPED = "Order Shipped"
    OUT_FOR_DELIVERY = "Out for Delivery"
    DELIVERED = "Order Delivered"

    @property
    def level(self) -> int:
        return list(OrderLogStatus).index(self) + 1
