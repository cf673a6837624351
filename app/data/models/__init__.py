# importing every model registers it in Base.metadata

from app.data.models.user import UserModel
from app.data.models.cart import CartModel
from app.data.models.cart_item import CartItemModel
from app.data.models.reward import RewardModel
from app.data.models.reward_transaction import RewardTransactionModel
from app.data.models.reward_config import RewardConfigModel
from app.data.models.notification import NotificationModel
from app.data.models.wishlist import WishlistModel, WishlistItemModel
from app.data.models.blog import BlogModel
from app.data.models.order_log import OrderLogModel

__all__ = [
    "UserModel",
    "CartModel",
    "CartItemModel",
    "RewardModel",
    "RewardTransactionModel",
    "RewardConfigModel",
    "NotificationModel",
    "WishlistModel",
    "WishlistItemModel",
    "BlogModel",
    "OrderLogModel",
]
