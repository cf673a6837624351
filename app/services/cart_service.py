from decimal import Decimal, InvalidOperation
from typing import Dict, Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.data.models._common import utcnow
from app.data.models.cart import CartModel
from app.data.models.cart_item import CartItemModel
from app.domain.exceptions import ValidationError, NotFoundError, ConcurrencyConflict
from app.repos.cart_repo import CartRepo
from app.services.product_client import ProductClient
from app.utils.retry import conflict_retry
from app.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Use cases for the per-user cart.

    A user owns exactly one cart, created on first access. Line items are
    keyed by (product_id, weight_option); the price is a snapshot taken
    when the line is first added. Every mutation bumps the cart version with
    a compare-and-set update so concurrent writers cannot lose each other's
    changes.
    """

    def __init__(self, db: Session, product_client: ProductClient):
        self.repo = CartRepo(db)
        self.product_client = product_client

    # query
    def get_cart(self, user_id: str) -> Dict[str, Any]:
        cart = self._get_or_create(user_id)
        return self._snapshot(cart)

    # commands
    def add_item(
        self,
        user_id: str,
        product_id: str | None,
        quantity: int | None,
        price: Any,
        weight_option: str | None = None,
    ) -> Dict[str, Any]:
        if not product_id:
            raise ValidationError("Product ID is required")
        if quantity is None or int(quantity) < 1:
            raise ValidationError("Valid quantity is required")
        price = self._parse_price(price)

        # raises NotFoundError for unknown products
        self.product_client.fetch_product(product_id)

        return self._add_line(user_id, product_id, int(quantity), price, weight_option or None)

    @conflict_retry()
    def _add_line(
        self,
        user_id: str,
        product_id: str,
        quantity: int,
        price: Decimal,
        weight_option: str | None,
    ) -> Dict[str, Any]:
        cart = self._get_or_create(user_id)
        existing = self.repo.get_cart_item(cart.id, product_id, weight_option)

        if existing:
            logger.info(
                f"Product {product_id} ({weight_option}) already in cart {cart.cart_id}, "
                f"quantity {existing.quantity} -> {existing.quantity + quantity}"
            )
            existing.quantity += quantity
            self.repo.add_cart_item(existing)
        else:
            logger.info(f"Adding product {product_id} ({weight_option}) to cart {cart.cart_id}")
            try:
                self.repo.add_cart_item(
                    CartItemModel(
                        cart_id=cart.id,
                        product_id=product_id,
                        weight_option=weight_option,
                        quantity=quantity,
                        price=price,
                        position=self.repo.next_position(cart.id),
                    )
                )
            except IntegrityError:
                # another request inserted the same line first; retry merges into it
                self.repo.rollback()
                logger.warning(f"Line {product_id} ({weight_option}) added concurrently to cart {cart.cart_id}, retrying")
                raise ConcurrencyConflict(
                    "Cart line was added by another operation",
                    details={"cartId": cart.cart_id, "productId": product_id},
                )

        self._bump_version(cart)
        return self._snapshot(cart)

    @conflict_retry()
    def update_item(
        self,
        user_id: str,
        product_id: str | None,
        quantity: int | None,
        weight_option: str | None = None,
    ) -> Dict[str, Any]:
        if not product_id:
            raise ValidationError("Product ID is required")
        # lines leave the cart only through remove_item
        if quantity is None or int(quantity) < 1:
            raise ValidationError("Quantity must be at least 1; use remove to delete the item")

        cart = self._get_or_create(user_id)
        item = self.repo.get_cart_item(cart.id, product_id, weight_option or None)
        if not item:
            raise NotFoundError("Item not found in cart", details={"productId": product_id})

        item.quantity = int(quantity)
        self.repo.add_cart_item(item)
        self._bump_version(cart)

        logger.info(f"Cart {cart.cart_id}: product {product_id} quantity set to {quantity}")
        return self._snapshot(cart)

    @conflict_retry()
    def remove_item(self, user_id: str, product_id: str | None, weight_option: str | None = None) -> Dict[str, Any]:
        if not product_id:
            raise ValidationError("Product ID is required")

        cart = self._get_or_create(user_id)
        item = self.repo.get_cart_item(cart.id, product_id, weight_option or None)
        if not item:
            raise NotFoundError("Item not found in cart", details={"productId": product_id})

        self.repo.delete_cart_item(item)
        self._bump_version(cart)

        logger.info(f"Removed product {product_id} from cart {cart.cart_id}")
        return self._snapshot(cart)

    @conflict_retry()
    def clear(self, user_id: str) -> Dict[str, Any]:
        cart = self._get_or_create(user_id)
        removed = self.repo.delete_all_items(cart.id)
        self._bump_version(cart)

        logger.info(f"Cleared {removed} lines from cart {cart.cart_id}")
        return self._snapshot(cart)

    # helpers
    def _get_or_create(self, user_id: str) -> CartModel:
        cart = self.repo.get_cart_by_user(user_id)
        if cart:
            return cart

        try:
            cart = self.repo.create_cart(CartModel(user_id=user_id))
        except IntegrityError:
            # lost the race to create; the other request's cart wins
            self.repo.rollback()
            return self.repo.get_cart_by_user(user_id)

        logger.info(f"Created cart {cart.cart_id} for user {user_id}")
        return cart

    def _bump_version(self, cart: CartModel):
        old_version = cart.version
        rowcount = self.repo.update_cart_version(
            cart_pk=cart.id,
            old_version=old_version,
            new_data={"version": old_version + 1, "updated_at": utcnow()},
        )

        # UPDATE carts SET version = 2 WHERE id = 1 AND version = 1
        if rowcount == 0:
            self.repo.rollback()
            logger.warning(f"Cart {cart.cart_id} changed concurrently, retrying")
            raise ConcurrencyConflict(
                "Cart was modified by another operation",
                details={"cartId": cart.cart_id},
            )

        self.repo.commit()

    def _snapshot(self, cart: CartModel) -> Dict[str, Any]:
        items = self.repo.get_cart_items(cart.id)
        lines = [
            {
                "productId": i.product_id,
                "weightOption": i.weight_option,
                "quantity": i.quantity,
                "price": float(i.price),
                "total": float(Decimal(i.price) * i.quantity),
            }
            for i in items
        ]
        subtotal = sum((Decimal(i.price) * i.quantity for i in items), Decimal("0.00"))

        return {
            "cartId": cart.cart_id,
            "items": lines,
            "itemCount": len(lines),
            "subtotal": float(subtotal),
        }

    @staticmethod
    def _parse_price(price: Any) -> Decimal:
        if price is None:
            raise ValidationError("Valid price is required")
        try:
            value = Decimal(str(price))
        except (InvalidOperation, ValueError):
            raise ValidationError("Valid price is required")
        if not value.is_finite() or value < 0:
            raise ValidationError("Valid price is required")
        return value
