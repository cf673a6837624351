# app/services/wishlist_service.py
from typing import Dict, Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.data.models.wishlist import WishlistModel, WishlistItemModel
from app.domain.exceptions import ValidationError, NotFoundError
from app.repos.wishlist_repo import WishlistRepo
from app.services.product_client import ProductClient
from app.utils.logging import get_logger

logger = get_logger(__name__)


class WishlistService:
    def __init__(self, db: Session, product_client: ProductClient):
        self.repo = WishlistRepo(db)
        self.product_client = product_client

    def get(self, user_id: str) -> Dict[str, Any]:
        wishlist = self._get_or_create(user_id)
        items = [self._item_to_dict(i) for i in wishlist.items]
        return {"items": items, "count": len(items)}

    def add(self, user_id: str, product_id: str | None = None, recipe_id: str | None = None) -> Dict[str, Any]:
        self._check_reference(product_id, recipe_id)
        if product_id:
            self.product_client.fetch_product(product_id)

        wishlist = self._get_or_create(user_id)
        if self.repo.find_item(wishlist, product_id, recipe_id):
            raise ValidationError(
                "Product already in wishlist" if product_id else "Recipe already in wishlist"
            )

        item = self.repo.add_item(
            wishlist,
            WishlistItemModel(product_id=product_id or None, recipe_id=recipe_id or None),
        )
        logger.info(f"Wishlist of user {user_id}: added {product_id or recipe_id}")
        return {**self._item_to_dict(item), "count": len(wishlist.items)}

    def remove(self, user_id: str, product_id: str | None = None, recipe_id: str | None = None) -> Dict[str, Any]:
        self._check_reference(product_id, recipe_id)

        wishlist = self.repo.get_by_user(user_id)
        if wishlist is None:
            raise NotFoundError("Wishlist not found")

        item = self.repo.find_item(wishlist, product_id, recipe_id)
        if item is None:
            raise NotFoundError(
                "Product not found in wishlist" if product_id else "Recipe not found in wishlist"
            )

        self.repo.remove_item(wishlist, item)
        logger.info(f"Wishlist of user {user_id}: removed {product_id or recipe_id}")
        return {"productId": product_id, "recipeId": recipe_id, "count": len(wishlist.items)}

    def _get_or_create(self, user_id: str) -> WishlistModel:
        wishlist = self.repo.get_by_user(user_id)
        if wishlist:
            return wishlist
        try:
            return self.repo.create(WishlistModel(user_id=user_id))
        except IntegrityError:
            self.repo.db.rollback()
            return self.repo.get_by_user(user_id)

    @staticmethod
    def _check_reference(product_id: str | None, recipe_id: str | None):
        # an entry points at a product or a recipe, never both
        if bool(product_id) == bool(recipe_id):
            raise ValidationError("Exactly one of productId or recipeId is required")

    @staticmethod
    def _item_to_dict(item: WishlistItemModel) -> Dict[str, Any]:
        return {
            "productId": item.product_id,
            "recipeId": item.recipe_id,
            "addedAt": item.added_at,
        }
