# app/repos/wishlist_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.data.models.wishlist import WishlistModel, WishlistItemModel


class WishlistRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_by_user(self, user_id: str) -> WishlistModel | None:
        return self.db.execute(
            select(WishlistModel).where(WishlistModel.user_id == user_id)
        ).scalar_one_or_none()

    def create(self, wishlist: WishlistModel) -> WishlistModel:
        self.db.add(wishlist)
        self.db.commit()
        self.db.refresh(wishlist)
        return wishlist

    def find_item(self, wishlist: WishlistModel, product_id: str | None, recipe_id: str | None) -> WishlistItemModel | None:
        for item in wishlist.items:
            if product_id and item.product_id == product_id:
                return item
            if recipe_id and item.recipe_id == recipe_id:
                return item
        return None

    def add_item(self, wishlist: WishlistModel, item: WishlistItemModel) -> WishlistItemModel:
        wishlist.items.append(item)
        self.db.commit()
        self.db.refresh(wishlist)
        return item

    def remove_item(self, wishlist: WishlistModel, item: WishlistItemModel):
        wishlist.items.remove(item)
        self.db.commit()
        self.db.refresh(wishlist)
