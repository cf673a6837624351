# app/repos/cart_repo.py
from sqlalchemy import select, update, func
from sqlalchemy.orm import Session

from app.data.models.cart import CartModel
from app.data.models.cart_item import CartItemModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_cart_by_user(self, user_id: str) -> CartModel | None:
        return self.db.execute(
            select(CartModel).where(CartModel.user_id == user_id)
        ).scalar_one_or_none()

    def create_cart(self, cart: CartModel) -> CartModel:
        self.db.add(cart)
        self.db.commit()
        self.db.refresh(cart)
        return cart

    def get_cart_items(self, cart_pk: int) -> list[CartItemModel]:
        return list(
            self.db.execute(
                select(CartItemModel)
                .where(CartItemModel.cart_id == cart_pk)
                .order_by(CartItemModel.position, CartItemModel.id)
            ).scalars()
        )

    def get_cart_item(self, cart_pk: int, product_id: str, weight_option: str | None) -> CartItemModel | None:
        stmt = select(CartItemModel).where(
            CartItemModel.cart_id == cart_pk,
            CartItemModel.product_id == product_id,
        )
        if weight_option is None:
            stmt = stmt.where(CartItemModel.weight_option.is_(None))
        else:
            stmt = stmt.where(CartItemModel.weight_option == weight_option)
        return self.db.execute(stmt).scalar_one_or_none()

    def next_position(self, cart_pk: int) -> int:
        current = self.db.execute(
            select(func.max(CartItemModel.position)).where(CartItemModel.cart_id == cart_pk)
        ).scalar()
        return 0 if current is None else current + 1

    def add_cart_item(self, item: CartItemModel):
        self.db.add(item)
        self.db.flush()

    def delete_cart_item(self, item: CartItemModel):
        self.db.delete(item)
        self.db.flush()

    def delete_all_items(self, cart_pk: int) -> int:
        items = self.get_cart_items(cart_pk)
        for item in items:
            self.db.delete(item)
        self.db.flush()
        return len(items)

    def update_cart_version(self, cart_pk: int, old_version: int, new_data: dict) -> int:
        # UPDATE carts SET ... WHERE id = :id AND version = :old_version
        result = self.db.execute(
            update(CartModel)
            .where(CartModel.id == cart_pk, CartModel.version == old_version)
            .values(**new_data)
        )
        return result.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
