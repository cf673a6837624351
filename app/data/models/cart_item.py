from sqlalchemy import Column, Integer, String, ForeignKey, Numeric, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship

from app.data.database import Base


class CartItemModel(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True)
    cart_id = Column(Integer, ForeignKey("carts.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(String(64), nullable=False)
    weight_option = Column(String(32), nullable=True)

    quantity = Column(Integer, nullable=False, default=1)
    # snapshot taken when the line was added
    price = Column(Numeric(10, 2), nullable=False)
    position = Column(Integer, nullable=False, default=0)

    cart = relationship("CartModel", back_populates="items")

    __table_args__ = (
        UniqueConstraint("cart_id", "product_id", "weight_option", name="u_cart_product_weight"),
        CheckConstraint("quantity >= 1", name="ck_cart_item_quantity"),
        CheckConstraint("price >= 0", name="ck_cart_item_price"),
    )
