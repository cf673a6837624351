from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship

from app.data.database import Base
from app.data.models._common import utcnow


class WishlistModel(Base):
    __tablename__ = "wishlists"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(36), nullable=False, unique=True, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    items = relationship(
        "WishlistItemModel",
        back_populates="wishlist",
        cascade="all, delete-orphan",
        order_by="WishlistItemModel.id",
    )


class WishlistItemModel(Base):
    __tablename__ = "wishlist_items"

    id = Column(Integer, primary_key=True)
    wishlist_id = Column(Integer, ForeignKey("wishlists.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(String(64), nullable=True)
    recipe_id = Column(String(64), nullable=True)
    added_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    wishlist = relationship("WishlistModel", back_populates="items")

    __table_args__ = (
        # exactly one of product or recipe
        CheckConstraint(
            "(product_id IS NULL) <> (recipe_id IS NULL)",
            name="ck_wishlist_item_single_ref",
        ),
    )
