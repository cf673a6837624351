# app/api/routers/wishlist.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.deps import get_product_client, require_shopper
from app.api.envelope import envelope
from app.data.database import get_db
from app.domain.schemas import WishlistItemIn
from app.services.product_client import ProductClient
from app.services.wishlist_service import WishlistService

router = APIRouter(prefix="/api/wishlist", tags=["wishlist"])


def get_service(
    db: Session = Depends(get_db),
    product_client: ProductClient = Depends(get_product_client),
) -> WishlistService:
    return WishlistService(db=db, product_client=product_client)


@router.get("")
def get_wishlist(user_id: str = Depends(require_shopper), svc: WishlistService = Depends(get_service)):
    return envelope(200, "Wishlist retrieved successfully", svc.get(user_id))


@router.post("")
def add_to_wishlist(
    payload: WishlistItemIn,
    user_id: str = Depends(require_shopper),
    svc: WishlistService = Depends(get_service),
):
    data = svc.add(user_id, payload.product_id, payload.recipe_id)
    return envelope(201, "Added to wishlist successfully", data)


@router.delete("")
def remove_from_wishlist(
    product_id: str | None = Query(None, alias="productId"),
    recipe_id: str | None = Query(None, alias="recipeId"),
    user_id: str = Depends(require_shopper),
    svc: WishlistService = Depends(get_service),
):
    data = svc.remove(user_id, product_id, recipe_id)
    return envelope(200, "Removed from wishlist successfully", data)
