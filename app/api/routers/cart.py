# app/api/routers/cart.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.deps import get_product_client, require_shopper
from app.api.envelope import envelope
from app.data.database import get_db
from app.domain.enums import CartAction
from app.domain.exceptions import ValidationError
from app.domain.schemas import CartActionIn
from app.services.cart_service import CartService
from app.services.product_client import ProductClient

router = APIRouter(prefix="/api/cart", tags=["cart"])


def get_service(
    db: Session = Depends(get_db),
    product_client: ProductClient = Depends(get_product_client),
) -> CartService:
    return CartService(db=db, product_client=product_client)


@router.get("")
def get_cart(user_id: str = Depends(require_shopper), svc: CartService = Depends(get_service)):
    return envelope(200, "Cart retrieved successfully", svc.get_cart(user_id))


@router.post("")
def change_cart(
    payload: CartActionIn,
    action: str | None = Query(None),
    user_id: str = Depends(require_shopper),
    svc: CartService = Depends(get_service),
):
    # body wins over the query string; a bare item means "add"
    name = (payload.action or action or CartAction.ADD.value).lower()
    item = payload.item

    if name == CartAction.ADD.value:
        cart = svc.add_item(user_id, item.product_id, item.quantity, item.price, item.weight_option)
        message = "Item added to cart successfully"
    elif name == CartAction.UPDATE.value:
        cart = svc.update_item(user_id, item.product_id, item.quantity, item.weight_option)
        message = "Cart item updated successfully"
    elif name == CartAction.REMOVE.value:
        cart = svc.remove_item(user_id, item.product_id, item.weight_option)
        message = "Item removed from cart successfully"
    elif name == CartAction.CLEAR.value:
        cart = svc.clear(user_id)
        message = "Cart cleared successfully"
    else:
        raise ValidationError("Invalid action. Use add, update, remove or clear", details={"action": name})

    return envelope(200, message, cart)
