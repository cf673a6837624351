"""
Unit Tests: CartService

Covers line merging on (product_id, weight_option), the quantity floor,
explicit removal and the optimistic version bump on every write.
"""

from unittest.mock import patch

import pytest

from app.domain.exceptions import ValidationError, NotFoundError, ConcurrencyConflict
from app.repos.cart_repo import CartRepo
from app.services.cart_service import CartService


@pytest.fixture
def service(db, product_client):
    return CartService(db=db, product_client=product_client)


class TestGetCart:
    def test_cart_created_on_first_access(self, service):
        cart = service.get_cart("u1")

        assert cart["cartId"]
        assert cart["items"] == []
        assert cart["itemCount"] == 0
        assert cart["subtotal"] == 0

    def test_one_cart_per_user(self, service):
        assert service.get_cart("u1")["cartId"] == service.get_cart("u1")["cartId"]
        assert service.get_cart("u1")["cartId"] != service.get_cart("u2")["cartId"]


class TestAddItem:
    def test_same_line_added_twice_merges(self, service):
        service.add_item("u1", "turmeric-powder", 1, "45.00", "100g")
        cart = service.add_item("u1", "turmeric-powder", 1, "45.00", "100g")

        assert cart["itemCount"] == 1
        assert cart["items"][0]["quantity"] == 2
        assert cart["items"][0]["total"] == 90.0
        assert cart["subtotal"] == 90.0

    def test_different_weight_is_a_new_line(self, service):
        service.add_item("u1", "turmeric-powder", 1, 45, "100g")
        cart = service.add_item("u1", "turmeric-powder", 1, 99, "250g")

        assert [(i["weightOption"], i["quantity"]) for i in cart["items"]] == [("100g", 1), ("250g", 1)]
        assert cart["subtotal"] == 144.0

    def test_price_snapshot_kept_on_merge(self, service):
        service.add_item("u1", "garam-masala", 1, 70, "100g")
        cart = service.add_item("u1", "garam-masala", 1, 75, "100g")

        assert cart["items"][0]["price"] == 70.0

    def test_unknown_product_rejected(self, service, product_client):
        with pytest.raises(NotFoundError):
            service.add_item("u1", "saffron", 1, 10)

        product_client.fetch_product.assert_called_once_with("saffron")
        assert service.get_cart("u1")["items"] == []

    @pytest.mark.parametrize(
        "product_id, quantity, price",
        [(None, 1, 10), ("cumin-seeds", 0, 10), ("cumin-seeds", None, 10), ("cumin-seeds", 1, -1), ("cumin-seeds", 1, None)],
    )
    def test_invalid_input_rejected(self, service, product_client, product_id, quantity, price):
        with pytest.raises(ValidationError):
            service.add_item("u1", product_id, quantity, price)

        product_client.fetch_product.assert_not_called()

    def test_every_write_bumps_version(self, service, db):
        service.add_item("u1", "cumin-seeds", 1, 55)
        service.add_item("u1", "cumin-seeds", 1, 55)

        cart = CartRepo(db).get_cart_by_user("u1")
        # carts start at version 1
        assert cart.version == 3


class TestUpdateAndRemove:
    def test_update_sets_quantity(self, service):
        service.add_item("u1", "cumin-seeds", 1, 55, "100g")
        cart = service.update_item("u1", "cumin-seeds", 4, "100g")

        assert cart["items"][0]["quantity"] == 4

    def test_update_to_zero_rejected(self, service):
        service.add_item("u1", "cumin-seeds", 2, 55, "100g")

        with pytest.raises(ValidationError):
            service.update_item("u1", "cumin-seeds", 0, "100g")

        assert service.get_cart("u1")["items"][0]["quantity"] == 2

    def test_update_missing_line(self, service):
        with pytest.raises(NotFoundError):
            service.update_item("u1", "cumin-seeds", 3)

    def test_remove_is_the_only_deletion(self, service):
        service.add_item("u1", "cumin-seeds", 1, 55)
        service.add_item("u1", "garam-masala", 1, 70)

        cart = service.remove_item("u1", "cumin-seeds")

        assert [i["productId"] for i in cart["items"]] == ["garam-masala"]

    def test_remove_missing_line(self, service):
        with pytest.raises(NotFoundError):
            service.remove_item("u1", "cumin-seeds")

    def test_clear(self, service):
        service.add_item("u1", "cumin-seeds", 1, 55)
        service.add_item("u1", "garam-masala", 1, 70)

        cart = service.clear("u1")

        assert cart["items"] == []
        assert cart["subtotal"] == 0


class TestConcurrency:
    def test_conflict_rolls_back_the_line(self, service):
        service.get_cart("u1")

        with patch.object(CartRepo, "update_cart_version", return_value=0):
            with pytest.raises(ConcurrencyConflict):
                service.add_item("u1", "cumin-seeds", 1, 55)

        assert service.get_cart("u1")["items"] == []

    def test_racing_insert_of_same_line_merges(self, service):
        service.add_item("u1", "turmeric-powder", 1, 45, "100g")

        real = CartRepo.get_cart_item
        reads = []

        def stale_first_read(self, *args, **kwargs):
            # the first lookup misses the line another request already wrote
            reads.append(args)
            if len(reads) == 1:
                return None
            return real(self, *args, **kwargs)

        with patch.object(CartRepo, "get_cart_item", stale_first_read):
            cart = service.add_item("u1", "turmeric-powder", 1, 45, "100g")

        assert len(reads) == 2
        assert cart["itemCount"] == 1
        assert cart["items"][0]["quantity"] == 2
