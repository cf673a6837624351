"""
Integration Tests: /api/cart and /api/wishlist

Both routes are session-gated: anonymous callers get a 401 envelope plus
the redirect header.
"""


class TestCartAuth:
    def test_anonymous_gets_login_redirect(self, client):
        response = client.get("/api/cart")

        assert response.status_code == 401
        assert response.headers["X-Redirect-To"] == "/login"
        assert response.json() == {"status": 401, "message": "Unauthorized. Please log in.", "data": {}}

    def test_invalid_token(self, client):
        response = client.post("/api/cart", json={}, headers={"Authorization": "Bearer nope"})

        assert response.status_code == 401


class TestCartActions:
    def test_get_empty_cart(self, client, auth_headers):
        response = client.get("/api/cart", headers=auth_headers)

        body = response.json()
        assert response.status_code == 200
        assert body["status"] == 200
        assert body["data"]["itemCount"] == 0

    def test_add_twice_merges(self, client, auth_headers):
        item = {"productId": "turmeric-powder", "quantity": 1, "weightOption": "100g", "price": 45}
        client.post("/api/cart", json={"action": "add", "data": item}, headers=auth_headers)
        response = client.post("/api/cart", json={"action": "add", "data": item}, headers=auth_headers)

        data = response.json()["data"]
        assert response.status_code == 200
        assert data["itemCount"] == 1
        assert data["items"][0]["quantity"] == 2

    def test_inline_item_defaults_to_add(self, client, auth_headers):
        response = client.post(
            "/api/cart",
            json={"productId": "cumin-seeds", "quantity": 2, "price": "55.50"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["data"]["subtotal"] == 111.0

    def test_action_from_query(self, client, auth_headers):
        client.post("/api/cart", json={"productId": "cumin-seeds", "quantity": 1, "price": 55}, headers=auth_headers)

        response = client.post("/api/cart?action=remove", json={"productId": "cumin-seeds"}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["data"]["items"] == []

    def test_update_to_zero_is_400(self, client, auth_headers):
        client.post("/api/cart", json={"productId": "cumin-seeds", "quantity": 1, "price": 55}, headers=auth_headers)

        response = client.post(
            "/api/cart",
            json={"action": "update", "data": {"productId": "cumin-seeds", "quantity": 0}},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["status"] == 400

    def test_unknown_product_is_404(self, client, auth_headers):
        response = client.post(
            "/api/cart",
            json={"action": "add", "data": {"productId": "saffron", "quantity": 1, "price": 10}},
            headers=auth_headers,
        )

        assert response.status_code == 404
        assert response.json()["data"] == {"productId": "saffron"}

    def test_unknown_action(self, client, auth_headers):
        response = client.post("/api/cart", json={"action": "explode"}, headers=auth_headers)

        assert response.status_code == 400

    def test_clear(self, client, auth_headers):
        client.post("/api/cart", json={"productId": "cumin-seeds", "quantity": 1, "price": 55}, headers=auth_headers)

        response = client.post("/api/cart", json={"action": "clear"}, headers=auth_headers)

        assert response.json()["data"]["itemCount"] == 0

    def test_carts_are_per_user(self, client, auth_headers):
        from app.services.auth_guard import issue_token

        client.post("/api/cart", json={"productId": "cumin-seeds", "quantity": 1, "price": 55}, headers=auth_headers)
        other = {"Authorization": f"Bearer {issue_token('someone-else')}"}

        assert client.get("/api/cart", headers=other).json()["data"]["items"] == []


class TestWishlist:
    def test_anonymous(self, client):
        assert client.get("/api/wishlist").status_code == 401

    def test_add_list_remove(self, client, auth_headers):
        created = client.post("/api/wishlist", json={"productId": "garam-masala"}, headers=auth_headers)
        assert created.status_code == 201
        assert created.json()["data"]["count"] == 1

        client.post("/api/wishlist", json={"recipeId": "biryani"}, headers=auth_headers)
        listing = client.get("/api/wishlist", headers=auth_headers).json()["data"]
        assert [(i["productId"], i["recipeId"]) for i in listing["items"]] == [
            ("garam-masala", None),
            (None, "biryani"),
        ]

        removed = client.delete("/api/wishlist?productId=garam-masala", headers=auth_headers)
        assert removed.status_code == 200
        assert removed.json()["data"]["count"] == 1

    def test_duplicate_rejected(self, client, auth_headers):
        client.post("/api/wishlist", json={"productId": "garam-masala"}, headers=auth_headers)

        response = client.post("/api/wishlist", json={"productId": "garam-masala"}, headers=auth_headers)

        assert response.status_code == 400

    def test_needs_exactly_one_reference(self, client, auth_headers):
        both = client.post("/api/wishlist", json={"productId": "garam-masala", "recipeId": "r1"}, headers=auth_headers)
        neither = client.post("/api/wishlist", json={}, headers=auth_headers)

        assert both.status_code == 400
        assert neither.status_code == 400

    def test_unknown_product(self, client, auth_headers):
        response = client.post("/api/wishlist", json={"productId": "saffron"}, headers=auth_headers)

        assert response.status_code == 404

    def test_remove_without_wishlist(self, client, auth_headers):
        response = client.delete("/api/wishlist?productId=garam-masala", headers=auth_headers)

        assert response.status_code == 404
