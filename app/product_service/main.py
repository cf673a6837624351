# product_service/main.py
from fastapi import FastAPI, HTTPException

app = FastAPI(title="Product Service (dev mock)")


PRODUCTS = {
    "turmeric-powder": {
        "productId": "turmeric-powder",
        "title": "Turmeric Powder",
        "weightVsPrice": {"100g": 45.0, "250g": 99.0, "500g": 185.0},
    },
    "garam-masala": {
        "productId": "garam-masala",
        "title": "Garam Masala",
        "weightVsPrice": {"100g": 70.0, "200g": 130.0},
    },
    "cumin-seeds": {
        "productId": "cumin-seeds",
        "title": "Cumin Seeds (Jeera)",
        "weightVsPrice": {"100g": 55.0, "500g": 240.0},
    },
    "basmati-rice": {
        "productId": "basmati-rice",
        "title": "Aged Basmati Rice",
        "weightVsPrice": {"1kg": 160.0, "5kg": 760.0},
    },
}


@app.get("/products/{product_id}")
def get_product(product_id: str):
    product = PRODUCTS.get(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product
