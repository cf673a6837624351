# app/domain/reference.py
"""Static storefront reference data served without touching the database."""

COUNTRIES = [
    {"id": "IN", "countryName": "India"},
    {"id": "US", "countryName": "United States"},
    {"id": "GB", "countryName": "United Kingdom"},
    {"id": "CA", "countryName": "Canada"},
    {"id": "AU", "countryName": "Australia"},
    {"id": "DE", "countryName": "Germany"},
    {"id": "FR", "countryName": "France"},
    {"id": "JP", "countryName": "Japan"},
    {"id": "CN", "countryName": "China"},
    {"id": "BR", "countryName": "Brazil"},
    {"id": "ZA", "countryName": "South Africa"},
    {"id": "MX", "countryName": "Mexico"},
    {"id": "RU", "countryName": "Russia"},
    {"id": "IT", "countryName": "Italy"},
    {"id": "ES", "countryName": "Spain"},
]

DELIVERY_OPTIONS = [
    {
        "id": "delivery_normal_001",
        "type": "Normal",
        "description": "Normal Delivery (standard timeframe)",
        "price": 30,
        "currency": "INR",
    },
    {
        "id": "delivery_expected_001",
        "type": "Expected",
        "description": "Expected / Express Delivery (faster)",
        "price": 50,
        "currency": "INR",
    },
]

DIETARY_OPTIONS = [
    {"label": "Vegetarian", "icon": "leaf"},
    {"label": "Vegan", "icon": "vegan"},
    {"label": "Gluten-Free", "icon": "wheat-off"},
    {"label": "Sugar-Free", "icon": "candy-off"},
    {"label": "High Protein", "icon": "dumbbell"},
    {"label": "Organic", "icon": "badge-check"},
    {"label": "Preservative-Free", "icon": "ban"},
]


def find_country(country_id: str) -> dict | None:
    return next((c for c in COUNTRIES if c["id"] == str(country_id)), None)


def find_delivery_option(option_type: str | None) -> dict | None:
    if not option_type:
        return None
    wanted = str(option_type).strip().lower()
    return next((d for d in DELIVERY_OPTIONS if d["type"].lower() == wanted), None)
