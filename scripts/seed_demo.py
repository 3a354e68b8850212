"""Seed demo data by calling the back-office HTTP API.

Creates a small catalogue (categories, brands, products), a few users and
their reviews so the landing page and admin dashboard have something to
show. Users that already exist are reused (the API answers
"Email already exists"), everything else is created again on every run.

Usage:
    python scripts/seed_demo.py [BASE_URL]

BASE_URL defaults to $API_URL or http://localhost:8000.
"""
import os
import sys

import httpx
from loguru import logger

API_URL = os.environ.get("API_URL", "http://localhost:8000")

CATEGORIES = ["Filters", "Brakes", "Lighting"]
BRANDS = ["Bosch", "Mann", "Hella"]

# (name, description, price, stock, category)
PRODUCTS = [
    ("Air filter 1.4 TSI", "OEM air filter for TSI engines", 19.90, 25, "Filters"),
    ("Oil filter", "Spin-on oil filter", 9.99, 40, "Filters"),
    ("Front brake pads", "Ceramic pads, front axle", 54.99, 12, "Brakes"),
    ("Headlight, left (halogen)", "Direct replacement headlight", 149.00, 3, "Lighting"),
]

USERS = [
    ("anna@example.com", "Anna"),
    ("marco@example.com", "Marco"),
]

# (author email, product name, rating, content)
FEEDBACKS = [
    ("anna@example.com", "Air filter 1.4 TSI", 5, "Fits perfectly, engine breathes again."),
    ("marco@example.com", "Front brake pads", 4, "Quiet and no dust so far."),
    ("marco@example.com", "Headlight, left (halogen)", 3, "Good light, took a while to arrive."),
]


def _post(client, path: str, payload: dict) -> dict:
    r = client.post(path, json=payload)
    if r.status_code != 201:
        raise RuntimeError(f"POST {path} returned {r.status_code}: {r.text}")
    return r.json()


def _ensure_user(client, email: str, name: str) -> dict:
    r = client.post("/api/users", json={"email": email, "name": name})
    if r.status_code == 201:
        return r.json()
    if r.status_code == 400 and r.json().get("error") == "Email already exists":
        for user in client.get("/api/users").json():
            if user["email"] == email:
                return user
    raise RuntimeError(f"Could not create user {email}: {r.status_code} {r.text}")


def seed(client) -> dict:
    """Create the demo data through ``client`` (any httpx-style client).

    Returns the number of rows created or reused per entity.
    """
    categories = {name: _post(client, "/api/categories", {"name": name}) for name in CATEGORIES}
    for name in BRANDS:
        _post(client, "/api/brands", {"name": name})

    products = {}
    for name, description, price, stock, category in PRODUCTS:
        products[name] = _post(client, "/api/products", {
            "name": name,
            "description": description,
            "price": price,
            "stock": stock,
            "categoryId": categories[category]["id"],
        })

    users = {email: _ensure_user(client, email, name) for email, name in USERS}

    for email, product, rating, content in FEEDBACKS:
        _post(client, "/api/feedbacks", {
            "content": content,
            "rating": rating,
            "authorId": users[email]["id"],
            "productId": products[product]["id"],
        })

    counts = {
        "categories": len(categories),
        "brands": len(BRANDS),
        "products": len(products),
        "users": len(users),
        "feedbacks": len(FEEDBACKS),
    }
    logger.info("Seeded {}", counts)
    return counts


def main():
    base_url = sys.argv[1] if len(sys.argv) > 1 else API_URL
    logger.info("Seeding demo data into {}", base_url)
    try:
        with httpx.Client(base_url=base_url, timeout=5.0) as client:
            seed(client)
    except (httpx.HTTPError, RuntimeError) as e:
        logger.error("Seeding failed: {}", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
