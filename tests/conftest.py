import pytest
from fastapi.testclient import TestClient

from backoffice.config import Settings
from backoffice.main import create_app

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture
def app():
    return create_app(Settings(database_url=TEST_DATABASE_URL))


@pytest.fixture
def client(app):
    # entering the client runs the lifespan, which opens the gateway
    with TestClient(app) as c:
        yield c


@pytest.fixture
def category(client):
    r = client.post("/api/categories", json={"name": "Filters"})
    assert r.status_code == 201, r.text
    return r.json()


@pytest.fixture
def product(client, category):
    r = client.post("/api/products", json={
        "name": "Oil filter",
        "description": "Spin-on oil filter",
        "price": 9.99,
        "stock": 40,
        "categoryId": category["id"],
    })
    assert r.status_code == 201, r.text
    return r.json()


@pytest.fixture
def user(client):
    r = client.post("/api/users", json={"email": "anna@example.com", "name": "Anna"})
    assert r.status_code == 201, r.text
    return r.json()


@pytest.fixture
def feedback(client, user, product):
    r = client.post("/api/feedbacks", json={
        "content": "Does the job",
        "rating": 4,
        "authorId": user["id"],
        "productId": product["id"],
    })
    assert r.status_code == 201, r.text
    return r.json()
