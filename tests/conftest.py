import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from marketplace_api.core.config import Settings
from marketplace_api.database.mongo import MongoDB
from marketplace_api.main import create_app

ADMIN_EMAIL = "admin@test.local"
ADMIN_PASSWORD = "admin-password"


@pytest.fixture
def mongodb():
    return MongoDB(database_name="marketplace_test", client=AsyncMongoMockClient())


@pytest.fixture
def app_settings():
    return Settings(ADMIN_EMAIL=ADMIN_EMAIL, ADMIN_PASSWORD=ADMIN_PASSWORD, JWT_SECRET="test-secret")


@pytest.fixture
def client(app_settings, mongodb):
    app = create_app(settings=app_settings, mongodb=mongodb)
    # le lifespan crée les index et l'admin
    with TestClient(app) as c:
        yield c


def register(client, email, role="buyer", password="password123", name="Test User"):
    res = client.post(
        "/api/register",
        json={"name": name, "email": email, "password": password, "role": role},
    )
    assert res.status_code == 201, res.text
    return res.json()["user"]


def login(client, email, password="password123"):
    res = client.post("/api/login", json={"email": email, "password": password})
    assert res.status_code == 200, res.text
    return {"Authorization": f"Bearer {res.json()['access_token']}"}


def make_user(client, email, role="buyer"):
    user = register(client, email, role=role)
    return user, login(client, email)


@pytest.fixture
def admin_headers(client):
    return login(client, ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture
def seller(client):
    return make_user(client, "seller@example.com", role="seller")


@pytest.fixture
def buyer(client):
    return make_user(client, "buyer@example.com", role="buyer")


def product_payload(**overrides):
    data = {
        "name": "Trail Shoe",
        "price": 89.5,
        "category": "shoes",
        "brand": "Acme",
        "details": "Lightweight running shoe",
        "stock": 10,
        "image": "https://img.example.com/shoe.png",
    }
    data.update(overrides)
    return data


def create_product(client, headers, **overrides):
    res = client.post("/api/products", json=product_payload(**overrides), headers=headers)
    assert res.status_code == 201, res.text
    return res.json()
