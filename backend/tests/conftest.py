# backend/tests/conftest.py
"""
Fixtures comunes: aplicación con base de datos SQLite en memoria y un
servicio de imágenes falso que registra las llamadas.
"""

import os

os.environ.setdefault("LOG_FILE_PATH", "")
os.environ.setdefault("APP_ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from app.core.config import Settings
from app.core.exceptions import ImageStoreError
from app.db.database import Database, ReconnectStrategy
from app.main import create_app

API = "/api/v1"


class FakeImageStore:
    """Sustituto de CloudinaryImageStore que no hace peticiones de red."""

    is_configured = True

    def __init__(self, fail_delete: bool = False):
        self.fail_delete = fail_delete
        self.uploads = []
        self.deletes = []

    async def upload(self, image, folder):
        self.uploads.append((folder, image.filename, image.content_type, len(image.data)))
        return f"https://res.cloudinary.com/demo/image/upload/v1/{folder}/{image.filename.rsplit('.', 1)[0]}.jpg"

    async def delete(self, image_url):
        self.deletes.append(image_url)
        if self.fail_delete:
            raise ImageStoreError("Image deletion failed")


@pytest.fixture
def test_settings():
    return Settings(
        APP_ENVIRONMENT="test",
        LOG_FILE_PATH="",
        SQLALCHEMY_DATABASE_URI="sqlite+aiosqlite://",
        DB_CREATE_TABLES=True,
    )


@pytest.fixture
def image_store():
    return FakeImageStore()


@pytest.fixture
def client(test_settings, image_store):
    database = Database(
        test_settings.DATABASE_URL,
        reconnect=ReconnectStrategy(delay=0, max_attempts=1),
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    app = create_app(test_settings, database=database, image_store=image_store)
    with TestClient(app) as test_client:
        yield test_client


# ========================================
# HELPERS PARA CREAR DATOS
# ========================================

def create_category(client, **fields):
    payload = {"name": "Drinks", "taxApplicability": True, "tax": 5, "taxType": "percentage"}
    payload.update(fields)
    response = client.post(f"{API}/categories/", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


def create_subcategory(client, category_id, **fields):
    payload = {"name": "Soda", "categoryId": category_id}
    payload.update(fields)
    response = client.post(f"{API}/subcategories/", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


def create_item(client, **fields):
    payload = {"name": "Cola", "taxApplicability": False, "baseAmount": 80, "discount": 10}
    payload.update(fields)
    response = client.post(f"{API}/items/", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]
