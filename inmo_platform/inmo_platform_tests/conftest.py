import pytest
from fastapi.testclient import TestClient

from inmo_platform.inmo_platform.inmo_service.config import Settings
from inmo_platform.inmo_platform.inmo_service.db import Database
from inmo_platform.inmo_platform.inmo_service.hashing import PasswordHasher
from inmo_platform.inmo_platform.inmo_service.main import create_app


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'inmo_test.db'}",
        PASSWORD_HASH_ROUNDS=1000,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def hasher(settings):
    return PasswordHasher.from_settings(settings)


@pytest.fixture
def database(settings):
    db = Database(settings)
    db.init_db()
    yield db
    db.dispose()


@pytest.fixture
def session(database):
    s = database.session()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


def property_payload(**overrides):
    payload = {
        "title": "Casa en Lomas",
        "listing_date": "2024-03-01T10:00:00",
        "address": "Av. Reforma 123",
        "neighborhood": "Lomas",
        "city": "CDMX",
        "zone": "Poniente",
        "reference": "Frente al parque",
        "notes": "Llaves con el portero",
        "price": 4500000.0,
        "construction_m2": 180,
        "land_m2": 240,
        "garden_m2": 30,
        "is_occupied": False,
        "is_furnished": True,
        "floors": 2,
        "bedrooms": 3,
        "bathrooms": 2,
        "garage_size": 2,
        "gas_types": ["natural", "lp"],
        "amenities": ["pool", "gym"],
        "extras": ["solar panels"],
        "utilities": ["water", "electricity"],
        "owner_id": 1,
        "user_id": 2,
        "property_type": "house",
        "transaction_type": "sale",
        "status": "available",
    }
    payload.update(overrides)
    return payload
