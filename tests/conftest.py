import pytest

from app import create_app
from config import TestingConfig


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    yield app
    with app.app_context():
        from extensions import db
        db.session.remove()
        db.drop_all()
        app.extensions["plant_store"].close()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store(app):
    with app.app_context():
        yield app.extensions["plant_store"]


@pytest.fixture
def pothos():
    return {
        "name": "Pothos",
        "species": "Epipremnum aureum",
        "lastWatered": "2023-10-20",
        "wateringFrequency": 7,
        "lightPref": "bright-indirect",
        "notes": "Easy to care for, loves humidity.",
    }
