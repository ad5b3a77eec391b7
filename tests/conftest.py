import base64

import pytest

from app import create_app
from speeddial.config import RegistrySettings
from speeddial.registry import SpeedDialRegistry


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        'SPEEDDIAL_CONFIG',
        'SPEEDDIAL_MAX_DIRECTORIES',
        'SPEEDDIAL_TOTAL_CAPACITY',
        'SPEEDDIAL_DEFAULT_CAPACITY',
        'SPEEDDIAL_REMAINDER_POLICY',
        'SPEEDDIAL_SEED_DEMO',
        'BASIC_AUTH_USERNAME',
        'BASIC_AUTH_PASSWORD',
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def registry():
    reg = SpeedDialRegistry(RegistrySettings(max_directories=5, total_capacity=1000))
    reg.initialize()
    return reg


@pytest.fixture
def small_registry():
    reg = SpeedDialRegistry(RegistrySettings(max_directories=2, total_capacity=6))
    reg.initialize()
    return reg


@pytest.fixture
def app(registry):
    flask_app = create_app(registry=registry)
    flask_app.config['TESTING'] = True
    return flask_app


@pytest.fixture
def auth_headers():
    token = base64.b64encode(b'admin:admin').decode('ascii')
    return {'Authorization': f'Basic {token}'}


@pytest.fixture
def client(app):
    return app.test_client()
