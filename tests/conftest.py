import pytest

from passkit.randomness import SeededRandomSource
from passkit.web.api import create_app


@pytest.fixture
def rng():
    return SeededRandomSource(1234)


@pytest.fixture
def app():
    app = create_app({"cors_origins": "*"})
    app.config.update({"TESTING": True})
    return app


@pytest.fixture
def client(app):
    return app.test_client()
