from __future__ import annotations

import pytest
from flask import Flask
from flask.testing import FlaskClient

from backend.app import create_app
from backend.config import DEFAULTS


@pytest.fixture()
def app() -> Flask:
    return create_app({"TESTING": True, "LOCALE": "pt-BR"})


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture()
def default_inputs() -> dict:
    return dict(DEFAULTS)
