"""
Pytest configuration and fixtures.
"""

import pytest

import app as app_module
from service.storage import ConversionStore


@pytest.fixture
def client(monkeypatch):
    """Flask test client with an empty conversion history"""
    monkeypatch.setattr(app_module, "storage", ConversionStore())
    app_module.app.config["TESTING"] = True
    return app_module.app.test_client()


@pytest.fixture
def lines():
    """Join source lines the way an editor would submit them"""
    def join(*source):
        return "\n".join(source)
    return join
