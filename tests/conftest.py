"""Shared test fixtures for the LogoFive test suite.

Provides:
- app: Flask app configured for testing (memory token store, fake keys)
- client: Flask test client
- token_store: the app's token store, emptied before and after each test
- paid_token: a token already granted by a (simulated) webhook
- upstream: factory for fake image API responses
"""

from unittest.mock import MagicMock

import pytest

from logofive import create_app


@pytest.fixture(scope="session")
def app():
    """Create the Flask application configured for testing."""
    app = create_app("testing")
    yield app


@pytest.fixture(autouse=True)
def token_store(app):
    """Give each test an empty memory store."""
    store = app.extensions["token_store"]
    store.clear()
    yield store
    store.clear()


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture
def paid_token(token_store):
    token = "PaidToken0000000000000000000001"
    token_store.insert(token)
    return token


@pytest.fixture
def upstream():
    """Build a fake requests.Response from the image API."""

    def _make(status=200, payload=None, text=""):
        resp = MagicMock()
        resp.status_code = status
        resp.ok = status < 400  # requests semantics: 3xx counts as ok
        resp.text = text
        if isinstance(payload, Exception):
            resp.json.side_effect = payload
        else:
            resp.json.return_value = payload
        return resp

    return _make
