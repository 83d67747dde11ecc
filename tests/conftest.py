"""
Shared fixtures.

- ``app``: a fresh application on an in-memory SQLite database per test;
- ``client``: Flask test client for that app;
- ``register``: helper that creates a user and returns (token, user dict);
- ``api_session``: a requests-like session that routes BurnMateClient calls
  into the Flask test client, so client code runs end to end without a server;
- ``los_angeles_tz``: runs the test with the process time zone set to
  America/Los_Angeles and yields that zone.
"""

import os
import time
from zoneinfo import ZoneInfo

import pytest

from burnmate import create_app, db
from config import TestConfig


@pytest.fixture
def app():
    app = create_app(TestConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def register(client):
    counter = {"n": 0}

    def _register(name=None, email=None, password="secret123", **extra):
        counter["n"] += 1
        payload = {
            "name": name or f"User {counter['n']}",
            "email": email or f"user{counter['n']}@example.com",
            "password": password,
            **extra,
        }
        resp = client.post("/api/register", json=payload)
        assert resp.status_code == 201, resp.get_json()
        body = resp.get_json()
        return body["token"], body["user"]

    return _register


class _FlaskResponse:
    def __init__(self, resp):
        self.status_code = resp.status_code
        self.text = resp.get_data(as_text=True)
        self._json = resp.get_json(silent=True)

    def json(self):
        if self._json is None:
            raise ValueError("no JSON body")
        return self._json


class FlaskSession:
    """Just enough of requests.Session for BurnMateClient."""

    def __init__(self, test_client, prefix="http://testserver"):
        self.test_client = test_client
        self.prefix = prefix
        self.headers = {}
        self.calls = []

    def request(self, method, url, timeout=None, json=None, params=None):
        path = url[len(self.prefix):] if url.startswith(self.prefix) else url
        self.calls.append((method, path))
        resp = self.test_client.open(
            path,
            method=method,
            json=json,
            query_string=params or None,
            headers={k: v for k, v in self.headers.items() if k != "Content-Type"},
        )
        return _FlaskResponse(resp)


@pytest.fixture
def api_session(client):
    return FlaskSession(client)


@pytest.fixture
def los_angeles_tz():
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    original = os.environ.get("TZ")
    os.environ["TZ"] = "America/Los_Angeles"
    time.tzset()
    yield ZoneInfo("America/Los_Angeles")
    if original is None:
        os.environ.pop("TZ", None)
    else:
        os.environ["TZ"] = original
    time.tzset()
