import os
import sys
import pytest

# Ensure the backend root (containing the `relay` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from config import Config
from relay import create_app, socketio


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret'
    TRUST_X_FORWARDED_FOR = True
    MAX_ROOMS = 100
    SOCKET_RATE_MAX = 10
    SOCKET_RATE_WINDOW_SEC = 60
    HTTP_RATE_MAX = 200
    HTTP_RATE_WINDOW_SEC = 900


class FakeClock:
    """Manually advanced stand-in for time.time."""

    def __init__(self, start=1_000_000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def connect(flask_app):
    """Factory for Socket.IO test clients, each from its own address by default."""
    clients = []
    counter = iter(range(1, 10_000))

    def _connect(addr=None):
        addr = addr or f"10.0.0.{next(counter)}"
        test_client = socketio.test_client(
            flask_app,
            flask_test_client=flask_app.test_client(),
            headers={'X-Forwarded-For': addr},
        )
        clients.append(test_client)
        return test_client

    yield _connect
    for test_client in clients:
        try:
            if test_client.is_connected():
                test_client.disconnect()
        except Exception:
            pass
