import os
import sys
import pytest
from typing import Optional

# Ensure the backend root (containing the `countdown` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from countdown import create_app, socketio


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    TICK_INTERVAL_MS = 20
    MAX_CATCHUP_SEC = 0
    CORS_ORIGINS = ['http://localhost:5173']
    LOG_LEVEL = 'DEBUG'


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.current = start

    def now(self) -> float:
        return self.current

    def elapsed(self, since: float, now: Optional[float] = None) -> float:
        if now is None:
            now = self.current
        return max(0.0, now - since)

    def advance(self, seconds: float) -> None:
        self.current += seconds


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
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    if test_client.is_connected('/ws'):
        test_client.disconnect(namespace='/ws')
