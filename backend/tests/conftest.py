import os
import sys
import pytest

# Ensure the backend root (containing the `throwrelay` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from throwrelay import create_app, socketio
from throwrelay.services.rooms import RelayCore, RoomRegistry


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    ROOM_RETENTION_SEC = 2 * 60 * 60
    ROOM_ID_LENGTH = 8
    ROOM_SWEEP_INTERVAL_SEC = 0
    SOCKETIO_NAMESPACE = '/'
    CORS_ALLOWED_ORIGINS = '*'
    PUBLIC_BASE_URL = 'https://relay.example.com'
    LOG_LEVEL = 'DEBUG'


class FakeClock:
    def __init__(self, now=1_000_000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class RecordingTransport:
    """In-memory transport that records every delivery per connection."""

    def __init__(self):
        self.members = {}
        self.sent = []

    def send(self, connection_id, event, payload):
        self.sent.append((connection_id, event, payload))

    def send_to_room(self, room_id, event, payload, skip=None):
        for sid in sorted(self.members.get(room_id, set())):
            if sid != skip:
                self.sent.append((sid, event, payload))

    def enter_room(self, connection_id, room_id):
        self.members.setdefault(room_id, set()).add(connection_id)

    def leave_room(self, connection_id, room_id):
        self.members.get(room_id, set()).discard(connection_id)

    def received(self, connection_id, event=None):
        return [p for sid, e, p in self.sent if sid == connection_id and (event is None or e == event)]


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def registry(clock):
    return RoomRegistry(retention_window=TestConfig.ROOM_RETENTION_SEC, clock=clock)


@pytest.fixture()
def transport():
    return RecordingTransport()


@pytest.fixture()
def relay(registry, transport):
    return RelayCore(registry, transport)


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def app_registry(flask_app):
    return flask_app.extensions['throwrelay'].registry


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


def _make_sio_client(flask_app):
    return socketio.test_client(flask_app, flask_test_client=flask_app.test_client(), namespace='/')


@pytest.fixture()
def sio_client(flask_app):
    test_client = _make_sio_client(flask_app)
    yield test_client
    if test_client.is_connected('/'):
        test_client.disconnect(namespace='/')


@pytest.fixture()
def sio_factory(flask_app):
    """Build extra Socket.IO clients; all are disconnected on teardown."""
    made = []

    def _factory():
        c = _make_sio_client(flask_app)
        made.append(c)
        return c

    yield _factory
    for c in made:
        if c.is_connected('/'):
            c.disconnect(namespace='/')
