import os
import sys
import pytest

# Ensure the backend root (containing the `arena` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from arena import create_app, socketio
from arena.models import Position


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ALLOWED_ORIGINS = ['http://localhost:3000']
    SOCKETIO_NAMESPACE = '/'
    GAME_LOOP_ENABLED = False
    TICK_HEARTBEAT_SEC = 0
    LOG_LEVEL = 'DEBUG'


class RecordingEmitter:
    """Collects emitted events instead of sending them."""

    def __init__(self):
        self.events = []

    def emit(self, event, payload=None, to=None, skip=None):
        self.events.append({'event': event, 'payload': payload, 'to': to, 'skip': skip})

    def enter_room(self, sid, room_id):
        self.events.append({'event': '<enter>', 'payload': room_id, 'to': sid, 'skip': None})
        return True

    def leave_room(self, sid, room_id):
        self.events.append({'event': '<leave>', 'payload': room_id, 'to': sid, 'skip': None})

    def close_room(self, room_id):
        self.events.append({'event': '<close>', 'payload': room_id, 'to': None, 'skip': None})

    def names(self):
        return [e['event'] for e in self.events]

    def of(self, event):
        return [e for e in self.events if e['event'] == event]

    def clear(self):
        self.events = []


class ScriptedSampler:
    """Returns the given positions in order, then repeats the last one."""

    def __init__(self, *positions):
        self.positions = [Position(*p) for p in positions]
        self.calls = 0

    def __call__(self):
        idx = min(self.calls, len(self.positions) - 1)
        self.calls += 1
        return self.positions[idx]


@pytest.fixture()
def emitter():
    return RecordingEmitter()


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def registry(flask_app):
    return flask_app.extensions['room_registry']


@pytest.fixture()
def scheduler(flask_app):
    return flask_app.extensions['tick_scheduler']


@pytest.fixture()
def sio_factory(flask_app):
    clients = []

    def make():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        clients.append(test_client)
        return test_client

    yield make
    for test_client in clients:
        try:
            if test_client.is_connected():
                test_client.disconnect()
        except Exception:
            pass
