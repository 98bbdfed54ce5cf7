import pytest

from wordle_duel import create_app
from wordle_duel.config import TestingConfig
from wordle_duel.services.duel_room import DuelRoom
from wordle_duel.services.room_registry import RoomRegistry
from wordle_duel.services.shared_room import SharedTurnRoom


class Outbox(list):
    """Collects room notifications in place of a Socket.IO server."""

    def events(self, target=None, name=None):
        return [
            n for n in self
            if (target is None or n.target == target) and (name is None or n.event == name)
        ]

    def payloads(self, target, name):
        return [n.payload for n in self.events(target, name)]


class ManualScheduler:
    """Records background tasks; sleeps return immediately."""

    def __init__(self):
        self.tasks = []
        self.slept = 0

    def start_background_task(self, target, *args, **kwargs):
        self.tasks.append((target, args, kwargs))

    def sleep(self, seconds):
        self.slept += seconds

    def run_next(self):
        target, args, kwargs = self.tasks.pop(0)
        target(*args, **kwargs)

    def run_latest(self):
        target, args, kwargs = self.tasks.pop()
        target(*args, **kwargs)


@pytest.fixture()
def outbox():
    return Outbox()


@pytest.fixture()
def scheduler():
    return ManualScheduler()


@pytest.fixture()
def shared_room(outbox, scheduler):
    room = SharedTurnRoom(
        'ABCD', 'host', outbox.append,
        scheduler=scheduler,
        word_picker=lambda language: 'CRANE',
        turn_duration=3
    )
    room.add_guest('guest')
    outbox.clear()
    return room


@pytest.fixture()
def duel_room(outbox):
    room = DuelRoom('WXYZ', 'host', outbox.append)
    room.add_guest('guest')
    outbox.clear()
    return room


def _start_duel(room, host_word='CRANE', guest_word='LEVEL', hints_enabled=True,
                host_hint='a bird', guest_hint='flat'):
    room.set_secret_word('host', host_word, host_hint, hints_enabled)
    room.set_secret_word('guest', guest_word, guest_hint)
    room.player_ready('host')
    room.player_ready('guest')


@pytest.fixture()
def start_duel():
    return _start_duel


@pytest.fixture()
def registry(outbox):
    return RoomRegistry(outbox.append, word_picker=lambda language: 'CRANE')


class TestConfig(TestingConfig):
    SECRET_KEY = 'test-secret'


@pytest.fixture()
def flask_app():
    app, socketio = create_app(TestConfig)
    app.room_registry.word_picker = lambda language: 'CRANE'
    yield app


@pytest.fixture()
def socketio(flask_app):
    return flask_app.socketio


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def make_sio_client(flask_app, socketio):
    clients = []

    def _make():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        clients.append(test_client)
        return test_client

    yield _make

    for test_client in clients:
        if test_client.is_connected():
            test_client.disconnect()
