import re

import pytest

from wordle_duel.config.game_settings import ROOM_CODE_ALPHABET
from wordle_duel.models.errors import CapacityError, InvalidStateError, NotFoundError, RoomFullError
from wordle_duel.models.events import SUBMIT_GUESS, Intent
from wordle_duel.models.game import GameMode, RoomStatus
from wordle_duel.services.duel_room import DuelRoom
from wordle_duel.services.room_registry import RoomRegistry
from wordle_duel.services.shared_room import SharedTurnRoom


def test_create_room_returns_four_letter_code(registry):
    code = registry.create_room(GameMode.SHARED, 'host')

    assert re.fullmatch(r'[A-Z]{4}', code)
    room = registry.get_room(code)
    assert isinstance(room, SharedTurnRoom)
    assert room.host.id == 'host'
    assert room.status == RoomStatus.WAITING
    assert registry.room_for_player('host') is room


def test_create_duel_room_by_mode_value(registry):
    code = registry.create_room('duel', 'host')
    assert isinstance(registry.get_room(code), DuelRoom)


def test_code_collision_is_retried(registry, monkeypatch):
    draws = iter([list('ABCD'), list('ABCD'), list('WXYZ')])
    monkeypatch.setattr('wordle_duel.services.room_registry.random.choices',
                        lambda population, k: next(draws))

    assert registry.create_room(GameMode.SHARED, 'first') == 'ABCD'
    assert registry.create_room(GameMode.SHARED, 'second') == 'WXYZ'


def test_persistent_collisions_raise_capacity_error(registry, monkeypatch):
    monkeypatch.setattr('wordle_duel.services.room_registry.random.choices',
                        lambda population, k: list('ABCD'))
    registry.create_room(GameMode.SHARED, 'first')

    with pytest.raises(CapacityError):
        registry.create_room(GameMode.SHARED, 'second')
    assert registry.room_for_player('second') is None


def test_exhausted_code_space_raises_capacity_error(outbox):
    registry = RoomRegistry(outbox.append, code_length=1)
    for letter in ROOM_CODE_ALPHABET:
        registry.rooms[letter] = DuelRoom(letter, f'player-{letter}', outbox.append)

    with pytest.raises(CapacityError):
        registry.create_room(GameMode.DUEL, 'late')


def test_join_unknown_code(registry):
    with pytest.raises(NotFoundError):
        registry.join_room('QQQQ', 'guest')
    with pytest.raises(NotFoundError):
        registry.join_room(None, 'guest')


def test_join_wrong_mode_is_not_found(registry):
    code = registry.create_room(GameMode.DUEL, 'host')
    with pytest.raises(NotFoundError):
        registry.join_room(code, 'guest', mode=GameMode.SHARED)


def test_join_is_case_insensitive_and_notifies_host(registry, outbox):
    code = registry.create_room(GameMode.SHARED, 'host')

    room = registry.join_room(f' {code.lower()} ', 'guest')

    assert room.code == code
    assert registry.room_for_player('guest') is room
    assert outbox.payloads('host', 'playerJoined')
    assert room.status == RoomStatus.ACTIVE


def test_join_full_room(registry):
    code = registry.create_room(GameMode.SHARED, 'host')
    registry.join_room(code, 'guest')

    with pytest.raises(RoomFullError):
        registry.join_room(code, 'third')
    assert registry.room_for_player('third') is None


def test_rejected_join_keeps_current_game(registry, outbox):
    code = registry.create_room(GameMode.SHARED, 'host')
    registry.join_room(code, 'guest')
    full_code = registry.create_room(GameMode.SHARED, 'other-host')
    registry.join_room(full_code, 'other-guest')
    outbox.clear()

    with pytest.raises(RoomFullError):
        registry.join_room(full_code, 'guest')

    room = registry.get_room(code)
    assert room is not None
    assert room.status == RoomStatus.ACTIVE
    assert registry.room_for_player('guest') is room
    assert registry.get_room(full_code).has_player('guest') is False
    assert outbox.events(name='opponentDisconnected') == []


def test_successful_join_leaves_previous_room(registry, outbox):
    waiting = registry.create_room(GameMode.DUEL, 'guest')
    code = registry.create_room(GameMode.SHARED, 'host')

    room = registry.join_room(code, 'guest')

    assert registry.get_room(waiting) is None
    assert registry.room_for_player('guest') is room
    assert room.status == RoomStatus.ACTIVE


def test_join_own_room_rejected(registry):
    code = registry.create_room(GameMode.DUEL, 'host')
    with pytest.raises(InvalidStateError):
        registry.join_room(code, 'host')


def test_creating_again_leaves_previous_room(registry):
    first = registry.create_room(GameMode.SHARED, 'host')
    second = registry.create_room(GameMode.DUEL, 'host')

    assert registry.get_room(first) is None
    assert registry.room_for_player('host').code == second


def test_disconnect_removes_room_and_notifies_opponent(registry, outbox):
    code = registry.create_room(GameMode.SHARED, 'host')
    registry.join_room(code, 'guest')
    outbox.clear()

    assert registry.disconnect('host') is True

    assert registry.get_room(code) is None
    assert registry.room_for_player('guest') is None
    assert len(outbox.payloads('guest', 'opponentDisconnected')) == 1
    assert registry.disconnect('host') is False


def test_remove_room_is_idempotent(registry):
    code = registry.create_room(GameMode.SHARED, 'host')
    assert registry.remove_room(code) is True
    assert registry.remove_room(code) is False
    assert registry.player_rooms == {}


def test_dispatch_requires_a_room(registry):
    with pytest.raises(NotFoundError):
        registry.dispatch(Intent(kind=SUBMIT_GUESS, sender='nobody', payload={'word': 'CRANE'}))


def test_dispatch_reaches_senders_room(registry, outbox):
    code = registry.create_room(GameMode.SHARED, 'host')
    registry.join_room(code, 'guest')

    registry.dispatch(Intent(kind=SUBMIT_GUESS, sender='host', payload={'word': 'CRANE'}))

    assert registry.get_room(code).winner == 'host'
    assert outbox.payloads('guest', 'gameOver') == [{'winner': 'host', 'secretWord': 'CRANE'}]


def test_unknown_language_falls_back_to_default(registry):
    code = registry.create_room(GameMode.SHARED, 'host', language='xx')
    assert registry.get_room(code).language == 'en'

    code = registry.create_room(GameMode.SHARED, 'other', language='IT')
    assert registry.get_room(code).language == 'it'


def test_summary_counts_rooms_and_players(registry):
    code = registry.create_room(GameMode.SHARED, 'host')
    registry.join_room(code, 'guest')
    registry.create_room(GameMode.DUEL, 'solo')

    summary = registry.summary()
    assert summary['success'] is True
    assert summary['active_rooms'] == 2
    assert summary['connected_players'] == 3
    assert {room['mode'] for room in summary['rooms']} == {'shared', 'duel'}
