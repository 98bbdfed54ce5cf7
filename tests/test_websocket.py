def received(sio_client):
    """Drain a test client's queue into {event: [argument or argument list, ...]}."""
    events = {}
    for packet in sio_client.get_received():
        args = packet['args']
        if not args:
            value = None
        else:
            value = args[0] if len(args) == 1 else list(args)
        events.setdefault(packet['name'], []).append(value)
    return events


def open_shared_game(make_sio_client):
    host = make_sio_client()
    guest = make_sio_client()
    host.emit('createRoom', 'en')
    code = received(host)['roomCreated'][0]
    guest.emit('joinRoom', code)
    return host, guest, code


def test_shared_game_over_sockets(flask_app, make_sio_client):
    host, guest, code = open_shared_game(make_sio_client)

    host_events = received(host)
    guest_events = received(guest)
    assert host_events['playerJoined']
    assert guest_events['roomJoined'] == [code]
    room = flask_app.room_registry.get_room(code)
    players = [room.host.id, room.guest.id]
    assert host_events['startGame'] == [[code, players]]
    assert guest_events['startGame'] == [[code, players]]
    assert host_events['updateTurnStatus'][-1]['isTurn'] is True
    assert guest_events['updateTurnStatus'][-1]['isTurn'] is False

    guest.emit('submitWord', 'SLATE')
    assert received(guest)['gameError'] == ["It's not your turn"]
    assert received(host) == {}

    host.emit('submitWord', 'slate')
    state = received(guest)['updateGameState'][-1]
    assert state['currentRow'] == 1
    assert state['grid'][0]['word'] == 'SLATE'
    received(host)

    guest_sid = room.guest.id
    guest.emit('submitGuess', {'word': 'CRANE'})
    for sio_client in (host, guest):
        assert received(sio_client)['gameOver'] == [{'winner': guest_sid, 'secretWord': 'CRANE'}]

    guest.emit('requestRematch')
    assert received(host)['rematchRequested']
    host.emit('requestRematch')
    assert received(guest)['rematchStart']
    assert flask_app.room_registry.get_room(code).grid == ()


def test_invalid_guess_reported_to_sender_only(make_sio_client):
    host, guest, code = open_shared_game(make_sio_client)
    received(host)
    received(guest)

    host.emit('submitWord', 'CAT')
    assert received(host)['gameError'] == ['The word must be exactly 5 letters']
    assert received(guest) == {}


def test_join_unknown_room_reports_lobby_error(make_sio_client):
    player = make_sio_client()
    player.emit('joinRoom', 'QQQQ')
    assert received(player)['lobbyError'] == ['Room QQQQ not found']


def test_duel_in_hard_mode(flask_app, make_sio_client):
    host = make_sio_client()
    guest = make_sio_client()
    host.emit('createDuelloRoom', 'en')
    code = received(host)['duelloRoomCreated'][0]
    guest.emit('joinDuelloRoom', code)
    assert received(host)['duelloPlayerJoined']
    assert received(guest)['duelloRoomJoined'] == [code]

    host.emit('setSecretWord', {'word': 'crane', 'hint': 'a bird', 'hintsEnabled': False})
    guest.emit('setSecretWord', {'word': 'level', 'hint': 'flat'})
    host.emit('playerReady')
    assert received(host)['waitingForOpponent']
    guest.emit('playerReady')

    host_start = received(host)['duelloGameStart'][0]
    guest_start = received(guest)['duelloGameStart'][0]
    assert host_start == {'opponentHint': 'flat', 'hintsEnabled': False}
    assert guest_start == {'opponentHint': 'a bird', 'hintsEnabled': False}

    host.emit('submitDuelloGuess', 'SLATE')
    assert received(host)['duelloGuessResult'][0]['feedback'] == ['neutral'] * 5
    assert received(guest)['opponentGuessUpdate'][0]['opponentGrid'] == [
        {'feedback': ['absent', 'present', 'absent', 'absent', 'present']}
    ]

    guest.emit('passTurn')
    assert received(guest)['duelloError'] == ['That action is not available in this game mode']

    guest.emit('submitDuelloGuess', 'CRANE')
    guest_over = received(guest)['duelloGameOver'][0]
    host_over = received(host)['duelloGameOver'][0]
    assert guest_over['won'] is True
    assert guest_over['secretWord'] == 'CRANE'
    assert host_over['won'] is False
    assert host_over['secretWord'] == 'CRANE'
    assert flask_app.room_registry.get_room(code).status.value == 'finished'


def test_disconnect_notifies_opponent_and_removes_room(flask_app, make_sio_client):
    host, guest, code = open_shared_game(make_sio_client)
    received(guest)

    host.disconnect()

    assert received(guest)['opponentDisconnected'] == ['Your opponent has disconnected.']
    assert flask_app.room_registry.get_room(code) is None
    assert flask_app.room_registry.player_rooms == {}


def test_leave_room(flask_app, make_sio_client):
    host, guest, code = open_shared_game(make_sio_client)
    received(host)

    guest.emit('leaveRoom')

    assert received(host)['opponentDisconnected']
    assert flask_app.room_registry.get_room(code) is None
