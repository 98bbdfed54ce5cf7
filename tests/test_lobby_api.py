from wordle_duel.models.game import GameMode


def test_health_check(client):
    response = client.get('/api/health')
    assert response.status_code == 200
    data = response.get_json()
    assert data['status'] == 'healthy'
    assert data['active_rooms'] == 0


def test_lobby_state_lists_rooms(client, flask_app):
    flask_app.room_registry.create_room(GameMode.SHARED, 'host')

    data = client.get('/api/lobby/state').get_json()
    assert data['success'] is True
    assert data['active_rooms'] == 1
    assert data['rooms'][0]['status'] == 'waiting'


def test_unknown_room_is_404(client):
    response = client.get('/api/rooms/QQQQ')
    assert response.status_code == 404
    assert response.get_json() == {'success': False, 'error': 'Room not found'}


def test_room_lookup(client, flask_app):
    code = flask_app.room_registry.create_room(GameMode.DUEL, 'host')

    response = client.get(f'/api/rooms/{code.lower()}')
    assert response.status_code == 200
    room = response.get_json()['room']
    assert room['code'] == code
    assert room['mode'] == 'duel'
    assert room['players'] == 1
    assert room['joinable'] is True
    assert room['created_at'] == flask_app.room_registry.get_room(code).created_at
