import queue

import pytest

from catan_server import create_app
from catan_server.extensions import notification_queue, sid_to_user_map


@pytest.fixture
def app_and_socketio(tmp_path):
    app, socketio = create_app({
        'TESTING': True,
        'JWT_SECRET_KEY': 'test-secret-key-with-enough-length-for-hs256',
        'LOG_FILE': str(tmp_path / 'app.log'),
        'STATS_LOG_FILE': str(tmp_path / 'stats.log'),
        'SOCKETIO_ASYNC_MODE': 'threading',
        'START_NOTIFICATION_WORKER': False,
        'RATELIMIT_ENABLED': False,
    })
    yield app, socketio
    _drain_notifications()
    sid_to_user_map.clear()


@pytest.fixture
def app(app_and_socketio):
    return app_and_socketio[0]


@pytest.fixture
def client(app):
    return app.test_client()


def _drain_notifications():
    messages = []
    while True:
        try:
            messages.append(notification_queue.get_nowait())
        except queue.Empty:
            return messages


def _create_game(client, names=("Alice", "Bob")):
    response = client.post('/games', json={'players': list(names)})
    assert response.status_code == 201
    return response.get_json()


def _events(received, name):
    return [event['args'][0] for event in received if event['name'] == name]


# --- REST ---

def test_ping(client):
    response = client.get('/ping')
    assert response.status_code == 200
    assert response.get_json()['message'] == "pong"


def test_create_game_returns_tokens(client):
    data = _create_game(client, ["Alice", "Bob", "Carol"])

    assert data['status'] == "success"
    assert [p['display_name'] for p in data['players']] == ["Alice", "Bob", "Carol"]
    assert [p['color'] for p in data['players']] == ["RED", "BLUE", "WHITE"]
    assert all(p['access_token'] for p in data['players'])

    events = [m['event'] for m in _drain_notifications() if m['room'] == data['game_id']]
    assert events == ['current_game_state', 'game_progress']


@pytest.mark.parametrize("payload, code", [
    (None, "GENERIC_BAD_REQUEST"),
    ({'players': ["Alice", "Alice"]}, "GAME_VALIDATION_ERROR"),
    ({'players': ["Solo"]}, "GAME_VALIDATION_ERROR"),
    ({'players': ["A", "B", "C", "D", "E"]}, "GAME_VALIDATION_ERROR"),
])
def test_create_game_rejects_bad_input(client, payload, code):
    response = client.post('/games', json=payload) if payload is not None else client.post('/games')
    assert response.status_code == 400
    assert response.get_json()['code'] == code


def test_get_game_state(client):
    game_id = _create_game(client)['game_id']

    response = client.get(f'/games/{game_id}')
    assert response.status_code == 200
    state = response.get_json()['state']
    assert len(state['hexagons']) == 19
    assert len(state['intersections']) == 54
    assert len(state['connections']) == 72
    assert state['is_setup_phase'] is True


def test_get_unknown_game(client):
    response = client.get('/games/missing')
    assert response.status_code == 404
    assert response.get_json()['code'] == "NO_SUCH_GAME"


# --- Socket.IO ---

def _connect(app_and_socketio, token):
    app, socketio = app_and_socketio
    return socketio.test_client(app, auth={'token': token})


def test_socket_connect_with_match_token(app_and_socketio):
    app, _ = app_and_socketio
    data = _create_game(app.test_client())
    alice = data['players'][0]

    sio = _connect(app_and_socketio, alice['access_token'])
    assert sio.is_connected()
    connected = _events(sio.get_received(), 'connected')
    assert connected == [{'game_id': data['game_id'], 'player_id': alice['id']}]
    sio.disconnect()


@pytest.mark.parametrize("token", [None, "not-a-jwt"])
def test_socket_connect_rejected(app_and_socketio, token):
    app, socketio = app_and_socketio
    sio = socketio.test_client(app, auth={'token': token} if token else None)
    assert not sio.is_connected()


def test_socket_connect_rejected_for_removed_game(app_and_socketio):
    app, _ = app_and_socketio
    data = _create_game(app.test_client())
    app.game_service.finalize_game(data['game_id'])

    sio = _connect(app_and_socketio, data['players'][0]['access_token'])
    assert not sio.is_connected()


def test_socket_move_applied_and_broadcast_queued(app_and_socketio):
    app, _ = app_and_socketio
    data = _create_game(app.test_client())
    sio = _connect(app_and_socketio, data['players'][0]['access_token'])
    sio.get_received()
    _drain_notifications()

    sio.emit('make_move', {'type': 'build_village', 'intersection_id': 0})

    assert _events(sio.get_received(), 'move_rejection') == []
    queued = _drain_notifications()
    assert [m['event'] for m in queued] == ['current_game_state']
    assert queued[0]['room'] == data['game_id']
    assert queued[0]['payload']['intersections'][0]['building_type'] == "VILLAGE"
    sio.disconnect()


@pytest.mark.parametrize("move, code", [
    ({'type': 'end_turn'}, "NOT_ACTIVE_PLAYER"),
    ({'type': 'roll_dice', 'dice_roll': 6}, "INVALID_GAME_MOVE"),
    ({'type': 'trade'}, "UNSUPPORTED_GAME_MOVE"),
    ({'type': 'build_road', 'connection_id': "x"}, "INVALID_PAYLOAD"),
])
def test_socket_move_rejected(app_and_socketio, move, code):
    app, _ = app_and_socketio
    data = _create_game(app.test_client())
    sio = _connect(app_and_socketio, data['players'][0]['access_token'])
    sio.get_received()

    sio.emit('make_move', move)

    rejections = _events(sio.get_received(), 'move_rejection')
    assert len(rejections) == 1
    assert rejections[0]['code'] == code
    sio.disconnect()


def test_socket_move_out_of_turn(app_and_socketio):
    app, _ = app_and_socketio
    data = _create_game(app.test_client())
    sio = _connect(app_and_socketio, data['players'][1]['access_token'])
    sio.get_received()

    sio.emit('make_move', {'type': 'build_village', 'intersection_id': 0})

    rejections = _events(sio.get_received(), 'move_rejection')
    assert rejections[0]['code'] == "NOT_ACTIVE_PLAYER"
    assert "Alice" in rejections[0]['message']
    assert app.game_service.get_game_state(data['game_id'])['intersections'][0]['owner'] is None
    sio.disconnect()


def test_socket_request_game_state(app_and_socketio):
    app, _ = app_and_socketio
    data = _create_game(app.test_client())
    sio = _connect(app_and_socketio, data['players'][0]['access_token'])
    sio.get_received()

    sio.emit('request_game_state')

    states = _events(sio.get_received(), 'current_game_state')
    assert len(states) == 1
    assert [p['display_name'] for p in states[0]['players']] == ["Alice", "Bob", "Bob", "Alice"]
    sio.disconnect()


def test_disconnect_clears_session(app_and_socketio):
    app, _ = app_and_socketio
    data = _create_game(app.test_client())
    sio = _connect(app_and_socketio, data['players'][0]['access_token'])
    assert len(sid_to_user_map) == 1

    sio.disconnect()
    assert sid_to_user_map == {}
