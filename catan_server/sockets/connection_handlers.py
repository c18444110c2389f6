# catan_server/sockets/connection_handlers.py
import datetime
from flask import request, current_app
from flask_socketio import emit, join_room
from flask_jwt_extended import decode_token
from jwt.exceptions import ExpiredSignatureError, DecodeError
from ..extensions import socketio
from ..globals import sid_to_user, sid_to_user_lock, log_event
from ..game_core import NoSuchGameError


def _reject(sid, message):
    """Отклоняет подключение (return False из обработчика connect)."""
    print(f"Клиент {sid}: подключение отклонено ({message}).")
    return False


@socketio.on('connect')
def handle_connect(auth):
    sid = request.sid
    token = auth.get('token') if auth else None

    if not token:
        return _reject(sid, 'No token provided.')

    try:
        decoded_token = decode_token(token)
        player_id = decoded_token['sub']
        game_id = decoded_token['game_id']
    except (ExpiredSignatureError, DecodeError, KeyError):
        return _reject(sid, 'Invalid or expired token.')

    try:
        game = current_app.game_service.get_game(game_id)
    except NoSuchGameError as e:
        return _reject(sid, e.message)

    player = game.get_player(player_id)
    if player is None:
        return _reject(sid, 'Player is not part of this game.')

    with sid_to_user_lock:
        sid_to_user[sid] = {
            "username": player.display_name,
            "player_id": player_id,
            "game_id": game_id,
            "connect_time": datetime.datetime.now()
        }

    # Комната матча = канал рассылки состояния
    join_room(game_id)
    log_event("SESSION_START", f"Player '{player.display_name}' joined game room.", sid=sid, game_id=game_id)

    emit('connected', {'game_id': game_id, 'player_id': player_id})


@socketio.on('disconnect')
def handle_disconnect(*args):
    sid = request.sid
    duration_str = "N/A"

    with sid_to_user_lock:
        user_data = sid_to_user.pop(sid, None)

    if not user_data:
        log_event("SESSION_END", "Disconnected (pre-auth or already popped).", sid=sid)
        return

    connect_time = user_data.get("connect_time")
    if connect_time:
        duration = datetime.datetime.now() - connect_time
        duration_str = str(datetime.timedelta(seconds=int(duration.total_seconds())))

    log_event(
        "SESSION_END",
        f"Player '{user_data.get('username', 'N/A')}' disconnected. Session duration: {duration_str}",
        game_id=user_data.get("game_id")
    )
