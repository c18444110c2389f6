# catan_server/sockets/game_handlers.py

from flask import request, current_app
from flask_socketio import emit
from marshmallow import ValidationError
from ..extensions import socketio
from ..globals import sid_to_user, sid_to_user_lock, log_event
from ..game_core import GameError
from ..api.schemas import load_move


def _get_session(sid):
    with sid_to_user_lock:
        user_data = sid_to_user.get(sid)
        return dict(user_data) if user_data else None


@socketio.on('make_move')
def handle_make_move(data=None):
    """
    Принимает ход игрока {'type': ..., ...}.
    Успех - рассылка состояния идет через очередь в комнату матча;
    нарушение правил - 'move_rejection' только этому клиенту.
    """
    game_service = current_app.game_service
    sid = request.sid

    session = _get_session(sid)
    if not session:
        print(f"[SocketHandler] {sid} отправил 'make_move' без сессии.")
        emit('move_rejection', {'code': 'NO_SESSION', 'message': 'Server session error.'})
        return

    game_id = session['game_id']

    try:
        move = load_move(data)
        game_service.submit_move(game_id, move, session['player_id'])
    except ValidationError as err:
        emit('move_rejection', {'code': 'INVALID_PAYLOAD', 'message': str(err.messages)})
    except GameError as err:
        log_event("MOVE_REJECTED", err.message, sid=sid, game_id=game_id, extra_data=err.code)
        emit('move_rejection', {'code': err.code, 'message': err.message})


@socketio.on('request_game_state')
def handle_request_game_state(data=None):
    """Отправляет снимок состояния только запросившему клиенту."""
    sid = request.sid
    session = _get_session(sid)
    if not session:
        emit('move_rejection', {'code': 'NO_SESSION', 'message': 'Server session error.'})
        return

    try:
        state = current_app.game_service.get_game_state(session['game_id'])
    except GameError as err:
        emit('move_rejection', {'code': err.code, 'message': err.message})
        return

    emit('current_game_state', state)
