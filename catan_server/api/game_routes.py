# catan_server/api/game_routes.py

from flask import request, jsonify, Blueprint, current_app
from flask_jwt_extended import create_access_token
from marshmallow import ValidationError
from ..extensions import limiter
from ..game_core import GameError, NoSuchGameError
from .schemas import CreateGameSchema

bp = Blueprint('game_api', __name__)


@bp.errorhandler(NoSuchGameError)
def handle_no_such_game(err):
    return jsonify({"status": "error", "message": err.message, "code": err.code}), 404


@bp.errorhandler(GameError)
def handle_game_error(err):
    current_app.logger.error(err.message)
    return jsonify({"status": "error", "message": err.message, "code": err.code}), 400


@bp.route('/games', methods=['POST'])
@limiter.limit("20 per 10 minutes")
def handle_create_game():
    """
    Создает матч для заданного списка игроков (порядок = порядок ходов).
    Каждому игроку выдается JWT для подключения по WebSocket.
    """
    json_data = request.get_json(silent=True)
    if not json_data:
        return jsonify({
            "status": "error",
            "message": "Нет данных.",
            "code": "GENERIC_BAD_REQUEST"
        }), 400

    try:
        data = CreateGameSchema().load(json_data)
    except ValidationError as err:
        first_field_with_error = next(iter(err.messages))
        error_message = err.messages[first_field_with_error]
        return jsonify({
            "status": "error",
            "message": f"Validation failed on '{first_field_with_error}': {error_message}",
            "code": "GAME_VALIDATION_ERROR"
        }), 400

    try:
        game = current_app.game_service.create_game(data['players'])
    except ValueError as err:
        return jsonify({"status": "error", "message": str(err), "code": "GAME_VALIDATION_ERROR"}), 400

    players = []
    for player in game.players:
        token = create_access_token(
            identity=player.player_id,
            additional_claims={'game_id': game.game_id, 'display_name': player.display_name}
        )
        players.append({
            'id': player.player_id,
            'display_name': player.display_name,
            'color': player.color,
            'access_token': token
        })

    return jsonify({"status": "success", "game_id": game.game_id, "players": players}), 201


@bp.route('/games/<game_id>', methods=['GET'])
@limiter.limit("60 per minute")
def handle_get_game_state(game_id):
    """Текущий снимок состояния матча (тот же, что рассылается игрокам)."""
    state = current_app.game_service.get_game_state(game_id)
    return jsonify({"status": "success", "game_id": game_id, "state": state}), 200
