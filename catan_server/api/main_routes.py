from flask import Blueprint, jsonify
from ..extensions import limiter

bp = Blueprint('main', __name__)

@bp.route('/ping', methods=['GET'])
@limiter.limit("20 per minute")
def handle_ping():
    """
    Простой эндпоинт для проверки доступности сервера.
    Клиент может использовать его перед попыткой WebSocket-соединения.
    """
    return jsonify({"status": "success", "message": "pong"}), 200
