# catan_server/extensions.py
"""
Инициализация расширений Flask и глобальных объектов.

Этот файл централизует создание экземпляров расширений (SocketIO, Limiter, JWT),
чтобы избежать циклических импортов и упростить управление в фабрике приложений (app factory).
"""

from flask_socketio import SocketIO
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_jwt_extended import JWTManager
import threading
import queue
from typing import Dict, Any

# --- Расширения Flask ---

# cors_allowed_origins="*" - разрешает все источники.
# Для production следует указать конкретные домены.
socketio = SocketIO(cors_allowed_origins="*", compress=True)

# Ограничение частоты запросов по IP-адресу клиента
limiter = Limiter(key_func=get_remote_address)

# JWT: токен матча выдается каждому игроку при создании игры
jwt = JWTManager()


# --- Глобальное управление состоянием ---

# { 'sid': {'player_id': ..., 'game_id': ..., 'username': ...}, ... }
sid_to_user_map: Dict[str, Any] = {}

# SocketIO обрабатывает каждого клиента в своем потоке
sid_to_user_lock = threading.Lock()

# Очередь уведомлений: ядро кладет, фоновый воркер рассылает.
# Ход никогда не ждет доставки.
notification_queue: queue.Queue = queue.Queue()
