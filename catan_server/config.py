# catan_server/config.py

import os
import datetime

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))

class Config:
    """Базовый класс конфигурации (безопасные значения)."""

    JWT_SECRET_KEY = 'super-secret-default-key-SHOULD-BE-CHANGED'
    JWT_ACCESS_TOKEN_EXPIRES = datetime.timedelta(hours=12)

    LOG_FILE = 'application.log'
    STATS_LOG_FILE = 'match_stats.log'

    # --- Правила матча ---
    VICTORY_POINTS_FOR_VICTORY = 10
    RANDOMIZE_BOARD = False
    MIN_PLAYERS = 2
    MAX_PLAYERS = 4

    # --- Инфраструктура ---
    SOCKETIO_ASYNC_MODE = None  # None = автоопределение (eventlet, если установлен)
    START_NOTIFICATION_WORKER = True
    RATELIMIT_ENABLED = True
