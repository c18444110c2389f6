import logging
from flask import Flask
from .extensions import (
    socketio,
    limiter,
    jwt,
    notification_queue
)
from .globals import log_event
from .workers import start_notification_consumer

# Получаем логгер
logger = logging.getLogger(__name__)

def _configure_logging(app):
    """Настраивает файловый логгер."""
    file_handler = logging.FileHandler(app.config['LOG_FILE'], encoding='utf-8')
    file_handler.setLevel(logging.INFO)
    app.logger.addHandler(file_handler)
    app.logger.setLevel(logging.INFO)
    logger.info("Файловый логгер настроен.")

def _init_extensions(app):
    """Инициализирует расширения Flask."""
    socketio.init_app(app, async_mode=app.config['SOCKETIO_ASYNC_MODE'])
    limiter.init_app(app)
    jwt.init_app(app)
    logger.info("Расширения Flask (SocketIO, Limiter, JWT) инициализированы.")

def _init_services(app):
    """Инициализирует и внедряет сервисы приложения."""

    # Импорты сервисов лучше делать здесь, чтобы избежать
    # циклических зависимостей, если сервисам нужен 'app'.
    from .services.game_service import GameService
    from .services.game_factory import GameFactory
    from .services.game_registry import GameRegistry
    from .services.progress_notifier import QueueProgressNotifier
    from .services.logging_service import log_match_stats

    registry = GameRegistry(log_event_func=log_event)

    game_factory = GameFactory(
        config=app.config,
        log_event=log_event,
        notifier=QueueProgressNotifier(notification_queue)
    )

    game_service = GameService(
        registry=registry,
        factory=game_factory,
        log_event=log_event,
        log_stats=log_match_stats
    )

    # Прикрепляем главный сервис к экземпляру приложения
    app.game_service = game_service
    logger.info("Игровые сервисы (GameService, Factory, Registry) инициализированы.")

def _register_blueprints(app):
    """Регистрирует все маршруты API (Blueprints)."""
    from .api.game_routes import bp as game_bp
    app.register_blueprint(game_bp)

    from .api.main_routes import bp as main_bp
    app.register_blueprint(main_bp)

    logger.info("Blueprints (маршруты API) зарегистрированы.")

def _register_socketio_handlers():
    """
    Импортирует обработчики SocketIO для их регистрации.
    """
    # Этот импорт регистрирует обработчики в экземпляре socketio
    from .sockets import connection_handlers
    from .sockets import game_handlers
    logger.info("Обработчики SocketIO (connection, game) зарегистрированы.")

def create_app(test_config=None):
    """
    Фабрика приложений (Паттерн Application Factory).
    """

    app = Flask(__name__, instance_relative_config=True)

    # 1. Загрузка конфигурации
    app.config.from_object('catan_server.config.Config')
    app.config.from_pyfile('config.py', silent=True)
    if test_config:
        app.config.from_mapping(test_config)

    # 2. Настройка логирования
    _configure_logging(app)

    # 3. Регистрация обработчиков SocketIO (до init_app, иначе новый
    # экземпляр сервера в следующем приложении их не получит)
    _register_socketio_handlers()

    # 4. Инициализация расширений
    _init_extensions(app)

    # 5. Инициализация сервисов
    _init_services(app)

    # 6. Регистрация Blueprints (маршрутов API)
    _register_blueprints(app)

    # 7. Запуск фонового воркера
    if app.config['START_NOTIFICATION_WORKER']:
        logger.info("Запуск фонового потока-потребителя (QueueConsumer)...")
        start_notification_consumer(socketio, notification_queue)

    app.logger.info("Приложение 'catan-server' создано.")
    app.logger.info(f"Путь к логам: {app.config['LOG_FILE']}")

    return app, socketio
