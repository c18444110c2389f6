# catan_server/services/game_registry.py

import threading
from typing import Optional, Dict, Any

class GameRegistry:
    """
    Отвечает ИСКЛЮЧИТЕЛЬНО за хранение и поиск активных матчей.
    Потокобезопасен.
    """
    def __init__(self, log_event_func=None):
        self.games: Dict[str, Any] = {} # game_id -> GameLogicController

        self.lock = threading.RLock()
        self.log_event = log_event_func or (lambda *args, **kwargs: None)

    def add_game(self, game):
        """Регистрирует новый матч."""
        game_id = game.game_id
        with self.lock:
            if game_id in self.games:
                self.log_event("REGISTRY_WARN", f"Игра {game_id} уже существует при добавлении.", game_id=game_id)
                return

            self.games[game_id] = game
            self.log_event("REGISTRY_ADD", f"Игра {game_id} добавлена. Всего игр: {len(self.games)}", game_id=game_id)

    def remove_game_by_id(self, game_id: str):
        """Удаляет матч из реестра (завершение процесса/матча)."""
        if not game_id:
            return

        with self.lock:
            if self.games.pop(game_id, None) is None:
                self.log_event("REGISTRY_WARN", f"Попытка удалить несуществующую игру {game_id}", game_id=game_id)
                return

            self.log_event("REGISTRY_REMOVE", f"Игра {game_id} удалена. Осталось игр: {len(self.games)}", game_id=game_id)

    def get_by_game_id(self, game_id: str) -> Optional[Any]:
        """Получить матч по ID игры."""
        with self.lock:
            return self.games.get(game_id)

    def count(self) -> int:
        with self.lock:
            return len(self.games)
