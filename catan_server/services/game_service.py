# catan_server/services/game_service.py

from typing import Optional, Dict, Any, List, Callable

from ..game_core import (
    ErrorCode,
    GameLogicController,
    NoSuchGameError,
    NotActivePlayerError,
)
from .game_registry import GameRegistry
from .game_factory import GameFactory


class GameService:
    """
    Фасад, координирующий высокоуровневые игровые действия.
    Не владеет состоянием матчей, а делегирует его реестру и контроллерам.
    """

    def __init__(self,
                 registry: GameRegistry,
                 factory: GameFactory,
                 log_event: Optional[Callable] = None,
                 log_stats: Optional[Callable] = None):
        """
        Инициализируется через Внедрение Зависимостей (Dependency Injection).
        """
        self.registry = registry
        self.factory = factory
        self.log_event = log_event or (lambda *args, **kwargs: None)
        self.log_stats = log_stats or (lambda stats: None)

    ### Публичный API (Прокси к Registry) ###

    def get_game(self, game_id: str) -> GameLogicController:
        """Возвращает матч или выбрасывает NoSuchGameError."""
        game = self.registry.get_by_game_id(game_id)
        if game is None:
            raise NoSuchGameError(ErrorCode.ERROR_NO_SUCH_GAME.format(game_id))
        return game

    def get_game_state(self, game_id: str) -> Dict[str, Any]:
        return self.get_game(game_id).current_game_state().to_dict()

    def finalize_game(self, game_id: str) -> None:
        """Принудительно удаляет матч (вызывается извне при завершении)."""
        self.registry.remove_game_by_id(game_id)

    ### Создание игр ###

    def create_game(self, player_names: List[str]) -> GameLogicController:
        game = self.factory.create_game(player_names)
        self.registry.add_game(game)
        return game

    ### Ходы ###

    def submit_move(self, game_id: str, move, player_id: str) -> None:
        """
        Применяет ход игрока. Успех - состояние изменено и уведомления
        поставлены в очередь; иначе GameError без каких-либо изменений.
        """
        game = self.get_game(game_id)

        player = game.get_player(player_id)
        if player is None:
            raise NotActivePlayerError(
                ErrorCode.ERROR_NOT_ACTIVE_PLAYER.format(game.players[0].display_name)
            )

        with game.lock:
            was_over = game.gameover
            game.make_move(move, player)
            finished_now = game.gameover and not was_over

        self.log_event("MOVE_APPLIED", f"{type(move).__name__} by {player.display_name}", game_id=game_id)

        if finished_now:
            self._handle_game_over(game)

    def _handle_game_over(self, game: GameLogicController):
        self.log_event("GAME_OVER", f"Победитель: {game.winner.display_name}", game_id=game.game_id)
        self.log_stats({
            'game_id': game.game_id,
            'winner': game.winner.display_name,
            'players': [
                {'name': player.display_name, 'victory_points': player.victory_points}
                for player in game.players
            ]
        })
