# catan_server/services/game_factory.py

import uuid
import random
from typing import Dict, Any, Callable, List, Optional

from ..game_core import Board, GameLogicController, Player, generate_random_layout
from ..game_core.constants import PLAYER_COLORS
from .progress_notifier import QueueProgressNotifier


class GameFactory:

    def __init__(
        self,
        config: Dict[str, Any],
        log_event: Callable,
        notifier: QueueProgressNotifier,
        rng: Optional[random.Random] = None
    ):
        self.log_event = log_event
        self.notifier = notifier
        self.rng = rng or random.Random()

        # --- Извлекаем нужные ключи из внедренного конфига ---
        try:
            self.config = {
                'VICTORY_POINTS_FOR_VICTORY': config['VICTORY_POINTS_FOR_VICTORY'],
                'RANDOMIZE_BOARD': config['RANDOMIZE_BOARD'],
                'MIN_PLAYERS': config['MIN_PLAYERS'],
                'MAX_PLAYERS': config['MAX_PLAYERS']
            }
        except KeyError as e:
            raise KeyError(f"GameFactory: отсутствует ключ конфига {e} при внедрении.")

    def _create_players(self, player_names: List[str]) -> List[Player]:
        players = []
        for seat, name in enumerate(player_names):
            color = PLAYER_COLORS[seat % len(PLAYER_COLORS)]
            players.append(Player(str(uuid.uuid4()), name, color))
        return players

    def _create_board(self) -> Board:
        if self.config['RANDOMIZE_BOARD']:
            return Board(generate_random_layout(self.rng))
        return Board()

    def create_game(self, player_names: List[str]) -> GameLogicController:
        """
        Создает матч с фиксированным порядком игроков.
        Контроллер сразу рассылает стартовое состояние и очередность.
        """
        if not self.config['MIN_PLAYERS'] <= len(player_names) <= self.config['MAX_PLAYERS']:
            raise ValueError(
                f"A match needs {self.config['MIN_PLAYERS']}-{self.config['MAX_PLAYERS']} players, "
                f"got {len(player_names)}"
            )

        game_id = str(uuid.uuid4())

        game = GameLogicController(
            players=self._create_players(player_names),
            notifier=self.notifier,
            game_id=game_id,
            board=self._create_board(),
            victory_points_for_victory=self.config['VICTORY_POINTS_FOR_VICTORY'],
            log_event=self.log_event
        )

        self.log_event("GAME_CREATED", f"Игра {game_id} создана для {', '.join(player_names)}", game_id=game_id)
        return game
