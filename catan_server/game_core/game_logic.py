# catan_server/game_core/game_logic.py

import threading
from enum import Enum
from typing import Callable, List, Optional, Protocol

from . import constants as c
from .board import Board
from .dtos import (
    ConnectionDto,
    CurrentGameStateDto,
    GameOverDto,
    GameProgressDto,
    HexagonDto,
    IntersectionDto,
)
from .exceptions import (
    ErrorCode,
    GameAlreadyOverError,
    InvalidGameMoveError,
    NotActivePlayerError,
    UnsupportedGameMoveError,
)
from .moves import BuildRoadMove, BuildVillageMove, EndTurnMove, RollDiceMove
from .player import Player


class ProgressNotifier(Protocol):
    def notify(self, game_id: str, payload) -> None: ...


class GamePhase(str, Enum):
    SETUP = "SETUP"
    MAIN = "MAIN"
    GAMEOVER = "GAMEOVER"


class GameLogicController:
    """
    Конечный автомат одного матча: SETUP -> MAIN -> GAMEOVER.

    Проверяет фазу и активного игрока, передает изменения в Board/Player,
    проверяет победу и рассылает актуальное состояние через notifier.
    Любое нарушение правил выбрасывается ДО изменения состояния.
    """

    def __init__(
        self,
        players: List[Player],
        notifier: ProgressNotifier,
        game_id: str,
        board: Optional[Board] = None,
        victory_points_for_victory: int = c.VICTORY_POINTS_FOR_VICTORY,
        log_event: Optional[Callable] = None
    ):
        if not players:
            raise ValueError("A match needs at least one player")
        if len({player.player_id for player in players}) != len(players):
            raise ValueError("Player ids must be unique within a match")

        self._players: List[Player] = list(players)
        self._players_by_id = {player.player_id: player for player in self._players}
        self.notifier = notifier
        self.game_id = game_id
        self.board = board or Board()
        self.victory_points_for_victory = victory_points_for_victory
        self.log_event = log_event or (lambda *args, **kwargs: None)

        # Все ходы одного матча выполняются строго по очереди
        self.lock = threading.RLock()

        self.phase = GamePhase.SETUP
        self.board.set_setup_phase(True)
        self.winner: Optional[Player] = None

        self.setup_phase_turn_order: List[str] = []
        self.turn_order: List[str] = []
        self._generate_turn_orders()

        # Стартовое состояние и стартовая очередность
        self._send_current_game_state()
        self._send_turn_order(self.setup_phase_turn_order)

    # --- Свойства ---

    @property
    def players(self) -> List[Player]:
        return list(self._players)

    @property
    def is_setup_phase(self) -> bool:
        return self.phase is GamePhase.SETUP

    @property
    def gameover(self) -> bool:
        return self.phase is GamePhase.GAMEOVER

    def get_player(self, player_id: str) -> Optional[Player]:
        return self._players_by_id.get(player_id)

    # --- Публичный API ---

    def make_move(self, game_move, player: Player):
        with self.lock:
            if self.gameover:
                raise GameAlreadyOverError(
                    ErrorCode.ERROR_GAME_ALREADY_OVER.format(self._first_player_name())
                )

            if isinstance(game_move, RollDiceMove):
                if self.is_setup_phase:
                    raise InvalidGameMoveError(ErrorCode.ERROR_CANT_ROLL_IN_SETUP)
                self._check_active(self.turn_order, player)
                self._make_roll_dice_move(game_move)
            elif isinstance(game_move, BuildRoadMove):
                self._make_build_road_move(game_move, player)
            elif isinstance(game_move, BuildVillageMove):
                self._make_build_village_move(game_move, player)
            elif isinstance(game_move, EndTurnMove):
                if self.is_setup_phase:
                    raise NotActivePlayerError(
                        ErrorCode.ERROR_NOT_ACTIVE_PLAYER.format(self._first_player_name())
                    )
                self._check_active(self.turn_order, player)
                self._make_end_turn_move()
            else:
                raise UnsupportedGameMoveError(ErrorCode.ERROR_UNKNOWN_MOVE)

    def current_game_state(self) -> CurrentGameStateDto:
        """Снимок всего состояния, ровно тот, что уходит игрокам."""
        with self.lock:
            return self._build_current_game_state()

    # --- Ходы ---

    def _make_roll_dice_move(self, move: RollDiceMove):
        if not _is_int(move.dice_roll) or not c.MIN_DICE_ROLL <= move.dice_roll <= c.MAX_DICE_ROLL:
            raise InvalidGameMoveError(ErrorCode.ERROR_INVALID_DICE_ROLL)

        self.board.distribute_resources_by_dice_roll(move.dice_roll)
        # Рассылается очередность ФАЗЫ РАССТАНОВКИ (в основной фазе она пуста)
        self._send_turn_order(self.setup_phase_turn_order)

    def _make_end_turn_move(self):
        self.turn_order.append(self.turn_order.pop(0))
        self._send_turn_order(self.turn_order)

    def _make_build_road_move(self, move: BuildRoadMove, player: Player):
        if self.is_setup_phase:
            self._check_active(self.setup_phase_turn_order, player)

            if not self.board.add_new_road(player, move.connection_id):
                raise InvalidGameMoveError(ErrorCode.ERROR_CANT_BUILD_HERE.format("road"))

            # В расстановке ход заканчивается вместе с дорогой
            self.setup_phase_turn_order.pop(0)
            if not self.setup_phase_turn_order:
                self.phase = GamePhase.MAIN
                self.board.set_setup_phase(False)
                self.log_event("STATE_CHANGE", f"State -> {GamePhase.MAIN.value} (setup finished)", game_id=self.game_id)
            self._send_current_game_state()
            return

        self._check_active(self.turn_order, player)

        if not player.resources_sufficient(c.ROAD_COST):
            raise InvalidGameMoveError(ErrorCode.ERROR_NOT_ENOUGH_RESOURCES.format("road"))
        if not self.board.add_new_road(player, move.connection_id):
            raise InvalidGameMoveError(ErrorCode.ERROR_CANT_BUILD_HERE.format("road"))

        player.adjust_resources(_negate(c.ROAD_COST))
        self._send_current_game_state()

    def _make_build_village_move(self, move: BuildVillageMove, player: Player):
        if self.is_setup_phase:
            self._check_active(self.setup_phase_turn_order, player)

            if not self.board.add_new_village(player, move.intersection_id):
                raise InvalidGameMoveError(ErrorCode.ERROR_CANT_BUILD_HERE.format("village"))

            # Очередь расстановки НЕ сдвигается: это делает следующая дорога
            player.increase_victory_points(1)
            self._send_current_game_state()
            return

        self._check_active(self.turn_order, player)

        if not player.resources_sufficient(c.VILLAGE_COST):
            raise InvalidGameMoveError(ErrorCode.ERROR_NOT_ENOUGH_RESOURCES.format("village"))
        if not self.board.add_new_village(player, move.intersection_id):
            raise InvalidGameMoveError(ErrorCode.ERROR_CANT_BUILD_HERE.format("village"))

        player.adjust_resources(_negate(c.VILLAGE_COST))
        player.increase_victory_points(1)
        self._send_current_game_state()

        if player.victory_points >= self.victory_points_for_victory:
            self.phase = GamePhase.GAMEOVER
            self.winner = player
            self.log_event(
                "STATE_CHANGE",
                f"State -> {GamePhase.GAMEOVER.value} (winner: {player.display_name})",
                game_id=self.game_id
            )
            self.notifier.notify(self.game_id, GameOverDto(player.to_ingame_player_dto()))

    # --- Хелперы ---

    def _check_active(self, order: List[str], player: Player):
        if not order or player is None or order[0] != player.player_id:
            raise NotActivePlayerError(
                ErrorCode.ERROR_NOT_ACTIVE_PLAYER.format(self._first_player_name())
            )

    def _first_player_name(self) -> str:
        # Всегда имя первого игрока матча, независимо от того, кто ошибся
        return self._players[0].display_name

    def _generate_turn_orders(self):
        player_ids = [player.player_id for player in self._players]
        self.turn_order = list(player_ids)
        self.setup_phase_turn_order = player_ids + player_ids[::-1]

    def _send_turn_order(self, order: List[str]):
        players = [self._players_by_id[player_id].to_ingame_player_dto() for player_id in order]
        self.notifier.notify(self.game_id, GameProgressDto(players))

    def _send_current_game_state(self):
        self.notifier.notify(self.game_id, self._build_current_game_state())

    def _build_current_game_state(self) -> CurrentGameStateDto:
        hexagon_dtos = [
            HexagonDto(
                hexagon.hexagon_type.value,
                {resource.value: amount for resource, amount in hexagon.distribution.items()},
                hexagon.roll_value,
                hexagon.id
            )
            for hexagon in self.board.hexagons
        ]

        # Последовательные ID по обходу таблицы, независимо от координат хранения
        intersection_dtos = []
        next_id = 0
        for intersection_row in self.board.intersections:
            for intersection in intersection_row:
                if intersection is None:
                    continue
                owner = intersection.player.to_ingame_player_dto() if intersection.player else None
                intersection_dtos.append(IntersectionDto(owner, intersection.building_type.value, next_id))
                next_id += 1

        # Ключи канонические, поэтому каждая дорога встречается ровно один раз
        connection_dtos = [
            ConnectionDto(
                connection.player.to_ingame_player_dto() if connection.player else None,
                connection.connection_id
            )
            for connection in self.board.connections.values()
        ]
        connection_dtos.sort(key=lambda dto: dto.id)

        order = self.setup_phase_turn_order if self.is_setup_phase else self.turn_order
        player_dtos = [self._players_by_id[player_id].to_ingame_player_dto() for player_id in order]

        return CurrentGameStateDto(
            hexagon_dtos, intersection_dtos, connection_dtos, player_dtos, self.is_setup_phase
        )


def _negate(cost):
    return {resource: -amount for resource, amount in cost.items()}


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
