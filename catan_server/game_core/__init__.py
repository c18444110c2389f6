# catan_server/game_core/__init__.py

# "Публичный API" ядра правил
from .constants import (
    ResourceType, HexagonType, BuildingType,
    ROAD_COST, VILLAGE_COST, VICTORY_POINTS_FOR_VICTORY
)

from .board import (
    Board,
    Hexagon,
    Intersection,
    Connection,
    connection_key,
    standard_layout,
    generate_random_layout
)

from .player import Player

from .moves import (
    RollDiceMove,
    BuildRoadMove,
    BuildVillageMove,
    EndTurnMove,
    MOVE_TYPES
)

from .dtos import (
    GameProgressDto,
    CurrentGameStateDto,
    GameOverDto
)

from .exceptions import (
    ErrorCode,
    GameError,
    InvalidGameMoveError,
    GameAlreadyOverError,
    NotActivePlayerError,
    UnsupportedGameMoveError,
    NoSuchGameError
)

from .game_logic import (
    GameLogicController,
    GamePhase
)
