# catan_server/game_core/dtos.py
"""
Полезные нагрузки, которые ядро отправляет через уведомитель.
Каждая запись знает имя своего события и умеет превращаться в dict.
"""

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, List, Optional

PlayerDto = Dict[str, Any]


@dataclass
class HexagonDto:
    hexagon_type: str
    distribution: Dict[str, int]
    roll_value: int
    id: int


@dataclass
class IntersectionDto:
    owner: Optional[PlayerDto]
    building_type: str
    id: int


@dataclass
class ConnectionDto:
    owner: Optional[PlayerDto]
    id: int


@dataclass
class GameProgressDto:
    EVENT = 'game_progress'

    players: List[PlayerDto] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class CurrentGameStateDto:
    EVENT = 'current_game_state'

    hexagons: List[HexagonDto]
    intersections: List[IntersectionDto]
    connections: List[ConnectionDto]
    players: List[PlayerDto]
    is_setup_phase: bool

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class GameOverDto:
    EVENT = 'game_over'

    winner: PlayerDto

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
