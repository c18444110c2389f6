# catan_server/game_core/moves.py

from dataclasses import dataclass


@dataclass(frozen=True)
class RollDiceMove:
    dice_roll: int


@dataclass(frozen=True)
class BuildRoadMove:
    connection_id: int


@dataclass(frozen=True)
class BuildVillageMove:
    intersection_id: int


@dataclass(frozen=True)
class EndTurnMove:
    pass


# Тег на проводе -> класс хода. Все, что не здесь, отклоняется.
MOVE_TYPES = {
    'roll_dice': RollDiceMove,
    'build_road': BuildRoadMove,
    'build_village': BuildVillageMove,
    'end_turn': EndTurnMove,
}

