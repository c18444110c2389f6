# catan_server/game_core/constants.py

from enum import Enum


class ResourceType(str, Enum):
    WOOD = "WOOD"
    BRICK = "BRICK"
    SHEEP = "SHEEP"
    WHEAT = "WHEAT"
    ORE = "ORE"


class HexagonType(str, Enum):
    FOREST = "FOREST"
    HILLS = "HILLS"
    PASTURE = "PASTURE"
    FIELDS = "FIELDS"
    MOUNTAINS = "MOUNTAINS"
    DESERT = "DESERT"


class BuildingType(str, Enum):
    EMPTY = "EMPTY"
    VILLAGE = "VILLAGE"
    # Зарезервировано, ходом не создается
    CITY = "CITY"


# === Выплата ресурсов с одного гекса ===
HEXAGON_DISTRIBUTION = {
    HexagonType.FOREST: {ResourceType.WOOD: 1},
    HexagonType.HILLS: {ResourceType.BRICK: 1},
    HexagonType.PASTURE: {ResourceType.SHEEP: 1},
    HexagonType.FIELDS: {ResourceType.WHEAT: 1},
    HexagonType.MOUNTAINS: {ResourceType.ORE: 1},
    HexagonType.DESERT: {},
}

# === Стоимость построек ===
ROAD_COST = {ResourceType.BRICK: 1, ResourceType.WOOD: 1}
VILLAGE_COST = {
    ResourceType.BRICK: 1,
    ResourceType.WOOD: 1,
    ResourceType.SHEEP: 1,
    ResourceType.WHEAT: 1,
}

# === Правила ===
VICTORY_POINTS_FOR_VICTORY = 10
MIN_DICE_ROLL = 2
MAX_DICE_ROLL = 12

# Пустыня никогда не срабатывает
DESERT_ROLL_VALUE = 0

# === Стандартная раскладка (19 гексов, ряды 3-4-5-4-3, сверху вниз) ===
STANDARD_HEXAGON_TYPES = [
    HexagonType.MOUNTAINS, HexagonType.PASTURE, HexagonType.FOREST,
    HexagonType.FIELDS, HexagonType.HILLS, HexagonType.PASTURE, HexagonType.HILLS,
    HexagonType.FIELDS, HexagonType.FOREST, HexagonType.DESERT, HexagonType.FOREST, HexagonType.MOUNTAINS,
    HexagonType.FOREST, HexagonType.MOUNTAINS, HexagonType.FIELDS, HexagonType.PASTURE,
    HexagonType.HILLS, HexagonType.FIELDS, HexagonType.PASTURE,
]
STANDARD_ROLL_VALUES = [10, 2, 9, 12, 6, 4, 10, 9, 11, 3, 8, 8, 3, 4, 5, 5, 6, 11]

# === Геометрия ===
BOARD_RADIUS = 2
INTERSECTION_ROWS = 6
INTERSECTION_COLS = 11
CORNER_ROUNDING = 6

PLAYER_COLORS = ["RED", "BLUE", "WHITE", "ORANGE"]
