# catan_server/game_core/board.py

import math
import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from . import constants as c
from .constants import BuildingType, HexagonType, ResourceType
from .player import Player

ConnectionKey = Tuple[int, int]
Point = Tuple[float, float]
HexagonLayout = Sequence[Tuple[HexagonType, int]]


@dataclass
class Hexagon:
    hexagon_type: HexagonType
    distribution: Dict[ResourceType, int]
    roll_value: int
    id: int


@dataclass
class Intersection:
    intersection_id: int
    row: int
    col: int
    building_type: BuildingType = BuildingType.EMPTY
    player: Optional[Player] = None


@dataclass
class Connection:
    connection_id: int
    intersections: ConnectionKey
    player: Optional[Player] = None


def connection_key(first: int, second: int) -> ConnectionKey:
    """Канонический ключ ребра: (i, j) и (j, i) дают одно и то же."""
    return (first, second) if first < second else (second, first)


# --- Раскладки гексов ---

def standard_layout() -> List[Tuple[HexagonType, int]]:
    return _pair_layout(c.STANDARD_HEXAGON_TYPES, c.STANDARD_ROLL_VALUES)


def generate_random_layout(rng: Optional[random.Random] = None) -> List[Tuple[HexagonType, int]]:
    """Перемешивает стандартные гексы и номера бросков."""
    rng = rng or random.Random()
    hexagon_types = list(c.STANDARD_HEXAGON_TYPES)
    roll_values = list(c.STANDARD_ROLL_VALUES)
    rng.shuffle(hexagon_types)
    rng.shuffle(roll_values)
    return _pair_layout(hexagon_types, roll_values)


def _pair_layout(hexagon_types, roll_values) -> List[Tuple[HexagonType, int]]:
    layout = []
    values = iter(roll_values)
    for hexagon_type in hexagon_types:
        if hexagon_type is HexagonType.DESERT:
            layout.append((hexagon_type, c.DESERT_ROLL_VALUE))
        else:
            layout.append((hexagon_type, next(values)))
    return layout


# --- Геометрия (вычисляется один раз, общая для всех досок) ---

def _hexagon_axial_coords(radius: int) -> List[Tuple[int, int]]:
    coords = []
    for q in range(-radius, radius + 1):
        r_min = max(-radius, -q - radius)
        r_max = min(radius, -q + radius)
        for r in range(r_min, r_max + 1):
            coords.append((q, r))
    # Ряды сверху вниз, внутри ряда слева направо
    coords.sort(key=lambda item: (item[1], item[0]))
    return coords


def _hexagon_corners(q: int, r: int) -> List[Point]:
    center_x = math.sqrt(3) * (q + r / 2)
    center_y = 1.5 * r
    corners = []
    for corner_index in range(6):
        angle = math.radians(60 * corner_index - 30)
        corners.append((
            round(center_x + math.cos(angle), c.CORNER_ROUNDING),
            round(center_y + math.sin(angle), c.CORNER_ROUNDING),
        ))
    return corners


def _build_geometry():
    """
    Раскладывает 54 перекрестка в разреженную таблицу 6 x 11.
    Каждый "ряд" таблицы - это зигзаг из двух соседних уровней по Y,
    поэтому ширины рядов 7, 9, 11, 11, 9, 7 (ряд центрируется).
    ID перекрестка - порядковый номер занятой клетки при обходе по строкам.
    """
    hexagon_corners = [_hexagon_corners(q, r) for q, r in _hexagon_axial_coords(c.BOARD_RADIUS)]

    points = {point for corners in hexagon_corners for point in corners}
    levels = sorted({y for _, y in points})

    rows: Dict[int, List[Point]] = {}
    for point in points:
        rows.setdefault(levels.index(point[1]) // 2, []).append(point)

    point_to_cell: Dict[Point, Tuple[int, int]] = {}
    for row, row_points in rows.items():
        row_points.sort()
        offset = (c.INTERSECTION_COLS - len(row_points)) // 2
        for rank, point in enumerate(row_points):
            point_to_cell[point] = (row, rank + offset)

    cells = sorted(point_to_cell.values())
    cell_to_id = {cell: intersection_id for intersection_id, cell in enumerate(cells)}
    point_to_id = {point: cell_to_id[cell] for point, cell in point_to_cell.items()}

    hexagon_intersections = []
    connection_keys = set()
    for corners in hexagon_corners:
        ids = [point_to_id[point] for point in corners]
        hexagon_intersections.append(tuple(sorted(ids)))
        for first, second in zip(ids, ids[1:] + ids[:1]):
            connection_keys.add(connection_key(first, second))

    return cells, hexagon_intersections, sorted(connection_keys)


INTERSECTION_CELLS, HEXAGON_INTERSECTIONS, CONNECTION_KEYS = _build_geometry()


class Board:
    """
    Игровое поле: гексы, перекрестки и дороги между ними.
    Проверяет только геометрию и занятость клеток; чей сейчас ход,
    доска не знает (это забота GameLogicController).
    """

    def __init__(self, hexagon_layout: Optional[HexagonLayout] = None):
        layout = list(hexagon_layout) if hexagon_layout is not None else standard_layout()
        if len(layout) != len(HEXAGON_INTERSECTIONS):
            raise ValueError(f"Expected {len(HEXAGON_INTERSECTIONS)} hexagons, received {len(layout)}.")

        self.hexagons: List[Hexagon] = [
            Hexagon(hexagon_type, dict(c.HEXAGON_DISTRIBUTION[hexagon_type]), roll_value, hexagon_id)
            for hexagon_id, (hexagon_type, roll_value) in enumerate(layout)
        ]

        self.intersections: List[List[Optional[Intersection]]] = [
            [None] * c.INTERSECTION_COLS for _ in range(c.INTERSECTION_ROWS)
        ]
        self._intersections_by_id: List[Intersection] = []
        for intersection_id, (row, col) in enumerate(INTERSECTION_CELLS):
            intersection = Intersection(intersection_id, row, col)
            self.intersections[row][col] = intersection
            self._intersections_by_id.append(intersection)

        # Матрица смежности хранится как словарь по каноническому ключу
        self.connections: Dict[ConnectionKey, Connection] = {}
        self._connections_by_id: List[Connection] = []
        self._neighbours: Dict[int, List[int]] = {i: [] for i in range(len(INTERSECTION_CELLS))}
        for connection_id, key in enumerate(CONNECTION_KEYS):
            connection = Connection(connection_id, key)
            self.connections[key] = connection
            self._connections_by_id.append(connection)
            self._neighbours[key[0]].append(key[1])
            self._neighbours[key[1]].append(key[0])

        self._hexagons_of: Dict[int, List[int]] = {i: [] for i in range(len(INTERSECTION_CELLS))}
        for hexagon_id, intersection_ids in enumerate(HEXAGON_INTERSECTIONS):
            for intersection_id in intersection_ids:
                self._hexagons_of[intersection_id].append(hexagon_id)

        self.is_setup_phase = True
        # player_id -> деревня из фазы расстановки, к которой еще не проложена дорога
        self._pending_setup_villages: Dict[str, int] = {}

    # --- Доступ ---

    def set_setup_phase(self, is_setup_phase: bool):
        self.is_setup_phase = is_setup_phase

    def get_intersection(self, intersection_id: int) -> Optional[Intersection]:
        if not _is_valid_index(intersection_id, len(self._intersections_by_id)):
            return None
        return self._intersections_by_id[intersection_id]

    def get_connection(self, connection_id: int) -> Optional[Connection]:
        if not _is_valid_index(connection_id, len(self._connections_by_id)):
            return None
        return self._connections_by_id[connection_id]

    def get_connection_id_from_intersections(self, first: int, second: int) -> Optional[int]:
        connection = self.connections.get(connection_key(first, second))
        return connection.connection_id if connection else None

    def get_intersections_of_connection(self, connection_id: int) -> Optional[ConnectionKey]:
        connection = self.get_connection(connection_id)
        return connection.intersections if connection else None

    def neighbours_of(self, intersection_id: int) -> List[int]:
        return list(self._neighbours.get(intersection_id, []))

    def hexagons_of(self, intersection_id: int) -> List[Hexagon]:
        return [self.hexagons[hexagon_id] for hexagon_id in self._hexagons_of.get(intersection_id, [])]

    def iter_intersections(self):
        """Перекрестки в порядке ID (он же порядок обхода таблицы по строкам)."""
        return iter(self._intersections_by_id)

    # --- Постройки ---

    def add_new_road(self, player: Player, connection_id: int) -> bool:
        connection = self.get_connection(connection_id)
        if connection is None or connection.player is not None:
            return False

        if self.is_setup_phase:
            # В расстановке дорога обязана идти от только что поставленной деревни
            pending_village = self._pending_setup_villages.get(player.player_id)
            if pending_village is None or pending_village not in connection.intersections:
                return False
            del self._pending_setup_villages[player.player_id]
        elif not self._is_road_connected(player, connection):
            return False

        connection.player = player
        return True

    def add_new_village(self, player: Player, intersection_id: int) -> bool:
        intersection = self.get_intersection(intersection_id)
        if intersection is None or intersection.building_type is not BuildingType.EMPTY:
            return False

        neighbours = self._neighbours[intersection_id]
        # Правило расстояния: соседние перекрестки должны быть пустыми
        for neighbour_id in neighbours:
            if self._intersections_by_id[neighbour_id].building_type is not BuildingType.EMPTY:
                return False

        if not self.is_setup_phase:
            has_own_road = any(
                self.connections[connection_key(intersection_id, neighbour_id)].player == player
                for neighbour_id in neighbours
            )
            if not has_own_road:
                return False

        intersection.building_type = BuildingType.VILLAGE
        intersection.player = player
        if self.is_setup_phase:
            self._pending_setup_villages[player.player_id] = intersection_id
        return True

    def _is_road_connected(self, player: Player, connection: Connection) -> bool:
        for intersection_id in connection.intersections:
            intersection = self._intersections_by_id[intersection_id]
            if intersection.player is not None:
                if intersection.player == player:
                    return True
                # Чужая постройка разрывает дорожную сеть
                continue
            for neighbour_id in self._neighbours[intersection_id]:
                other = self.connections[connection_key(intersection_id, neighbour_id)]
                if other is not connection and other.player == player:
                    return True
        return False

    # --- Ресурсы ---

    def distribute_resources_by_dice_roll(self, dice_roll: int):
        """
        Каждый гекс с roll_value == dice_roll выплачивает свою раздачу
        владельцу каждого соседнего занятого перекрестка (по разу на перекресток).
        """
        for hexagon in self.hexagons:
            if hexagon.roll_value != dice_roll or not hexagon.distribution:
                continue
            for intersection_id in HEXAGON_INTERSECTIONS[hexagon.id]:
                owner = self._intersections_by_id[intersection_id].player
                if owner is not None:
                    owner.adjust_resources(hexagon.distribution)


def _is_valid_index(value, size: int) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value < size
