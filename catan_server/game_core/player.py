# catan_server/game_core/player.py

from typing import Dict, Optional, Any

from .constants import ResourceType


class Player:
    """
    Игрок внутри одного матча: идентичность, инвентарь ресурсов
    и победные очки. Сравнение игроков идет по player_id, а не по ссылке.
    """

    def __init__(self, player_id: str, display_name: str, color: Optional[str] = None):
        self.player_id = player_id
        self.display_name = display_name
        self.color = color
        self.resources: Dict[ResourceType, int] = {resource: 0 for resource in ResourceType}
        self.victory_points: int = 0

    def resources_sufficient(self, cost: Dict[ResourceType, int]) -> bool:
        """Хватает ли ресурсов, чтобы оплатить cost (значения положительные)."""
        for resource, amount in cost.items():
            if self.resources.get(resource, 0) < amount:
                return False
        return True

    def adjust_resources(self, delta: Dict[ResourceType, int]):
        """
        Применяет знаковую дельту к инвентарю.
        Либо применяется целиком, либо (при уходе в минус) не применяется вовсе.
        """
        for resource, amount in delta.items():
            if self.resources.get(resource, 0) + amount < 0:
                raise ValueError(
                    f"Player {self.player_id}: {resource.value} would drop below zero"
                )
        for resource, amount in delta.items():
            self.resources[resource] = self.resources.get(resource, 0) + amount

    def increase_victory_points(self, amount: int):
        if amount < 0:
            raise ValueError("Victory points cannot decrease")
        self.victory_points += amount

    def to_ingame_player_dto(self) -> Dict[str, Any]:
        return {
            'id': self.player_id,
            'display_name': self.display_name,
            'color': self.color,
            'victory_points': self.victory_points,
            'resources': {resource.value: count for resource, count in self.resources.items()},
        }

    def __eq__(self, other):
        if not isinstance(other, Player):
            return NotImplemented
        return self.player_id == other.player_id

    def __hash__(self):
        return hash(self.player_id)

    def __repr__(self):
        return f"Player({self.player_id!r}, {self.display_name!r})"
