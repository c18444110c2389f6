import pytest

from catan_server.game_core import Player, ResourceType, ROAD_COST, VILLAGE_COST


def test_new_player_starts_empty():
    player = Player("p1", "Alice", "RED")
    assert all(count == 0 for count in player.resources.values())
    assert set(player.resources) == set(ResourceType)
    assert player.victory_points == 0


def test_resources_sufficient():
    player = Player("p1", "Alice")
    assert not player.resources_sufficient(ROAD_COST)

    player.adjust_resources({ResourceType.BRICK: 1, ResourceType.WOOD: 1})
    assert player.resources_sufficient(ROAD_COST)
    assert not player.resources_sufficient(VILLAGE_COST)


def test_adjust_resources_never_goes_negative():
    player = Player("p1", "Alice")
    player.adjust_resources({ResourceType.BRICK: 2})

    with pytest.raises(ValueError):
        player.adjust_resources({ResourceType.BRICK: -1, ResourceType.WOOD: -1})

    # Неудачная операция не применяется частично
    assert player.resources[ResourceType.BRICK] == 2
    assert player.resources[ResourceType.WOOD] == 0


def test_victory_points_only_grow():
    player = Player("p1", "Alice")
    player.increase_victory_points(1)
    player.increase_victory_points(2)
    assert player.victory_points == 3

    with pytest.raises(ValueError):
        player.increase_victory_points(-1)


def test_ingame_dto_is_public_snapshot():
    player = Player("p1", "Alice", "BLUE")
    player.adjust_resources({ResourceType.ORE: 3})

    dto = player.to_ingame_player_dto()
    assert dto == {
        'id': "p1",
        'display_name': "Alice",
        'color': "BLUE",
        'victory_points': 0,
        'resources': {'WOOD': 0, 'BRICK': 0, 'SHEEP': 0, 'WHEAT': 0, 'ORE': 3},
    }


def test_players_compare_by_id():
    assert Player("p1", "Alice") == Player("p1", "Alice (again)")
    assert Player("p1", "Alice") != Player("p2", "Alice")
    assert len({Player("p1", "x"), Player("p1", "y")}) == 1
