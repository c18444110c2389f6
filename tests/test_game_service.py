import queue
import random
from types import SimpleNamespace

import pytest

from catan_server.game_core import (
    BuildRoadMove,
    BuildVillageMove,
    EndTurnMove,
    GameAlreadyOverError,
    HexagonType,
    NoSuchGameError,
    NotActivePlayerError,
    standard_layout,
)
from catan_server.services.game_factory import GameFactory
from catan_server.services.game_registry import GameRegistry
from catan_server.services.game_service import GameService
from catan_server.services.progress_notifier import QueueProgressNotifier
from catan_server.workers import _notification_queue_consumer
from game_helpers import finish_setup_2p, free_neighbour, give


FACTORY_CONFIG = {
    'VICTORY_POINTS_FOR_VICTORY': 3,
    'RANDOMIZE_BOARD': False,
    'MIN_PLAYERS': 2,
    'MAX_PLAYERS': 4,
}


class EventLog:
    def __init__(self):
        self.events = []

    def __call__(self, event_type, message, sid=None, game_id=None, extra_data=None):
        self.events.append((event_type, game_id))

    def types(self):
        return [event_type for event_type, _ in self.events]


def _drain(q):
    items = []
    while True:
        try:
            items.append(q.get_nowait())
        except queue.Empty:
            return items


@pytest.fixture
def notification_queue():
    return queue.Queue()


@pytest.fixture
def event_log():
    return EventLog()


@pytest.fixture
def stats():
    return []


@pytest.fixture
def service(notification_queue, event_log, stats):
    notifier = QueueProgressNotifier(notification_queue)
    factory = GameFactory(FACTORY_CONFIG, event_log, notifier, rng=random.Random(1))
    return GameService(GameRegistry(event_log), factory, log_event=event_log, log_stats=stats.append)


# --- Фабрика и реестр ---

def test_factory_requires_config_keys(notification_queue):
    with pytest.raises(KeyError):
        GameFactory({'MIN_PLAYERS': 2}, print, QueueProgressNotifier(notification_queue))


@pytest.mark.parametrize("names", [["Solo"], ["A", "B", "C", "D", "E"]])
def test_factory_rejects_player_count(service, names):
    with pytest.raises(ValueError):
        service.create_game(names)
    assert service.registry.count() == 0


def test_create_game_registers_and_seats_players(service, event_log):
    game = service.create_game(["Alice", "Bob", "Carol"])

    assert service.get_game(game.game_id) is game
    assert [p.display_name for p in game.players] == ["Alice", "Bob", "Carol"]
    assert [p.color for p in game.players] == ["RED", "BLUE", "WHITE"]
    assert len({p.player_id for p in game.players}) == 3
    assert game.victory_points_for_victory == 3
    assert "GAME_CREATED" in event_log.types()
    assert "REGISTRY_ADD" in event_log.types()


def test_randomized_board(notification_queue, event_log):
    config = dict(FACTORY_CONFIG, RANDOMIZE_BOARD=True)
    factory = GameFactory(config, event_log, QueueProgressNotifier(notification_queue), rng=random.Random(7))
    game = factory.create_game(["A", "B"])

    desert_count = sum(h.hexagon_type is HexagonType.DESERT for h in game.board.hexagons)
    assert desert_count == 1
    assert sorted(h.hexagon_type.value for h in game.board.hexagons) == sorted(t.value for t, _ in standard_layout())


def test_registry_ignores_duplicates_and_unknown_removals(event_log):
    registry = GameRegistry(event_log)
    game = SimpleNamespace(game_id="g-1")

    registry.add_game(game)
    registry.add_game(game)
    registry.remove_game_by_id("missing")
    assert registry.count() == 1
    assert event_log.types().count("REGISTRY_WARN") == 2

    registry.remove_game_by_id("g-1")
    assert registry.get_by_game_id("g-1") is None


# --- Уведомления ---

def test_creation_queues_state_and_turn_order(service, notification_queue):
    game = service.create_game(["Alice", "Bob"])
    messages = _drain(notification_queue)

    assert [m['event'] for m in messages] == ['current_game_state', 'game_progress']
    assert all(m['room'] == game.game_id for m in messages)
    assert len(messages[0]['payload']['intersections']) == 54
    assert [p['display_name'] for p in messages[1]['payload']['players']] == ["Alice", "Bob", "Bob", "Alice"]


def test_worker_emits_to_match_room(notification_queue):
    class FakeSocketIO:
        def __init__(self):
            self.emitted = []

        def emit(self, event, payload, room=None):
            self.emitted.append((event, payload, room))

        def sleep(self, seconds):
            pass

    socketio = FakeSocketIO()
    notification_queue.put({'event': 'game_progress', 'payload': {'players': []}, 'room': 'g-1'})
    notification_queue.put({'event': 'game_progress', 'payload': {}})
    notification_queue.put(None)

    _notification_queue_consumer(socketio, notification_queue)

    assert socketio.emitted == [('game_progress', {'players': []}, 'g-1')]


# --- Ходы ---

def test_unknown_game(service):
    with pytest.raises(NoSuchGameError):
        service.get_game("nope")
    with pytest.raises(NoSuchGameError):
        service.submit_move("nope", EndTurnMove(), "someone")


def test_unknown_player_is_not_active(service):
    game = service.create_game(["Alice", "Bob"])
    with pytest.raises(NotActivePlayerError, match="Alice"):
        service.submit_move(game.game_id, BuildVillageMove(0), "stranger")


def test_submit_move_applies_and_logs(service, event_log, notification_queue):
    game = service.create_game(["Alice", "Bob"])
    alice = game.players[0]
    _drain(notification_queue)

    service.submit_move(game.game_id, BuildVillageMove(0), alice.player_id)

    assert alice.victory_points == 1
    assert "MOVE_APPLIED" in event_log.types()
    assert [m['event'] for m in _drain(notification_queue)] == ['current_game_state']


def test_game_over_stats_logged_once(service, stats, event_log):
    game = service.create_game(["Alice", "Bob"])
    ends = finish_setup_2p(game)
    alice = game.players[0]

    end = ends["A"][0]
    target = free_neighbour(game.board, end, exclude=(0,))
    give(alice, 1)
    road_id = game.board.get_connection_id_from_intersections(end, target)
    service.submit_move(game.game_id, BuildRoadMove(road_id), alice.player_id)
    give(alice, 1)
    service.submit_move(game.game_id, BuildVillageMove(target), alice.player_id)

    assert game.gameover
    assert len(stats) == 1
    assert stats[0]['winner'] == "Alice"
    assert stats[0]['game_id'] == game.game_id
    assert "GAME_OVER" in event_log.types()

    # Матч остается в реестре и отклоняет дальнейшие ходы
    with pytest.raises(GameAlreadyOverError):
        service.submit_move(game.game_id, EndTurnMove(), alice.player_id)
    assert len(stats) == 1
    assert service.get_game_state(game.game_id)['is_setup_phase'] is False
