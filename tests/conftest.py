import pytest

from catan_server.game_core import Board, GameLogicController
from game_helpers import RecordingNotifier, make_players


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def players():
    return make_players("A", "B")


@pytest.fixture
def controller(players, notifier):
    return GameLogicController(players, notifier, "game-1")


@pytest.fixture
def board():
    return Board()
