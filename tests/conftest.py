"""
Shared pytest fixtures.

Searches run on a thread pool in tests so monkeypatched functions are seen by
the workers.
"""
import os

os.environ.setdefault("AI_EXECUTOR", "thread")
os.environ.setdefault("AI_MAX_WORKERS", "2")

import pytest

from models.enums import Orientation
from models.player import PlayerState, Position
from models.state import GameState
from models.wall import Wall
from services.ai_worker import shutdown_pool


def make_state(p1=(4, 0), p2=(4, 8), turn=1, walls=(), p1_walls=10, p2_walls=10, winner=None):
    """Build a GameState from plain tuples: walls are (x, y, 'h'|'v')."""
    return GameState(
        player1=PlayerState(Position(*p1), p1_walls),
        player2=PlayerState(Position(*p2), p2_walls),
        turn_owner=turn,
        walls=tuple(Wall(x, y, Orientation.parse(o)) for x, y, o in walls),
        winner=winner,
    )


@pytest.fixture
def initial_state():
    return GameState.initial()


@pytest.fixture
def state_factory():
    return make_state


@pytest.fixture
def client():
    from app import create_app

    app = create_app()
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c


@pytest.fixture(autouse=True, scope="session")
def _search_pool():
    yield
    shutdown_pool()
