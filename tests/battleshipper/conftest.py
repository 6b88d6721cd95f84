from __future__ import annotations

import random

import pytest

from battleshipper.core.game import Game
from battleshipper.core.models import FLEET_SHIP_LENGTHS, Cell, Ship
from battleshipper.core.rules import create_game, create_player


def make_fleet() -> list[Ship]:
    """Five ships in columns 0, 2, 4, 6 and 8, each starting at row 0."""
    return [
        Ship.of(Cell(index * 2, y) for y in range(length))
        for index, length in enumerate(FLEET_SHIP_LENGTHS)
    ]


def make_game(seed: int = 1337, *, fleets: bool = True) -> Game:
    rng = random.Random(seed)
    player_a = create_player("Karsa Orlong", rng)
    player_b = create_player("Fiddler", rng)
    game = create_game(player_a, player_b, player_a.id, rng)
    if fleets:
        for ship in make_fleet():
            game.add_ship(player_a.id, ship)
            game.add_ship(player_b.id, ship)
    return game


@pytest.fixture
def fleet() -> list[Ship]:
    return make_fleet()


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1337)


@pytest.fixture
def game() -> Game:
    return make_game()


@pytest.fixture
def setup_game() -> Game:
    return make_game(fleets=False)
