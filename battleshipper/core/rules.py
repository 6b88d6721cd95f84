"""Factories for players and games."""

from __future__ import annotations

import random
from copy import deepcopy

from battleshipper.core.errors import UnknownPlayerError
from battleshipper.core.game import Game
from battleshipper.core.player import Player, TargetBoard

_MAX_ID = 2**53 - 1
_default_rng = random.Random()


def allocate_id(rng: random.Random | None = None) -> int:
    """Draw a positive identifier."""
    return (rng or _default_rng).randint(1, _MAX_ID)


def create_player(name: str, rng: random.Random | None = None) -> Player:
    """Create a player with a fresh id, an empty fleet and an empty target board."""
    return Player(id=allocate_id(rng), name=name, ships=[], target=TargetBoard())


def create_game(
    player_a: Player,
    player_b: Player,
    starting_player_id: int,
    rng: random.Random | None = None,
) -> Game:
    """Create a game owning copies of both players."""
    if player_a.id == player_b.id:
        raise ValueError("A game needs two distinct players.")
    game_id = allocate_id(rng)
    if starting_player_id not in (player_a.id, player_b.id):
        raise UnknownPlayerError(starting_player_id, game_id)
    return Game(
        id=game_id,
        player_a=deepcopy(player_a),
        player_b=deepcopy(player_b),
        turn=starting_player_id,
    )
