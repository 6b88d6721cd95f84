"""Game state machine: turn enforcement, shot resolution and win detection."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from battleshipper.core.errors import (
    CellOutOfBoundsError,
    GameFinishedError,
    GameNotStartedError,
    OutOfTurnError,
    UnknownPlayerError,
)
from battleshipper.core.grid import in_bounds
from battleshipper.core.models import FLEET_SIZE, MISS, Cell, GamePhase, Ship, ShotOutcome
from battleshipper.core.player import Player


@dataclass(slots=True)
class Game:
    """Match between two players.

    ``turn`` holds the id of the player allowed to shoot next and ``winner`` is set
    once a player has sunk the whole opposing fleet.
    """

    id: int
    player_a: Player
    player_b: Player
    turn: int
    winner: int | None = None

    @property
    def phase(self) -> GamePhase:
        if self.winner is not None:
            return GamePhase.FINISHED
        if self.player_a.fleet_complete and self.player_b.fleet_complete:
            return GamePhase.IN_PROGRESS
        return GamePhase.SETUP

    def player(self, player_id: int) -> Player:
        """Return the player with the given id."""
        if player_id == self.player_a.id:
            return self.player_a
        if player_id == self.player_b.id:
            return self.player_b
        raise UnknownPlayerError(player_id, self.id)

    def next_ship_length(self, player_id: int) -> int:
        return self.player(player_id).next_ship_length()

    def available_cells(self, player_id: int) -> np.ndarray:
        return self.player(player_id).available_cells()

    def add_ship(self, player_id: int, ship: Ship) -> None:
        self.player(player_id).add_ship(ship)

    def shoot(self, player_id: int, cell: Cell) -> ShotOutcome:
        """Resolve a shot by ``player_id`` at ``cell`` on the opponent board.

        All preconditions are checked before anything changes. An accepted shot always
        passes the turn to the opponent, whatever its outcome.
        """
        for contestant in (self.player_a, self.player_b):
            if not contestant.fleet_complete:
                raise GameNotStartedError(contestant.id)
        if self.winner is not None:
            raise GameFinishedError(self.winner)
        if player_id != self.turn:
            raise OutOfTurnError(player_id, self.turn)

        if player_id == self.player_a.id:
            shooter, opponent = self.player_a, self.player_b
        elif player_id == self.player_b.id:
            shooter, opponent = self.player_b, self.player_a
        else:
            raise UnknownPlayerError(player_id, self.id)

        if not in_bounds(cell):
            raise CellOutOfBoundsError(cell)

        self.turn = opponent.id
        return self._resolve(shooter, opponent, cell)

    def _resolve(self, shooter: Player, opponent: Player, cell: Cell) -> ShotOutcome:
        target = shooter.target
        if not opponent.occupies(cell):
            target.record_miss(cell)
            return MISS
        if target.in_sunk_ship(cell):
            return ShotOutcome(hit=True, sank=False, won=False)

        target.record_hit(cell)
        sunk = opponent.matching_ship(target.ship_from_hits(cell))
        if sunk is None:
            return ShotOutcome(hit=True, sank=False, won=False)

        target.mark_sunk(sunk)
        if len(target.sunk_ships) < FLEET_SIZE:
            return ShotOutcome(hit=True, sank=True, won=False)
        self.winner = shooter.id
        return ShotOutcome(hit=True, sank=True, won=True)
