"""Match use cases: read a snapshot, apply an engine operation, write it back."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from threading import Lock

import numpy as np

from battleshipper.core.errors import GameNotStartedError, GameRuleError
from battleshipper.core.game import Game
from battleshipper.core.models import Cell, Ship, ShotOutcome
from battleshipper.core.player import Player
from battleshipper.store.repository import GameRepository

logger = logging.getLogger(__name__)


class MatchService:
    """High-level match operations over a game repository."""

    def __init__(self, repository: GameRepository) -> None:
        self._repository = repository
        self._mutation_lock = Lock()

    def start(self, player_name: str) -> Player:
        """Register a player waiting for an opponent."""
        return self._repository.start_game(player_name)

    def waiting_players(self) -> list[Player]:
        return self._repository.all_waiting_players()

    def join(self, player_name: str, opponent_id: int) -> Game:
        """Join the game opened by a waiting opponent."""
        with self._mutation_lock:
            try:
                return self._repository.join_game(player_name, opponent_id)
            except LookupError as exc:
                logger.info(
                    "join_rejected opponent_id=%s reason=%s", opponent_id, type(exc).__name__
                )
                raise

    def state(self, player_id: int) -> tuple[Player, Game | None]:
        """Return a snapshot of the player and their game."""
        return self._repository.get_player_and_game(player_id)

    def next_ship_length(self, player_id: int) -> int:
        player, game = self._repository.get_player_and_game(player_id)
        if game is not None:
            return game.next_ship_length(player_id)
        return player.next_ship_length()

    def available_cells(self, player_id: int) -> np.ndarray:
        player, _ = self._repository.get_player_and_game(player_id)
        return player.available_cells()

    def place_ship(self, player_id: int, cells: Iterable[Cell]) -> Player:
        """Add the next ship to the player's fleet and persist it."""
        ship = Ship.of(cells)
        with self._mutation_lock:
            try:
                player, game = self._repository.get_player_and_game(player_id)
                if game is None:
                    player.add_ship(ship)
                    self._repository.update_player(player)
                else:
                    game.add_ship(player_id, ship)
                    player = game.player(player_id)
                    self._repository.update_game(game)
            except (GameRuleError, LookupError) as exc:
                logger.info(
                    "ship_rejected player_id=%s reason=%s", player_id, type(exc).__name__
                )
                raise
        logger.info("ship_placed player_id=%s fleet=%s", player_id, len(player.ships))
        return player

    def shoot(self, player_id: int, cell: Cell) -> ShotOutcome:
        """Fire at the opponent board and persist the resolved game."""
        with self._mutation_lock:
            try:
                _, game = self._repository.get_player_and_game(player_id)
                if game is None:
                    raise GameNotStartedError(player_id)
                outcome = game.shoot(player_id, cell)
                self._repository.update_game(game)
            except (GameRuleError, LookupError) as exc:
                logger.info(
                    "shot_rejected player_id=%s reason=%s", player_id, type(exc).__name__
                )
                raise
        logger.info(
            "shot_resolved game_id=%s player_id=%s x=%s y=%s hit=%s sank=%s won=%s",
            game.id,
            player_id,
            cell.x,
            cell.y,
            outcome.hit,
            outcome.sank,
            outcome.won,
        )
        if outcome.won:
            logger.info("game_finished game_id=%s winner=%s", game.id, game.winner)
        return outcome
