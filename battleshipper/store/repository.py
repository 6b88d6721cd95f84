"""Registry of waiting players and running games."""

from __future__ import annotations

import logging
import random
from threading import Lock
from typing import Protocol

from battleshipper.core.game import Game
from battleshipper.core.player import Player
from battleshipper.core.rules import create_game, create_player
from battleshipper.store.schema import (
    game_to_payload,
    payload_to_game,
    payload_to_player,
    player_to_payload,
)

logger = logging.getLogger(__name__)


class PlayerNotFoundError(LookupError):
    """No waiting or playing player has the given id."""

    def __init__(self, player_id: int) -> None:
        super().__init__(f"player {player_id} not found")
        self.player_id = player_id


class GameNotFoundError(LookupError):
    """No running game has the given id."""

    def __init__(self, game_id: int) -> None:
        super().__init__(f"game {game_id} not found")
        self.game_id = game_id


class GameRepository(Protocol):
    """Storage contract consumed by the match service."""

    def init(self) -> None: ...

    def start_game(self, player_name: str) -> Player: ...

    def all_waiting_players(self) -> list[Player]: ...

    def get_player_and_game(self, player_id: int) -> tuple[Player, Game | None]: ...

    def update_player(self, player: Player) -> None: ...

    def join_game(self, player_name: str, opponent_id: int) -> Game: ...

    def update_game(self, game: Game) -> None: ...


class InMemoryGameRepository:
    """Process-local repository holding canonical copies as schema payloads.

    Reads decode fresh objects and writes encode them, so callers never share
    mutable state with the repository or with each other.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng
        self._lock = Lock()
        self._ready = False
        self._games: dict[int, dict[str, object]] = {}
        self._game_id_by_player_id: dict[int, int] = {}
        self._waiting: dict[int, dict[str, object]] = {}

    def init(self) -> None:
        """Reset to empty tables and accept calls."""
        with self._lock:
            self._games = {}
            self._game_id_by_player_id = {}
            self._waiting = {}
            self._ready = True
        logger.info("repository_initialized kind=memory")

    def start_game(self, player_name: str) -> Player:
        """Register a new player waiting for an opponent."""
        with self._lock:
            self._require_ready()
            player = create_player(player_name, self._rng)
            while self._is_known_player(player.id):
                player = create_player(player_name, self._rng)
            self._waiting[player.id] = player_to_payload(player)
        logger.info("player_waiting player_id=%s", player.id)
        return player

    def all_waiting_players(self) -> list[Player]:
        """Return copies of every waiting player."""
        with self._lock:
            self._require_ready()
            players = [payload_to_player(payload) for payload in self._waiting.values()]
        return sorted(players, key=lambda player: (player.name, player.id))

    def get_player_and_game(self, player_id: int) -> tuple[Player, Game | None]:
        """Return the player and their game, or ``None`` while still waiting."""
        with self._lock:
            self._require_ready()
            waiting = self._waiting.get(player_id)
            if waiting is not None:
                return payload_to_player(waiting), None
            game_id = self._game_id_by_player_id.get(player_id)
            if game_id is None:
                raise PlayerNotFoundError(player_id)
            payload = self._games.get(game_id)
            if payload is None:
                raise GameNotFoundError(game_id)
            game = payload_to_game(payload)
        return game.player(player_id), game

    def update_player(self, player: Player) -> None:
        """Replace a waiting player or a player inside a running game."""
        with self._lock:
            self._require_ready()
            if player.id in self._waiting:
                self._waiting[player.id] = player_to_payload(player)
                return
            game_id = self._game_id_by_player_id.get(player.id)
            if game_id is None or game_id not in self._games:
                raise PlayerNotFoundError(player.id)
            game = payload_to_game(self._games[game_id])
            if player.id == game.player_a.id:
                game.player_a = player
            else:
                game.player_b = player
            self._games[game_id] = game_to_payload(game)
        logger.debug("player_updated player_id=%s game_id=%s", player.id, game_id)

    def join_game(self, player_name: str, opponent_id: int) -> Game:
        """Create a player and start a game against a waiting opponent.

        The waiting opponent takes the first turn.
        """
        with self._lock:
            self._require_ready()
            waiting = self._waiting.get(opponent_id)
            if waiting is None:
                raise PlayerNotFoundError(opponent_id)
            player_a = payload_to_player(waiting)
            player_b = create_player(player_name, self._rng)
            while self._is_known_player(player_b.id):
                player_b = create_player(player_name, self._rng)
            game = create_game(player_a, player_b, player_a.id, self._rng)
            while game.id in self._games:
                game = create_game(player_a, player_b, player_a.id, self._rng)
            del self._waiting[player_a.id]
            self._game_id_by_player_id[player_a.id] = game.id
            self._game_id_by_player_id[player_b.id] = game.id
            self._games[game.id] = game_to_payload(game)
        logger.info(
            "game_started game_id=%s player_a=%s player_b=%s",
            game.id,
            player_a.id,
            player_b.id,
        )
        return game

    def update_game(self, game: Game) -> None:
        """Replace a running game."""
        with self._lock:
            self._require_ready()
            if game.id not in self._games:
                raise GameNotFoundError(game.id)
            self._games[game.id] = game_to_payload(game)
        logger.debug("game_updated game_id=%s phase=%s", game.id, game.phase.value)

    def _require_ready(self) -> None:
        if not self._ready:
            raise RuntimeError("Repository is not initialized; call init() first.")

    def _is_known_player(self, player_id: int) -> bool:
        return player_id in self._waiting or player_id in self._game_id_by_player_id
