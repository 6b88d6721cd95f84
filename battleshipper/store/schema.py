"""Payload schema for storing players and games as JSON-compatible data."""

from __future__ import annotations

from collections.abc import Iterable

from battleshipper.core.game import Game
from battleshipper.core.grid import in_bounds
from battleshipper.core.models import BOARD_SIZE, Cell, Ship
from battleshipper.core.player import Player, TargetBoard

SCHEMA_VERSION = 1


def player_to_payload(player: Player) -> dict[str, object]:
    """Convert a player to a JSON-serializable payload."""
    return {"version": SCHEMA_VERSION, "grid_size": BOARD_SIZE, "player": _player_fields(player)}


def payload_to_player(payload: dict[str, object]) -> Player:
    """Convert a loaded payload back into a player."""
    _check_header(payload)
    return _player_from(payload.get("player"))


def game_to_payload(game: Game) -> dict[str, object]:
    """Convert a game to a JSON-serializable payload."""
    return {
        "version": SCHEMA_VERSION,
        "grid_size": BOARD_SIZE,
        "game": {
            "id": game.id,
            "player_a": _player_fields(game.player_a),
            "player_b": _player_fields(game.player_b),
            "turn": game.turn,
            "winner": game.winner,
        },
    }


def payload_to_game(payload: dict[str, object]) -> Game:
    """Convert a loaded payload back into a game."""
    _check_header(payload)
    raw = payload.get("game")
    if not isinstance(raw, dict):
        raise ValueError("Game payload must be an object.")
    try:
        game_id = _to_int(raw["id"])
        turn = _to_int(raw["turn"])
        raw_winner = raw.get("winner")
        winner = None if raw_winner is None else _to_int(raw_winner)
    except KeyError as exc:
        raise ValueError(f"Game payload is missing '{exc.args[0]}'.") from exc
    player_a = _player_from(raw.get("player_a"))
    player_b = _player_from(raw.get("player_b"))
    if turn not in (player_a.id, player_b.id):
        raise ValueError("Game turn must reference one of its players.")
    if winner is not None and winner not in (player_a.id, player_b.id):
        raise ValueError("Game winner must reference one of its players.")
    return Game(id=game_id, player_a=player_a, player_b=player_b, turn=turn, winner=winner)


def _check_header(payload: dict[str, object]) -> None:
    if not isinstance(payload, dict):
        raise ValueError("Payload must be an object.")
    raw_version = payload.get("version", -1)
    if not isinstance(raw_version, (int, str)):
        raise ValueError("Payload version must be int-compatible.")
    if int(raw_version) != SCHEMA_VERSION:
        raise ValueError("Unsupported payload version.")
    raw_grid_size = payload.get("grid_size", BOARD_SIZE)
    if not isinstance(raw_grid_size, (int, str)):
        raise ValueError("Payload grid_size must be int-compatible.")
    if int(raw_grid_size) != BOARD_SIZE:
        raise ValueError("Payload grid size mismatch.")


def _player_fields(player: Player) -> dict[str, object]:
    target = player.target
    return {
        "id": player.id,
        "name": player.name,
        "ships": [_ship_fields(ship) for ship in player.ships],
        "target": {
            "hits": _cells_to_lists(target.hits),
            "misses": _cells_to_lists(target.misses),
            "sunk_ships": [_ship_fields(ship) for ship in target.sunk_ships],
        },
    }


def _player_from(raw: object) -> Player:
    if not isinstance(raw, dict):
        raise ValueError("Player payload must be an object.")
    try:
        player_id = _to_int(raw["id"])
        name = str(raw["name"])
        raw_ships = raw["ships"]
        raw_target = raw["target"]
    except KeyError as exc:
        raise ValueError(f"Player payload is missing '{exc.args[0]}'.") from exc
    if not isinstance(raw_ships, list):
        raise ValueError("Player ships must be a list.")
    if not isinstance(raw_target, dict):
        raise ValueError("Player target must be an object.")
    raw_sunk = raw_target.get("sunk_ships", [])
    if not isinstance(raw_sunk, list):
        raise ValueError("Target sunk_ships must be a list.")
    target = TargetBoard(
        hits=set(_lists_to_cells(raw_target.get("hits", []))),
        misses=set(_lists_to_cells(raw_target.get("misses", []))),
        sunk_ships=[_ship_from(item) for item in raw_sunk],
    )
    return Player(
        id=player_id,
        name=name,
        ships=[_ship_from(item) for item in raw_ships],
        target=target,
    )


def _ship_fields(ship: Ship) -> dict[str, object]:
    return {"cells": _cells_to_lists(ship.cells)}


def _ship_from(raw: object) -> Ship:
    if not isinstance(raw, dict):
        raise ValueError("Each ship must be an object.")
    cells = list(_lists_to_cells(raw.get("cells", [])))
    if not cells:
        raise ValueError("Ship must have at least one cell.")
    return Ship.of(cells)


def _cells_to_lists(cells: Iterable[Cell]) -> list[list[int]]:
    return [[cell.x, cell.y] for cell in sorted(cells, key=lambda c: (c.x, c.y))]


def _lists_to_cells(raw: object) -> Iterable[Cell]:
    if not isinstance(raw, list):
        raise ValueError("Cells must be a list.")
    for item in raw:
        if not isinstance(item, list) or len(item) != 2:
            raise ValueError("Cell must be a 2-item list.")
        cell = Cell(_to_int(item[0]), _to_int(item[1]))
        if not in_bounds(cell):
            raise ValueError(f"Cell ({cell.x}, {cell.y}) is outside the grid.")
        yield cell


def _to_int(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValueError(f"Expected int-compatible value, got {value!r}.")
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"Expected int-compatible value, got {value!r}.") from exc
