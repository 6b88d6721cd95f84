"""Rule violations raised by the engine before any state is mutated."""

from __future__ import annotations

from battleshipper.core.models import Cell


class GameRuleError(ValueError):
    """Base class for rejected engine operations."""


class WrongLengthError(GameRuleError):
    """Proposed ship length does not match the next required length."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"expected ship length {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


class FleetFullError(GameRuleError):
    """Player already owns a complete fleet."""

    def __init__(self, player_id: int) -> None:
        super().__init__(f"fleet of player {player_id} is full")
        self.player_id = player_id


class CellUnavailableError(GameRuleError):
    """Proposed ship overlaps or touches an owned ship, or leaves the grid."""

    def __init__(self, cell: Cell) -> None:
        super().__init__(f"cell ({cell.x}, {cell.y}) is not available")
        self.cell = cell


class GameNotStartedError(GameRuleError):
    """A shot was attempted before both fleets were complete."""

    def __init__(self, player_id: int) -> None:
        super().__init__(f"fleet of player {player_id} is not complete")
        self.player_id = player_id


class GameFinishedError(GameRuleError):
    """A shot was attempted after a winner was set."""

    def __init__(self, winner_id: int) -> None:
        super().__init__(f"game already won by player {winner_id}")
        self.winner_id = winner_id


class OutOfTurnError(GameRuleError):
    """The shooting player does not hold the turn."""

    def __init__(self, player_id: int, turn: int) -> None:
        super().__init__(f"player {player_id} shot out of turn, turn holder is {turn}")
        self.player_id = player_id
        self.turn = turn


class UnknownPlayerError(GameRuleError):
    """Player id is not part of the game."""

    def __init__(self, player_id: int, game_id: int) -> None:
        super().__init__(f"player {player_id} not in game {game_id}")
        self.player_id = player_id
        self.game_id = game_id


class CellOutOfBoundsError(GameRuleError):
    """Shot target lies outside the grid."""

    def __init__(self, cell: Cell) -> None:
        super().__init__(f"cell ({cell.x}, {cell.y}) is outside the grid")
        self.cell = cell


class ShipNotContiguousError(GameRuleError):
    """Proposed ship cells are not orthogonally connected."""

    def __init__(self, cell: Cell) -> None:
        super().__init__(f"cell ({cell.x}, {cell.y}) is not connected to the rest of the ship")
        self.cell = cell
