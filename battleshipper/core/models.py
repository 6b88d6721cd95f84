"""Core domain models used by the rules engine."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

BOARD_SIZE = 10

# Placement order decides the length of the next ship.
FLEET_SHIP_LENGTHS: tuple[int, ...] = (5, 4, 4, 3, 3)
FLEET_SIZE = len(FLEET_SHIP_LENGTHS)


class GamePhase(StrEnum):
    """Game lifecycle phase, derived from fleets and winner."""

    SETUP = "SETUP"
    IN_PROGRESS = "IN_PROGRESS"
    FINISHED = "FINISHED"


@dataclass(frozen=True, slots=True)
class Cell:
    """Grid coordinate."""

    x: int
    y: int


@dataclass(frozen=True, slots=True)
class Ship:
    """Set of occupied cells, immutable once created."""

    cells: frozenset[Cell]

    def __post_init__(self) -> None:
        if not isinstance(self.cells, frozenset):
            object.__setattr__(self, "cells", frozenset(self.cells))
        if not self.cells:
            raise ValueError("Ship must occupy at least one cell.")

    @classmethod
    def of(cls, cells: Iterable[Cell]) -> Ship:
        """Build a ship from any iterable of cells."""
        return cls(frozenset(cells))

    def __len__(self) -> int:
        return len(self.cells)

    def __contains__(self, cell: object) -> bool:
        return cell in self.cells


@dataclass(frozen=True, slots=True)
class ShotOutcome:
    """Result of a single accepted shot."""

    hit: bool
    sank: bool
    won: bool


MISS = ShotOutcome(hit=False, sank=False, won=False)
