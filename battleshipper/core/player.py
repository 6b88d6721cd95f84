"""Player state: owned fleet, placement rules and knowledge of the opponent board."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from battleshipper.core.errors import (
    CellUnavailableError,
    FleetFullError,
    ShipNotContiguousError,
    WrongLengthError,
)
from battleshipper.core.grid import NeighborMode, flood_fill, in_bounds, neighbors
from battleshipper.core.models import BOARD_SIZE, FLEET_SHIP_LENGTHS, FLEET_SIZE, Cell, Ship


@dataclass(slots=True)
class TargetBoard:
    """What a player knows about the opponent board.

    ``hits`` holds hit cells not yet attributed to a sunk ship, ``misses`` holds cells
    known to be empty and ``sunk_ships`` the opponent ships confirmed sunk. A cell of a
    sunk ship is never kept in ``hits``.
    """

    hits: set[Cell] = field(default_factory=set)
    misses: set[Cell] = field(default_factory=set)
    sunk_ships: list[Ship] = field(default_factory=list)

    def record_miss(self, cell: Cell) -> None:
        self.misses.add(cell)

    def record_hit(self, cell: Cell) -> None:
        self.hits.add(cell)

    def in_sunk_ship(self, cell: Cell) -> bool:
        """Return whether the cell belongs to an already sunk ship."""
        return any(cell in ship for ship in self.sunk_ships)

    def ship_from_hits(self, origin: Cell) -> Ship:
        """Group the recorded hits orthogonally connected to ``origin`` into a candidate ship."""
        return Ship(frozenset(flood_fill(origin, self.hits.__contains__)))

    def mark_sunk(self, ship: Ship) -> None:
        """Move a confirmed ship from pending hits to sunk ships and ring it with misses."""
        self.sunk_ships.append(ship)
        for cell in ship.cells:
            self.misses.update(
                neighbors(
                    cell,
                    NeighborMode.ORTHOGONAL_AND_DIAGONAL,
                    lambda neighbor: neighbor not in self.hits,
                )
            )
        self.hits.difference_update(ship.cells)


@dataclass(slots=True)
class Player:
    """Contestant with an own board of ships and a target board against the opponent."""

    id: int
    name: str
    ships: list[Ship] = field(default_factory=list)
    target: TargetBoard = field(default_factory=TargetBoard)

    @property
    def fleet_complete(self) -> bool:
        return len(self.ships) == FLEET_SIZE

    def next_ship_length(self) -> int:
        """Return the required length of the next ship to place."""
        placed = len(self.ships)
        if placed >= FLEET_SIZE:
            raise FleetFullError(self.id)
        return FLEET_SHIP_LENGTHS[placed]

    def available_cells(self) -> np.ndarray:
        """Boolean mask indexed ``[x, y]``; False where a cell is occupied or touches a ship."""
        mask = np.ones((BOARD_SIZE, BOARD_SIZE), dtype=bool)
        for ship in self.ships:
            for cell in ship.cells:
                mask[cell.x, cell.y] = False
                for neighbor in neighbors(cell, NeighborMode.ORTHOGONAL_AND_DIAGONAL):
                    mask[neighbor.x, neighbor.y] = False
        return mask

    def add_ship(self, ship: Ship) -> None:
        """Append a ship to the fleet after validating length, shape and availability."""
        expected = self.next_ship_length()
        if len(ship) != expected:
            raise WrongLengthError(expected, len(ship))
        ordered = sorted(ship.cells, key=lambda c: (c.x, c.y))
        for cell in ordered:
            if not in_bounds(cell):
                raise CellUnavailableError(cell)
        # Sink detection groups hits orthogonally, so every ship must be one component.
        connected = flood_fill(ordered[0], ship.cells.__contains__)
        for cell in ordered:
            if cell not in connected:
                raise ShipNotContiguousError(cell)
        mask = self.available_cells()
        for cell in ordered:
            if not mask[cell.x, cell.y]:
                raise CellUnavailableError(cell)
        self.ships.append(ship)

    def occupies(self, cell: Cell) -> bool:
        """Return whether any owned ship covers the cell."""
        return any(cell in ship for ship in self.ships)

    def matching_ship(self, candidate: Ship) -> Ship | None:
        """Return the owned ship with exactly the candidate's cells, if any."""
        for ship in self.ships:
            if ship.cells == candidate.cells:
                return ship
        return None
