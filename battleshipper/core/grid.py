"""Fixed-size grid geometry: bounds, neighbor selection and flood fill."""

from __future__ import annotations

from collections import deque
from collections.abc import Callable
from enum import Enum, auto

from battleshipper.core.models import BOARD_SIZE, Cell

CellPredicate = Callable[[Cell], bool]


class NeighborMode(Enum):
    """Which neighbors of a cell are considered."""

    ORTHOGONAL = auto()
    ORTHOGONAL_AND_DIAGONAL = auto()


# Left, right, up, down, then diagonals.
_ORTHOGONAL_STEPS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
_DIAGONAL_STEPS: tuple[tuple[int, int], ...] = ((-1, -1), (1, -1), (1, 1), (-1, 1))


def in_bounds(cell: Cell, size: int = BOARD_SIZE) -> bool:
    """Return whether the cell lies inside the grid."""
    return 0 <= cell.x < size and 0 <= cell.y < size


def _always(_: Cell) -> bool:
    return True


def neighbors(
    cell: Cell,
    mode: NeighborMode = NeighborMode.ORTHOGONAL,
    include: CellPredicate | None = None,
    size: int = BOARD_SIZE,
) -> list[Cell]:
    """Return in-bounds neighbors of ``cell`` accepted by ``include``, in a fixed order."""
    accept = include or _always
    steps = _ORTHOGONAL_STEPS
    if mode is NeighborMode.ORTHOGONAL_AND_DIAGONAL:
        steps = _ORTHOGONAL_STEPS + _DIAGONAL_STEPS
    result: list[Cell] = []
    for dx, dy in steps:
        candidate = Cell(cell.x + dx, cell.y + dy)
        if in_bounds(candidate, size) and accept(candidate):
            result.append(candidate)
    return result


def flood_fill(
    origin: Cell,
    include: CellPredicate,
    mode: NeighborMode = NeighborMode.ORTHOGONAL,
    size: int = BOARD_SIZE,
) -> set[Cell]:
    """Breadth-first connected component of ``origin`` over cells accepted by ``include``.

    The origin is always part of the component.
    """
    component: set[Cell] = set()
    queue: deque[Cell] = deque([origin])
    while queue:
        current = queue.popleft()
        if current in component:
            continue
        component.add(current)
        queue.extend(
            candidate
            for candidate in neighbors(current, mode, include, size)
            if candidate not in component
        )
    return component
