import numpy as np
import pytest

from battleshipper.core.errors import (
    CellUnavailableError,
    FleetFullError,
    ShipNotContiguousError,
    WrongLengthError,
)
from battleshipper.core.models import Cell, Ship
from battleshipper.core.player import Player, TargetBoard


def _vertical(x: int, y: int, length: int) -> Ship:
    return Ship.of(Cell(x, y + i) for i in range(length))


def test_next_ship_length_follows_fleet_order(fleet) -> None:
    player = Player(id=1, name="Coltaine")
    lengths = []
    for ship in fleet:
        lengths.append(player.next_ship_length())
        player.add_ship(ship)
    assert lengths == [5, 4, 4, 3, 3]
    assert player.fleet_complete
    with pytest.raises(FleetFullError):
        player.next_ship_length()
    with pytest.raises(FleetFullError):
        player.add_ship(_vertical(9, 7, 3))


def test_add_ship_rejects_wrong_length() -> None:
    player = Player(id=1, name="Coltaine")
    with pytest.raises(WrongLengthError) as excinfo:
        player.add_ship(_vertical(0, 0, 4))
    assert excinfo.value.expected == 5
    assert excinfo.value.actual == 4
    assert player.ships == []


def test_add_ship_rejects_overlap_and_touching() -> None:
    player = Player(id=1, name="Coltaine")
    player.add_ship(_vertical(4, 2, 5))

    with pytest.raises(CellUnavailableError):
        player.add_ship(_vertical(4, 5, 4))
    with pytest.raises(CellUnavailableError):
        player.add_ship(_vertical(5, 2, 4))
    # Diagonal contact below the last cell.
    with pytest.raises(CellUnavailableError):
        player.add_ship(Ship.of(Cell(5 + i, 7) for i in range(4)))
    assert len(player.ships) == 1

    player.add_ship(_vertical(6, 2, 4))
    assert len(player.ships) == 2


def test_add_ship_rejects_cells_outside_grid() -> None:
    player = Player(id=1, name="Coltaine")
    with pytest.raises(CellUnavailableError) as excinfo:
        player.add_ship(_vertical(0, 7, 5))
    assert excinfo.value.cell == Cell(0, 10)


def test_available_cells_excludes_ship_and_its_ring() -> None:
    player = Player(id=1, name="Coltaine")
    assert player.available_cells().all()

    ship = _vertical(4, 2, 5)
    player.add_ship(ship)
    mask = player.available_cells()

    assert mask.shape == (10, 10)
    assert mask.dtype == np.bool_
    blocked = {(x, y) for x in range(3, 6) for y in range(1, 8)}
    for x in range(10):
        for y in range(10):
            assert mask[x, y] == ((x, y) not in blocked)


def test_available_cells_clips_at_grid_edge(fleet) -> None:
    player = Player(id=1, name="Coltaine")
    player.add_ship(fleet[0])
    mask = player.available_cells()
    assert int((~mask).sum()) == 12


def test_add_ship_never_uses_unavailable_cells(fleet) -> None:
    player = Player(id=1, name="Coltaine")
    player.add_ship(fleet[0])
    mask = player.available_cells()
    for x in range(10):
        for y in range(7):
            candidate = _vertical(x, y, 4)
            fits = all(mask[c.x, c.y] for c in candidate.cells)
            trial = Player(id=2, name="trial", ships=list(player.ships))
            if fits:
                trial.add_ship(candidate)
            else:
                with pytest.raises(CellUnavailableError):
                    trial.add_ship(candidate)


def test_target_board_groups_hits_and_rings_sunk_ship() -> None:
    target = TargetBoard(hits={Cell(0, 0), Cell(0, 1), Cell(2, 2)})
    candidate = target.ship_from_hits(Cell(0, 0))
    assert candidate.cells == {Cell(0, 0), Cell(0, 1)}

    target.mark_sunk(candidate)

    assert target.sunk_ships == [candidate]
    assert target.hits == {Cell(2, 2)}
    assert target.misses == {Cell(1, 0), Cell(1, 1), Cell(1, 2), Cell(0, 2)}
    assert target.in_sunk_ship(Cell(0, 1))
    assert not target.in_sunk_ship(Cell(2, 2))


def test_ring_does_not_overwrite_pending_hits() -> None:
    target = TargetBoard(hits={Cell(5, 5), Cell(5, 6), Cell(6, 7)})
    ship = target.ship_from_hits(Cell(5, 5))
    target.mark_sunk(ship)
    assert Cell(6, 7) in target.hits
    assert Cell(6, 7) not in target.misses


def test_add_ship_rejects_diagonal_ship() -> None:
    player = Player(id=1, name="Coltaine")
    diagonal = Ship.of(Cell(i, 5 + i) for i in range(5))
    with pytest.raises(ShipNotContiguousError) as excinfo:
        player.add_ship(diagonal)
    assert excinfo.value.cell == Cell(1, 6)
    assert player.ships == []
    assert player.available_cells().all()


def test_add_ship_rejects_gapped_ship() -> None:
    player = Player(id=1, name="Coltaine")
    gapped = Ship.of([Cell(0, 0), Cell(0, 1), Cell(0, 2), Cell(0, 4), Cell(0, 5)])
    with pytest.raises(ShipNotContiguousError) as excinfo:
        player.add_ship(gapped)
    assert excinfo.value.cell == Cell(0, 4)
    assert player.ships == []


def test_add_ship_accepts_bent_but_connected_ship() -> None:
    player = Player(id=1, name="Coltaine")
    bent = Ship.of([Cell(0, 0), Cell(0, 1), Cell(0, 2), Cell(1, 2), Cell(2, 2)])
    player.add_ship(bent)
    assert player.ships == [bent]
