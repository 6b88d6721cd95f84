from battleshipper.core.grid import NeighborMode, flood_fill, in_bounds, neighbors
from battleshipper.core.models import Cell


def test_in_bounds_edges() -> None:
    assert in_bounds(Cell(0, 0))
    assert in_bounds(Cell(9, 9))
    assert not in_bounds(Cell(-1, 0))
    assert not in_bounds(Cell(0, 10))


def test_orthogonal_neighbors_in_fixed_order() -> None:
    assert neighbors(Cell(5, 5)) == [Cell(4, 5), Cell(6, 5), Cell(5, 4), Cell(5, 6)]


def test_diagonal_neighbors_follow_orthogonal_ones() -> None:
    result = neighbors(Cell(5, 5), NeighborMode.ORTHOGONAL_AND_DIAGONAL)
    assert result == [
        Cell(4, 5),
        Cell(6, 5),
        Cell(5, 4),
        Cell(5, 6),
        Cell(4, 4),
        Cell(6, 4),
        Cell(6, 6),
        Cell(4, 6),
    ]


def test_corner_neighbors_are_clipped() -> None:
    assert neighbors(Cell(0, 0)) == [Cell(1, 0), Cell(0, 1)]
    assert neighbors(Cell(9, 9), NeighborMode.ORTHOGONAL_AND_DIAGONAL) == [
        Cell(8, 9),
        Cell(9, 8),
        Cell(8, 8),
    ]


def test_neighbors_apply_predicate() -> None:
    allowed = {Cell(4, 5), Cell(6, 6)}
    result = neighbors(Cell(5, 5), NeighborMode.ORTHOGONAL_AND_DIAGONAL, allowed.__contains__)
    assert result == [Cell(4, 5), Cell(6, 6)]


def test_flood_fill_ignores_diagonal_links() -> None:
    hits = {Cell(0, 0), Cell(0, 1), Cell(0, 2), Cell(1, 3), Cell(5, 5)}
    assert flood_fill(Cell(0, 1), hits.__contains__) == {Cell(0, 0), Cell(0, 1), Cell(0, 2)}


def test_flood_fill_always_contains_origin() -> None:
    assert flood_fill(Cell(3, 3), lambda _: False) == {Cell(3, 3)}
