from stagegen.grid import OccupancyGrid
from stagegen.hallways import Hallway
from stagegen.layout import Layout
from stagegen.pathfinding import Pathfinder
from tests.layout_test_utils import is_contiguous, make_layout, room


def _walled_grid():
    grid = OccupancyGrid(5)
    for y in range(5):
        grid.mark_cell((2, y))
    return grid


def test_find_path_on_open_grid():
    pf = Pathfinder(OccupancyGrid(5), Layout())
    path = pf.find_path((0, 0), (3, 0))
    assert path == [(0, 0), (1, 0), (2, 0), (3, 0)]
    assert pf.path_exists((0, 0), (4, 4))
    assert len(pf.find_path((0, 0), (4, 4))) == 9


def test_blocked_grid_has_no_route():
    pf = Pathfinder(_walled_grid(), Layout())
    assert pf.find_path((0, 0), (4, 0)) == []
    assert not pf.path_exists((0, 0), (4, 0))


def test_hallway_cells_are_walkable_for_path_exists_only():
    layout = Layout(hallways=[Hallway((0, 0), (4, 0), [(1, 2), (2, 2), (3, 2)])])
    pf = Pathfinder(_walled_grid(), layout)
    assert pf.path_exists((0, 0), (4, 0))
    assert pf.find_path((0, 0), (4, 0)) == []


def test_find_path_never_enters_rooms():
    grid = OccupancyGrid(6)
    start = room(0, 0, 2, 2)
    layout = make_layout(grid, start)
    pf = Pathfinder(grid, layout)
    # the endpoint may sit inside a room, neighbours inside it may not be used
    assert pf.find_path((0, 0), (4, 4)) == []
    path = pf.find_path((1, 0), (4, 0))
    assert path[0] == (1, 0) and path[-1] == (4, 0)
    assert is_contiguous(path)
    assert not any(start.contains(c) for c in path[1:])


def test_out_of_bounds_and_trivial_queries():
    pf = Pathfinder(OccupancyGrid(5), Layout())
    assert pf.find_path((-1, 0), (3, 3)) == []
    assert not pf.path_exists((0, 0), (9, 9))
    assert pf.find_path((2, 2), (2, 2)) == [(2, 2)]
    assert pf.path_exists((2, 2), (2, 2))
