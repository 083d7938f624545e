from typing import Iterator, Tuple

Cell = Tuple[int, int]
Size2D = Tuple[int, int]

# Ordered for deterministic traversal
DIRECTIONS: Tuple[Cell, ...] = ((0, 1), (1, 0), (0, -1), (-1, 0))


def add(a: Cell, b: Cell) -> Cell:
    return (a[0] + b[0], a[1] + b[1])


def neighbors_4(cell: Cell) -> Iterator[Cell]:
    x, y = cell
    for dx, dy in DIRECTIONS:
        yield (x + dx, y + dy)


def manhattan(a: Cell, b: Cell) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def is_adjacent(a: Cell, b: Cell) -> bool:
    return manhattan(a, b) == 1


def rect_cells(position: Cell, size: Size2D) -> Iterator[Cell]:
    """Yield every cell of the rectangle [position, position+size) in row-major order."""
    px, py = position
    w, h = size
    for iy in range(py, py + h):
        for ix in range(px, px + w):
            yield (ix, iy)
