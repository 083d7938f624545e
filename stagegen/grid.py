"""Occupancy grid shared by the generation phases.

Bounded square boolean map of claimed cells. All access is bounds-checked:
reads outside the grid report "free" (``is_occupied``) or "blocked"
(``can_place``), writes outside the grid are ignored.
"""
from __future__ import annotations

from typing import Iterable, List

from .cells import Cell, Size2D, rect_cells


class OccupancyGrid:
    def __init__(self, size: int) -> None:
        if size < 1:
            raise ValueError(f"Grid size must be positive, got {size}")
        self.size = size
        # column-major: _cells[x][y]
        self._cells: List[List[bool]] = [[False for _ in range(size)] for _ in range(size)]

    def in_bounds(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.size and 0 <= y < self.size

    def is_occupied(self, cell: Cell) -> bool:
        if not self.in_bounds(cell):
            return False
        return self._cells[cell[0]][cell[1]]

    def mark_cell(self, cell: Cell) -> None:
        if self.in_bounds(cell):
            self._cells[cell[0]][cell[1]] = True

    def mark_occupied(self, position: Cell, size: Size2D) -> None:
        for cell in rect_cells(position, size):
            self.mark_cell(cell)

    def mark_cells(self, cells: Iterable[Cell]) -> None:
        for cell in cells:
            self.mark_cell(cell)

    def release_cell(self, cell: Cell) -> None:
        if self.in_bounds(cell):
            self._cells[cell[0]][cell[1]] = False

    def can_place(self, position: Cell, size: Size2D) -> bool:
        """True iff every cell of the rectangle is in bounds and unoccupied."""
        w, h = size
        if w < 1 or h < 1:
            return False
        px, py = position
        if px < 0 or py < 0 or px + w > self.size or py + h > self.size:
            return False
        return not any(self._cells[x][y] for x, y in rect_cells(position, size))

    def occupied_count(self) -> int:
        return sum(1 for column in self._cells for v in column if v)

    def snapshot(self):
        """Hashable copy of the bitmap for equality checks."""
        return tuple(tuple(column) for column in self._cells)
