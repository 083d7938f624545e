"""Breadth-first queries over the occupancy grid.

Two traversability rules are in play:

* ``path_exists`` is lenient: any hallway cell is walkable even where the
  bitmap says occupied, as is any unoccupied cell.
* ``find_path`` is strict: only unoccupied cells outside every room footprint
  are walkable.

In both, the two endpoints are always walkable. Movement is 4-directional.
"""
from __future__ import annotations

from collections import deque
from typing import Callable, Dict, List, Optional

from .cells import Cell, neighbors_4
from .grid import OccupancyGrid
from .layout import Layout


class Pathfinder:
    def __init__(self, grid: OccupancyGrid, layout: Layout) -> None:
        self.grid = grid
        self.layout = layout

    def _search(self, start: Cell, goal: Cell, walkable: Callable[[Cell], bool]) -> Dict[Cell, Optional[Cell]]:
        parent: Dict[Cell, Optional[Cell]] = {start: None}
        if not (self.grid.in_bounds(start) and self.grid.in_bounds(goal)):
            return parent
        q = deque([start])
        while q:
            cur = q.popleft()
            if cur == goal:
                break
            for nxt in neighbors_4(cur):
                if nxt in parent or not self.grid.in_bounds(nxt):
                    continue
                if nxt == goal or walkable(nxt):
                    parent[nxt] = cur
                    q.append(nxt)
        return parent

    def path_exists(self, start: Cell, goal: Cell) -> bool:
        if start == goal:
            return self.grid.in_bounds(start)
        hallway_cells = self.layout.hallway_cells()

        def walkable(c: Cell) -> bool:
            return c in hallway_cells or not self.grid.is_occupied(c)

        return goal in self._search(start, goal, walkable)

    def find_path(self, start: Cell, goal: Cell) -> List[Cell]:
        """Shortest free-space path from ``start`` to ``goal`` inclusive, or [] if unreachable."""
        if start == goal:
            return [start] if self.grid.in_bounds(start) else []

        def walkable(c: Cell) -> bool:
            return not self.grid.is_occupied(c) and not self.layout.in_any_room(c)

        parent = self._search(start, goal, walkable)
        if goal not in parent:
            return []
        path = [goal]
        while parent[path[-1]] is not None:
            path.append(parent[path[-1]])
        path.reverse()
        return path
