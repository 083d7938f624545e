"""Boundary derivation: door and wall positions per room.

Doors come from one place only, the hallways anchored at a room (their edge
points). A room with no anchored hallway falls back to a row-major scan for the
first footprint cell touching a corridor cell, and gets at most one door that
way. Walls are perimeter cells facing true exterior: an outward neighbor that is
neither inside any room nor on any hallway path. Every door cell is recorded
as a wall too, so corner doors keep their exterior face closed.

Both functions overwrite the per-room lists, so running them again on the same
state yields the same result.
"""
from __future__ import annotations

from typing import List, Optional

from .cells import Cell, add
from .layout import Layout
from .rooms import Room


def _outward_dirs(room: Room, cell: Cell) -> List[Cell]:
    x, y = cell
    dirs = []
    if x == room.x:
        dirs.append((-1, 0))
    if x == room.x + room.w - 1:
        dirs.append((1, 0))
    if y == room.y:
        dirs.append((0, -1))
    if y == room.y + room.h - 1:
        dirs.append((0, 1))
    return dirs


def scan_adjacent_door(room: Room, layout: Layout) -> Optional[Cell]:
    """First footprint cell (row-major) 4-adjacent to a corridor cell outside all rooms."""
    corridor = layout.corridor_cells()
    for cell in room.cells():
        for d in ((0, 1), (1, 0), (0, -1), (-1, 0)):
            if add(cell, d) in corridor:
                return cell
    return None


def derive_doors(layout: Layout) -> None:
    for room in layout.rooms:
        doors = layout.doors_for(room)
        if not doors:
            fallback = scan_adjacent_door(room, layout)
            if fallback is not None:
                doors = [fallback]
        room.door_positions = doors


def derive_walls(layout: Layout) -> None:
    hallway_cells = layout.hallway_cells()
    for room in layout.rooms:
        doors = set(room.door_positions)
        walls: List[Cell] = []
        for cell in room.cells():
            if cell in doors:
                walls.append(cell)
                continue
            if not room.is_perimeter(cell):
                continue
            for d in _outward_dirs(room, cell):
                out = add(cell, d)
                if out not in hallway_cells and not layout.in_any_room(out):
                    walls.append(cell)
                    break
        room.wall_positions = walls
