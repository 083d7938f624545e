"""Hallway model and corridor routing.

Corridors are deterministic L shapes: leave room A through the boundary edge
point facing room B, step one cell outward (the escape cell), walk purely along
X to the other escape cell's column, then purely along Y, step into room B's
edge point. No obstacle avoidance is attempted; a corridor may clip through a
third room, which is harmless because room cells are already walkable.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from .cells import Cell, add, is_adjacent
from .rooms import Room

# Fixed tie-break order for edge selection
SIDES: Tuple[Tuple[str, Cell], ...] = (
    ("left", (-1, 0)),
    ("right", (1, 0)),
    ("top", (0, 1)),
    ("bottom", (0, -1)),
)


@dataclass(eq=False)
class Hallway:
    anchor_a: Cell
    anchor_b: Cell
    path: List[Cell] = field(default_factory=list)
    is_branch: bool = False

    def references(self, room: Room) -> bool:
        return room.position in (self.anchor_a, self.anchor_b)

    def other_anchor(self, room: Room) -> Cell:
        return self.anchor_b if self.anchor_a == room.position else self.anchor_a

    def door_for(self, room: Room) -> Cell:
        """Edge point of ``room`` this hallway enters through."""
        return self.path[0] if self.anchor_a == room.position else self.path[-1]

    def is_contiguous(self) -> bool:
        return all(is_adjacent(a, b) for a, b in zip(self.path, self.path[1:]))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "anchor_a": list(self.anchor_a),
            "anchor_b": list(self.anchor_b),
            "path": [list(c) for c in self.path],
            "is_branch": self.is_branch,
        }


def edge_point(room: Room, side: str) -> Cell:
    if side == "left":
        return (room.x, room.y + room.h // 2)
    if side == "right":
        return (room.x + room.w - 1, room.y + room.h // 2)
    if side == "top":
        return (room.x + room.w // 2, room.y + room.h - 1)
    return (room.x + room.w // 2, room.y)


def choose_edge(room: Room, target: Cell, grid_size: int) -> Tuple[Cell, Cell]:
    """Return (edge point, escape cell) of the side of ``room`` closest to ``target``.

    Sides whose escape cell would leave the grid are not eligible. If no side
    is eligible the edge point doubles as its own escape cell.
    """
    best = None
    best_dist = math.inf
    for side, normal in SIDES:
        point = edge_point(room, side)
        escape = add(point, normal)
        if not (0 <= escape[0] < grid_size and 0 <= escape[1] < grid_size):
            continue
        d = math.dist(point, target)
        if d < best_dist:
            best, best_dist = (point, escape), d
    if best is None:
        point = edge_point(room, SIDES[0][0])
        return point, point
    return best


def l_path(start: Cell, end: Cell) -> List[Cell]:
    """Two-segment Manhattan path: X first, then Y. Both ends inclusive."""
    x, y = start
    gx, gy = end
    path = [(x, y)]
    while x != gx:
        x += 1 if gx > x else -1
        path.append((x, y))
    while y != gy:
        y += 1 if gy > y else -1
        path.append((x, y))
    return path


def route_hallway(a: Room, b: Room, grid_size: int, *, is_branch: bool = False) -> Hallway:
    edge_a, escape_a = choose_edge(a, b.center, grid_size)
    edge_b, escape_b = choose_edge(b, a.center, grid_size)
    raw = [edge_a] + l_path(escape_a, escape_b) + [edge_b]
    path: List[Cell] = []
    for cell in raw:
        if not path or path[-1] != cell:
            path.append(cell)
    # Touching rooms: the route may cross the far edge point early, or re-enter
    # the near one; trim so each edge point appears exactly once at its end.
    path = path[: path.index(edge_b) + 1]
    last_a = len(path) - 1 - path[::-1].index(edge_a)
    path = path[last_a:]
    return Hallway(a.position, b.position, path, is_branch)
