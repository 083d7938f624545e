"""Structural diagnostics for generated layouts.

``analyze`` reports invariant violations as lists (empty means healthy) so
scripts and tests can assert on them; ``render_lines`` draws an ASCII map
(row 0 printed last so +Y points up).
"""
from __future__ import annotations

from collections import deque
from typing import Any, Dict, List

from .cells import neighbors_4
from .layout import Layout
from .rooms import RoomCategory

GLYPHS = {
    RoomCategory.START: "S",
    RoomCategory.EXIT: "E",
    RoomCategory.TREASURE: "$",
    RoomCategory.BOSS: "B",
    RoomCategory.MINI_BOSS: "b",
}


def walkable_cells(layout: Layout):
    cells = layout.hallway_cells()
    for room in layout.rooms:
        cells.update(room.cells())
    return cells


def cell_reachable(layout: Layout):
    """Cells reachable from the start room over room footprints and hallway paths."""
    if layout.start_room is None:
        return set()
    walk = walkable_cells(layout)
    seen = set(layout.start_room.cells())
    q = deque(seen)
    while q:
        cur = q.popleft()
        for nxt in neighbors_4(cur):
            if nxt in walk and nxt not in seen:
                seen.add(nxt)
                q.append(nxt)
    return seen


def analyze(layout: Layout) -> Dict[str, Any]:
    size = layout.stage_size[0]
    overlaps = [
        (a.position, b.position)
        for i, a in enumerate(layout.rooms)
        for b in layout.rooms[i + 1:]
        if a.overlaps(b)
    ]
    broken_hallways = [(h.anchor_a, h.anchor_b) for h in layout.hallways if not h.is_contiguous()]
    out_of_bounds = sorted(
        c for c in walkable_cells(layout) if not (0 <= c[0] < size and 0 <= c[1] < size)
    )
    reachable = cell_reachable(layout)
    unreachable_rooms = [r.position for r in layout.rooms if not any(c in reachable for c in r.cells())]
    exit_doors = len(layout.exit_room.door_positions) if layout.exit_room else 0
    return {
        "overlapping_rooms": overlaps,
        "broken_hallways": broken_hallways,
        "out_of_bounds_cells": out_of_bounds,
        "unreachable_rooms": unreachable_rooms,
        "exit_door_count": exit_doors,
    }


def render_lines(layout: Layout) -> List[str]:
    w, h = layout.stage_size
    canvas = [["." for _ in range(w)] for _ in range(h)]
    for cell in layout.corridor_cells():
        canvas[cell[1]][cell[0]] = "#"
    for room in layout.rooms:
        glyph = GLYPHS.get(room.category, "r")
        for x, y in room.cells():
            canvas[y][x] = glyph
        for x, y in room.wall_positions:
            canvas[y][x] = "W"
        for x, y in room.door_positions:
            canvas[y][x] = "D"
    sx, sy = layout.player_spawn_position
    if 0 <= sx < w and 0 <= sy < h:
        canvas[sy][sx] = "@"
    return ["".join(row) for row in reversed(canvas)]
