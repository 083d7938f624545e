"""Spanning connection and branch injection.

``ensure_spanning`` is the greedy nearest-pair builder: rooms already reachable
from the start room (through existing hallways) form the connected set, and the
globally closest (connected, unconnected) pair by center distance is joined
until nothing is left. Running it on an already spanning layout is a no-op, so
the pipeline calls it both as the main pass and as the post-processing repair.

The exit room is a leaf: it may be joined once but never serves as the
connected side of another join, and branches never touch it.
"""
from __future__ import annotations

import random
from typing import Any, Dict, List

from .grid import OccupancyGrid
from .hallways import Hallway, route_hallway
from .layout import Layout
from .logging_utils import get_logger
from .pathfinding import Pathfinder
from .rooms import Room

log = get_logger("stagegen.connectivity")


def claim_hallway(grid: OccupancyGrid, layout: Layout, hallway: Hallway) -> None:
    """Mark every path cell outside a room footprint occupied."""
    grid.mark_cells(c for c in hallway.path if not layout.in_any_room(c))


def release_hallway(grid: OccupancyGrid, layout: Layout, hallway: Hallway) -> None:
    """Remove ``hallway`` and free the corridor cells no other hallway uses."""
    layout.hallways.remove(hallway)
    still_used = layout.hallway_cells()
    for cell in hallway.path:
        if cell not in still_used and not layout.in_any_room(cell):
            grid.release_cell(cell)


def connect_rooms(grid: OccupancyGrid, layout: Layout, a: Room, b: Room, *, is_branch: bool = False) -> Hallway:
    hallway = route_hallway(a, b, grid.size, is_branch=is_branch)
    layout.hallways.append(hallway)
    claim_hallway(grid, layout, hallway)
    return hallway


def ensure_spanning(grid: OccupancyGrid, layout: Layout, metrics: Dict[str, Any]) -> int:
    """Join every room to the start room's component. Returns hallways added."""
    if layout.start_room is None:
        return 0
    connected: List[Room] = layout.reachable_rooms()
    unconnected: List[Room] = [r for r in layout.rooms if r not in connected]
    added = 0
    while unconnected:
        best = None
        best_dist = float("inf")
        for a in connected:
            if a is layout.exit_room:
                continue
            for b in unconnected:
                d = a.distance_to(b)
                if d < best_dist:
                    best, best_dist = (a, b), d
        if best is None:
            # only the exit is connected; nothing may branch off it
            break
        a, b = best
        connect_rooms(grid, layout, a, b)
        added += 1
        log.debug(event="rooms_connected", room_a=a.position, room_b=b.position, distance=round(best_dist, 2))
        connected = layout.reachable_rooms()
        unconnected = [r for r in layout.rooms if r not in connected]
    if unconnected:
        log.warn(event="spanning_incomplete", unconnected=len(unconnected))
    return added


def inject_branches(
    grid: OccupancyGrid,
    layout: Layout,
    rng: random.Random,
    branch_chance: float,
    max_branch_distance: float,
    metrics: Dict[str, Any],
) -> int:
    """Add optional extra hallways between nearby rooms that have no route yet."""
    pathfinder = Pathfinder(grid, layout)
    rooms = list(layout.rooms)
    added = 0
    for i, a in enumerate(rooms):
        for b in rooms[i + 1:]:
            if layout.exit_room in (a, b):
                continue
            if a.distance_to(b) >= max_branch_distance:
                continue
            if rng.random() >= branch_chance:
                continue
            if pathfinder.path_exists(a.center, b.center):
                metrics["branches_skipped"] += 1
                log.debug(event="branch_skipped_route_exists", room_a=a.position, room_b=b.position)
                continue
            connect_rooms(grid, layout, a, b, is_branch=True)
            added += 1
    metrics["branches_added"] += added
    return added
