"""Room model and room placement phase.

Placement order mirrors the stage flow: the configured start room first, then
the exit room on a grid edge away from the start, then the main-path rooms
scattered on a coarse lattice. Every successful placement claims its full
footprint on the occupancy grid immediately, so later rooms can never overlap
earlier ones.
"""
from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .cells import Cell, Size2D, rect_cells
from .config import StageConfig
from .grid import OccupancyGrid
from .logging_utils import get_logger

log = get_logger("stagegen.rooms")


class RoomCategory(Enum):
    START = "start"
    EXIT = "exit"
    COMBAT = "combat"
    TREASURE = "treasure"
    MINI_BOSS = "mini_boss"
    BOSS = "boss"
    CORRIDOR = "corridor"  # hallway marker only
    PUZZLE = "puzzle"
    TRAP = "trap"
    FILLER = "filler"


class ExitEdge(Enum):
    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"


# eq=False: rooms are compared and hashed by identity so they can live in sets
@dataclass(eq=False)
class Room:
    position: Cell
    size: Size2D
    category: RoomCategory = RoomCategory.COMBAT
    door_positions: List[Cell] = field(default_factory=list)
    wall_positions: List[Cell] = field(default_factory=list)

    @property
    def x(self) -> int:
        return self.position[0]

    @property
    def y(self) -> int:
        return self.position[1]

    @property
    def w(self) -> int:
        return self.size[0]

    @property
    def h(self) -> int:
        return self.size[1]

    def cells(self):
        return rect_cells(self.position, self.size)

    @property
    def center(self) -> Cell:
        return (self.x + self.w // 2, self.y + self.h // 2)

    def contains(self, cell: Cell) -> bool:
        cx, cy = cell
        return self.x <= cx < self.x + self.w and self.y <= cy < self.y + self.h

    def is_perimeter(self, cell: Cell) -> bool:
        if not self.contains(cell):
            return False
        cx, cy = cell
        return cx in (self.x, self.x + self.w - 1) or cy in (self.y, self.y + self.h - 1)

    def overlaps(self, other: "Room") -> bool:
        return (
            self.x < other.x + other.w
            and other.x < self.x + self.w
            and self.y < other.y + other.h
            and other.y < self.y + self.h
        )

    def distance_to(self, other: "Room") -> float:
        return math.dist(self.center, other.center)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "position": list(self.position),
            "size": list(self.size),
            "category": self.category.value,
            "door_positions": [list(c) for c in self.door_positions],
            "wall_positions": [list(c) for c in self.wall_positions],
        }


def place_start_room(grid: OccupancyGrid, config: StageConfig) -> Room:
    """Place the configured start room. Configuration is trusted to be valid."""
    room = Room(tuple(config.start_room_position), tuple(config.start_room_size), RoomCategory.START)
    grid.mark_occupied(room.position, room.size)
    return room


def _exit_candidate(edge: ExitEdge, grid_size: int, size: Size2D, rng: random.Random) -> Cell:
    w, h = size
    if edge is ExitEdge.LEFT:
        return (0, rng.randint(0, grid_size - h))
    if edge is ExitEdge.RIGHT:
        return (grid_size - w, rng.randint(0, grid_size - h))
    if edge is ExitEdge.BOTTOM:
        return (rng.randint(0, grid_size - w), 0)
    return (rng.randint(0, grid_size - w), grid_size - h)


def exit_doorway(room: Room, edge: ExitEdge, grid_size: int) -> Cell:
    """Cell of the exit room flush with the grid edge it was placed on."""
    if edge is ExitEdge.LEFT:
        return (0, room.y + room.h // 2)
    if edge is ExitEdge.RIGHT:
        return (grid_size - 1, room.y + room.h // 2)
    if edge is ExitEdge.BOTTOM:
        return (room.x + room.w // 2, 0)
    return (room.x + room.w // 2, grid_size - 1)


def place_exit_room(
    grid: OccupancyGrid,
    config: StageConfig,
    start: Room,
    rng: random.Random,
    metrics: Dict[str, Any],
) -> Optional[Tuple[Room, ExitEdge]]:
    """Place the exit room on a grid edge, preferring positions far from the start.

    The minimum distance is a soft constraint: after ``exit_attempts`` misses the
    last placeable candidate is accepted anyway. Returns None only when no
    candidate could be placed at all.
    """
    size = tuple(config.exit_room_size)
    min_distance = config.resolved_min_exit_distance()
    forced = ExitEdge(config.exit_edge) if config.exit_edge else None
    fallback: Optional[Tuple[Cell, ExitEdge]] = None
    attempts = 0
    chosen: Optional[Tuple[Cell, ExitEdge]] = None
    while attempts < config.exit_attempts:
        attempts += 1
        edge = forced or rng.choice(list(ExitEdge))
        pos = _exit_candidate(edge, grid.size, size, rng)
        if not grid.can_place(pos, size):
            continue
        fallback = (pos, edge)
        if math.dist(pos, start.position) >= min_distance:
            chosen = fallback
            break
    metrics["exit_attempts"] = attempts
    metrics["exit_distance_met"] = chosen is not None
    if chosen is None:
        if fallback is None:
            log.error(event="exit_placement_failed", attempts=attempts, grid_size=grid.size)
            return None
        log.warn(
            event="exit_distance_unmet",
            attempts=attempts,
            position=fallback[0],
            min_distance=min_distance,
        )
        chosen = fallback
    pos, edge = chosen
    room = Room(pos, size, RoomCategory.EXIT)
    grid.mark_occupied(room.position, room.size)
    return room, edge


def place_main_rooms(
    grid: OccupancyGrid,
    config: StageConfig,
    rng: random.Random,
    metrics: Dict[str, Any],
) -> List[Room]:
    """Scatter ``room_count - 2`` rooms on a coarse lattice.

    A room that cannot be placed within ``room_attempts`` is skipped; generation
    continues with fewer rooms.
    """
    target = max(0, config.room_count - 2)
    rooms: List[Room] = []
    skipped = 0
    for index in range(target):
        w = rng.randint(config.min_room_size, config.max_room_size)
        h = rng.randint(config.min_room_size, config.max_room_size)
        step = max(w, h)
        placed = None
        if w <= grid.size and h <= grid.size:
            for _ in range(config.room_attempts):
                pos = (
                    rng.randint(0, (grid.size - w) // step) * step,
                    rng.randint(0, (grid.size - h) // step) * step,
                )
                if grid.can_place(pos, (w, h)):
                    placed = pos
                    break
        if placed is None:
            skipped += 1
            continue
        category = RoomCategory.TREASURE if rng.random() < config.treasure_chance else RoomCategory.COMBAT
        room = Room(placed, (w, h), category)
        grid.mark_occupied(room.position, room.size)
        rooms.append(room)
        log.debug(event="room_placed", index=index, position=placed, size=(w, h), category=category.value)
    metrics["rooms_placed"] = len(rooms)
    metrics["rooms_skipped"] = skipped
    if skipped:
        log.warn(event="room_placement_failed", requested=target, placed=len(rooms), skipped=skipped)
    return rooms
