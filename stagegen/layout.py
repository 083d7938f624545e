"""Layout aggregate returned by generation.

Owns the rooms and hallways of one stage. Door bookkeeping is not tracked
separately: a room's doors, connections and hallway references are all derived
from the hallway list, so removing a hallway can never leave stale door data.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Tuple

from .cells import Cell
from .config import StageType
from .hallways import Hallway
from .rooms import ExitEdge, Room


@dataclass
class Layout:
    rooms: List[Room] = field(default_factory=list)
    hallways: List[Hallway] = field(default_factory=list)
    start_room: Optional[Room] = None
    exit_room: Optional[Room] = None
    player_spawn_position: Cell = (0, 0)
    main_exit_position: Cell = (0, 0)
    exit_edge: Optional[ExitEdge] = None
    stage_name: str = "Default Stage"
    stage_type: StageType = StageType.REGULAR
    stage_size: Tuple[int, int] = (0, 0)
    cell_size: float = 1.0
    seed: Optional[int] = None
    metrics: Dict[str, Any] = field(default_factory=dict)

    # ---- Lookups ---------------------------------------------------------
    def room_at(self, cell: Cell) -> Optional[Room]:
        for room in self.rooms:
            if room.contains(cell):
                return room
        return None

    def room_by_position(self, position: Cell) -> Optional[Room]:
        for room in self.rooms:
            if room.position == position:
                return room
        return None

    def in_any_room(self, cell: Cell) -> bool:
        return self.room_at(cell) is not None

    def hallway_cells(self) -> Set[Cell]:
        return {c for h in self.hallways for c in h.path}

    def corridor_cells(self) -> Set[Cell]:
        """Hallway cells lying outside every room footprint."""
        return {c for c in self.hallway_cells() if not self.in_any_room(c)}

    # ---- Derived topology ------------------------------------------------
    def hallways_for(self, room: Room) -> List[Hallway]:
        return [h for h in self.hallways if h.references(room)]

    def doors_for(self, room: Room) -> List[Cell]:
        doors: List[Cell] = []
        for h in self.hallways_for(room):
            door = h.door_for(room)
            if door not in doors:
                doors.append(door)
        return doors

    def connected_rooms(self, room: Room) -> List[Room]:
        out: List[Room] = []
        for h in self.hallways_for(room):
            other = self.room_by_position(h.other_anchor(room))
            if other is not None and other not in out:
                out.append(other)
        return out

    def adjacency(self) -> Dict[Cell, Set[Cell]]:
        graph: Dict[Cell, Set[Cell]] = {r.position: set() for r in self.rooms}
        for h in self.hallways:
            graph.setdefault(h.anchor_a, set()).add(h.anchor_b)
            graph.setdefault(h.anchor_b, set()).add(h.anchor_a)
        return graph

    def hop_distances(self, origin: Room) -> Dict[Cell, int]:
        """Hallway hop count from ``origin`` to every reachable room position."""
        from collections import deque

        graph = self.adjacency()
        dist = {origin.position: 0}
        q = deque([origin.position])
        while q:
            cur = q.popleft()
            for nxt in sorted(graph.get(cur, ())):
                if nxt not in dist:
                    dist[nxt] = dist[cur] + 1
                    q.append(nxt)
        return dist

    def reachable_rooms(self) -> List[Room]:
        if self.start_room is None:
            return []
        dist = self.hop_distances(self.start_room)
        return [r for r in self.rooms if r.position in dist]

    def is_spanning(self) -> bool:
        return len(self.reachable_rooms()) == len(self.rooms)

    # ---- Consumer helpers ------------------------------------------------
    @property
    def protected_positions(self) -> List[Cell]:
        cells: List[Cell] = []
        for room in (self.start_room, self.exit_room):
            if room is not None:
                cells.extend(room.cells())
        return cells

    def grid_to_world(self, cell: Cell) -> Tuple[float, float, float]:
        half = self.cell_size / 2
        return (cell[0] * self.cell_size + half, 0.0, cell[1] * self.cell_size + half)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stage_name": self.stage_name,
            "stage_type": self.stage_type.value,
            "stage_size": list(self.stage_size),
            "seed": self.seed,
            "rooms": [r.to_dict() for r in self.rooms],
            "hallways": [h.to_dict() for h in self.hallways],
            "start_room": self.rooms.index(self.start_room) if self.start_room in self.rooms else None,
            "exit_room": self.rooms.index(self.exit_room) if self.exit_room in self.rooms else None,
            "player_spawn_position": list(self.player_spawn_position),
            "main_exit_position": list(self.main_exit_position),
            "exit_edge": self.exit_edge.value if self.exit_edge else None,
        }
