"""Topology-driven room flavor.

Runs after the hallway set is final, so door counts here are the ones the
boundary deriver will write onto the rooms.

Logic:
  * Dead ends (exactly one door, not start/exit) become Treasure with
    ``dead_end_treasure_chance``.
  * Treasure rooms with more than one door are demoted to Combat.
  * Boss / MiniBoss stages turn the room farthest (in hallway hops) from the
    start into the boss room.
"""
from __future__ import annotations

import random
from typing import Any, Dict, Optional

from .config import StageConfig, StageType
from .layout import Layout
from .logging_utils import get_logger
from .rooms import Room, RoomCategory

log = get_logger("stagegen.features")

_FIXED = (RoomCategory.START, RoomCategory.EXIT)


def reclassify_dead_ends(layout: Layout, rng: random.Random, chance: float, metrics: Dict[str, Any]) -> None:
    for room in layout.rooms:
        if room is layout.start_room or room is layout.exit_room or room.category in _FIXED:
            continue
        doors = len(layout.doors_for(room))
        if doors == 1:
            if rng.random() < chance and room.category is not RoomCategory.TREASURE:
                room.category = RoomCategory.TREASURE
                metrics["treasure_promoted"] += 1
        elif doors > 1 and room.category is RoomCategory.TREASURE:
            room.category = RoomCategory.COMBAT
            metrics["treasure_demoted"] += 1


def assign_boss_room(layout: Layout, stage_type: StageType) -> Optional[Room]:
    if stage_type is StageType.REGULAR or layout.start_room is None:
        return None
    category = RoomCategory.BOSS if stage_type is StageType.BOSS else RoomCategory.MINI_BOSS
    hops = layout.hop_distances(layout.start_room)
    best: Optional[Room] = None
    best_hops = -1
    for room in layout.rooms:
        if room is layout.start_room or room is layout.exit_room:
            continue
        d = hops.get(room.position, -1)
        if d > best_hops:
            best, best_hops = room, d
    if best is None:
        log.warn(event="boss_room_unassigned", stage_type=stage_type.value)
        return None
    best.category = category
    log.debug(event="boss_room_assigned", position=best.position, hops=best_hops, category=category.value)
    return best


def assign_features(layout: Layout, config: StageConfig, rng: random.Random, metrics: Dict[str, Any]) -> None:
    reclassify_dead_ends(layout, rng, config.dead_end_treasure_chance, metrics)
    assign_boss_room(layout, config.stage_type)
