"""Hallway pruning passes run after the spanning connection exists.

Both passes remove whole hallways only (paths are never edited in place) and
release the corridor cells that no remaining hallway uses.
"""
from __future__ import annotations

from typing import Any, Dict

from .connectivity import release_hallway
from .grid import OccupancyGrid
from .layout import Layout
from .logging_utils import get_logger

log = get_logger("stagegen.pruning")


def limit_exit_connections(grid: OccupancyGrid, layout: Layout, metrics: Dict[str, Any]) -> int:
    """Keep only the first hallway into the exit room. Returns hallways removed."""
    if layout.exit_room is None:
        return 0
    extra = layout.hallways_for(layout.exit_room)[1:]
    for hallway in extra:
        release_hallway(grid, layout, hallway)
        log.debug(event="exit_hallway_removed", anchor_a=hallway.anchor_a, anchor_b=hallway.anchor_b)
    metrics["exit_hallways_removed"] += len(extra)
    return len(extra)


def prune_redundant_hallways(grid: OccupancyGrid, layout: Layout, metrics: Dict[str, Any]) -> int:
    """Drop duplicate hallways that share a room's single door.

    For each room referenced by more than one hallway while having exactly one
    door, every hallway after the first (list order) is removed, unless its
    removal would cut a room off from the start room.
    """
    pruned = 0
    for room in layout.rooms:
        hallways = layout.hallways_for(room)
        if len(hallways) <= 1 or len(layout.doors_for(room)) != 1:
            continue
        for hallway in hallways[1:]:
            index = layout.hallways.index(hallway)
            layout.hallways.pop(index)
            keeps_spanning = layout.is_spanning()
            layout.hallways.insert(index, hallway)
            if not keeps_spanning:
                continue
            release_hallway(grid, layout, hallway)
            pruned += 1
            log.debug(event="hallway_pruned", room=room.position, anchor_a=hallway.anchor_a, anchor_b=hallway.anchor_b)
    metrics["hallways_pruned"] += pruned
    return pruned

