"""Pipeline orchestration for stage layout generation.

``generate_layout(config, rng=None)`` is the public entry point. It wraps a
``LayoutBuilder`` that owns every piece of mutable state for one run (the
occupancy grid, the in-progress Layout, the RNG and the metrics dict) and runs
the phases in a fixed order with no rollback:

    place rooms -> ensure spanning -> limit exit connections -> inject branches
    -> prune redundant hallways -> ensure spanning (repair) -> assign features
    -> derive doors -> derive walls

Degraded outcomes (skipped rooms, an unmet exit distance, repairs) are logged
and counted in metrics; only a missing or unusable configuration, or an exit
room that cannot be placed at all, yields ``None``.
"""
from __future__ import annotations

import random
import time
from typing import Any, Callable, Dict, Optional

from .cells import add
from .config import StageConfig
from .connectivity import ensure_spanning, inject_branches
from .doors import derive_doors, derive_walls
from .features import assign_features
from .grid import OccupancyGrid
from .layout import Layout
from .logging_utils import get_logger
from .metrics import init_metrics
from .pruning import limit_exit_connections, prune_redundant_hallways
from .rooms import exit_doorway, place_exit_room, place_main_rooms, place_start_room

log = get_logger("stagegen.pipeline")


class LayoutBuilder:
    def __init__(self, config: StageConfig, rng: Optional[random.Random] = None):
        self.config = config
        self.seed = config.seed
        if rng is None:
            # Preserve seed semantics: 0 is a valid deterministic seed; None => random
            if self.seed is None:
                self.seed = random.randint(0, 2**31 - 1)
            rng = random.Random(self.seed)
        self.rng = rng
        self.grid = OccupancyGrid(config.grid_size)
        self.metrics: Dict[str, Any] = init_metrics()
        self.phase_ms: Dict[str, int] = {}
        self.layout = Layout(
            stage_name=config.stage_name,
            stage_type=config.stage_type,
            stage_size=(config.grid_size, config.grid_size),
            cell_size=config.cell_size,
            seed=self.seed,
        )

    def _phase(self, label: str, fn: Callable, *a, **k):
        ps = time.perf_counter()
        r = fn(*a, **k)
        self.phase_ms[label] = int((time.perf_counter() - ps) * 1000)
        log.debug(event="phase_complete", phase=label, ms=self.phase_ms[label])
        return r

    def place_rooms(self) -> bool:
        config, layout = self.config, self.layout
        start = place_start_room(self.grid, config)
        layout.start_room = start
        layout.rooms.append(start)
        layout.player_spawn_position = add(start.position, tuple(config.player_spawn_offset))
        placed = place_exit_room(self.grid, config, start, self.rng, self.metrics)
        if placed is None:
            return False
        exit_room, edge = placed
        layout.exit_room = exit_room
        layout.exit_edge = edge
        layout.main_exit_position = exit_doorway(exit_room, edge, config.grid_size)
        layout.rooms.append(exit_room)
        layout.rooms.extend(place_main_rooms(self.grid, config, self.rng, self.metrics))
        return True

    def connect(self) -> None:
        self.metrics["hallways_spanning"] = ensure_spanning(self.grid, self.layout, self.metrics)

    def post_process(self) -> None:
        grid, layout, metrics = self.grid, self.layout, self.metrics
        self._phase("limit_exit", limit_exit_connections, grid, layout, metrics)
        self._phase(
            "branches",
            inject_branches,
            grid,
            layout,
            self.rng,
            self.config.branch_chance,
            self.config.max_branch_distance,
            metrics,
        )
        self._phase("prune", prune_redundant_hallways, grid, layout, metrics)
        repairs = self._phase("ensure_spanning", ensure_spanning, grid, layout, metrics)
        if repairs:
            metrics["spanning_repairs"] += repairs
            log.warn(event="spanning_repair", hallways_added=repairs)

    def build(self) -> Optional[Layout]:
        start = time.perf_counter()
        if not self._phase("place_rooms", self.place_rooms):
            return None
        self._phase("connect", self.connect)
        self.post_process()
        self._phase("assign_features", assign_features, self.layout, self.config, self.rng, self.metrics)
        self._phase("derive_doors", derive_doors, self.layout)
        self._phase("derive_walls", derive_walls, self.layout)
        self.metrics["runtime_ms"] = int((time.perf_counter() - start) * 1000)
        self.metrics["phase_ms"] = self.phase_ms
        if self.config.enable_metrics:
            self.layout.metrics = self.metrics
        log.info(
            event="layout_generated",
            seed=self.seed,
            rooms=len(self.layout.rooms),
            hallways=len(self.layout.hallways),
            runtime_ms=self.metrics["runtime_ms"],
        )
        return self.layout


def generate_layout(config: Optional[StageConfig], rng: Optional[random.Random] = None) -> Optional[Layout]:
    """Generate one stage layout, or None when the configuration is absent/unusable."""
    if config is None:
        log.error(event="generation_aborted", reason="missing_config")
        return None
    problems = config.validate()
    if problems:
        log.error(event="generation_aborted", reason="invalid_config", problems="; ".join(problems))
        return None
    return LayoutBuilder(config, rng).build()
