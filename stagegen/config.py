import os
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import List, Optional, Tuple

from dotenv import load_dotenv

from .logging_utils import get_logger

log = get_logger("stagegen.config")


class StageType(Enum):
    REGULAR = "regular"
    BOSS = "boss"
    MINI_BOSS = "mini_boss"


EXIT_EDGES = ("left", "right", "top", "bottom")


@dataclass
class StageConfig:
    grid_size: int = 20
    cell_size: float = 3.0
    room_count: int = 10
    min_room_size: int = 3
    max_room_size: int = 6
    start_room_position: Tuple[int, int] = (0, 0)
    start_room_size: Tuple[int, int] = (3, 3)
    player_spawn_offset: Tuple[int, int] = (1, 1)
    exit_room_size: Tuple[int, int] = (3, 3)
    min_exit_distance: Optional[float] = None
    exit_edge: Optional[str] = None
    exit_attempts: int = 20
    room_attempts: int = 100
    treasure_chance: float = 0.10
    branch_chance: float = 0.25
    max_branch_distance: float = 8
    dead_end_treasure_chance: float = 0.5
    stage_name: str = "Default Stage"
    stage_type: StageType = field(default=StageType.REGULAR)
    seed: Optional[int] = None
    enable_metrics: bool = True

    def resolved_min_exit_distance(self) -> float:
        if self.min_exit_distance is None:
            return self.grid_size / 2
        return self.min_exit_distance

    def validate(self) -> List[str]:
        """Return a list of configuration problems (empty when usable)."""
        problems = []
        g = self.grid_size
        if g < 1:
            problems.append(f"grid_size must be positive (got {g})")
        if self.min_room_size < 1:
            problems.append("min_room_size must be at least 1")
        if self.min_room_size > self.max_room_size:
            problems.append(f"min_room_size {self.min_room_size} exceeds max_room_size {self.max_room_size}")
        sx, sy = self.start_room_position
        sw, sh = self.start_room_size
        if sw < 1 or sh < 1 or sx < 0 or sy < 0 or sx + sw > g or sy + sh > g:
            problems.append("start room does not fit inside the grid")
        ew, eh = self.exit_room_size
        if ew < 1 or eh < 1 or ew > g or eh > g:
            problems.append("exit room does not fit inside the grid")
        if self.exit_edge is not None and self.exit_edge not in EXIT_EDGES:
            problems.append(f"exit_edge must be one of {', '.join(EXIT_EDGES)} (got {self.exit_edge!r})")
        for name in ("treasure_chance", "branch_chance", "dead_end_treasure_chance"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                problems.append(f"{name} must be within [0, 1] (got {value})")
        return problems

    @classmethod
    def from_env(cls, **overrides) -> "StageConfig":
        """Build a config from ``.env`` / ``STAGEGEN_*`` variables, then keyword overrides.

        Precedence (lowest to highest): dataclass defaults, environment, overrides.
        Unparseable environment values are logged and ignored.
        """
        load_dotenv()
        config = cls()
        env_map = {
            "STAGEGEN_GRID_SIZE": ("grid_size", int),
            "STAGEGEN_ROOM_COUNT": ("room_count", int),
            "STAGEGEN_MIN_ROOM_SIZE": ("min_room_size", int),
            "STAGEGEN_MAX_ROOM_SIZE": ("max_room_size", int),
            "STAGEGEN_BRANCH_CHANCE": ("branch_chance", float),
            "STAGEGEN_MAX_BRANCH_DISTANCE": ("max_branch_distance", float),
            "STAGEGEN_SEED": ("seed", int),
            "STAGEGEN_EXIT_EDGE": ("exit_edge", str),
            "STAGEGEN_STAGE_TYPE": ("stage_type", StageType),
            "STAGEGEN_ENABLE_METRICS": ("enable_metrics", _parse_bool),
        }
        for env_key, (attr, parse) in env_map.items():
            if env_key not in os.environ:
                continue
            raw = os.environ.get(env_key, "")
            try:
                setattr(config, attr, parse(raw.strip().lower()))
            except ValueError:
                log.warn(event="config_env_invalid", key=env_key, value=raw)
        known = {f.name for f in fields(cls)}
        unknown = set(overrides) - known
        if unknown:
            log.warn(event="config_override_unknown", keys=",".join(sorted(unknown)))
        return replace(config, **{k: v for k, v in overrides.items() if k in known})


def _parse_bool(value: str) -> bool:
    return value not in {"0", "false", "no", "off", ""}


__all__ = ["StageConfig", "StageType", "EXIT_EDGES"]
