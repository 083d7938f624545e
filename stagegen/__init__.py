"""Procedural stage layout generator.

Public surface: configure a ``StageConfig``, call ``generate_layout`` and
consume the returned ``Layout`` (rooms, hallways, start/exit, spawn point).
"""

from .config import StageConfig, StageType
from .grid import OccupancyGrid
from .hallways import Hallway
from .layout import Layout
from .pathfinding import Pathfinder
from .pipeline import LayoutBuilder, generate_layout
from .rooms import ExitEdge, Room, RoomCategory

__all__ = [
    "StageConfig",
    "StageType",
    "OccupancyGrid",
    "Hallway",
    "Layout",
    "Pathfinder",
    "LayoutBuilder",
    "generate_layout",
    "ExitEdge",
    "Room",
    "RoomCategory",
]
