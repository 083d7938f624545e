import json

import pytest

from stagegen import LayoutBuilder, StageConfig, StageType, generate_layout
from stagegen.debug_checks import analyze
from stagegen.rooms import ExitEdge, RoomCategory
from tests.layout_test_utils import all_rooms_cell_reachable, is_contiguous, overlapping_pairs

SEEDS = [0, 1, 7, 42, 1234, 99991]


def _config(**overrides):
    base = dict(grid_size=20, room_count=6, exit_edge="right")
    base.update(overrides)
    return StageConfig(**base)


@pytest.mark.parametrize("seed", SEEDS)
def test_generated_layout_is_structurally_sound(seed):
    layout = generate_layout(_config(seed=seed))
    assert layout is not None
    assert overlapping_pairs(layout.rooms) == []
    assert all(is_contiguous(h.path) for h in layout.hallways)
    assert len(layout.exit_room.door_positions) == 1
    assert all_rooms_cell_reachable(layout)
    assert layout.is_spanning()
    assert layout.player_spawn_position == (1, 1)
    assert layout.exit_edge is ExitEdge.RIGHT
    assert layout.main_exit_position[0] == 19
    assert layout.exit_room.contains(layout.main_exit_position)
    assert layout.start_room.category is RoomCategory.START
    assert layout.exit_room.category is RoomCategory.EXIT


@pytest.mark.parametrize("seed", SEEDS)
def test_hallway_cells_claimed_on_grid(seed):
    builder = LayoutBuilder(_config(seed=seed))
    layout = builder.build()
    for cell in layout.hallway_cells():
        assert layout.in_any_room(cell) or builder.grid.is_occupied(cell)


def test_spanning_right_after_connect():
    builder = LayoutBuilder(_config(seed=5, room_count=8))
    assert builder.place_rooms()
    builder.connect()
    assert builder.layout.is_spanning()
    assert builder.metrics["hallways_spanning"] == len(builder.layout.rooms) - 1


@pytest.mark.parametrize("seed", SEEDS)
def test_without_branches_layout_is_a_tree(seed):
    layout = generate_layout(_config(seed=seed, branch_chance=0.0, max_branch_distance=0))
    assert len(layout.hallways) == len(layout.rooms) - 1
    assert layout.metrics["branches_added"] == 0


def test_same_seed_same_layout():
    first = generate_layout(_config(seed=31337, room_count=10))
    second = generate_layout(_config(seed=31337, room_count=10))
    assert first.to_dict() == second.to_dict()


def test_seed_recorded_when_not_given():
    layout = generate_layout(_config())
    assert isinstance(layout.seed, int)
    again = generate_layout(_config(seed=layout.seed))
    assert again.to_dict() == layout.to_dict()


def test_missing_config_returns_none(capsys):
    assert generate_layout(None) is None
    assert "missing_config" in capsys.readouterr().err


def test_invalid_config_returns_none(capsys):
    assert generate_layout(StageConfig(min_room_size=7, max_room_size=4)) is None
    assert "invalid_config" in capsys.readouterr().err


def test_metrics_populated_and_optional():
    layout = generate_layout(_config(seed=3))
    assert layout.metrics["rooms_placed"] + layout.metrics["rooms_skipped"] == 4
    assert "place_rooms" in layout.metrics["phase_ms"]
    assert layout.metrics["exit_distance_met"] in (True, False)
    quiet = generate_layout(_config(seed=3, enable_metrics=False))
    assert quiet.metrics == {}


@pytest.mark.parametrize("seed", SEEDS)
def test_start_room_flush_with_far_corner(seed):
    config = StageConfig(
        grid_size=10,
        room_count=4,
        max_room_size=3,
        start_room_position=(7, 7),
        exit_edge="left",
        seed=seed,
    )
    layout = generate_layout(config)
    assert layout is not None
    assert analyze(layout)["out_of_bounds_cells"] == []
    assert layout.player_spawn_position == (8, 8)
    assert all_rooms_cell_reachable(layout)


@pytest.mark.parametrize("stage_type, category", [
    (StageType.BOSS, RoomCategory.BOSS),
    (StageType.MINI_BOSS, RoomCategory.MINI_BOSS),
])
def test_boss_stage_gets_one_boss_room(stage_type, category):
    layout = generate_layout(_config(seed=11, stage_type=stage_type))
    assert [r.category for r in layout.rooms].count(category) == 1
    assert layout.to_dict()["stage_type"] == stage_type.value


def test_grid_to_world_centers_cells():
    layout = generate_layout(_config(seed=2, cell_size=3.0))
    assert layout.grid_to_world((2, 4)) == (7.5, 0.0, 13.5)
    assert layout.grid_to_world((0, 0)) == (1.5, 0.0, 1.5)


def test_protected_positions_cover_start_and_exit():
    layout = generate_layout(_config(seed=2))
    protected = set(layout.protected_positions)
    assert set(layout.start_room.cells()) <= protected
    assert set(layout.exit_room.cells()) <= protected
    assert len(protected) == 18


def test_layout_serializes_to_json():
    layout = generate_layout(_config(seed=8, stage_name="Crypt"))
    data = json.loads(json.dumps(layout.to_dict()))
    assert data["stage_name"] == "Crypt"
    assert data["stage_size"] == [20, 20]
    assert data["rooms"][data["start_room"]]["category"] == "start"
    assert data["exit_edge"] == "right"
