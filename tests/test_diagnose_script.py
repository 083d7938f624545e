import importlib.util
import json
import os

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


def _load_script():
    path = os.path.join(ROOT_DIR, "scripts", "diagnose_seeds.py")
    spec = importlib.util.spec_from_file_location("diagnose_seeds", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_healthy_seeds_exit_zero(capsys):
    script = _load_script()
    assert script.main(["1", "2", "3"]) == 0
    out = capsys.readouterr().out
    data = json.loads(out[out.index("{"):])
    assert [r["seed"] for r in data["results"]] == [1, 2, 3]
    assert all(r["ok"] for r in data["results"])


def test_render_and_overrides(capsys):
    script = _load_script()
    assert script.main(["--render", "--grid-size", "16", "--room-count", "5", "4"]) == 0
    out = capsys.readouterr().out
    assert "seed=4" in out
    data = json.loads(out[out.index("{"):])
    assert data["results"][0]["rooms"] <= 5


def test_failed_generation_reported():
    script = _load_script()
    result = script.run_for_seed(1, {"min_room_size": 9, "max_room_size": 2})
    assert result["ok"] is False
    assert result["issues"] == {"generation_failed": 1}
