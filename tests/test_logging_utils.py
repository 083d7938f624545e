import json

from stagegen.logging_utils import get_logger


def test_key_value_line(monkeypatch, capsys):
    monkeypatch.setenv("STAGEGEN_LOG_LEVEL", "info")
    get_logger("stagegen.test").info(event="room_placed", name="big room", count=3, skipped=None)
    line = capsys.readouterr().out.strip()
    assert line.startswith("level=info ts=")
    assert "event=room_placed" in line
    assert "name=bigroom" in line
    assert "count=3" in line
    assert "logger=stagegen.test" in line
    assert "skipped" not in line


def test_json_mode(monkeypatch, capsys):
    monkeypatch.setenv("STAGEGEN_LOG_LEVEL", "debug")
    monkeypatch.setenv("STAGEGEN_LOG_JSON", "1")
    get_logger("stagegen.test").debug(event="phase_complete", position=(1, 2), ms=4)
    rec = json.loads(capsys.readouterr().out)
    assert rec["event"] == "phase_complete"
    assert rec["level"] == "debug"
    assert rec["position"] == [1, 2]
    assert rec["ms"] == 4


def test_level_filter(capsys):
    log = get_logger("stagegen.test")
    log.debug(event="hidden")
    log.info(event="hidden_too")
    log.warn(event="shown")
    out = capsys.readouterr().out
    assert "hidden" not in out
    assert "event=shown" in out


def test_errors_go_to_stderr(capsys):
    get_logger("stagegen.test").error(event="boom")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "event=boom" in captured.err


def test_logger_cached():
    assert get_logger("stagegen.same") is get_logger("stagegen.same")


def test_render_drops_none_and_squeezes_spaces(monkeypatch):
    from stagegen.logging_utils import render

    monkeypatch.delenv("STAGEGEN_LOG_JSON", raising=False)
    line = render("warn", {"event": "x", "note": "two words", "gone": None})
    assert line.split(" ", 2)[2] == "event=x note=twowords"
