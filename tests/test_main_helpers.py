import logging

from main import CONFIG_FILE, build_map, main, run
from shadowcast.config import DemoConfig, load_demo_config
from shadowcast.logging_utils import setup_logging


def test_build_map_places_walls():
    config = DemoConfig(width=4, height=3, origin=(0, 0), walls=[(3, 2)])
    terrain_map = build_map(config)
    assert not terrain_map.is_transparent(3, 2)
    assert terrain_map.is_transparent(0, 0)


def test_run_renders_bundled_map():
    config = load_demo_config(CONFIG_FILE)
    lines = run(config)
    assert len(lines) == config.height
    assert all(len(line) == config.width for line in lines)
    assert lines[10][10] == "@"
    # Walls are always drawn once reached
    assert lines[5][10] == "#"


def test_run_origin_override():
    config = DemoConfig(width=3, height=3, origin=(0, 0))
    assert run(config, (2, 2)) == ["...", "...", "..@"]


def test_main_prints_map(capsys):
    assert main(["--origin", "0", "0"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0].startswith("@")


def test_main_bad_config_returns_error(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("map:\n  width: -1\n  height: 2\n")
    assert main(["--config", str(path)]) == 1


def test_main_origin_outside_map_returns_error():
    assert main(["--origin", "99", "0"]) == 1


def _write_config(tmp_path, log_level):
    path = tmp_path / "map.yaml"
    path.write_text(
        f"log_level: {log_level}\n"
        "map:\n  width: 3\n  height: 3\n"
        "origin: [1, 1]\n"
    )
    return path


def test_config_log_level_debug_enables_debug_events(tmp_path, caplog):
    path = _write_config(tmp_path, "DEBUG")
    try:
        assert main(["--config", str(path)]) == 0
        assert "Starting FOV computation" in caplog.text
    finally:
        setup_logging(logging.INFO)


def test_cli_log_level_overrides_config(tmp_path, caplog):
    path = _write_config(tmp_path, "DEBUG")
    try:
        assert main(["--config", str(path), "--log-level", "INFO"]) == 0
        assert "FOV computed" in caplog.text
        assert "Starting FOV computation" not in caplog.text
    finally:
        setup_logging(logging.INFO)
