from pathlib import Path

import pytest

from config import MAX_DISKS, DotDict, get_config_value, load_config
from hanoi_moves import InvalidArgument


def test_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config = load_config()
    assert config.disks.min == 1
    assert config.disks.max == 10
    assert config.disks.default == 4
    assert (config.pegs.src, config.pegs.dest, config.pegs.temp) == (0, 2, 1)
    assert config.viewer.autoplay_ms == 400


def test_file_merges_over_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("disks:\n  default: 6\nviewer:\n  autoplay_ms: 100\n")
    config = load_config(str(path))
    assert config.disks.default == 6
    assert config.disks.max == 10
    assert config.viewer.autoplay_ms == 100
    assert config.viewer.fps == 30


def test_default_disk_count_is_clamped(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("disks:\n  default: 30\n")
    assert load_config(str(path)).disks.default == 10


def test_bad_peg_convention(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("pegs:\n  src: 0\n  dest: 0\n  temp: 1\n")
    with pytest.raises(InvalidArgument):
        load_config(str(path))


def test_bad_bounds(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("disks:\n  min: 5\n  max: 2\n")
    with pytest.raises(InvalidArgument):
        load_config(str(path))


def test_missing_file():
    with pytest.raises(FileNotFoundError):
        load_config("does-not-exist.yaml")


def test_get_config_value():
    config = DotDict({"viewer": {"fps": 60}})
    assert get_config_value(config, "viewer.fps") == 60
    assert get_config_value(config, "viewer.missing", 5) == 5


def test_reads_config_yaml_from_working_directory(tmp_path, monkeypatch):
    (tmp_path / "config.yaml").write_text("disks:\n  default: 7\n")
    monkeypatch.chdir(tmp_path)
    assert load_config().disks.default == 7


def test_shipped_config_yaml_loads():
    root = Path(__file__).resolve().parents[1]
    config = load_config(str(root / "config.yaml"))
    assert (config.disks.min, config.disks.max) == (1, MAX_DISKS)


@pytest.mark.parametrize("disks", [
    "disks:\n  max: 40\n  default: 30\n",
    "disks:\n  min: true\n",
    "disks:\n  max: 5.5\n",
])
def test_disk_bounds_are_capped(tmp_path, disks):
    path = tmp_path / "config.yaml"
    path.write_text(disks)
    with pytest.raises(InvalidArgument):
        load_config(str(path))
