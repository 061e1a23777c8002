"""Tests for session configuration."""

from pathlib import Path

from stocktake.config import DEFAULT_LOCATION, SessionConfig, load_locations


class TestLoadLocations:
    """Tests for load_locations."""

    def test_read_lines(self, tmp_path):
        path = tmp_path / "locations.txt"
        path.write_text("raktár1\n\n  bolt  \nraktár2\n", encoding="utf-8")
        assert load_locations(path) == ["raktár1", "bolt", "raktár2"]

    def test_missing_file(self, tmp_path):
        assert load_locations(tmp_path / "nincs.txt") == [DEFAULT_LOCATION]

    def test_empty_file(self, tmp_path):
        path = tmp_path / "locations.txt"
        path.write_text("\n  \n", encoding="utf-8")
        assert load_locations(path) == ["raktár1"]


class TestSessionConfig:
    """Tests for SessionConfig."""

    def test_defaults(self):
        config = SessionConfig(operator="Péter")
        assert config.location == "raktár1"
        assert config.log_path == Path("log")

    def test_dict_round_trip(self):
        config = SessionConfig(operator="Anna", location="bolt", log_dir="naplók")
        assert SessionConfig.from_dict(config.to_dict()) == config

    def test_from_partial_dict(self):
        config = SessionConfig.from_dict({"operator": "Anna"})
        assert config.location == DEFAULT_LOCATION
        assert config.log_dir == "log"
