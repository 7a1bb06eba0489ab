"""Tests for GAC configuration."""

from pathlib import Path

import pytest

from gac.config import GacConfig
from gac.exceptions import ConfigurationError


class TestGacConfigDefaults:
    """Tests for default configuration values."""

    def test_defaults(self) -> None:
        config = GacConfig()
        assert config.auto_push_default is False
        assert config.wip_on_save is False
        assert config.git.timeout_seconds == 60
        assert config.push.remote is None
        assert config.watch.debounce_seconds == 0.5
        assert config.logging.level == "warn"


class TestGacConfigLoad:
    """Tests for loading configuration from YAML."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        assert GacConfig.load(tmp_path / "missing.yaml") == GacConfig()

    def test_load_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text(
            "auto_push_default: true\n"
            "push:\n"
            "  remote: origin\n"
            "  branch: main\n"
            "watch:\n"
            "  debounce_seconds: 1.5\n"
        )
        config = GacConfig.load(path)
        assert config.auto_push_default is True
        assert config.push.remote == "origin"
        assert config.watch.debounce_seconds == 1.5

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert GacConfig.load(path) == GacConfig()

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("push: [unclosed\n")
        with pytest.raises(ConfigurationError):
            GacConfig.load(path)

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("- one\n- two\n")
        with pytest.raises(ConfigurationError):
            GacConfig.load(path)

    @pytest.mark.parametrize(
        "data",
        [
            {"git": {"timeout_seconds": 0}},
            {"watch": {"debounce_seconds": 60}},
            {"logging": {"level": "verbose"}},
        ],
    )
    def test_invalid_values(self, data: dict) -> None:
        with pytest.raises(ConfigurationError):
            GacConfig.from_dict(data)

    def test_save_and_load(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "config.yaml"
        config = GacConfig.from_dict({"auto_push_default": True, "push": {"remote": "upstream"}})
        config.save(path)
        assert GacConfig.load(path) == config


class TestPushArgs:
    """Tests for building the push command."""

    @pytest.mark.parametrize(
        "push,expected",
        [
            ({}, ["push"]),
            ({"remote": "origin"}, ["push", "origin"]),
            ({"remote": "origin", "branch": "main"}, ["push", "origin", "main"]),
            ({"branch": "main"}, ["push"]),
        ],
    )
    def test_push_args(self, push: dict, expected: list[str]) -> None:
        assert GacConfig.from_dict({"push": push}).push_args() == expected
