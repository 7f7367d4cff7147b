"""Tests for officedev.toml walk-up discovery."""

from pathlib import Path

import pytest

from officedev.config.discovery import CONFIG_FILENAME, find_config


@pytest.fixture(autouse=True)
def _no_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OFFICEDEV_CONFIG", raising=False)


class TestFindConfig:
    def test_finds_in_start_dir(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("")
        assert find_config(tmp_path) == (tmp_path / CONFIG_FILENAME).resolve()

    def test_walks_up(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("")
        nested = tmp_path / "x" / "y"
        nested.mkdir(parents=True)
        assert find_config(nested) == (tmp_path / CONFIG_FILENAME).resolve()

    def test_env_var_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("")
        override = tmp_path / "override.toml"
        override.write_text("")
        monkeypatch.setenv("OFFICEDEV_CONFIG", str(override))
        assert find_config(tmp_path) == override

    def test_env_var_pointing_nowhere(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OFFICEDEV_CONFIG", str(tmp_path / "missing.toml"))
        assert find_config(tmp_path) is None
