"""Tests for config file discovery."""

from pathlib import Path

import pytest

from ledgerctl.config.discovery import CONFIG_ENV_VAR, CONFIG_FILENAMES, find_config


@pytest.fixture(autouse=True)
def _no_env_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


class TestFindConfig:
    def test_finds_in_start_dir(self, tmp_path: Path) -> None:
        config_file = tmp_path / "ledgerctl.toml"
        config_file.write_text("[ledger]\nfirst_account_number = 1\n")
        assert find_config(tmp_path) == config_file

    def test_hidden_name_accepted(self, tmp_path: Path) -> None:
        config_file = tmp_path / ".ledgerctl.toml"
        config_file.write_text("")
        assert find_config(tmp_path) == config_file

    def test_visible_name_wins(self, tmp_path: Path) -> None:
        for name in CONFIG_FILENAMES:
            (tmp_path / name).write_text("")
        assert find_config(tmp_path) == tmp_path / "ledgerctl.toml"

    def test_walks_up(self, tmp_path: Path) -> None:
        config_file = tmp_path / "ledgerctl.toml"
        config_file.write_text("")
        child = tmp_path / "a" / "b" / "c"
        child.mkdir(parents=True)
        assert find_config(child) == config_file

    def test_nearest_wins(self, tmp_path: Path) -> None:
        (tmp_path / "ledgerctl.toml").write_text("")
        child = tmp_path / "inner"
        child.mkdir()
        (child / "ledgerctl.toml").write_text("")
        assert find_config(child) == child / "ledgerctl.toml"

    def test_returns_none_when_not_found(self, tmp_path: Path) -> None:
        child = tmp_path / "empty"
        child.mkdir()
        assert find_config(child) is None

    def test_defaults_to_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        config_file = tmp_path / "ledgerctl.toml"
        config_file.write_text("")
        monkeypatch.chdir(tmp_path)
        assert find_config() == config_file.resolve()


class TestEnvOverride:
    def test_env_var_pins_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        config_file = tmp_path / "custom.toml"
        config_file.write_text("")
        (tmp_path / "ledgerctl.toml").write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(config_file))
        assert find_config(tmp_path) == config_file

    def test_missing_env_file_disables_walk(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "ledgerctl.toml").write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "nope.toml"))
        assert find_config(tmp_path) is None
