"""Tests for PassHashSettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest

from passhash.config.models import StoreKeyPolicy
from passhash.config.settings import PassHashSettings
from passhash.domain.guess import GuessMode


@pytest.fixture(autouse=True)
def _clean_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("PASSHASH_CONFIG", "PASSHASH_DATA_DIR", "PASSHASH_SUFFIX_LIST"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = PassHashSettings.from_cli(start=tmp_path)
        assert settings.data_dir == tmp_path / "home" / ".passhash"
        assert settings.suffix_list is None
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.session.guess_tag is GuessMode.DOMAIN
        assert settings.hash.length == 8

    def test_frozen(self, tmp_path: Path) -> None:
        settings = PassHashSettings.from_cli(start=tmp_path)
        with pytest.raises(Exception):
            settings.verbose = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        toml = tmp_path / "passhash.toml"
        toml.write_text('[session]\nguess_tag = "name"\n[hash]\nlength = 12\n')
        settings = PassHashSettings.from_cli(start=tmp_path)
        assert settings.config_path == toml
        assert settings.session.guess_tag is GuessMode.NAME
        assert settings.hash.length == 12
        assert settings.hash.digit_count == 1

    def test_top_level_keys(self, tmp_path: Path) -> None:
        (tmp_path / "passhash.toml").write_text(f'data_dir = "{tmp_path / "store"}"\n')
        settings = PassHashSettings.from_cli(start=tmp_path)
        assert settings.data_dir == tmp_path / "store"

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text('[session]\nstore_key = "forever"\n')
        settings = PassHashSettings.from_cli(config_path=str(custom), start=tmp_path)
        assert settings.session.store_key is StoreKeyPolicy.FOREVER
        assert settings.config_path == custom

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "passhash.toml").write_text("[session\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            PassHashSettings.from_cli(start=tmp_path)


class TestPriority:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "passhash.toml").write_text("[hash]\nlength = 12\n")
        monkeypatch.setenv("PASSHASH_HASH__LENGTH", "16")
        settings = PassHashSettings.from_cli(start=tmp_path)
        assert settings.hash.length == 16

    def test_env_data_dir(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PASSHASH_DATA_DIR", str(tmp_path / "env"))
        settings = PassHashSettings.from_cli(start=tmp_path)
        assert settings.data_dir == tmp_path / "env"

    def test_cli_flags_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PASSHASH_DATA_DIR", str(tmp_path / "env"))
        settings = PassHashSettings.from_cli(
            start=tmp_path, data_dir=tmp_path / "cli", json_output=True
        )
        assert settings.data_dir == tmp_path / "cli"
        assert settings.json_output is True

    def test_none_flags_dropped(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PASSHASH_DATA_DIR", str(tmp_path / "env"))
        settings = PassHashSettings.from_cli(start=tmp_path, data_dir=None)
        assert settings.data_dir == tmp_path / "env"
