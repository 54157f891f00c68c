"""Tests for config discovery and loading."""

from pathlib import Path

import pytest

from folio.config.discovery import CONFIG_FILENAME, ConfigError, find_config, load_config


class TestFindConfig:
    def test_finds_in_start_dir(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("")
        assert find_config(tmp_path) == (tmp_path / CONFIG_FILENAME).resolve()

    def test_walks_up(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("")
        nested = tmp_path / "_posts" / "deep"
        nested.mkdir(parents=True)
        assert find_config(nested) == (tmp_path / CONFIG_FILENAME).resolve()

    def test_defaults_to_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("")
        monkeypatch.chdir(tmp_path)
        assert find_config() == (tmp_path / CONFIG_FILENAME).resolve()

    def test_env_var_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("")
        other = tmp_path / "elsewhere.toml"
        other.write_text("")
        monkeypatch.setenv("FOLIO_CONFIG", str(other))
        assert find_config(tmp_path) == other

    def test_env_var_missing_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("")
        monkeypatch.setenv("FOLIO_CONFIG", str(tmp_path / "gone.toml"))
        assert find_config(tmp_path) is None


class TestLoadConfig:
    def test_no_file_gives_defaults(self, tmp_path: Path) -> None:
        empty = tmp_path / "empty"
        empty.mkdir()
        config = load_config(cwd=empty)
        assert config.site.title == "My Blog"
        assert config.build.output_dir == "_site"

    def test_explicit_path(self, tmp_path: Path) -> None:
        path = tmp_path / CONFIG_FILENAME
        path.write_text('[site]\ntitle = "Notes"\n\n[feed]\nlimit = 5\n')
        config = load_config(path)
        assert config.site.title == "Notes"
        assert config.feed.limit == 5
        assert config.feed.path == "feed.xml"

    def test_discovered_from_cwd(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text('[build]\noutput_dir = "public"\n')
        sub = tmp_path / "sub"
        sub.mkdir()
        assert load_config(cwd=sub).build.output_dir == "public"

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / CONFIG_FILENAME
        path.write_text("[site\n")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(path)
