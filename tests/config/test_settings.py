"""Tests for FolioSettings: unified settings with TOML source."""

from pathlib import Path

import click
import pytest

from folio.config.settings import FolioSettings


class TestFolioSettingsDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = FolioSettings.from_cli(site_root=tmp_path)
        assert settings.site_root == tmp_path
        assert settings.json_output is False
        assert settings.quiet is False
        assert settings.verbose is False
        assert settings.site.language == "en"
        assert settings.build.permalink == "/blog/{year}/{month}/{day}/{slug}/"
        assert settings.plugins.enabled == ["sitemap", "robots", "feed"]

    def test_frozen(self, tmp_path: Path) -> None:
        settings = FolioSettings.from_cli(site_root=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]

    def test_output_root(self, tmp_path: Path) -> None:
        settings = FolioSettings.from_cli(site_root=tmp_path)
        assert settings.output_root == tmp_path / "_site"


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        (tmp_path / "folio.toml").write_text('[site]\ntitle = "Field Notes"\n\n[css]\nminify = true\n')
        settings = FolioSettings.from_cli(site_root=tmp_path)
        assert settings.site.title == "Field Notes"
        assert settings.css.minify is True
        assert settings.css.output == "assets/css/site.css"
        assert settings.config_path == (tmp_path / "folio.toml").resolve()

    def test_site_root_from_config_location(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "folio.toml").write_text("")
        nested = tmp_path / "_posts"
        nested.mkdir()
        monkeypatch.chdir(nested)
        settings = FolioSettings.from_cli()
        assert settings.site_root == tmp_path.resolve()

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        other = tmp_path / "staging.toml"
        other.write_text('[site]\nurl = "https://staging.example.com"\n')
        settings = FolioSettings.from_cli(config_path=str(other))
        assert settings.config_path == other
        assert settings.site_root == tmp_path
        assert settings.site.url == "https://staging.example.com"

    def test_missing_explicit_config_path(self, tmp_path: Path) -> None:
        with pytest.raises(click.ClickException, match="Config file not found"):
            FolioSettings.from_cli(config_path=str(tmp_path / "nope.toml"))

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "folio.toml").write_text("[site\ntitle = ")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            FolioSettings.from_cli(site_root=tmp_path)


class TestPriority:
    def test_env_over_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "folio.toml").write_text('[site]\ntitle = "From TOML"\nauthor = "Ada"\n')
        monkeypatch.setenv("FOLIO_SITE__TITLE", "From Env")
        settings = FolioSettings.from_cli(site_root=tmp_path)
        assert settings.site.title == "From Env"
        assert settings.site.author == "Ada"

    def test_cli_flags_over_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FOLIO_VERBOSE", "false")
        settings = FolioSettings.from_cli(site_root=tmp_path, verbose=True, json_output=True)
        assert settings.verbose is True
        assert settings.json_output is True

    def test_init_sections_merge_with_toml(self, tmp_path: Path) -> None:
        (tmp_path / "folio.toml").write_text('[build]\noutput_dir = "public"\n')
        settings = FolioSettings.from_cli(site_root=tmp_path, build={"drafts": True})
        assert settings.build.drafts is True
        assert settings.build.output_dir == "public"
