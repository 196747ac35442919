"""Tests for argument parsing, config files and development mode."""

import json

import pytest

from mdsite.cli import build_parser, main
from mdsite.config import ENV_VAR, dev_mode_from_env, load_config, settings_from_args


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(ENV_VAR, raising=False)


def parse(*argv):
    return settings_from_args(build_parser(list(argv)).parse_args(list(argv)))


class TestDevMode:
    def test_env_values(self):
        assert dev_mode_from_env({ENV_VAR: "development"})
        assert dev_mode_from_env({ENV_VAR: "DEV"})
        assert not dev_mode_from_env({ENV_VAR: "production"})
        assert not dev_mode_from_env({})

    def test_defaults_are_production(self):
        settings = parse()
        assert not settings.dev
        assert not settings.include_unpublished
        assert settings.source_dir == settings.output_dir

    def test_env_enables_dev_and_unpublished(self, monkeypatch):
        monkeypatch.setenv(ENV_VAR, "development")
        settings = parse()
        assert settings.dev
        assert settings.include_unpublished

    def test_unpublished_can_be_excluded_in_dev(self, monkeypatch):
        monkeypatch.setenv(ENV_VAR, "development")
        settings = parse("--no-include-unpublished")
        assert settings.dev
        assert not settings.include_unpublished

    def test_unpublished_can_be_included_in_production(self):
        settings = parse("--include-unpublished")
        assert not settings.dev
        assert settings.include_unpublished


class TestConfig:
    def test_missing_file_is_empty(self, tmp_path):
        assert load_config(tmp_path / "site.toml") == {}

    def test_toml_config_supplies_defaults(self, tmp_path):
        (tmp_path / "site.toml").write_text(
            'site_name = "From TOML"\ntoc_grouping = "year"\nblog_prefix = "posts"\n', encoding="utf-8"
        )
        settings = parse()
        assert settings.site_name == "From TOML"
        assert settings.toc_grouping == "year"
        assert settings.blog_prefix == "posts/"

    def test_flags_override_config(self, tmp_path):
        (tmp_path / "site.toml").write_text('site_name = "From TOML"\n', encoding="utf-8")
        assert parse("--site-name", "Flag").site_name == "Flag"

    def test_json_and_yaml_configs(self, tmp_path):
        (tmp_path / "site.json").write_text(json.dumps({"comments_site": "shortname"}), encoding="utf-8")
        (tmp_path / "site.yaml").write_text("contact_email: me@example.com\ndev: true\n", encoding="utf-8")
        assert parse("--config", "site.json").comments_site == "shortname"
        settings = parse("--config", "site.yaml")
        assert settings.contact_email == "me@example.com"
        assert settings.dev

    def test_invalid_json_exits(self, tmp_path, capsys):
        path = tmp_path / "site.json"
        path.write_text("{nope", encoding="utf-8")
        with pytest.raises(SystemExit):
            load_config(path)
        assert "Invalid JSON" in capsys.readouterr().err

    def test_invalid_toc_grouping_exits(self, capsys):
        with pytest.raises(SystemExit):
            parse("--toc-grouping", "week")
        assert "Invalid toc_grouping" in capsys.readouterr().err


class TestMain:
    def test_builds_site(self, tmp_path, capsys):
        source = tmp_path / "dist"
        (source / "blog").mkdir(parents=True)
        (source / "blog" / "post-a.md").write_text(
            "---\ntitle: A\npublished: true\ntype: article\n---\n# Hello\n", encoding="utf-8"
        )
        main(["--source", str(source)])
        assert (source / "blog" / "post-a.html").exists()
        assert "Build completed" in capsys.readouterr().out

    def test_build_error_exits_nonzero(self, tmp_path, capsys):
        source = tmp_path / "dist"
        source.mkdir()
        (source / "a.md").write_text("---\ntitle: A\npublished: true\ntype: essay\n---\n", encoding="utf-8")
        with pytest.raises(SystemExit) as excinfo:
            main(["--source", str(source)])
        assert excinfo.value.code == 1
        err = capsys.readouterr().err
        assert "Build failed" in err
        assert "'a'" in err

    def test_missing_source_exits_nonzero(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["--source", str(tmp_path / "missing")])
        assert excinfo.value.code == 1
        assert "Source directory not found" in capsys.readouterr().err
