"""Tests for the YAML configuration loader."""

import pytest

from vasgotools.config import CONFIG_ENV, CONFIG_FILENAME, ToolsConfig, load_config
from vasgotools.errors import ConfigurationError


@pytest.fixture(autouse=True)
def _no_env_config(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV, raising=False)


def test_defaults_without_config_file(tmp_path):
    cfg = load_config(cwd=tmp_path)

    assert cfg.source is None
    assert cfg.go_path == "go"
    assert cfg.git_path == "git"
    assert cfg.editor_command == "code"
    assert cfg.no_git is False
    assert cfg.submodules_keep_going is False


def test_load_from_working_directory(tmp_path):
    (tmp_path / CONFIG_FILENAME).write_text(
        "\n".join(
            [
                "module_prefix: vas",
                "prefix_aliases:",
                "  acme: github.com/acme/",
                "paths:",
                "  go: /usr/local/go/bin/go",
                "  editor: codium",
                "defaults:",
                "  no_code: true",
                "submodules:",
                "  keep_going: true",
            ]
        ),
        encoding="utf-8",
    )

    cfg = load_config(cwd=tmp_path)

    assert cfg.source == tmp_path / CONFIG_FILENAME
    assert cfg.go_path == "/usr/local/go/bin/go"
    assert cfg.git_path == "git"
    assert cfg.editor_command == "codium"
    assert cfg.no_code is True
    assert cfg.no_git is False
    assert cfg.submodules_keep_going is True
    assert cfg.resolve_prefix() == "github.com/muellerbbm-vas/"
    assert cfg.resolve_prefix("acme") == "github.com/acme/"


def test_env_variable_points_to_config(tmp_path, monkeypatch):
    cfg_file = tmp_path / "custom.yaml"
    cfg_file.write_text("paths:\n  git: /opt/git\n", encoding="utf-8")
    monkeypatch.setenv(CONFIG_ENV, str(cfg_file))

    assert load_config(cwd=tmp_path).git_path == "/opt/git"


def test_empty_file_gives_defaults(tmp_path):
    cfg_file = tmp_path / "empty.yaml"
    cfg_file.write_text("", encoding="utf-8")

    cfg = load_config(cfg_file)

    assert cfg.source == cfg_file
    assert cfg.go_path == "go"


def test_explicit_missing_file_is_an_error(tmp_path):
    with pytest.raises(ConfigurationError):
        load_config(tmp_path / "nope.yaml")


def test_invalid_yaml_is_an_error(tmp_path):
    cfg_file = tmp_path / "bad.yaml"
    cfg_file.write_text("paths: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_config(cfg_file)


def test_non_mapping_is_an_error(tmp_path):
    cfg_file = tmp_path / "list.yaml"
    cfg_file.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_config(cfg_file)


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, ""),
        ("", ""),
        ("none", ""),
        ("vas", "github.com/muellerbbm-vas/"),
        ("slb", "github.com/mbbm-slb/"),
        ("example.org/team/", "example.org/team/"),
    ],
)
def test_resolve_prefix(value, expected):
    assert ToolsConfig().resolve_prefix(value) == expected
