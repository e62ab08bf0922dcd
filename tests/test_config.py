import pytest
import yaml

from readme_activity.config import BOT_EMAIL, build_settings, parse_html_flag, token_from_env
from readme_activity.errors import ConfigurationError


def test_defaults():
    settings = build_settings({"username": "octo"})
    assert settings.username == "octo"
    assert settings.html_encoding is True
    assert settings.max_lines == 5
    assert settings.variable_name == "ACTIVITY_EVENTS"
    assert settings.committer_email == BOT_EMAIL
    assert str(settings.readme_path) == "README.md"


@pytest.mark.parametrize(
    "value, expected",
    [("false", False), ("FALSE", False), (False, False), ("true", True), ("yes", True), ("", True), (True, True)],
)
def test_html_flag(value, expected):
    assert parse_html_flag(value) is expected


def test_yaml_file_then_overrides(tmp_path):
    path = tmp_path / ".readme-activity.yaml"
    path.write_text("username: from-file\nhtml_encoding: false\nmax_lines: 3\nreadme_path: docs/README.md\n")
    settings = build_settings({"username": "octo", "max_lines": None}, config_path=path)
    assert settings.username == "octo"
    assert settings.html_encoding is False
    assert settings.max_lines == 3
    assert str(settings.readme_path) == "docs/README.md"


def test_missing_config_file_is_ignored(tmp_path):
    assert build_settings({"username": "octo"}, config_path=tmp_path / "nope.yaml").username == "octo"


def test_config_file_must_be_mapping(tmp_path):
    path = tmp_path / "c.yaml"
    path.write_text("- a\n- b\n")
    with pytest.raises(ConfigurationError):
        build_settings({"username": "octo"}, config_path=path)


@pytest.mark.parametrize(
    "overrides",
    [{}, {"username": "  "}, {"username": "octo", "max_lines": "abc"}, {"username": "octo", "max_lines": 0}, {"username": "octo", "colour": "red"}],
)
def test_invalid_settings(overrides):
    with pytest.raises(ConfigurationError):
        build_settings(overrides)


def test_max_lines_string_is_parsed():
    assert build_settings({"username": "octo", "max_lines": "8"}).max_lines == 8


def test_token_hidden_from_repr():
    settings = build_settings({"username": "octo"}, token="s3cret")
    assert settings.token == "s3cret"
    assert "s3cret" not in repr(settings)


def test_token_from_env_prefers_access_token():
    assert token_from_env({"GITHUB_TOKEN": "b", "ACCESS_TOKEN": "a"}) == "a"
    assert token_from_env({"GITHUB_TOKEN": "b"}) == "b"
    assert token_from_env({}) is None


@pytest.mark.parametrize("page_size", ["lots", 0, True])
def test_invalid_page_size_from_file(tmp_path, page_size):
    path = tmp_path / ".readme-activity.yaml"
    path.write_text(yaml.safe_dump({"username": "octo", "page_size": page_size}))
    with pytest.raises(ConfigurationError):
        build_settings({}, config_path=path)


def test_page_size_from_file(tmp_path):
    path = tmp_path / ".readme-activity.yaml"
    path.write_text("username: octo\npage_size: '30'\n")
    assert build_settings({}, config_path=path).page_size == 30
