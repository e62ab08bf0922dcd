from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml

from .errors import ConfigurationError

DEFAULT_CONFIG_FILE = ".readme-activity.yaml"
DEFAULT_COMMIT_MESSAGE = "⚡ Update README with the recent activity"
BOT_EMAIL = "41898282+github-actions[bot]@users.noreply.github.com"
TOKEN_ENV_VARS = ("ACCESS_TOKEN", "GITHUB_TOKEN")


@dataclass(slots=True, frozen=True)
class Settings:
    username: str
    html_encoding: bool = True
    commit_message: str = DEFAULT_COMMIT_MESSAGE
    max_lines: int = 5
    readme_path: Path = Path("README.md")
    variable_name: str = "ACTIVITY_EVENTS"
    committer_name: str = "readme-bot"
    committer_email: str = BOT_EMAIL
    page_size: int = 100
    icon_base: str = "./icons/activities"
    token: str | None = field(default=None, repr=False)


def parse_html_flag(value: Any) -> bool:
    """Only an explicit false turns markup off."""
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() != "false"


def token_from_env(environ: Mapping[str, str] | None = None) -> str | None:
    environ = os.environ if environ is None else environ
    for name in TOKEN_ENV_VARS:
        value = environ.get(name)
        if value:
            return value
    return None


def _positive_int(value: Any, label: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{label} must be an integer, got {value!r}")
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{label} must be an integer, got {value!r}") from exc
    if number < 1:
        raise ConfigurationError(f"{label} must be at least 1")
    return number


def load_config_file(path: Path) -> Dict[str, Any]:
    path = Path(path)
    if not path.exists():
        return {}
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must contain a mapping")
    return data


def build_settings(
    overrides: Mapping[str, Any],
    config_path: Path | None = None,
    token: str | None = None,
) -> Settings:
    """Merge defaults, the YAML file and explicit values (env / CLI), in that order."""
    values: Dict[str, Any] = {}
    if config_path is not None:
        values.update(load_config_file(config_path))
    values.update({key: value for key, value in overrides.items() if value is not None})

    known = {f.name for f in fields(Settings)} - {"token"}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ConfigurationError(f"Unknown setting(s): {', '.join(unknown)}")

    username = str(values.get("username") or "").strip()
    if not username:
        raise ConfigurationError("GH_USERNAME is required")
    values["username"] = username

    if "html_encoding" in values:
        values["html_encoding"] = parse_html_flag(values["html_encoding"])
    for key, label in (("max_lines", "MAX_LINES"), ("page_size", "page_size")):
        if key in values:
            values[key] = _positive_int(values[key], label)
    if "readme_path" in values:
        values["readme_path"] = Path(values["readme_path"])
    return Settings(token=token, **values)
