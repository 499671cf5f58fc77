"""Configuration loading utilities for amelie."""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Mapping

from amelie.errors import ConfigError

_ENV_PREFIX = "AMELIE_"
_DEFAULT_CONFIG = Path("~/.amelie/config.toml").expanduser()

# Environment names used by older deployments (setup.sh / startup scripts).
_LEGACY_ENV_KEYS = {
    "AM_FILEPATH": "content_root",
    "AM_PORT": "port",
}


_DEFAULT_SETTINGS: dict[str, Any] = {
    "content_root": "./content",
    "host": "127.0.0.1",
    "port": 8080,
    "config_ttl": 1800000,
    "cache_max_age": 300,
    "homepage_post_count": 5,
    "verbose_logging": False,
}


def _coerce_env_value(key: str, value: str) -> Any:
    default = _DEFAULT_SETTINGS.get(key)
    if isinstance(default, bool):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    if isinstance(default, int):
        try:
            return int(value)
        except ValueError:
            return default
    if isinstance(default, float):
        try:
            return float(value)
        except ValueError:
            return default
    return value


def _resolve_config_path(cli_options: Mapping[str, Any] | None) -> Path:
    cli_options = dict(cli_options or {})
    raw_config_path = cli_options.get("config_path")
    return Path(raw_config_path).expanduser() if raw_config_path else _DEFAULT_CONFIG


def _load_file_config(path: Path) -> dict[str, Any]:
    if not path.is_file():
        return {}
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError:
        return {}
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            f"Invalid config file: {path}",
            hint=f"Fix the TOML syntax ({exc}).",
        ) from exc


def _load_env_config() -> dict[str, Any]:
    config: dict[str, Any] = {}
    for env_key, setting_key in _LEGACY_ENV_KEYS.items():
        raw_value = os.environ.get(env_key)
        if raw_value:
            config[setting_key] = _coerce_env_value(setting_key, raw_value)
    for env_key, raw_value in os.environ.items():
        if env_key.startswith(_ENV_PREFIX):
            normalized = env_key[len(_ENV_PREFIX) :].lower()
            config[normalized] = _coerce_env_value(normalized, raw_value)
    return config


def get_config(cli_options: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """defaults <- config.toml <- 環境変数 <- CLI の順でマージした設定を返す。"""

    cli_options = dict(cli_options or {})
    config_path = _resolve_config_path(cli_options)

    file_config = _load_file_config(config_path)
    env_config = _load_env_config()
    cli_config = {
        key: value
        for key, value in cli_options.items()
        if value is not None and key != "config_path"
    }

    merged: dict[str, Any] = dict(_DEFAULT_SETTINGS)
    merged.update(file_config)
    merged.update(env_config)
    merged.update(cli_config)

    merged["config_path"] = str(config_path)
    return merged


def get_int_setting(settings: Mapping[str, Any], key: str) -> int:
    default = int(_DEFAULT_SETTINGS[key])
    value = settings.get(key, default)
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return default
    return default
