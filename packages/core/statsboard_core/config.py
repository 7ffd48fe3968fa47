"""Bot settings schema and load helpers."""

from __future__ import annotations

import json
import os
import platform
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from statsboard_renderer.themes import DEFAULT_THEME_NAME, list_themes

from .errors import ConfigError


CONFIG_VERSION = 1
MIN_INTERVAL_S = 2.0
MAX_HISTORY_LIMIT = 100
_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class DashboardConfig:
    interval_s: float = 9.0
    command: str = "!stats"
    content: str = "Here are the latest server stats:"
    history_limit: int = 100
    image_name: str = "stats.png"
    theme: str = DEFAULT_THEME_NAME
    recreate_missing: bool = False


@dataclass
class LoggingConfig:
    keep_log_files: int = 7
    console: bool = True
    level: str = "INFO"


@dataclass
class AppConfig:
    config_version: int = CONFIG_VERSION
    token: str = ""
    channel_id: str = ""
    dashboard: DashboardConfig = field(default_factory=DashboardConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def config_dir() -> Path:
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "Statsboard"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "Statsboard"
    return Path.home() / ".config" / "statsboard"


def config_path() -> Path:
    local = Path.cwd() / "config.json"
    if local.exists():
        return local
    return config_dir() / "config.json"


def _merge(dataclass_type, raw: Any, section: str):
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"config section {section!r} must be a JSON object")
    defaults = dataclass_type()  # type: ignore[misc]
    for k, v in raw.items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _normalize_dashboard(cfg: AppConfig) -> None:
    dash = cfg.dashboard
    dash.interval_s = max(MIN_INTERVAL_S, float(dash.interval_s))
    dash.history_limit = max(1, min(MAX_HISTORY_LIMIT, int(dash.history_limit)))
    dash.command = str(dash.command).strip() or "!stats"
    dash.image_name = str(dash.image_name).strip() or "stats.png"
    if dash.theme not in list_themes():
        dash.theme = DEFAULT_THEME_NAME
    dash.recreate_missing = bool(dash.recreate_missing)


def _normalize_logging(cfg: AppConfig) -> None:
    cfg.logging.keep_log_files = max(2, int(cfg.logging.keep_log_files))
    level = str(cfg.logging.level).upper()
    cfg.logging.level = level if level in _LEVELS else "INFO"


def _migrate(raw: dict[str, Any]) -> dict[str, Any]:
    version = int(raw.get("config_version", 0))
    data = dict(raw)

    if version < 1:
        # v0 is the bare {"token", "channelId"} file.
        if "channelId" in data and "channel_id" not in data:
            data["channel_id"] = data.pop("channelId")
        data["config_version"] = 1

    return data


def _apply_env(cfg: AppConfig, env: Mapping[str, str]) -> None:
    if env.get("STATSBOARD_TOKEN"):
        cfg.token = env["STATSBOARD_TOKEN"]
    if env.get("STATSBOARD_CHANNEL_ID"):
        cfg.channel_id = env["STATSBOARD_CHANNEL_ID"]


def load_config(path: Path | None = None, env: Mapping[str, str] | None = None) -> AppConfig:
    path = path or config_path()
    env = os.environ if env is None else env

    if path.exists():
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise ConfigError(f"cannot read config {path}: {exc}") from exc
        if not isinstance(raw, dict):
            raise ConfigError(f"config {path} must contain a JSON object")
    else:
        raw = {}

    try:
        data = _migrate(raw)
        cfg = AppConfig(
            config_version=int(data.get("config_version", CONFIG_VERSION)),
            token=str(data.get("token") or ""),
            channel_id=str(data.get("channel_id") or ""),
            dashboard=_merge(DashboardConfig, data.get("dashboard"), "dashboard"),
            logging=_merge(LoggingConfig, data.get("logging"), "logging"),
        )
        _apply_env(cfg, env)
        _normalize_dashboard(cfg)
        _normalize_logging(cfg)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"invalid value in config {path}: {exc}") from exc
    return cfg


def validate_config(cfg: AppConfig) -> AppConfig:
    if not cfg.token:
        raise ConfigError("token is required (config.json or STATSBOARD_TOKEN)")
    if not cfg.channel_id:
        raise ConfigError("channelId is required (config.json or STATSBOARD_CHANNEL_ID)")
    if not cfg.channel_id.isdigit():
        raise ConfigError(f"channelId must be a numeric id, got {cfg.channel_id!r}")
    return cfg
