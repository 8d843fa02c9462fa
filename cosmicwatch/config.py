"""Application configuration loaded from YAML settings and the environment."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from cosmicwatch.errors import ConfigError

DEFAULT_API_URL = "https://cosmic-watch-backend-4bsv.onrender.com/api"
DEFAULT_AUTH_URL = "http://localhost:3000/api/auth"
DEFAULT_TIMEOUT_SECONDS = 15.0
DEFAULT_SESSION_PATH = "~/.cosmic_watch/session.json"
SESSION_BACKENDS = ("streamlit", "file")

_CONFIG_DIR = Path(__file__).resolve().parents[1] / "app" / "config"

_ENV_OVERRIDES = {
    "COSMIC_WATCH_API_URL": ("api", "base_url"),
    "COSMIC_WATCH_AUTH_URL": ("api", "auth_url"),
    "COSMIC_WATCH_TIMEOUT": ("api", "timeout_seconds"),
    "COSMIC_WATCH_SESSION_PATH": ("session", "path"),
    "COSMIC_WATCH_SESSION_BACKEND": ("session", "backend"),
    "COSMIC_WATCH_LOG_LEVEL": ("logging", "level"),
}


@dataclass(slots=True)
class AppConfig:
    app_version: str
    api_base_url: str = DEFAULT_API_URL
    auth_base_url: str = DEFAULT_AUTH_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    session_path: str = DEFAULT_SESSION_PATH
    session_backend: str = "streamlit"
    log_level: str = "INFO"
    settings: dict[str, Any] = field(default_factory=dict)


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        payload = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Unable to read settings from {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ConfigError(f"Settings file {path} must contain a mapping")
    return payload


def _read_version(path: Path) -> str:
    if not path.exists():
        return "0.0.0"
    try:
        return str(json.loads(path.read_text(encoding="utf-8"))["app_version"])
    except (OSError, ValueError, KeyError) as exc:
        raise ConfigError(f"Unable to read version from {path}: {exc}") from exc


def _apply_env(settings: dict[str, Any], environ: dict[str, str]) -> None:
    for variable, (section, key) in _ENV_OVERRIDES.items():
        value = environ.get(variable)
        if value is None or not value.strip():
            continue
        block = settings.setdefault(section, {})
        if not isinstance(block, dict):
            raise ConfigError(f"Settings section '{section}' must be a mapping")
        block[key] = value.strip()


def load_config(
    settings_path: str | Path | None = None,
    *,
    environ: dict[str, str] | None = None,
) -> AppConfig:
    """Load settings.yaml and version.json, then apply environment overrides."""

    path = Path(settings_path) if settings_path is not None else _CONFIG_DIR / "settings.yaml"
    settings = _read_yaml(path) if path.exists() else {}
    _apply_env(settings, dict(os.environ) if environ is None else environ)

    api = settings.get("api") or {}
    session = settings.get("session") or {}
    logging_block = settings.get("logging") or {}

    timeout_raw = api.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS)
    try:
        timeout = float(timeout_raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid timeout_seconds: {timeout_raw!r}") from exc
    if timeout <= 0:
        raise ConfigError("timeout_seconds must be positive")

    backend = str(session.get("backend") or "streamlit").lower()
    if backend not in SESSION_BACKENDS:
        raise ConfigError(f"Unknown session backend {backend!r}")

    return AppConfig(
        app_version=_read_version(path.parent / "version.json"),
        api_base_url=str(api.get("base_url") or DEFAULT_API_URL).rstrip("/"),
        auth_base_url=str(api.get("auth_url") or DEFAULT_AUTH_URL).rstrip("/"),
        timeout_seconds=timeout,
        session_path=str(session.get("path") or DEFAULT_SESSION_PATH),
        session_backend=backend,
        log_level=str(logging_block.get("level") or "INFO").upper(),
        settings=settings,
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


__all__ = [
    "AppConfig",
    "DEFAULT_API_URL",
    "DEFAULT_AUTH_URL",
    "SESSION_BACKENDS",
    "configure_logging",
    "load_config",
]
