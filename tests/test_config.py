from __future__ import annotations

import json

import pytest

from cosmicwatch.config import DEFAULT_API_URL, load_config
from cosmicwatch.errors import ConfigError


def _write_settings(tmp_path, text: str, version: str | None = "2.3.4"):
    path = tmp_path / "settings.yaml"
    path.write_text(text, encoding="utf-8")
    if version is not None:
        (tmp_path / "version.json").write_text(json.dumps({"app_version": version}))
    return path


def test_bundled_settings_load() -> None:
    config = load_config(environ={})
    assert config.api_base_url == DEFAULT_API_URL
    assert config.timeout_seconds > 0
    assert config.app_version


def test_settings_file_values(tmp_path) -> None:
    path = _write_settings(
        tmp_path,
        "api:\n  base_url: https://api.example/api/\n  timeout_seconds: 4\n"
        "logging:\n  level: debug\n",
    )

    config = load_config(path, environ={})

    assert config.api_base_url == "https://api.example/api"
    assert config.timeout_seconds == 4.0
    assert config.log_level == "DEBUG"
    assert config.app_version == "2.3.4"


def test_environment_overrides(tmp_path) -> None:
    path = _write_settings(tmp_path, "api:\n  base_url: https://api.example/api\n", version=None)

    config = load_config(
        path,
        environ={
            "COSMIC_WATCH_API_URL": "https://staging.example/api",
            "COSMIC_WATCH_AUTH_URL": "https://staging.example/api/auth",
            "COSMIC_WATCH_TIMEOUT": "2.5",
            "COSMIC_WATCH_SESSION_PATH": "/tmp/cw.json",
        },
    )

    assert config.api_base_url == "https://staging.example/api"
    assert config.auth_base_url == "https://staging.example/api/auth"
    assert config.timeout_seconds == 2.5
    assert config.session_path == "/tmp/cw.json"
    assert config.app_version == "0.0.0"


@pytest.mark.parametrize(
    "text",
    ["- just\n- a list\n", "api:\n  timeout_seconds: soon\n", "api:\n  timeout_seconds: 0\n", "a: [b\n"],
)
def test_invalid_settings_raise(tmp_path, text: str) -> None:
    path = _write_settings(tmp_path, text)
    with pytest.raises(ConfigError):
        load_config(path, environ={})


def test_session_backend_setting(tmp_path) -> None:
    path = _write_settings(tmp_path, "session:\n  backend: FILE\n  path: /tmp/cw.json\n")
    assert load_config(path, environ={}).session_backend == "file"

    overridden = load_config(path, environ={"COSMIC_WATCH_SESSION_BACKEND": "streamlit"})
    assert overridden.session_backend == "streamlit"

    with pytest.raises(ConfigError):
        load_config(path, environ={"COSMIC_WATCH_SESSION_BACKEND": "redis"})
