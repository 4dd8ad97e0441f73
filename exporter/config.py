"""Configuration loader for the check exporter."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .errors import ConfigLoadError

ENV_PREFIX = "EXPORTER_"

DEFAULTS: Dict[str, Any] = {
    "plan_path": "/app/config/tests.yaml",
    "test_name": "linkedin-login",
    "host": "0.0.0.0",
    "port": 8080,
    "browser": "chromium",
    "headless": True,
    "action_timeout_ms": 0,
    "navigation_timeout_ms": 0,
    "strict_actions": False,
    "events_path": "",
    "log_level": "INFO",
}

BROWSERS = ("chromium", "firefox", "webkit")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"true", "1", "yes", "on"}


@dataclass(slots=True)
class ExporterConfig:
    plan_path: Path = field(default_factory=lambda: Path(DEFAULTS["plan_path"]))
    test_name: str = DEFAULTS["test_name"]
    host: str = DEFAULTS["host"]
    port: int = DEFAULTS["port"]
    browser: str = DEFAULTS["browser"]
    headless: bool = DEFAULTS["headless"]
    action_timeout_ms: int = DEFAULTS["action_timeout_ms"]
    navigation_timeout_ms: int = DEFAULTS["navigation_timeout_ms"]
    strict_actions: bool = DEFAULTS["strict_actions"]
    events_path: Optional[Path] = None
    log_level: str = DEFAULTS["log_level"]

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "ExporterConfig":
        data = dict(DEFAULTS)
        data.update({k: v for k, v in mapping.items() if v is not None})
        try:
            config = cls(
                plan_path=Path(data["plan_path"]),
                test_name=str(data["test_name"]),
                host=str(data["host"]),
                port=int(data["port"]),
                browser=str(data["browser"]).lower(),
                headless=_as_bool(data["headless"]),
                action_timeout_ms=int(data["action_timeout_ms"]),
                navigation_timeout_ms=int(data["navigation_timeout_ms"]),
                strict_actions=_as_bool(data["strict_actions"]),
                events_path=Path(data["events_path"]) if data["events_path"] else None,
                log_level=str(data["log_level"]).upper(),
            )
        except (TypeError, ValueError) as exc:
            raise ConfigLoadError(f"Invalid configuration value: {exc}") from exc
        config.validate()
        return config

    def validate(self) -> None:
        if not self.test_name:
            raise ConfigLoadError("test_name must not be empty")
        if self.browser not in BROWSERS:
            raise ConfigLoadError(f"Unsupported browser '{self.browser}', expected one of {', '.join(BROWSERS)}")
        if not 0 < self.port < 65536:
            raise ConfigLoadError(f"Port out of range: {self.port}")
        if self.action_timeout_ms < 0 or self.navigation_timeout_ms < 0:
            raise ConfigLoadError("Timeouts must be >= 0")
        if self.log_level not in LOG_LEVELS:
            raise ConfigLoadError(f"Unknown log level '{self.log_level}'")

    def with_overrides(self, **overrides: Any) -> "ExporterConfig":
        values = {k: v for k, v in overrides.items() if v is not None}
        if not values:
            return self
        if "plan_path" in values:
            values["plan_path"] = Path(values["plan_path"])
        updated = replace(self, **values)
        updated.validate()
        return updated


def _load_toml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigLoadError(f"Failed to parse config file {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigLoadError(f"Failed to read config file {path}: {exc}") from exc


def load_config(config_path: Path | None = None, environ: Mapping[str, str] | None = None) -> ExporterConfig:
    """Load configuration from environment, optional TOML file, and defaults.

    An explicitly passed ``config_path`` must exist; the implicit
    ``exporter.toml`` in the working directory is optional.
    """

    environ = os.environ if environ is None else environ
    env_map: Dict[str, Any] = {}
    for key, value in environ.items():
        if key.startswith(ENV_PREFIX):
            env_map[key[len(ENV_PREFIX):].lower()] = value

    file_map: Dict[str, Any] = {}
    if config_path is not None:
        if not config_path.exists():
            raise ConfigLoadError(f"Config file not found: {config_path}")
        file_map = _load_toml(config_path).get("exporter", {})
    else:
        default_path = Path("exporter.toml")
        if default_path.exists():
            file_map = _load_toml(default_path).get("exporter", {})

    merged = {**file_map, **env_map}
    return ExporterConfig.from_mapping(merged)
