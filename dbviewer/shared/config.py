"""Configuration loading utilities for the database browser."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping, MutableMapping

import yaml

from . import paths
from .exceptions import ConfigurationError

SAMPLE_DESCRIPTOR = "sample"


@dataclass(frozen=True, slots=True)
class DatabaseSettings:
    """Which database the browser opens when no --db is given."""

    descriptor: str


@dataclass(frozen=True, slots=True)
class BrowserSettings:
    """Paging and session behaviour."""

    page_size: int
    timeout: float  # seconds SQLite waits on a locked file
    provision_sample: bool


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Top-level application configuration."""

    source_path: Path
    data_dir: Path
    database: DatabaseSettings
    browser: BrowserSettings

    @property
    def sample_path(self) -> Path:
        return paths.sample_database_path(self.data_dir)

    def with_descriptor(self, descriptor: str) -> AppConfig:
        """Return a copy pointing at another connection descriptor."""
        return replace(self, database=replace(self.database, descriptor=descriptor))


def _default_config(env: Mapping[str, str]) -> dict[str, Any]:
    return {
        "data_dir": str(paths.get_data_dir(env=env)),
        "database": {"descriptor": SAMPLE_DESCRIPTOR},
        "browser": {
            "page_size": 10,
            "timeout": 5.0,
            "provision_sample": True,
        },
    }


ENV_OVERRIDE_SPEC: dict[str, tuple[str, type]] = {
    "data_dir": (paths.DATA_DIR_ENV, str),
    "database.descriptor": ("DBVIEWER_DATABASE", str),
    "browser.page_size": ("DBVIEWER_PAGE_SIZE", int),
    "browser.timeout": ("DBVIEWER_TIMEOUT", float),
    "browser.provision_sample": ("DBVIEWER_PROVISION_SAMPLE", bool),
}


def load_config(
    config_path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> AppConfig:
    """Load configuration from defaults, YAML file, and env overrides."""
    env = dict(env or os.environ)
    resolved_config_path = _resolve_config_path(config_path, env)
    file_data = _load_yaml(resolved_config_path)
    defaults = _default_config(env)
    merged: dict[str, Any] = _deep_merge(defaults, file_data)
    merged = _apply_env_overrides(merged, env)
    return _build_config(merged, resolved_config_path)


def _resolve_config_path(config_path: str | Path | None, env: Mapping[str, str]) -> Path:
    if config_path:
        return paths.resolve_path(config_path)
    return paths.default_config_path(env=env)


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Config file at {path} is not valid YAML: {exc}") from exc
        if not isinstance(data, MutableMapping):
            raise ConfigurationError(f"Config file at {path} must define a mapping root object.")
        return dict(data)


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(value, Mapping):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _apply_env_overrides(config: dict[str, Any], env: Mapping[str, str]) -> dict[str, Any]:
    config_copy = _deep_merge(config, {})
    for dotted_key, (env_key, expected_type) in ENV_OVERRIDE_SPEC.items():
        if env_key not in env:
            continue
        raw_value = env[env_key]
        try:
            value = _coerce_env_value(raw_value, expected_type)
        except ValueError as exc:
            raise ConfigurationError(
                f"Environment override {env_key} has invalid value '{raw_value}': {exc}"
            ) from exc
        _assign_nested(config_copy, dotted_key.split("."), value)
    return config_copy


def _coerce_env_value(raw: str, expected_type: type) -> Any:
    cleaned = raw.strip()
    if expected_type is bool:
        lowered = cleaned.lower()
        if lowered in {"1", "true", "yes", "on"}:
            return True
        if lowered in {"0", "false", "no", "off"}:
            return False
        raise ValueError("expected boolean (true/false)")
    if expected_type is int:
        return int(cleaned)
    if expected_type is float:
        return float(cleaned)
    return cleaned


def _assign_nested(target: MutableMapping[str, Any], keys: list[str], value: Any) -> None:
    current = target
    for key in keys[:-1]:
        if key not in current or not isinstance(current[key], MutableMapping):
            current[key] = {}
        current = current[key]  # type: ignore[assignment]
    current[keys[-1]] = value


def _build_config(data: Mapping[str, Any], source_path: Path) -> AppConfig:
    try:
        data_dir = paths.resolve_path(str(data["data_dir"]))
        database = DatabaseSettings(descriptor=str(data["database"]["descriptor"]))
        browser_cfg = data["browser"]
        browser = BrowserSettings(
            page_size=int(browser_cfg["page_size"]),
            timeout=float(browser_cfg["timeout"]),
            provision_sample=_as_bool(browser_cfg["provision_sample"]),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid configuration structure: {exc}") from exc

    if browser.page_size <= 0:
        raise ConfigurationError("browser.page_size must be a positive integer.")
    if browser.timeout < 0:
        raise ConfigurationError("browser.timeout must not be negative.")

    return AppConfig(
        source_path=source_path,
        data_dir=data_dir,
        database=database,
        browser=browser,
    )


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return _coerce_env_value(value, bool)
    return bool(value)
