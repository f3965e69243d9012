"""Where dbviewer keeps its config file and sample database.

Both default to ``~/.dbviewer``; each can be moved with an environment
variable, and the config file can also be pointed at directly.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

HOME_DIR = "~/.dbviewer"
CONFIG_FILE_NAME = "config.yaml"
SAMPLE_DATABASE_NAME = "sample.db"

CONFIG_DIR_ENV = "DBVIEWER_CONFIG_DIR"
DATA_DIR_ENV = "DBVIEWER_DATA_DIR"
CONFIG_FILE_ENV = "DBVIEWER_CONFIG_PATH"


def resolve_path(path_str: str | Path) -> Path:
    """Expand ``~`` and environment variables."""
    return Path(os.path.expandvars(str(path_str))).expanduser()


def _app_dir(env_key: str, env: Mapping[str, str] | None, create: bool) -> Path:
    env = env or os.environ
    path = resolve_path(env.get(env_key, HOME_DIR))
    if create:
        path.mkdir(parents=True, exist_ok=True)
    return path


def get_config_dir(create: bool = False, env: Mapping[str, str] | None = None) -> Path:
    return _app_dir(CONFIG_DIR_ENV, env, create)


def get_data_dir(create: bool = False, env: Mapping[str, str] | None = None) -> Path:
    return _app_dir(DATA_DIR_ENV, env, create)


def default_config_path(env: Mapping[str, str] | None = None) -> Path:
    """Return ``DBVIEWER_CONFIG_PATH`` if set, else ``config.yaml`` in the config dir."""
    env = env or os.environ
    override = env.get(CONFIG_FILE_ENV)
    if override:
        return resolve_path(override)
    return get_config_dir(env=env) / CONFIG_FILE_NAME


def sample_database_path(data_dir: str | Path) -> Path:
    return resolve_path(data_dir) / SAMPLE_DATABASE_NAME
