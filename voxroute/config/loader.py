"""Configuration loading utilities."""

import json
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from loguru import logger
from pydantic import ValidationError

from voxroute.config.schema import Config, TaskConfig, default_config
from voxroute.errors import ConfigError

# Load .env into os.environ (won't overwrite existing env vars)
load_dotenv(override=False)

CONFIG_ENV_VAR = "VOXROUTE_ADAPTER_CONFIG"
CONFIG_PATH_ENV_VAR = "VOXROUTE_CONFIG_PATH"


def get_config_path() -> Path:
    """Get the configuration file path (env override, then ~/.voxroute)."""
    if val := os.environ.get(CONFIG_PATH_ENV_VAR):
        return Path(val).expanduser()
    return Path.home() / ".voxroute" / "config.json"


def load_config(config_path: Path | None = None) -> Config:
    """
    Load the adapter configuration.

    Priority (highest → lowest):
        1. VOXROUTE_ADAPTER_CONFIG environment variable (JSON document)
        2. config file (VOXROUTE_CONFIG_PATH or ~/.voxroute/config.json)
        3. Built-in defaults

    Raises:
        ConfigError: when the supplied document is not valid.
    """
    raw = os.environ.get(CONFIG_ENV_VAR)
    source = CONFIG_ENV_VAR
    if not raw:
        path = config_path or get_config_path()
        if not path.exists():
            logger.warning(f"{CONFIG_ENV_VAR} not set and {path} missing, using defaults")
            return default_config()
        raw = path.read_text(encoding="utf-8")
        source = str(path)

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(f"AI adapter config ({source}) is not valid JSON: {e}") from e

    config = parse_config(data)
    logger.info(f"AI adapter configured tasks: {', '.join(config.tasks)}")
    return config


def parse_config(data: Any) -> Config:
    """Validate a decoded configuration document into a ``Config``."""
    if not isinstance(data, dict):
        raise ConfigError("AI adapter config must be a JSON object")

    raw_tasks = data.get("tasks")
    if not isinstance(raw_tasks, dict):
        raise ConfigError('AI adapter config: "tasks" map is required')

    tasks: dict[str, TaskConfig] = {}
    for event_type, raw_task in raw_tasks.items():
        if not isinstance(raw_task, dict) or not raw_task.get("provider") or not raw_task.get("model"):
            raise ConfigError(
                f'AI adapter config: task "{event_type}" requires "provider" and "model"'
            )
        try:
            tasks[event_type] = TaskConfig.model_validate(raw_task)
        except ValidationError as e:
            raise ConfigError(f'AI adapter config: task "{event_type}" is invalid: {e}') from e

    return Config(tasks=tasks, language=data.get("language"))
