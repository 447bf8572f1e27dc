"""Configuration module for voxroute."""

from voxroute.config.loader import get_config_path, load_config, parse_config
from voxroute.config.schema import Config, TaskConfig

__all__ = ["Config", "TaskConfig", "load_config", "parse_config", "get_config_path"]
