"""
Configuration and logging setup for the decode service.

Settings come from DEFAULT_CONFIG, then an optional JSON file, then
environment variables.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

CONFIG_ENV = "OBD2_DECODER_CONFIG"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

DEFAULT_CONFIG = {
    "host": "127.0.0.1",
    "port": 8327,
    "log_level": "INFO",
    "log_file": "",  # Empty = console only
    "cors_origins": ["*"],
}

# Environment variable -> (config key, type)
_ENV_OVERRIDES = {
    "OBD2_DECODER_HOST": ("host", str),
    "OBD2_DECODER_PORT": ("port", int),
    "OBD2_DECODER_LOG_LEVEL": ("log_level", str),
}


def load_config(path: Optional[Union[str, Path]] = None) -> dict:
    """Load config from disk, or return defaults."""
    config = DEFAULT_CONFIG.copy()

    path = path or os.environ.get(CONFIG_ENV)
    if path:
        config_file = Path(path)
        if config_file.exists():
            try:
                with open(config_file, encoding="utf-8") as f:
                    saved = json.load(f)
                # Merge with defaults (in case new fields were added)
                config = {**config, **saved}
            except (OSError, ValueError) as e:
                logger.warning(f"Error loading config {config_file}: {e}")
        else:
            logger.warning(f"Config file not found: {config_file}")

    for env_name, (key, cast) in _ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value:
            try:
                config[key] = cast(value)
            except ValueError:
                logger.warning(f"Ignoring invalid {env_name}={value!r}")

    return config


def save_config(config: dict, path: Union[str, Path]):
    """Save config to disk."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=2)


def configure_logging(config: dict):
    """Set up root logging from the config's log_level and log_file."""
    level = getattr(logging, str(config.get("log_level", "INFO")).upper(), logging.INFO)
    handlers = [logging.StreamHandler()]
    if config.get("log_file"):
        handlers.append(logging.FileHandler(config["log_file"], encoding="utf-8"))
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)
