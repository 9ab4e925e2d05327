"""Logging setup

- setup_logging(): loads config/logging.yml into logging.config.dictConfig and
  falls back to basicConfig at settings.log_level when the file is missing or invalid
"""
from __future__ import annotations

import logging
import logging.config
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from flocore.settings import ROOT_DIR, settings

logger = logging.getLogger(__name__)

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def load_logging_config(path: str | Path) -> dict:
    """Load a logging YAML file. Returns an empty dict when missing or malformed.

    Args:
        path: Absolute path, or a path relative to the project root.
    """
    cfg_path = Path(path)
    if not cfg_path.is_absolute():
        cfg_path = ROOT_DIR / cfg_path
    if not cfg_path.exists():
        return {}

    yaml = YAML(typ="safe")
    try:
        with open(cfg_path, "r", encoding="utf-8") as f:
            data = yaml.load(f) or {}
    except (OSError, YAMLError) as e:
        logger.warning(f"Failed to read logging config {cfg_path}: {e}")
        return {}
    return data if isinstance(data, dict) else {}


def setup_logging(config_path: str | Path | None = None, level: str | None = None) -> None:
    """Initialise logging.

    Args:
        config_path: Logging YAML path (defaults to settings.logging_config_path).
        level: Fallback log level (defaults to settings.log_level).
    """
    data = load_logging_config(config_path or settings.logging_config_path)
    if data:
        try:
            logging.config.dictConfig(data)
            return
        except (ValueError, TypeError, AttributeError, ImportError) as e:
            logger.warning(f"Invalid logging config, using basicConfig: {e}")

    logging.basicConfig(
        level=getattr(logging, (level or settings.log_level).upper(), logging.INFO),
        format=DEFAULT_FORMAT,
    )
