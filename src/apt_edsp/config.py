"""Optional YAML configuration for processes embedding the codec.

Example ``edsp.yml``::

    logging:
      level: DEBUG
      file: /tmp/solver.log
    writer:
      flush: true
"""

from __future__ import annotations

import copy
import logging
import os
from typing import Any, Dict, Optional

import yaml

from .common.logging_utils import configure_logging
from .constants import Constants

logger = logging.getLogger(__name__)

DEFAULTS: Dict[str, Any] = {
    "logging": {
        "level": None,
        "file": None,
    },
    "writer": {
        "flush": Constants.WRITER_FLUSH,
    },
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration, falling back to defaults.

    Args:
        path: YAML file to read. Defaults to ``$EDSP_CONFIG`` when unset.

    Returns:
        Configuration dict with every default key present.
    """
    config = copy.deepcopy(DEFAULTS)
    path = path or os.environ.get(Constants.ENV_CONFIG)
    if not path:
        return config

    if not os.path.isfile(path):
        logger.warning("Config file not found: %s", path)
        return config

    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("Failed to load config %s: %s", path, exc)
        return config

    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: top level is not a mapping", path)
        return config
    return _merge(config, data)


def setup_from_config(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Apply the logging section of ``config`` (loaded when not given)."""
    if config is None:
        config = load_config()
    section = config.get("logging") or {}
    configure_logging(level=section.get("level"), log_file=section.get("file"))
    return config
