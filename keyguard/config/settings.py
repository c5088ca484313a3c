"""Settings loader for the keyguard device shim.

Configuration is read from the ``[general]`` table of a TOML file
(``/etc/keyguard/keyguard.toml`` by default) with sane defaults when the
file is absent. Environment variables are not used as overrides.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any, Final

from ..const import DEFAULT_CONFIG_PATH
from .model import RuntimeConfig
from .schema import RuntimeConfigSchema

logger = logging.getLogger(__name__)

_CONFIG_SECTION: Final[str] = "general"


def _load_raw_config(path: Path) -> dict[str, Any]:
    if not path.exists():
        logger.info("Config file %s not found; using defaults", path)
        return {}

    with path.open("rb") as handle:
        document = tomllib.load(handle)

    section = document.get(_CONFIG_SECTION, {})
    if not isinstance(section, dict):
        raise ValueError(f"[{_CONFIG_SECTION}] in {path} must be a table")
    return section


def load_runtime_config(path: str | Path | None = None) -> RuntimeConfig:
    """Load configuration from *path* (or the default location) and validate it.

    Raises:
        marshmallow.ValidationError: If a value fails schema validation.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    config_path = Path(path) if path is not None else Path(DEFAULT_CONFIG_PATH)
    raw = _load_raw_config(config_path)
    config: RuntimeConfig = RuntimeConfigSchema().load(raw)
    logger.debug("Loaded runtime config from %s: %s", config_path, config)
    return config
