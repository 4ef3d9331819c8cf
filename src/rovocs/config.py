"""Configuration management for ROVOCS."""

import logging
import os
import tomllib

from pathlib import Path
from typing import Any

import tomli_w

from pydantic import ValidationError

from rovocs.analysis.types import AnalyzerConfig
from rovocs.constants import DEFAULT_CONFIG_FILE, ROVOCS_HOME

logger = logging.getLogger(__name__)

ANALYZER_SECTION = "analyzer"


class ConfigError(ValueError):
    """Raised when configured analyzer settings are unknown or invalid."""


def get_config_path() -> Path:
    """
    Get the path to the ROVOCS configuration file.

    The file holds an `[analyzer]` table of AnalyzerConfig overrides used by
    `rovocs analyze`, and optionally a `[logging]` table read at startup.

    Returns:
        Path to ~/.rovocs/config.toml
    """
    return ROVOCS_HOME / DEFAULT_CONFIG_FILE


def load_config() -> dict[str, Any]:
    """
    Load the raw ROVOCS configuration tables.

    Values are not validated here. `load_analyzer_config` checks the
    `[analyzer]` table against AnalyzerConfig.

    Returns:
        Mapping of table name (`analyzer`, `logging`) to its settings.
        Returns empty dict if the file doesn't exist or is corrupted.
    """
    config_path = get_config_path()

    if not config_path.exists():
        return {}

    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except Exception as e:
        logger.warning(f"Failed to load config from {config_path}: {e}")
        logger.warning("Treating config as empty. Fix or delete the file to resolve.")
        return {}


def save_config(config: dict[str, Any]) -> None:
    """
    Write the ROVOCS configuration tables atomically.

    Creates ~/.rovocs if needed, then writes a temp file and renames it
    over config.toml.

    Args:
        config: Table name to settings mapping, e.g. {"analyzer": {...}}

    Raises:
        PermissionError: If directory cannot be created or file cannot be written
    """
    config_path = get_config_path()

    config_dir = config_path.parent
    try:
        os.makedirs(config_dir, exist_ok=True)
    except PermissionError as e:
        raise PermissionError(
            f"Cannot create config directory {config_dir}: {e}"
        ) from e

    temp_path = config_path.with_suffix(".toml.tmp")

    try:
        with open(temp_path, "wb") as f:
            tomli_w.dump(config, f)

        os.replace(temp_path, config_path)

    except Exception:
        if temp_path.exists():
            temp_path.unlink()
        raise


def _build_analyzer_config(overrides: dict[str, Any]) -> AnalyzerConfig:
    unknown = sorted(set(overrides) - set(AnalyzerConfig.model_fields))
    if unknown:
        raise ConfigError(
            f"Unknown analyzer setting(s): {', '.join(unknown)}. "
            f"Available: {', '.join(AnalyzerConfig.model_fields)}"
        )
    try:
        return AnalyzerConfig(**overrides)
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err["loc"])
        raise ConfigError(f"Invalid analyzer setting(s): {fields}\n{e}") from e


def load_analyzer_config() -> AnalyzerConfig:
    """
    Build analyzer parameters from the [analyzer] config table.

    Returns:
        AnalyzerConfig with defaults for anything not configured

    Raises:
        ConfigError: If a configured key is unknown or its value is invalid
    """
    overrides = load_config().get(ANALYZER_SECTION, {})
    if not isinstance(overrides, dict):
        raise ConfigError(f"[{ANALYZER_SECTION}] must be a table")
    return _build_analyzer_config(overrides)


def set_analyzer_option(key: str, value: str) -> Any:
    """
    Validate and store one analyzer setting.

    Args:
        key: AnalyzerConfig field name
        value: Raw value, coerced to the field's type

    Returns:
        The stored, type-converted value

    Raises:
        ConfigError: If the key is unknown or the value is invalid
    """
    config = load_config()
    section = dict(config.get(ANALYZER_SECTION, {}))
    section[key] = value

    validated = _build_analyzer_config(section)
    stored = getattr(validated, key)
    section[key] = stored

    config[ANALYZER_SECTION] = section
    save_config(config)
    return stored


def unset_analyzer_option(key: str) -> bool:
    """
    Remove one analyzer setting, restoring its default.

    If the section becomes empty it is removed; if the whole config becomes
    empty the file is deleted.

    Returns:
        True if the setting was present
    """
    config = load_config()
    section = config.get(ANALYZER_SECTION, {})
    if key not in section:
        return False

    del section[key]
    if not section:
        del config[ANALYZER_SECTION]

    if config:
        save_config(config)
    else:
        config_path = get_config_path()
        if config_path.exists():
            config_path.unlink()
    return True
