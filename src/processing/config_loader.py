"""
Loading of chunking configuration from external sources.

The chunker itself trusts its ``ChunkingConfig``; this module is where
untrusted input (YAML files, request bodies, environment variables) is
validated and converted.

Example YAML:
    chunking:
      enabled: true
      markers:
        - "[MSG]"
        - "<nl>"
      min_chunk_size: 3
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml
from dotenv import find_dotenv, load_dotenv

from .chunkers.base import (
    ChunkingConfig,
    DEFAULT_MARKERS,
    DEFAULT_MIN_CHUNK_SIZE,
    InvalidChunkingConfigError
)

logger = logging.getLogger(__name__)

_TRUE_STRINGS = {"true", "1", "yes", "on"}
_FALSE_STRINGS = {"false", "0", "no", "off", ""}

# camelCase keys used by some config producers
_KEY_ALIASES = {
    "minChunkSize": "min_chunk_size",
}


def _substitute_env_vars(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Substitute environment variable placeholders in config values.

    Supports ${VAR_NAME} syntax.
    """
    result = {}

    for key, value in config.items():
        if isinstance(value, str) and value.startswith("${") and value.endswith("}"):
            var_name = value[2:-1]
            env_value = os.getenv(var_name)

            if env_value is None:
                logger.warning(
                    f"Environment variable {var_name} not set for config key '{key}'"
                )
            result[key] = env_value
        else:
            result[key] = value

    return result


def _parse_enabled(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise InvalidChunkingConfigError(f"enabled must be a boolean, got {value!r}")


def _parse_markers(value: Any) -> tuple:
    if value is None:
        return DEFAULT_MARKERS
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise InvalidChunkingConfigError(
            f"markers must be a list of strings, got {value!r}"
        )

    for marker in value:
        if not isinstance(marker, str) or not marker:
            raise InvalidChunkingConfigError(
                f"markers must be non-empty strings, got {marker!r}"
            )

    if len(set(value)) != len(value):
        logger.warning(f"Duplicate chunk markers configured: {list(value)}")

    return tuple(value)


def _parse_min_chunk_size(value: Any) -> int:
    if value is None:
        return DEFAULT_MIN_CHUNK_SIZE
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError as e:
            raise InvalidChunkingConfigError(
                f"min_chunk_size must be an integer, got {value!r}"
            ) from e
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidChunkingConfigError(
            f"min_chunk_size must be an integer, got {value!r}"
        )
    if value < 0:
        raise InvalidChunkingConfigError("min_chunk_size must not be negative")
    return value


def load_chunking_config(data: Optional[Mapping[str, Any]] = None) -> ChunkingConfig:
    """
    Build a ChunkingConfig from a plain mapping.

    Args:
        data: Mapping with optional ``enabled``, ``markers`` and
            ``min_chunk_size`` (or ``minChunkSize``) keys

    Returns:
        Validated ChunkingConfig; defaults for every missing key

    Raises:
        InvalidChunkingConfigError: If a value has the wrong type
    """
    if data is None:
        return ChunkingConfig()
    if not isinstance(data, Mapping):
        raise InvalidChunkingConfigError(
            f"chunking configuration must be a mapping, got {type(data).__name__}"
        )

    normalized = {_KEY_ALIASES.get(key, key): value for key, value in data.items()}
    unknown = set(normalized) - {"enabled", "markers", "min_chunk_size"}
    if unknown:
        logger.warning(f"Ignoring unknown chunking config keys: {sorted(unknown)}")

    normalized = _substitute_env_vars(normalized)

    config = ChunkingConfig(
        enabled=_parse_enabled(normalized.get("enabled")),
        markers=_parse_markers(normalized.get("markers")),
        min_chunk_size=_parse_min_chunk_size(normalized.get("min_chunk_size"))
    )
    logger.debug(f"Loaded chunking config: {config}")
    return config


def load_chunking_config_from_yaml(yaml_path: Union[str, Path]) -> ChunkingConfig:
    """
    Load a ChunkingConfig from a YAML file.

    The configuration is read from a top-level ``chunking`` key when
    present, otherwise from the document root.

    Args:
        yaml_path: Path to YAML configuration file

    Raises:
        InvalidChunkingConfigError: If the file is missing or malformed
    """
    path = Path(yaml_path)
    if not path.exists():
        raise InvalidChunkingConfigError(f"Config file not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise InvalidChunkingConfigError(f"Invalid YAML in {path}: {e}") from e

    if config_data is None:
        return ChunkingConfig()
    if isinstance(config_data, dict) and "chunking" in config_data:
        config_data = config_data["chunking"]

    logger.info(f"Loading chunking config from {path}")
    return load_chunking_config(config_data)


def load_chunking_config_from_env(prefix: str = "CHUNKING_") -> ChunkingConfig:
    """
    Load a ChunkingConfig from environment variables.

    Reads ``{prefix}ENABLED``, ``{prefix}MARKERS`` (comma separated) and
    ``{prefix}MIN_CHUNK_SIZE``. A ``.env`` file is loaded first if present.
    """
    load_dotenv(find_dotenv(usecwd=True))

    data: Dict[str, Any] = {}
    enabled = os.getenv(f"{prefix}ENABLED")
    if enabled is not None:
        data["enabled"] = enabled

    markers = os.getenv(f"{prefix}MARKERS")
    if markers:
        data["markers"] = [m.strip() for m in markers.split(",") if m.strip()]

    min_chunk_size = os.getenv(f"{prefix}MIN_CHUNK_SIZE")
    if min_chunk_size is not None:
        data["min_chunk_size"] = min_chunk_size

    return load_chunking_config(data)
