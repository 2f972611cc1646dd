# sylburst/config/loaders.py

"""
Loading of the sylburst configuration.

Sources, lowest to highest priority: model defaults, explicitly passed
files, ./sylburst.toml, ~/.config/sylburst/sylburst.toml and SYLBURST_*
environment variables. Later sources are deep-merged over earlier ones.
"""

import os
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

import toml
from pydantic import ValidationError

from .models import SylburstConfig

logger = logging.getLogger(__name__)

ENV_PREFIX = "SYLBURST_"
USER_CONFIG_FILE = Path("~/.config/sylburst/sylburst.toml").expanduser()
PROJECT_CONFIG_FILE = Path("./sylburst.toml")

_ENV_LITERALS = {"true": True, "false": False, "none": None, "null": None, "": None}


def _read_toml(path: Path) -> Dict[str, Any]:
    """Parsed TOML of `path`; {} if it is missing or unreadable."""
    if not path.is_file():
        return {}
    try:
        with open(path, "r") as fh:
            data = toml.load(fh)
    except (toml.TomlDecodeError, OSError) as e:
        logger.warning(f"Ignoring config file '{path}': {e}")
        return {}
    logger.info(f"Read configuration from {path.resolve()}")
    return data


def _deep_merge_dicts(base: Dict, update: Dict) -> Dict:
    """Returns a copy of `base` with `update` merged in, section by section."""
    merged = dict(base)
    for key, value in update.items():
        current = merged.get(key)
        if isinstance(value, dict) and isinstance(current, dict):
            merged[key] = _deep_merge_dicts(current, value)
        else:
            merged[key] = value
    return merged


def _parse_env_value(value: str) -> Any:
    """Booleans, none/null, ints and floats are converted; other values stay strings."""
    lowered = value.strip().lower()
    if lowered in _ENV_LITERALS:
        return _ENV_LITERALS[lowered]
    for cast in (int, float):
        try:
            return cast(value)
        except ValueError:
            continue
    return value


def _get_config_from_env() -> Dict[str, Any]:
    """
    Collects SYLBURST_<SECTION>_<KEY> variables as {section: {key: value}}.

    Only the first underscore after the prefix separates section and key, so
    SYLBURST_SEGMENTATION_SHORTEST_SYL sets segmentation.shortest_syl.
    """
    env_config: Dict[str, Any] = {}
    for name, value in os.environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        section, _, key = name[len(ENV_PREFIX):].lower().partition("_")
        if not (section and key):
            logger.debug(f"Ignoring malformed config environment variable: {name}")
            continue
        env_config.setdefault(section, {})[key] = _parse_env_value(value)
    return env_config


def _file_sources(
    config_files: Optional[Iterable[Path]],
    disable_project_config: bool,
    disable_user_config: bool
) -> List[Tuple[str, Path]]:
    # lowest priority first; of several explicit files the first one wins
    sources = [("explicit", Path(p)) for p in reversed(list(config_files or []))]
    if not disable_project_config:
        sources.append(("project", PROJECT_CONFIG_FILE))
    if not disable_user_config:
        sources.append(("user", USER_CONFIG_FILE))
    return sources


def load_configuration(
    config_files: Optional[List[Path]] = None,
    disable_project_config: bool = False,
    disable_user_config: bool = False,
) -> SylburstConfig:
    """
    Builds the effective configuration.

    Args:
        config_files: Extra TOML files, ranked below ./sylburst.toml.
        disable_project_config: Skip ./sylburst.toml.
        disable_user_config: Skip ~/.config/sylburst/sylburst.toml.

    Returns:
        The validated SylburstConfig. If the merged settings do not validate,
        the error is logged and the built-in defaults are returned.
    """
    settings: Dict[str, Any] = {}
    for kind, path in _file_sources(config_files, disable_project_config, disable_user_config):
        logger.debug(f"Looking for {kind} config: {path}")
        settings = _deep_merge_dicts(settings, _read_toml(path))

    env_settings = _get_config_from_env()
    if env_settings:
        logger.debug(f"Environment overrides: {env_settings}")
        settings = _deep_merge_dicts(settings, env_settings)

    try:
        config = SylburstConfig(**settings)
    except ValidationError as e:
        logger.error(f"Invalid configuration:\n{e}")
        logger.warning("Falling back to default configuration.")
        return SylburstConfig()
    logger.debug("Configuration loaded.")
    return config
