"""
Configuration

Loads configuration from a YAML file, then applies environment variable
overrides. Command line options override both.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)


# Configuration file locations (checked in order)
CONFIG_SEARCH_PATHS = [
    Path.home() / ".xivaffects" / "config.yaml",
    Path.cwd() / "xivaffects.yaml",
]


DEFAULT_CONFIG: Dict[str, Any] = {
    # Directory of sheet CSV exports (Item.csv, ModelChara.csv, ...)
    "sheets_path": str(Path.cwd() / "csv"),
    # Directory of extracted archive files, laid out by game path
    "archive_path": str(Path.cwd() / "sqpack"),
    # Battle NPC base => name link document
    "bnpc_path": str(Path.cwd() / "bnpc.json"),
    # Where `build` writes and `resolve` reads the index
    "index_path": str(Path.home() / ".xivaffects" / "affects.json"),

    "pretty": False,
    "log_level": "INFO",
}

ENV_MAPPINGS = {
    "XIVAFFECTS_SHEETS_PATH": "sheets_path",
    "XIVAFFECTS_ARCHIVE_PATH": "archive_path",
    "XIVAFFECTS_BNPC_PATH": "bnpc_path",
    "XIVAFFECTS_INDEX_PATH": "index_path",
    "XIVAFFECTS_LOG_LEVEL": "log_level",
}


class ConfigError(Exception):
    """A configuration file exists but cannot be used."""


class AffectsConfig:
    """Settings for building and querying the affects index."""

    def __init__(self, config_path: Optional[Path] = None, environ: Optional[Dict[str, str]] = None):
        self._config: Dict[str, Any] = dict(DEFAULT_CONFIG)
        self._config_path: Optional[Path] = None

        self._load_config(config_path)
        self._apply_env_overrides(os.environ if environ is None else environ)

    def _load_config(self, explicit_path: Optional[Path] = None) -> None:
        """Load the first config file found."""
        if explicit_path is not None and not Path(explicit_path).exists():
            raise ConfigError(f"config file {explicit_path} does not exist")
        search_paths = [Path(explicit_path)] if explicit_path else CONFIG_SEARCH_PATHS

        for config_path in search_paths:
            if not config_path.exists():
                continue
            try:
                with open(config_path, "r", encoding="utf-8") as f:
                    user_config = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError) as e:
                raise ConfigError(f"failed to load config from {config_path}: {e}") from e
            if not isinstance(user_config, dict):
                raise ConfigError(f"{config_path} must contain a mapping")

            unknown = sorted(set(user_config) - set(DEFAULT_CONFIG))
            if unknown:
                logger.warning(f"Ignoring unknown config keys in {config_path}: {', '.join(unknown)}")
            self._config.update({k: v for k, v in user_config.items() if k in DEFAULT_CONFIG})
            self._config_path = config_path
            logger.debug(f"Loaded config from {config_path}")
            return

    def _apply_env_overrides(self, environ) -> None:
        for env_var, config_key in ENV_MAPPINGS.items():
            if env_var in environ:
                self._config[config_key] = environ[env_var]

    def override(self, **values: Any) -> None:
        """Apply explicit values (e.g. from the command line); None is ignored."""
        for key, value in values.items():
            if key not in DEFAULT_CONFIG:
                raise ConfigError(f"unknown config key {key!r}")
            if value is not None:
                self._config[key] = value

    @property
    def config_path(self) -> Optional[Path]:
        """Path to loaded config file, or None if using defaults."""
        return self._config_path

    @property
    def sheets_path(self) -> Path:
        return Path(self._config["sheets_path"]).expanduser()

    @property
    def archive_path(self) -> Path:
        return Path(self._config["archive_path"]).expanduser()

    @property
    def bnpc_path(self) -> Path:
        return Path(self._config["bnpc_path"]).expanduser()

    @property
    def index_path(self) -> Path:
        return Path(self._config["index_path"]).expanduser()

    @property
    def pretty(self) -> bool:
        return bool(self._config["pretty"])

    @property
    def log_level(self) -> str:
        return str(self._config["log_level"]).upper()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sheets_path": str(self.sheets_path),
            "archive_path": str(self.archive_path),
            "bnpc_path": str(self.bnpc_path),
            "index_path": str(self.index_path),
            "pretty": self.pretty,
            "log_level": self.log_level,
            "config_file": str(self._config_path) if self._config_path else None,
        }


def write_default_config(path: Optional[Path] = None) -> Path:
    """Write a commented default configuration file and return its path."""
    if path is None:
        path = CONFIG_SEARCH_PATHS[0]
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    content = """# xivaffects configuration
#
# Every setting can also be given by environment variable
# (XIVAFFECTS_SHEETS_PATH, XIVAFFECTS_ARCHIVE_PATH, ...) or on the command line.

# Sheet CSV exports
# sheets_path: "./csv"

# Extracted archive files
# archive_path: "./sqpack"

# Battle NPC name links
# bnpc_path: "./bnpc.json"

# Affects index location
# index_path: "~/.xivaffects/affects.json"

pretty: false
log_level: INFO
"""
    path.write_text(content, encoding="utf-8")
    return path
