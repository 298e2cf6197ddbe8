"""Configuration loader for the package documentation extractor.

Loads settings from configs/config.yaml and provides typed access
to all configuration sections via dataclasses.
"""

import logging
import os
import sysconfig
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from pkgdoc.utils.logging import DEFAULT_LEVEL

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "configs" / "config.yaml"

_DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _default_stdlib_root() -> str:
    return sysconfig.get_paths()["stdlib"]


@dataclass
class SearchConfig:
    """Search roots used to locate packages and their sub-packages.

    The workspace root is tried first, the standard library root second.
    """

    workspace_root: str = "."
    stdlib_root: str = field(default_factory=_default_stdlib_root)
    extension: str = ".py"


@dataclass
class LoaderConfig:
    """Configuration for loading and extracting package sources."""

    suppress_errors: bool = True
    include_private: bool = False


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = DEFAULT_LEVEL
    format: str = _DEFAULT_LOG_FORMAT
    file: Optional[str] = None


@dataclass
class AppConfig:
    """Top-level application configuration."""

    search: SearchConfig = field(default_factory=SearchConfig)
    loader: LoaderConfig = field(default_factory=LoaderConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _build_search_config(data: dict) -> SearchConfig:
    """Build a SearchConfig from a dictionary and the environment.

    ``PKGDOC_WORKSPACE`` and ``PKGDOC_STDLIB`` take precedence over the
    values from the file.

    Args:
        data: Dictionary with search settings.

    Returns:
        A configured SearchConfig instance.
    """
    workspace_root = os.getenv("PKGDOC_WORKSPACE") or data.get("workspace_root", ".")
    stdlib_root = (
        os.getenv("PKGDOC_STDLIB")
        or data.get("stdlib_root")
        or _default_stdlib_root()
    )
    return SearchConfig(
        workspace_root=str(workspace_root),
        stdlib_root=str(stdlib_root),
        extension=data.get("extension", ".py"),
    )


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """Load application configuration from a YAML file.

    Falls back to defaults for any missing values, and for the whole
    configuration when the file does not exist.

    Args:
        config_path: Path to the YAML config file. If None, uses the
            default path at configs/config.yaml.

    Returns:
        A fully populated AppConfig instance.

    Raises:
        yaml.YAMLError: If the config file contains invalid YAML.
    """
    path = Path(config_path) if config_path else _DEFAULT_CONFIG_PATH

    if not path.exists():
        logger.warning("Config file not found at %s, using defaults", path)
        return AppConfig(search=_build_search_config({}))

    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    logger.info("Loaded configuration from %s", path)

    loader_data = raw.get("loader", {})
    loader_config = LoaderConfig(
        suppress_errors=loader_data.get("suppress_errors", True),
        include_private=loader_data.get("include_private", False),
    )

    logging_data = raw.get("logging", {})
    logging_config = LoggingConfig(
        level=logging_data.get("level", DEFAULT_LEVEL),
        format=logging_data.get("format", _DEFAULT_LOG_FORMAT),
        file=logging_data.get("file"),
    )

    return AppConfig(
        search=_build_search_config(raw.get("search", {})),
        loader=loader_config,
        logging=logging_config,
    )
