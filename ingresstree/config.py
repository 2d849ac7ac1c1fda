"""Loading of the reader configuration file."""

import os
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import ValidationError

from .exceptions import ConfigError
from .logging_config import get_logger
from .models import ClusterConfig, ReaderConfig

logger = get_logger(__name__)

DEFAULT_CONFIG_PATHS = [
    Path("ingresstree.yaml"),
    Path("config.yaml"),
    Path("/etc/ingresstree/config.yaml"),
]


def find_config() -> Optional[Path]:
    """Return the first existing config file from the default locations."""
    for path in DEFAULT_CONFIG_PATHS:
        if path.exists():
            return path
    return None


def load_config(path: Union[str, Path]) -> ReaderConfig:
    """Parse a YAML configuration file.

    Raises:
        ConfigError: If the file is missing, is not valid YAML or does not
            match ``ReaderConfig``.
    """
    config_path = Path(path)
    logger.debug("Loading configuration file", config_path=str(config_path))
    try:
        with open(config_path) as f:
            config_data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigError(f"Cannot read configuration file {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(config_data, dict):
        raise ConfigError(f"Configuration file {config_path} must contain a mapping")

    try:
        reader_config = ReaderConfig(**config_data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e

    logger.info("Configuration loaded successfully",
               config_path=str(config_path),
               clusters_count=len(reader_config.clusters))
    return reader_config


def resolve_config(path: Optional[Union[str, Path]] = None) -> ReaderConfig:
    """Load the given config, a default one, or fall back to local kubeconfig."""
    if path:
        return load_config(path)

    found = find_config()
    if found:
        return load_config(found)

    logger.warning("No configuration file found, using local kubeconfig")
    return ReaderConfig(clusters=[ClusterConfig(name="local", kubeconfig_path=os.environ.get("KUBECONFIG", "~/.kube/config"))])
