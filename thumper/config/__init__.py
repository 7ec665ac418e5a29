# Thumper Configuration Module
# Handles YAML-based configuration loading, validation, and defaults

from thumper.config.defaults import DEFAULT_CONFIG, generate_default_config
from thumper.config.loader import (
    build_sync_config,
    ensure_config_exists,
    get_config_path,
    load_config,
    save_config,
    validate_config_file,
)
from thumper.config.schema import (
    DEFAULT_ENDPOINT,
    DEFAULT_LOCKFILE,
    OutputConfig,
    SyncConfig,
    ThumperConfig,
)

__all__ = [
    # Schema
    "ThumperConfig",
    "SyncConfig",
    "OutputConfig",
    "DEFAULT_ENDPOINT",
    "DEFAULT_LOCKFILE",
    # Loader
    "load_config",
    "save_config",
    "get_config_path",
    "ensure_config_exists",
    "validate_config_file",
    "build_sync_config",
    # Defaults
    "DEFAULT_CONFIG",
    "generate_default_config",
]
