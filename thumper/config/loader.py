# Thumper Configuration Loader
# Load, save, and merge YAML configuration with command-line values

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from thumper.config.defaults import generate_default_config
from thumper.config.schema import SyncConfig, ThumperConfig
from thumper.errors import ConfigurationError

CONFIG_ENV_VAR = "THUMPER_CONFIG"

# Keys of SyncConfig that have a counterpart in the configuration file
_FILE_DEFAULTS = ("endpoint", "lockfile", "concurrency", "ignore", "verbose", "html_barrier")
_FLAGS = ("verbose", "html_barrier")


def get_config_dir() -> Path:
    """Get the thumper configuration directory."""
    return Path.home() / ".config" / "thumper"


def get_config_path() -> Path:
    """Get the path to the configuration file."""
    # Allow override via environment variable
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return get_config_dir() / "config.yaml"


def _read_yaml(config_path: Path) -> dict[str, Any]:
    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML syntax in {config_path}") from e
    except OSError as e:
        raise ConfigurationError(f"Unable to read {config_path}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{config_path} must contain a mapping, not {type(data).__name__}")
    return data


def load_config(config_path: Optional[Path] = None) -> ThumperConfig:
    """
    Load configuration from YAML file.

    The configuration file is optional: when neither config_path nor
    THUMPER_CONFIG names a file and the default file is missing, the
    built-in defaults are returned.

    Args:
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        ThumperConfig: Validated configuration object.

    Raises:
        ConfigurationError: If an explicitly requested file is missing or unreadable.
        ValidationError: If the file content is invalid.
    """
    explicit = config_path is not None or bool(os.environ.get(CONFIG_ENV_VAR))
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        if explicit:
            raise ConfigurationError(
                f"Configuration file not found: {config_path}\nRun 'thumper config init' to create one."
            )
        return ThumperConfig()

    return ThumperConfig.model_validate(_read_yaml(config_path))


def save_config(config: ThumperConfig, config_path: Optional[Path] = None) -> Path:
    """
    Save configuration to YAML file.

    Args:
        config: Configuration object to save.
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        Path: Path where config was saved.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(mode="json")

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)

    return config_path


def ensure_config_exists(config_path: Optional[Path] = None) -> tuple[Path, bool]:
    """
    Ensure configuration file exists, creating default if needed.

    Returns:
        Tuple of (config_path, was_created).
    """
    if config_path is None:
        config_path = get_config_path()

    if config_path.exists():
        return config_path, False

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(generate_default_config(), encoding="utf-8")
    return config_path, True


def validate_config_file(config_path: Optional[Path] = None) -> tuple[bool, list[str]]:
    """
    Validate a configuration file.

    Args:
        config_path: Path to config file to validate.

    Returns:
        Tuple of (is_valid, error_messages).
    """
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        return False, [f"Configuration file not found: {config_path}"]

    try:
        data = _read_yaml(config_path)
    except ConfigurationError as e:
        cause = f": {e.__cause__}" if e.__cause__ else ""
        return False, [f"{e}{cause}"]

    errors: list[str] = []
    try:
        ThumperConfig.model_validate(data)
    except ValidationError as e:
        for error in e.errors():
            loc = " -> ".join(str(part) for part in error["loc"])
            errors.append(f"{loc}: {error['msg']}")

    unknown = sorted(set(data) - set(ThumperConfig.model_fields))
    for key in unknown:
        errors.append(f"{key}: unknown setting")

    return len(errors) == 0, errors


def build_sync_config(file_config: ThumperConfig, *, local_path: str, storage_zone: str, **cli_values: Any) -> SyncConfig:
    """
    Combine configuration file defaults with command-line values.

    Command-line values win, None meaning "not given". Ignore prefixes
    from both sources are combined; flags are enabled if either source
    enables them.

    Args:
        file_config: Loaded configuration file.
        local_path: Local directory to sync.
        storage_zone: Storage zone name.
        **cli_values: Remaining SyncConfig fields from the command line.

    Returns:
        Validated SyncConfig.

    Raises:
        ValidationError: If a value is invalid.
    """
    values: dict[str, Any] = {key: getattr(file_config, key) for key in _FILE_DEFAULTS}
    values["ignore"] = list(file_config.ignore)

    for key, value in cli_values.items():
        if value is None:
            continue
        if key == "ignore":
            values["ignore"] = [*values["ignore"], *value]
        elif key in _FLAGS:
            values[key] = bool(values[key] or value)
        else:
            values[key] = value

    return SyncConfig(local_path=local_path, storage_zone=storage_zone, **values)
