# Tests for thumper.config
# Configuration loading, validation, and merging with command-line values

import pytest
import yaml
from pydantic import ValidationError

from thumper.config import (
    DEFAULT_CONFIG,
    DEFAULT_ENDPOINT,
    DEFAULT_LOCKFILE,
    SyncConfig,
    ThumperConfig,
    build_sync_config,
    ensure_config_exists,
    generate_default_config,
    get_config_path,
    load_config,
    save_config,
    validate_config_file,
)
from thumper.errors import ConfigurationError


class TestGetConfigPath:
    """Tests for get_config_path."""

    def test_default(self, temp_home):
        assert get_config_path() == temp_home / ".config" / "thumper" / "config.yaml"

    def test_env_override(self, temp_home, temp_dir, monkeypatch):
        monkeypatch.setenv("THUMPER_CONFIG", str(temp_dir / "custom.yaml"))
        assert get_config_path() == temp_dir / "custom.yaml"


class TestLoadConfig:
    """Tests for load_config."""

    def test_missing_default_file(self, temp_home):
        config = load_config()
        assert config == ThumperConfig()
        assert config.endpoint == DEFAULT_ENDPOINT
        assert config.lockfile == DEFAULT_LOCKFILE

    def test_missing_explicit_file(self, temp_dir):
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(temp_dir / "missing.yaml")

    def test_missing_env_file(self, temp_home, temp_dir, monkeypatch):
        monkeypatch.setenv("THUMPER_CONFIG", str(temp_dir / "missing.yaml"))
        with pytest.raises(ConfigurationError):
            load_config()

    def test_load(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text(
            yaml.dump({"endpoint": "ny.storage.bunnycdn.com", "concurrency": 8, "ignore": ["uploads/"]}),
            encoding="utf-8",
        )

        config = load_config(path)

        assert config.endpoint == "ny.storage.bunnycdn.com"
        assert config.concurrency == 8
        assert config.ignore == ["uploads/"]

    def test_empty_file(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(path) == ThumperConfig()

    def test_invalid_yaml(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("endpoint: [unclosed", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_config(path)

    def test_not_a_mapping(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="mapping"):
            load_config(path)

    def test_invalid_value(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("concurrency: 0\n", encoding="utf-8")
        with pytest.raises(ValidationError):
            load_config(path)

    def test_generated_default_loads(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text(generate_default_config(), encoding="utf-8")
        assert load_config(path) == ThumperConfig.model_validate(DEFAULT_CONFIG)


class TestSaveConfig:
    """Tests for save_config."""

    def test_save_and_load(self, temp_dir):
        path = temp_dir / "nested" / "config.yaml"
        config = ThumperConfig(concurrency=3, html_barrier=True)

        assert save_config(config, path) == path
        assert load_config(path) == config


class TestEnsureConfigExists:
    """Tests for ensure_config_exists."""

    def test_creates(self, temp_home):
        path, created = ensure_config_exists()
        assert created
        assert path.exists()
        assert "# thumper configuration" in path.read_text(encoding="utf-8")

    def test_existing(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("verbose: true\n", encoding="utf-8")

        result_path, created = ensure_config_exists(path)

        assert result_path == path
        assert not created
        assert path.read_text(encoding="utf-8") == "verbose: true\n"


class TestValidateConfigFile:
    """Tests for validate_config_file."""

    def test_valid(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text(generate_default_config(), encoding="utf-8")
        assert validate_config_file(path) == (True, [])

    def test_missing(self, temp_dir):
        is_valid, errors = validate_config_file(temp_dir / "missing.yaml")
        assert not is_valid
        assert "not found" in errors[0]

    def test_invalid_value(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("concurrency: -1\n", encoding="utf-8")

        is_valid, errors = validate_config_file(path)

        assert not is_valid
        assert errors[0].startswith("concurrency:")

    def test_unknown_key(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("endpiont: x\n", encoding="utf-8")

        is_valid, errors = validate_config_file(path)

        assert not is_valid
        assert errors == ["endpiont: unknown setting"]

    def test_bad_yaml(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("a: [", encoding="utf-8")

        is_valid, errors = validate_config_file(path)

        assert not is_valid
        assert "Invalid YAML" in errors[0]


class TestSyncConfig:
    """Tests for SyncConfig."""

    def test_defaults(self, temp_dir):
        config = SyncConfig(local_path=str(temp_dir), storage_zone="zone")
        assert config.remote_path == "/"
        assert config.remote_root == ""
        assert config.remote_dir == ""
        assert config.lockfile == DEFAULT_LOCKFILE
        assert config.worker_count >= 1

    def test_remote_path(self, temp_dir):
        config = SyncConfig(local_path=str(temp_dir), storage_zone="zone", remote_path="/www/site/")
        assert config.remote_root == "www/site"
        assert config.remote_dir == "www/site/"

    def test_expands_home(self, temp_home):
        config = SyncConfig(local_path="~/site", storage_zone="zone")
        assert config.local_path == str(temp_home / "site")

    def test_empty_zone(self, temp_dir):
        with pytest.raises(ValidationError):
            SyncConfig(local_path=str(temp_dir), storage_zone="")

    def test_zero_concurrency(self, temp_dir):
        with pytest.raises(ValidationError):
            SyncConfig(local_path=str(temp_dir), storage_zone="zone", concurrency=0)

    def test_explicit_concurrency(self, temp_dir):
        assert SyncConfig(local_path=str(temp_dir), storage_zone="zone", concurrency=5).worker_count == 5


class TestBuildSyncConfig:
    """Tests for build_sync_config."""

    def test_file_defaults(self, temp_dir):
        file_config = ThumperConfig(endpoint="la.storage.bunnycdn.com", concurrency=3, verbose=True)

        config = build_sync_config(file_config, local_path=str(temp_dir), storage_zone="zone")

        assert config.endpoint == "la.storage.bunnycdn.com"
        assert config.concurrency == 3
        assert config.verbose

    def test_cli_values_win(self, temp_dir):
        file_config = ThumperConfig(endpoint="la.storage.bunnycdn.com", lockfile="a.lock")

        config = build_sync_config(
            file_config,
            local_path=str(temp_dir),
            storage_zone="zone",
            endpoint="ny.storage.bunnycdn.com",
            lockfile="b.lock",
        )

        assert config.endpoint == "ny.storage.bunnycdn.com"
        assert config.lockfile == "b.lock"

    def test_none_means_not_given(self, temp_dir):
        file_config = ThumperConfig(concurrency=3)

        config = build_sync_config(file_config, local_path=str(temp_dir), storage_zone="zone", concurrency=None)

        assert config.concurrency == 3

    def test_ignore_combined(self, temp_dir):
        file_config = ThumperConfig(ignore=["uploads/"])

        config = build_sync_config(file_config, local_path=str(temp_dir), storage_zone="zone", ignore=["media/"])

        assert config.ignore == ["uploads/", "media/"]

    def test_flags_or(self, temp_dir):
        file_config = ThumperConfig(html_barrier=True)

        config = build_sync_config(
            file_config,
            local_path=str(temp_dir),
            storage_zone="zone",
            html_barrier=False,
            verbose=True,
        )

        assert config.html_barrier
        assert config.verbose

    def test_invalid_cli_value(self, temp_dir):
        with pytest.raises(ValidationError):
            build_sync_config(ThumperConfig(), local_path=str(temp_dir), storage_zone="zone", concurrency=0)
