"""Configuration file management for gastos."""

import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

from gastos.errors import ValidationError
from gastos.store.backends import DB_FILENAME, JsonFileBackend, KeyValueBackend, SqliteBackend, get_data_dir

BACKENDS = ("sqlite", "json")


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path.

    GASTOS_CONFIG wins over the XDG location.

    Returns:
        Path to the config file.
    """
    override = os.environ.get("GASTOS_CONFIG")
    if override:
        return Path(override).expanduser()
    return get_xdg_config_home() / "gastos" / "config.toml"


def default_config() -> dict[str, Any]:
    """Return the settings used when no config file exists."""
    return {
        "backend": "sqlite",
        "data_dir": str(get_data_dir()),
    }


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    save_config(default_config(), config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file, falling back to defaults.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary with defaults filled in.

    Raises:
        ValidationError: If the file is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    config = default_config()
    if not config_path.exists():
        return config

    try:
        with open(config_path, "rb") as f:
            config.update(tomllib.load(f))
    except tomllib.TOMLDecodeError as e:
        raise ValidationError(f"Invalid config file {config_path}: {e}") from e
    return config


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def get_data_path(config: dict[str, Any]) -> Path:
    """Return the configured data directory."""
    return Path(config.get("data_dir") or get_data_dir()).expanduser()


def get_export_dir(config: dict[str, Any]) -> Path | None:
    """Return the configured export directory, if any."""
    export_dir = config.get("export_dir")
    return Path(export_dir).expanduser() if export_dir else None


def data_files(config: dict[str, Any]) -> list[Path]:
    """List the files the configured backend keeps its data in."""
    data_dir = get_data_path(config)
    if config.get("backend") == "json":
        return sorted(data_dir.glob("*.json"))
    return [data_dir / DB_FILENAME]


def build_backend(config: dict[str, Any]) -> KeyValueBackend:
    """Create the backend named in the configuration.

    Raises:
        ValidationError: If the backend name is unknown.
        PersistenceError: If the backend cannot be opened.
    """
    backend = config.get("backend", "sqlite")
    data_dir = get_data_path(config)
    if backend == "sqlite":
        return SqliteBackend(data_dir / DB_FILENAME)
    if backend == "json":
        return JsonFileBackend(data_dir)
    raise ValidationError(f"Unknown backend '{backend}'. Choose one of: {', '.join(BACKENDS)}")
