"""Configuration management for appointme.

Reads configuration from ~/.config/appointme.toml and creates default config if needed.
The category hierarchy depth can be overridden with the
CATEGORY_HIERARCHY_MAX_DEPTH environment variable.
"""

import os
from pathlib import Path
from dataclasses import dataclass
import tomllib
import tomli_w

MAX_DEPTH_ENV_VAR = "CATEGORY_HIERARCHY_MAX_DEPTH"
DEFAULT_CATEGORY_MAX_DEPTH = 5


@dataclass
class Config:
    """Application configuration."""

    base_dir: Path
    db_data_dir: Path
    db_filename: str
    log_level: str
    log_dir: Path
    category_max_depth: int = DEFAULT_CATEGORY_MAX_DEPTH

    @property
    def db_path(self) -> Path:
        """Get the full database path (data_dir/filename)."""
        return self.db_data_dir / self.db_filename

    @classmethod
    def default(cls) -> "Config":
        """Create a Config with default values."""
        home = Path.home()
        base_dir = home / "data" / "appointme"
        return cls(
            base_dir=base_dir,
            db_data_dir=base_dir / "db",
            db_filename="appointme.db",
            log_level="INFO",
            log_dir=base_dir / "logs",
            category_max_depth=DEFAULT_CATEGORY_MAX_DEPTH,
        )


def get_config_path() -> Path:
    """Get the path to the config file."""
    return Path.home() / ".config" / "appointme.toml"


def get_migrations_dir() -> Path:
    """Get the path to the migrations directory.

    This is always relative to the code location, not configurable.
    """
    return Path(__file__).parent / "db" / "migrations"


def parse_max_depth(value, source: str) -> int:
    """Validate a configured maximum hierarchy depth.

    Args:
        value: Raw value from the config file or environment.
        source: Where the value came from, used in the error message.

    Returns:
        The depth as a positive integer.

    Raises:
        ValueError: If the value is not a positive integer.
    """
    # bool is an int subclass; "max_depth = true" is a mistake, not 1
    if isinstance(value, bool):
        raise ValueError(f"{source} must be a positive integer, got {value!r}")
    try:
        depth = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{source} must be a positive integer, got {value!r}")
    if depth < 1:
        raise ValueError(f"{source} must be a positive integer, got {value!r}")
    return depth


def load_config() -> Config:
    """Load configuration from file, creating default if it doesn't exist.

    Returns:
        Config object with loaded or default values.

    Raises:
        ValueError: If the configured category depth is invalid.
    """
    config_path = get_config_path()

    # If config doesn't exist, create it with defaults
    if not config_path.exists():
        config = Config.default()
        _write_config(config)
        return _apply_env_overrides(config)

    # Load existing config
    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    # Parse with defaults for any missing values
    base_dir = Path(data.get("base_dir", Path.home() / "data" / "appointme"))

    db_config = data.get("database", {})
    db_data_dir = Path(db_config.get("data_dir", base_dir / "db"))
    db_filename = db_config.get("filename", "appointme.db")

    log_config = data.get("logging", {})
    log_level = log_config.get("level", "INFO")
    log_dir = Path(log_config.get("log_dir", base_dir / "logs"))

    categories_config = data.get("categories", {})
    category_max_depth = parse_max_depth(
        categories_config.get("max_depth", DEFAULT_CATEGORY_MAX_DEPTH),
        "categories.max_depth",
    )

    config = Config(
        base_dir=base_dir,
        db_data_dir=db_data_dir,
        db_filename=db_filename,
        log_level=log_level,
        log_dir=log_dir,
        category_max_depth=category_max_depth,
    )
    return _apply_env_overrides(config)


def _apply_env_overrides(config: Config) -> Config:
    """Apply environment variable overrides to a loaded config."""
    env_depth = os.environ.get(MAX_DEPTH_ENV_VAR)
    if env_depth:
        config.category_max_depth = parse_max_depth(env_depth, MAX_DEPTH_ENV_VAR)
    return config


def _write_config(config: Config) -> None:
    """Write config to the config file.

    Args:
        config: Config object to write.
    """
    config_path = get_config_path()

    # Ensure config directory exists
    config_path.parent.mkdir(parents=True, exist_ok=True)

    # Convert config to TOML structure
    data = {
        "base_dir": str(config.base_dir),
        "database": {
            "data_dir": str(config.db_data_dir),
            "filename": config.db_filename,
        },
        "logging": {
            "level": config.log_level,
            "log_dir": str(config.log_dir),
        },
        "categories": {
            "max_depth": config.category_max_depth,
        },
    }

    # Write TOML file
    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
