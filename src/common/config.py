"""Shared configuration utilities."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Generic, TypeVar

import yaml
from dotenv import load_dotenv

T = TypeVar("T")

# Config directory at the repository root
CONFIG_DIR = Path(__file__).resolve().parents[2] / "configs"
CONFIG_ENV_VAR = "NUTRITION_CONFIG"

DATABASE_URL = "DATABASE_URL"
SUPABASE_URL = "SUPABASE_URL"
SUPABASE_SERVICE_ROLE_KEY = "SUPABASE_SERVICE_ROLE_KEY"


class ConfigurationError(RuntimeError):
    """Raised when required configuration is missing or invalid."""


@dataclass
class MigrationConfig:
    data_path: str = "data/nutrition-info.json"
    batch_size: int = 10
    batch_delay_seconds: float = 0.1
    language: str = "ko"

    def __post_init__(self) -> None:
        if self.batch_size <= 0:
            raise ConfigurationError(f"batch_size must be positive, got {self.batch_size}")
        if self.batch_delay_seconds < 0:
            raise ConfigurationError(
                f"batch_delay_seconds must not be negative, got {self.batch_delay_seconds}"
            )


@dataclass
class BucketConfig:
    bucket_id: str = "product-images"
    public: bool = True
    file_size_limit: int = 5 * 1024 * 1024  # 5MB
    allowed_mime_types: list[str] = field(
        default_factory=lambda: ["image/jpeg", "image/png", "image/webp", "image/gif"]
    )


@dataclass
class AppConfig:
    migration: MigrationConfig = field(default_factory=MigrationConfig)
    bucket: BucketConfig = field(default_factory=BucketConfig)


@dataclass(frozen=True)
class Settings:
    """Connection settings read from the environment."""
    database_url: str | None
    supabase_url: str | None
    service_role_key: str | None


def find_config_path(
    config_name: str | None,
    config_dir: Path = CONFIG_DIR,
    default_name: str = "prod",
    env_var: str | None = CONFIG_ENV_VAR,
) -> Path:
    """Find config file path, checking env var and defaults.

    Args:
        config_name: Name of config (without .yaml), a path to a YAML file,
            or None for default
        config_dir: Directory containing config files
        default_name: Default config name if config_name is None
        env_var: Environment variable to check for config name

    Returns:
        Path to the config file

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    if config_name is None:
        config_name = os.environ.get(env_var, default_name) if env_var else default_name

    if "/" in config_name or config_name.endswith((".yaml", ".yml")):
        config_path = Path(config_name)
    else:
        config_path = config_dir / f"{config_name}.yaml"

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    return config_path


def load_yaml(path: Path) -> dict:
    """Load YAML file and return dict."""
    with open(path) as f:
        return yaml.safe_load(f) or {}


def _parse_config(data: dict) -> AppConfig:
    """Parse config dictionary into AppConfig object."""
    migration_data = data.get("migration", {}) or {}
    bucket_data = data.get("bucket", {}) or {}
    defaults = BucketConfig()

    migration = MigrationConfig(
        data_path=migration_data.get("data_path", MigrationConfig.data_path),
        batch_size=int(migration_data.get("batch_size", MigrationConfig.batch_size)),
        batch_delay_seconds=float(
            migration_data.get("batch_delay_seconds", MigrationConfig.batch_delay_seconds)
        ),
        language=migration_data.get("language", MigrationConfig.language),
    )

    bucket = BucketConfig(
        bucket_id=bucket_data.get("bucket_id", defaults.bucket_id),
        public=bool(bucket_data.get("public", defaults.public)),
        file_size_limit=int(bucket_data.get("file_size_limit", defaults.file_size_limit)),
        allowed_mime_types=list(
            bucket_data.get("allowed_mime_types", defaults.allowed_mime_types)
        ),
    )

    return AppConfig(migration=migration, bucket=bucket)


def load_config(config_name: str | None = None) -> AppConfig:
    """Load configuration from YAML file.

    Args:
        config_name: Name of config file (without .yaml extension) or a path.
            If None, uses the NUTRITION_CONFIG env var or "prod".

    Returns:
        Loaded AppConfig object
    """
    return _parse_config(load_yaml(find_config_path(config_name)))


def load_settings(required: tuple[str, ...] = (DATABASE_URL,)) -> Settings:
    """Read connection settings from .env and the process environment.

    Raises:
        ConfigurationError: If any of the required variables is unset or empty.
    """
    load_dotenv()

    missing = [name for name in required if not os.environ.get(name)]
    if missing:
        raise ConfigurationError(
            f"Missing required environment variables: {', '.join(missing)}"
        )

    return Settings(
        database_url=os.environ.get(DATABASE_URL),
        supabase_url=os.environ.get(SUPABASE_URL),
        service_role_key=os.environ.get(SUPABASE_SERVICE_ROLE_KEY),
    )


class ConfigSingleton(Generic[T]):
    """Generic config singleton manager.

    Provides get/set/reset pattern for managing a global config instance.

    Example:
        >>> _manager = ConfigSingleton(load_config)
        >>> get_config = _manager.get
        >>> set_config = _manager.set
        >>> reset_config = _manager.reset
    """

    def __init__(self, loader: Callable[[], T] | None = None):
        self._config: T | None = None
        self._loader = loader

    def get(self) -> T:
        """Get the config, loading it lazily if needed."""
        if self._config is None:
            if self._loader is None:
                raise RuntimeError("No config loaded and no loader set")
            self._config = self._loader()
        return self._config

    def set(self, config: T) -> None:
        """Set the config directly."""
        self._config = config

    def reset(self) -> None:
        """Reset the config, forcing reload on next get()."""
        self._config = None


_manager: ConfigSingleton[AppConfig] = ConfigSingleton(load_config)
get_config = _manager.get
set_config = _manager.set
reset_config = _manager.reset
