"""
Configuration loader for the dossier retention batches.
Loads configuration from YAML files and environment variables.
"""

from typing import Dict, Any, Optional
from pathlib import Path
import yaml
import os
from pydantic import BaseModel, Field, field_validator
import logging

from .core.ports import MAX_HOLD_BATCH_SIZE
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class SupabaseConfig(BaseModel):
    """Supabase (PostgREST) backend configuration."""

    url: str = ""
    key: str = ""

    # PostgREST caps a single response at 1000 rows by default
    page_size: int = 1000

    employees_table: str = "employees"
    documents_table: str = "documents"

    class Config:
        extra = "allow"


class BatchConfig(BaseModel):
    """Write batching for the retention and legal hold batches."""

    hold_batch_size: int = MAX_HOLD_BATCH_SIZE
    retention_batch_size: int = 200

    @field_validator("hold_batch_size")
    @classmethod
    def _check_hold_batch_size(cls, value: int) -> int:
        if not 1 <= value <= MAX_HOLD_BATCH_SIZE:
            raise ValueError(f"hold_batch_size must be between 1 and {MAX_HOLD_BATCH_SIZE}")
        return value

    @field_validator("retention_batch_size")
    @classmethod
    def _check_retention_batch_size(cls, value: int) -> int:
        if value < 1:
            raise ValueError("retention_batch_size must be positive")
        return value


class DossierConfig(BaseModel):
    """Main dossier configuration."""

    # Environment
    environment: str = "development"

    # Backend: "supabase" | "local"
    database_type: str = "supabase"
    supabase: SupabaseConfig = Field(default_factory=SupabaseConfig)

    # YAML seed file for the local backend
    local_data_path: str = ""

    batch: BatchConfig = Field(default_factory=BatchConfig)

    # Logging
    log_level: str = "INFO"

    @field_validator("database_type")
    @classmethod
    def _check_database_type(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in ("supabase", "local"):
            raise ValueError(f"Unknown database type: {value}. Use 'supabase' or 'local'")
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.strip().upper()
        if value not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value}. Use one of {', '.join(LOG_LEVELS)}")
        return value

    class Config:
        extra = "allow"


class ConfigLoader:
    """Load and manage dossier configuration."""

    def __init__(self, config_dir: str = "config"):
        """
        Initialize config loader.

        Args:
            config_dir: Directory containing config files
        """
        self.config_dir = Path(config_dir)
        self.config: Optional[DossierConfig] = None
        self.load()

    def load(self) -> DossierConfig:
        """Load configuration from YAML and environment variables."""

        # Determine which config file to load
        env = os.getenv("DOSSIER_ENV", "development")
        config_file = self.config_dir / f"{env}.yaml"

        # Load default config first
        merged = self._load_yaml(self.config_dir / "default.yaml")

        # Override with environment-specific config
        if config_file.exists():
            _deep_update(merged, self._load_yaml(config_file))
        else:
            logger.debug(f"Config file not found: {config_file}, using defaults")

        # Override with environment variables
        _deep_update(merged, self._load_from_env())
        merged.setdefault("environment", env)

        try:
            self.config = DossierConfig(**merged)
        except ValueError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

        logger.info(f"Configuration loaded (environment: {self.config.environment}, "
                    f"database: {self.config.database_type})")

        return self.config

    def _load_yaml(self, path: Path) -> Dict[str, Any]:
        """Load YAML config file."""
        if not path.exists():
            return {}

        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f)
                return data or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Failed to load YAML config {path}: {e}") from e

    def _load_from_env(self) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        config: Dict[str, Any] = {}

        # Supabase credentials
        supabase = {}
        if supabase_url := os.getenv("SUPABASE_URL"):
            supabase["url"] = supabase_url
        if supabase_key := (os.getenv("SUPABASE_KEY") or os.getenv("SUPABASE_SERVICE_ROLE_KEY")):
            supabase["key"] = supabase_key
        if supabase:
            config["supabase"] = supabase

        # Batch sizes
        batch = {}
        if hold_size := os.getenv("DOSSIER_HOLD_BATCH_SIZE"):
            batch["hold_batch_size"] = _env_int("DOSSIER_HOLD_BATCH_SIZE", hold_size)
        if retention_size := os.getenv("DOSSIER_RETENTION_BATCH_SIZE"):
            batch["retention_batch_size"] = _env_int("DOSSIER_RETENTION_BATCH_SIZE", retention_size)
        if batch:
            config["batch"] = batch

        if database_type := os.getenv("DOSSIER_DATABASE_TYPE"):
            config["database_type"] = database_type
        if local_data := os.getenv("DOSSIER_LOCAL_DATA"):
            config["local_data_path"] = local_data
        if log_level := os.getenv("DOSSIER_LOG_LEVEL"):
            config["log_level"] = log_level.upper()

        return config

    def get(self) -> DossierConfig:
        """Get current configuration."""
        if not self.config:
            self.load()
        return self.config


def _deep_update(target: Dict[str, Any], updates: Dict[str, Any]) -> Dict[str, Any]:
    """Merge nested sections instead of replacing them wholesale."""
    for key, value in updates.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            _deep_update(target[key], value)
        else:
            target[key] = value
    return target


def _env_int(name: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")


# Global config instance
_global_config_loader: Optional[ConfigLoader] = None


def get_config() -> DossierConfig:
    """Get the global dossier configuration."""
    global _global_config_loader
    if _global_config_loader is None:
        _global_config_loader = ConfigLoader()
    return _global_config_loader.get()


def initialize_config(config_dir: str = "config") -> DossierConfig:
    """Initialize the global configuration loader."""
    global _global_config_loader
    _global_config_loader = ConfigLoader(config_dir)
    return _global_config_loader.get()
