"""
Configuration management for the Wellness Planner API.

Loads an optional JSON config file, applies environment overrides and
validates security-critical settings once at start-up.
"""

import json
import logging
import os
import secrets
import sys
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

# Known weak/default JWT secrets that must never sign session tokens
WEAK_JWT_SECRETS = {
    "your-secret-key-change-in-production",
    "secret",
    "key",
    "password",
    "jwt-secret",
    "secret-key",
    "change-me",
    "default",
    "test",
    "development",
    "dev",
    "demo",
    "example",
    "sample",
}

DEFAULT_DATABASE_URL = "sqlite:///./wellness_planner.db"


def _env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean flag from the environment."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _validate_jwt_secret_key(jwt_secret_key: str) -> None:
    """Validate JWT secret key security and reject weak/default keys.

    Args:
        jwt_secret_key: The JWT secret key to validate

    Raises:
        SystemExit: If the secret key is weak, default, or insecure
    """
    if not jwt_secret_key:
        logging.critical("JWT secret key is empty")
        sys.exit(1)

    if len(jwt_secret_key) < 32:
        logging.critical(
            f"JWT secret key is too short ({len(jwt_secret_key)} chars). "
            f"Minimum 32 characters required."
        )
        sys.exit(1)

    if jwt_secret_key.lower() in WEAK_JWT_SECRETS:
        logging.critical(
            "JWT secret key is a known weak/default secret. "
            "Set WELLNESS_JWT_SECRET_KEY to a secure random value."
        )
        sys.exit(1)

    unique_chars = len(set(jwt_secret_key))
    if unique_chars < 8:
        logging.critical(
            f"JWT secret key has insufficient entropy ({unique_chars} unique characters)."
        )
        sys.exit(1)

    logging.debug(
        f"JWT secret key validation passed ({len(jwt_secret_key)} chars, {unique_chars} unique)"
    )


@dataclass
class DatabaseConfig:
    """Database configuration."""

    url: str = DEFAULT_DATABASE_URL
    echo: bool = False
    log_queries: bool = False  # Slow query warnings and per-query timing


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    auto_reload: bool = False


@dataclass
class AppConfig:
    """Main application configuration."""

    app_name: str = "Wellness Planner"
    description: str = "Wellness areas, goals and reflections for a single user"

    # JWT session verification
    jwt_secret_key: str = ""  # Set at runtime, never defaulted
    jwt_algorithm: str = "HS256"
    jwt_access_token_expires_minutes: int = 60

    # Request handling
    max_request_bytes: int = 16 * 1024
    cors_origins: List[str] = field(
        default_factory=lambda: ["http://127.0.0.1:8000", "http://localhost:8000"]
    )

    # Logging
    log_level: str = "INFO"
    log_to_file: bool = False
    log_dir: str = "logs"

    is_development: bool = False


@dataclass
class WellnessConfig:
    """Complete configuration for the Wellness Planner."""

    app: AppConfig
    server: ServerConfig
    database: DatabaseConfig

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "app": asdict(self.app),
            "server": asdict(self.server),
            "database": asdict(self.database),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WellnessConfig":
        """Create from dictionary."""
        return cls(
            app=AppConfig(**data.get("app", {})),
            server=ServerConfig(**data.get("server", {})),
            database=DatabaseConfig(**data.get("database", {})),
        )


class ConfigManager:
    """Manages configuration loading, saving, and environment overrides."""

    def __init__(self):
        self.config_file: Optional[Path] = None
        self.config: Optional[WellnessConfig] = None

    def get_config_file_path(self) -> Path:
        """Get the path for the config file."""
        explicit = os.getenv("WELLNESS_CONFIG_FILE")
        if explicit:
            return Path(explicit)
        return Path(__file__).parent.parent.parent / "data" / "config.json"

    def apply_environment(self, config: WellnessConfig) -> WellnessConfig:
        """Apply environment variable overrides to a loaded configuration."""
        db_url = os.getenv("WELLNESS_DATABASE_URL") or os.getenv("DATABASE_URL")
        if db_url:
            config.database.url = db_url

        jwt_secret_key = os.getenv("WELLNESS_JWT_SECRET_KEY")
        if jwt_secret_key:
            config.app.jwt_secret_key = jwt_secret_key
            logging.info("Using JWT secret key from WELLNESS_JWT_SECRET_KEY")
        elif not config.app.jwt_secret_key:
            config.app.jwt_secret_key = secrets.token_urlsafe(64)
            logging.warning(
                "Generated a random JWT secret key; tokens issued elsewhere will not verify"
            )

        if os.getenv("WELLNESS_DEBUG") is not None:
            config.server.debug = _env_flag("WELLNESS_DEBUG")
            config.app.log_level = "DEBUG" if config.server.debug else config.app.log_level
        if os.getenv("WELLNESS_DEV_MODE") is not None:
            config.app.is_development = _env_flag("WELLNESS_DEV_MODE")
            config.server.auto_reload = config.app.is_development
        if os.getenv("WELLNESS_LOG_TO_FILE") is not None:
            config.app.log_to_file = _env_flag("WELLNESS_LOG_TO_FILE")
        if os.getenv("WELLNESS_LOG_DIR"):
            config.app.log_dir = os.getenv("WELLNESS_LOG_DIR")

        return config

    def load_config(self) -> WellnessConfig:
        """Load configuration from file or create default."""
        self.config_file = self.get_config_file_path()

        config = None
        if self.config_file.exists():
            try:
                with open(self.config_file, "r", encoding="utf-8") as f:
                    config = WellnessConfig.from_dict(json.load(f))
                logging.info(f"Loaded configuration from {self.config_file}")
            except (OSError, ValueError, TypeError) as e:
                logging.warning(f"Failed to load config from {self.config_file}: {e}")

        if config is None:
            config = WellnessConfig(
                app=AppConfig(), server=ServerConfig(), database=DatabaseConfig()
            )

        config = self.apply_environment(config)
        _validate_jwt_secret_key(config.app.jwt_secret_key)

        self.config = config
        return config

    def get(self) -> WellnessConfig:
        """Return the cached configuration, loading it on first use."""
        if self.config is None:
            self.load_config()
        return self.config

    def reset(self) -> None:
        """Drop the cached configuration so the next access reloads it."""
        self.config = None

    def save_config(self, config: Optional[WellnessConfig] = None) -> bool:
        """Save configuration to file."""
        config = config or self.config
        if config is None:
            logging.error("No configuration to save")
            return False

        path = self.config_file or self.get_config_file_path()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config.to_dict(), f, indent=2, ensure_ascii=False)
            logging.info(f"Saved configuration to {path}")
            return True
        except OSError as e:
            logging.error(f"Failed to save config to {path}: {e}")
            return False

    def validate_config(self) -> List[str]:
        """Validate configuration and return a list of warnings."""
        config = self.get()
        issues = []

        db_url = config.database.url
        if db_url.startswith("sqlite:///") and ":memory:" not in db_url:
            db_dir = Path(db_url.replace("sqlite:///", "")).parent
            if db_dir.exists() and not os.access(db_dir, os.W_OK):
                issues.append(f"Database directory is not writable: {db_dir}")

        return issues


# Global config manager instance
config_manager = ConfigManager()


def get_config() -> WellnessConfig:
    """Get the current configuration."""
    return config_manager.get()
