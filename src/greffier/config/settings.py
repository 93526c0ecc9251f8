"""
Greffier settings.

Resolution order, first match wins:
1. Process environment (optionally seeded from ``.env.<ENV>``)
2. ``config/<ENV>.yaml``
3. ``config/default.yaml``
4. Field defaults below
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[3]
CONFIG_DIR = PROJECT_ROOT / "config"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
JWT_ALGORITHMS = ("HS256", "HS384", "HS512", "RS256", "RS384", "RS512", "ES256")


class Settings(BaseSettings):
    """
    Typed service configuration.

    DATABASE_URL and AUTH_JWT_KEY have no default and must come from the
    environment; YAML files hold only non-secret values.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="allow",
    )

    # Service
    APP_NAME: str = "Greffier"
    APP_VERSION: str = "0.1.0"
    ENV: str = "development"
    DEBUG: bool = False

    # HTTP
    API_HOST: str = "0.0.0.0"
    API_PORT: int = Field(default=8000, ge=1024, le=65535)
    CORS_ORIGINS: List[str] = Field(default_factory=lambda: ["http://localhost:3000"])

    # User store
    DATABASE_URL: str = Field(..., description="SQLAlchemy async URL")
    DATABASE_ECHO: bool = False
    DATABASE_POOL_SIZE: int = Field(default=20, ge=1)
    DATABASE_TIMEOUT: float = Field(
        default=10.0, gt=0, description="Per-statement timeout (seconds)"
    )

    # Provider token verification
    AUTH_JWT_KEY: str = Field(..., description="HMAC secret or PEM public key")
    AUTH_JWT_ALGORITHM: str = "HS256"
    AUTH_JWT_ISSUER: Optional[str] = None
    AUTH_JWT_AUDIENCE: Optional[str] = None

    # Observability
    LOG_LEVEL: str = "INFO"
    METRICS_ENABLED: bool = True

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {LOG_LEVELS}")
        return level

    @field_validator("AUTH_JWT_ALGORITHM")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        algorithm = v.upper()
        if algorithm not in JWT_ALGORITHMS:
            raise ValueError(f"AUTH_JWT_ALGORITHM must be one of {JWT_ALGORITHMS}")
        return algorithm


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with open(path, "r") as f:
        return yaml.safe_load(f) or {}


def load_config(
    config_file: Optional[str] = None,
    env_file: Optional[str] = None,
    env: Optional[str] = None,
) -> Settings:
    """
    Build Settings from YAML layers and the environment.

    Args:
        config_file: YAML file in ``config/`` (default ``<env>.yaml``)
        env_file: dotenv file at the project root (default ``.env.<env>``)
        env: Environment name (default ``$ENV`` or "production")

    Returns:
        Settings instance

    Raises:
        pydantic.ValidationError: If a required value is missing or invalid
    """
    environment = env or os.getenv("ENV", "production")

    dotenv_path = PROJECT_ROOT / (env_file or f".env.{environment}")
    if dotenv_path.exists():
        load_dotenv(dotenv_path, override=True)

    values = _read_yaml(CONFIG_DIR / "default.yaml")
    values.update(_read_yaml(CONFIG_DIR / (config_file or f"{environment}.yaml")))

    # Environment variables outrank YAML; let BaseSettings read them
    yaml_values = {k: v for k, v in values.items() if k not in os.environ}

    return Settings(**yaml_values)


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Process-wide Settings, loaded on first use."""
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings


def override_settings(new_settings: Settings) -> None:
    """Replace the process-wide Settings (tests)."""
    global _settings
    _settings = new_settings


def reset_settings() -> None:
    """Forget the process-wide Settings so the next call reloads."""
    global _settings
    _settings = None
