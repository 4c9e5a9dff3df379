"""
Configuration management with schema validation.
Single source of truth for TeamCal settings.
"""

import os
from pathlib import Path
from typing import Any, List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from .exceptions import ConfigError

# Load environment variables
load_dotenv()

DATA_DIR = Path("data")
SETTINGS_FILE = Path(os.getenv("TEAMCAL_SETTINGS", str(DATA_DIR / "settings.yaml")))


class AppSettings(BaseModel):
    name: str = "TeamCal"
    version: str = "1.0.0"
    environment: str = "development"

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


class StoreSettings(BaseModel):
    path: str = "db.json"


class SessionSettings(BaseModel):
    cookie_name: str = "user4000"
    max_age_seconds: int = 24 * 60 * 60  # 24 hours
    samesite: str = "lax"


class SecuritySettings(BaseModel):
    bcrypt_rounds: int = Field(default=10, ge=4, le=31)


class SeedSettings(BaseModel):
    """Default administrator created when the document holds no users."""
    enabled: bool = True
    admin_username: str = "admin"
    admin_password: str = "admin"


class LoggingSettings(BaseModel):
    level: str = "INFO"
    format: str = "json"
    file_path: Optional[str] = None
    max_bytes: int = 10485760
    backup_count: int = 5


class CorsSettings(BaseModel):
    allow_origins: List[str] = Field(default_factory=lambda: ["http://localhost:5173"])


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    store: StoreSettings = Field(default_factory=StoreSettings)
    session: SessionSettings = Field(default_factory=SessionSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)
    seed: SeedSettings = Field(default_factory=SeedSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    cors: CorsSettings = Field(default_factory=CorsSettings)


class ConfigManager:
    """Singleton configuration manager"""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return
        self.settings_path = SETTINGS_FILE
        self._settings: Optional[Settings] = None
        self._initialized = True

    def _substitute_env_vars(self, value: Any) -> Any:
        """Recursively substitute ${VAR} and ${VAR:default} references"""
        if isinstance(value, str):
            if value.startswith("${") and value.endswith("}"):
                var_expr = value[2:-1]
                if ":" in var_expr:
                    var_name, default = var_expr.split(":", 1)
                    return os.getenv(var_name.strip(), default.strip())
                else:
                    return os.getenv(var_expr, value)
        elif isinstance(value, dict):
            return {k: self._substitute_env_vars(v) for k, v in value.items()}
        elif isinstance(value, list):
            return [self._substitute_env_vars(item) for item in value]
        return value

    def load_settings(self, path: Optional[Path] = None) -> Settings:
        """Load and validate settings.yaml; defaults when the file is absent"""
        settings_path = Path(path) if path else self.settings_path
        if not settings_path.exists():
            self._settings = Settings()
            return self._settings

        try:
            with open(settings_path, "r", encoding="utf-8") as f:
                raw_data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to read settings from {settings_path}: {str(e)}")

        processed_data = self._substitute_env_vars(raw_data)
        try:
            self._settings = Settings(**processed_data)
        except ValidationError as e:
            raise ConfigError(f"Invalid settings in {settings_path}: {str(e)}")
        return self._settings

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            return self.load_settings()
        return self._settings


# Global instance
config_manager = ConfigManager()
