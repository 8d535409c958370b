"""
Configuration management for ESGenius

Loads settings from:
1. config/config.yaml
2. Environment variables (.env, ESGENIUS_ prefix)
3. Default values
"""

from pathlib import Path
from typing import Literal, Optional

import yaml
from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Load environment variables
load_dotenv()


class Config(BaseSettings):
    """ESGenius configuration settings"""

    model_config = SettingsConfigDict(
        env_prefix="ESGENIUS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Project paths
    project_root: Path = Path(__file__).parent.parent

    # Monte Carlo settings
    monte_carlo_iterations: int = Field(
        default=1000,
        gt=0,
        description="Default number of Monte Carlo trials",
    )
    monte_carlo_seed: Optional[int] = Field(
        default=None,
        description="Seed for reproducible simulations (None = fresh entropy)",
    )

    # Sensitivity settings
    sensitivity_steps: int = Field(default=10, gt=0)

    # Export settings
    export_format: Literal["json", "csv"] = "json"

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: Optional[Path] = Field(default=None, description="Log file path (optional)")

    @classmethod
    def from_yaml(cls, yaml_path: str | Path = "config/config.yaml") -> "Config":
        """Load configuration from YAML file, falling back to env/defaults"""
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            return cls()

        with open(yaml_path) as f:
            config_data = yaml.safe_load(f) or {}

        return cls(**config_data)


# Global configuration instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create global configuration instance"""
    global _config
    if _config is None:
        _config = Config.from_yaml()
    return _config


def reload_config(yaml_path: Optional[str | Path] = None) -> Config:
    """Reload configuration from file"""
    global _config
    _config = Config.from_yaml(yaml_path) if yaml_path else Config.from_yaml()
    return _config
