"""Configuration management for the DemoBlaze suite."""

from pathlib import Path
from typing import Literal

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file at import time
load_dotenv()


class TimeoutConfig(BaseModel):
    """Bounded waits per operation class, in milliseconds."""

    probe: int = 2_000
    standard: int = 10_000
    dialog: int = 5_000
    purchase: int = 10_000
    navigation: int = 30_000
    dialog_poll_interval: int = 100


class CartConfig(BaseModel):
    """Settling behaviour of the asynchronously populated cart table."""

    poll_interval_ms: int = 500
    stable_polls: int = 2
    remove_all_max_iterations: int = 20


class ArtifactsConfig(BaseModel):
    """Diagnostics written for failing scenarios."""

    dir: Path = Path("test-results/failures")
    screenshot_on_failure: bool = True
    html_on_failure: bool = True
    full_page: bool = True


class LoggingConfig(BaseModel):
    """structlog output settings."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = True


class Config(BaseSettings):
    """Main configuration for the DemoBlaze page objects and suite."""

    model_config = SettingsConfigDict(
        env_prefix="DEMOBLAZE_",
        env_nested_delimiter="__",
    )

    # Core settings
    base_url: str = "https://www.demoblaze.com/"
    scenario_timeout_s: float = 120.0
    test_command: str = "pytest"

    # Sub-configurations
    timeouts: TimeoutConfig = Field(default_factory=TimeoutConfig)
    cart: CartConfig = Field(default_factory=CartConfig)
    artifacts: ArtifactsConfig = Field(default_factory=ArtifactsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # Environment wins over values passed in from the YAML file
        return env_settings, init_settings, dotenv_settings, file_secret_settings


CONFIG_FILE_NAMES = ["demoblaze_pom.yaml", "demoblaze_pom.yml", ".demoblaze_pom.yaml"]


def load_config(config_path: Path | None = None) -> Config:
    """Load configuration from YAML file and environment variables."""
    config_data: dict = {}

    # Try to find config file
    if config_path is None:
        for name in CONFIG_FILE_NAMES:
            if Path(name).exists():
                config_path = Path(name)
                break

    # Load from YAML if exists
    if config_path and config_path.exists():
        with open(config_path) as f:
            raw = yaml.safe_load(f)
            if raw and "demoblaze_pom" in raw:
                config_data = raw["demoblaze_pom"]
            elif raw:
                config_data = raw

    # Environment variables override YAML
    return Config(**config_data)
