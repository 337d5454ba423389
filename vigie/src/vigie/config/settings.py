"""
Vigie configuration with hybrid YAML + ENV support.

Priority: Environment variables > .env file > YAML config > Pydantic defaults

The sidecar toggle keeps its deployment-wide name, ISTIO_PROXY_ENABLED.
Every other setting is read from VIGIE_* variables.
"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from vigie.domain.value_objects import RetryPolicy

TRUE_VALUES = frozenset({"1", "t", "T", "TRUE", "true", "True"})
FALSE_VALUES = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def parse_bool(value: Any, default: bool = False) -> bool:
    """
    Parse a boolean toggle.

    Accepts exactly the 1/t/true and 0/f/false spellings listed above;
    surrounding whitespace is not stripped. Anything else, including None,
    yields the default instead of an error.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        if value in TRUE_VALUES:
            return True
        if value in FALSE_VALUES:
            return False
    return default


class VigieSettings(BaseSettings):
    """
    Vigie configuration schema.

    Loads configuration from:
    1. Environment variables (highest priority)
    2. .env file
    3. YAML configuration file (passed as init values)
    4. Pydantic defaults (lowest priority)
    """

    model_config = SettingsConfigDict(
        env_prefix="VIGIE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Feature toggle
    istio_proxy_enabled: bool = Field(
        default=False,
        validation_alias=AliasChoices("ISTIO_PROXY_ENABLED", "istio_proxy_enabled"),
        description="Use the real sidecar client instead of the null client",
    )

    # Retry policy
    timeout: float = Field(
        default=1.0, gt=0, description="Per-request deadline in seconds"
    )
    retry_delay: float = Field(
        default=1.0, ge=0, description="Fixed pause between attempts in seconds"
    )
    max_retries: int = Field(default=60, ge=0, description="Attempt ceiling")

    # Logging
    log_level: str = Field(default="info")
    log_dir: Optional[str] = Field(default=None)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        """Environment wins over YAML values passed at construction."""
        return env_settings, dotenv_settings, init_settings, file_secret_settings

    @field_validator("istio_proxy_enabled", mode="before")
    @classmethod
    def validate_toggle(cls, v: Any) -> bool:
        """Unparsable toggles fall back to disabled."""
        return parse_bool(v, default=False)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = ["debug", "info", "warning", "error", "critical"]
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"Invalid log_level. Must be one of: {allowed}")
        return v_lower

    def retry_policy(self) -> RetryPolicy:
        """Build the retry policy for sidecar calls."""
        return RetryPolicy(
            timeout=self.timeout,
            retry_delay=self.retry_delay,
            max_retries=self.max_retries,
        )


def _config_dir() -> Path:
    """Component config directory (vigie/config)."""
    return Path(__file__).resolve().parent.parent.parent.parent / "config"


def load_config(
    config_file: Optional[str] = None,
    env_file: Optional[str] = None,
) -> VigieSettings:
    """
    Load configuration from YAML, .env and environment variables.

    Args:
        config_file: YAML file (absolute, or relative to vigie/config).
            Falls back to $VIGIE_CONFIG, then default.yaml if present.
        env_file: Optional .env file to load before reading the environment

    Returns:
        VigieSettings instance

    Raises:
        FileNotFoundError: If an explicitly requested file does not exist
        ValidationError: If a value is invalid
    """
    if env_file is not None:
        if not Path(env_file).exists():
            raise FileNotFoundError(f"Env file not found: {env_file}")
        load_dotenv(env_file, override=False)

    explicit = config_file or os.getenv("VIGIE_CONFIG")
    if explicit:
        config_path = Path(explicit)
        if not config_path.is_absolute() and not config_path.exists():
            config_path = _config_dir() / explicit
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {explicit}")
    else:
        config_path = _config_dir() / "default.yaml"

    merged_config = {}
    if config_path.exists():
        with open(config_path, "r") as f:
            loaded = yaml.safe_load(f)
            if loaded:
                merged_config.update(loaded)

    return VigieSettings(**merged_config)


# Global settings singleton (lazy initialization)
_settings: Optional[VigieSettings] = None


def get_settings() -> VigieSettings:
    """
    Get or initialize global settings singleton.

    Returns:
        VigieSettings instance
    """
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings


def override_settings(new_settings: VigieSettings) -> None:
    """Override global settings (for testing)."""
    global _settings
    _settings = new_settings


def reset_settings() -> None:
    """Reset settings to force re-initialization (for testing)."""
    global _settings
    _settings = None
