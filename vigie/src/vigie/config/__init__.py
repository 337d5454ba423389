"""
Vigie configuration.
"""

from vigie.config.settings import (
    VigieSettings,
    get_settings,
    load_config,
    override_settings,
    parse_bool,
    reset_settings,
)

__all__ = [
    "VigieSettings",
    "get_settings",
    "load_config",
    "override_settings",
    "parse_bool",
    "reset_settings",
]
