"""
Dependency wiring.
"""

from vigie.di.container import (
    create_proxy,
    create_proxy_from_settings,
    create_reporter,
)

__all__ = ["create_proxy", "create_proxy_from_settings", "create_reporter"]
