"""
Domain service interfaces.
"""

from vigie.domain.services.i_proxy import IProxy

__all__ = ["IProxy"]
