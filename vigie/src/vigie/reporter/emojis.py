"""
Sidecar lifecycle emoji definitions.

Usage:
    >>> from vigie.reporter.emojis import ProxyEmoji
    >>> print(f"{ProxyEmoji.LIVE} Sidecar is live")
    ✅ Sidecar is live
"""

from typing import Dict, List


class ComponentEmoji:
    """
    Base class for emoji collections.

    Class attributes define emojis as constants; no instances needed.
    """

    @classmethod
    def get_all(cls) -> Dict[str, str]:
        """Get all emoji definitions from this category."""
        return {
            name: value
            for klass in reversed(cls.__mro__)
            for name, value in vars(klass).items()
            if not name.startswith("_") and name.isupper() and isinstance(value, str)
        }

    @classmethod
    def list_names(cls) -> List[str]:
        """Get list of all emoji names in this category."""
        return [
            name for name in dir(cls) if not name.startswith("_") and name.isupper()
        ]


class ProxyEmoji(ComponentEmoji):
    """Sidecar readiness and shutdown events."""

    # ============================================================
    # Readiness
    # ============================================================
    WAITING = "⏳"  # Waiting for sidecar readiness
    LIVE = "✅"  # Sidecar reported LIVE
    NOT_LIVE = "🟡"  # Sidecar answered with another state
    MALFORMED = "🧩"  # Payload could not be decoded

    # ============================================================
    # Shutdown
    # ============================================================
    QUIT = "🛑"  # Shutdown requested
    ACKNOWLEDGED = "👋"  # Shutdown acknowledged
    REJECTED = "⛔"  # Non-200 answer to shutdown

    # ============================================================
    # Transport & Retry
    # ============================================================
    DISCONNECTED = "⚠️"  # Transport failure
    RETRY = "🔄"  # Retrying after delay
    EXHAUSTED = "❌"  # Retry budget exhausted
    DISABLED = "💤"  # Sidecar integration disabled
