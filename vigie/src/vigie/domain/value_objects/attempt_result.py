"""
Per-attempt outcomes of sidecar calls.

A result only lives for one iteration of the retry loop. It is handed to
the retry observer for reporting and is never returned to callers.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

LIVE_STATE = "LIVE"


class ProbeOutcome(str, Enum):
    """Outcome of one readiness probe."""

    TRANSPORT_ERROR = "transport_error"
    BODY_READ_ERROR = "body_read_error"
    MALFORMED_PAYLOAD = "malformed_payload"
    NOT_LIVE = "not_live"
    LIVE = "live"


class SignalOutcome(str, Enum):
    """Outcome of one shutdown request."""

    TRANSPORT_ERROR = "transport_error"
    REJECTED = "rejected"
    ACKNOWLEDGED = "acknowledged"


@dataclass(frozen=True)
class ProbeResult:
    """
    Outcome of a single GET against the sidecar server_info endpoint.

    Attributes:
        outcome: What happened on this attempt
        state: Reported sidecar state (NOT_LIVE / LIVE only)
        detail: Transport or decode error text, for logs only
    """

    outcome: ProbeOutcome
    state: Optional[str] = None
    detail: Optional[str] = None

    @classmethod
    def transport_error(cls, detail: str) -> "ProbeResult":
        return cls(ProbeOutcome.TRANSPORT_ERROR, detail=detail)

    @classmethod
    def body_read_error(cls, detail: str) -> "ProbeResult":
        return cls(ProbeOutcome.BODY_READ_ERROR, detail=detail)

    @classmethod
    def malformed(cls, detail: str) -> "ProbeResult":
        return cls(ProbeOutcome.MALFORMED_PAYLOAD, detail=detail)

    @classmethod
    def from_state(cls, state: str) -> "ProbeResult":
        """Classify a decoded state string; only "LIVE" counts as ready."""
        if state == LIVE_STATE:
            return cls(ProbeOutcome.LIVE, state=state)
        return cls(ProbeOutcome.NOT_LIVE, state=state)

    @property
    def succeeded(self) -> bool:
        return self.outcome is ProbeOutcome.LIVE

    @property
    def event(self) -> str:
        """Log event name for this outcome."""
        return {
            ProbeOutcome.TRANSPORT_ERROR: "wait_client_get",
            ProbeOutcome.BODY_READ_ERROR: "wait_read_body",
            ProbeOutcome.MALFORMED_PAYLOAD: "wait_json_decode",
            ProbeOutcome.NOT_LIVE: "wait_server_response_state",
            ProbeOutcome.LIVE: "wait_server_live",
        }[self.outcome]

    def describe(self) -> str:
        """Key=value suffix used in log lines."""
        if self.outcome in (ProbeOutcome.NOT_LIVE, ProbeOutcome.LIVE):
            return f"state={self.state}"
        return f"error={self.detail}"


@dataclass(frozen=True)
class SignalResult:
    """
    Outcome of a single POST against the sidecar quitquitquit endpoint.

    Attributes:
        outcome: What happened on this attempt
        status_code: HTTP status (REJECTED / ACKNOWLEDGED only)
        detail: Transport error text, for logs only
    """

    outcome: SignalOutcome
    status_code: Optional[int] = None
    detail: Optional[str] = None

    @classmethod
    def transport_error(cls, detail: str) -> "SignalResult":
        return cls(SignalOutcome.TRANSPORT_ERROR, detail=detail)

    @classmethod
    def from_status(cls, status_code: int) -> "SignalResult":
        """Classify an HTTP status; only 200 acknowledges the shutdown."""
        if status_code == 200:
            return cls(SignalOutcome.ACKNOWLEDGED, status_code=status_code)
        return cls(SignalOutcome.REJECTED, status_code=status_code)

    @property
    def succeeded(self) -> bool:
        return self.outcome is SignalOutcome.ACKNOWLEDGED

    @property
    def event(self) -> str:
        return {
            SignalOutcome.TRANSPORT_ERROR: "close_client_post",
            SignalOutcome.REJECTED: "close_response_status",
            SignalOutcome.ACKNOWLEDGED: "close_acknowledged",
        }[self.outcome]

    def describe(self) -> str:
        if self.outcome is SignalOutcome.TRANSPORT_ERROR:
            return f"error={self.detail}"
        return f"status={self.status_code}"
