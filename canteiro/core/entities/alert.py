"""Alert status value objects for expiry badges."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class AlertSeverity(str, Enum):
    """Urgency of a date relative to today."""

    EXPIRED = "expired"
    WARNING = "warning"
    OK = "ok"
    NEUTRAL = "neutral"

    @property
    def rank(self) -> int:
        """Sort key: most urgent first."""
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    AlertSeverity.EXPIRED: 0,
    AlertSeverity.WARNING: 1,
    AlertSeverity.OK: 2,
    AlertSeverity.NEUTRAL: 3,
}


class AlertStatus(BaseModel):
    """
    Computed alert badge for an expiry date.

    Never persisted; recomputed from the date on every read.
    """

    model_config = ConfigDict(frozen=True)

    severity: AlertSeverity
    label: str
    color: str
    bg: str
    border: str

    @property
    def is_alerting(self) -> bool:
        return self.severity in (AlertSeverity.EXPIRED, AlertSeverity.WARNING)
