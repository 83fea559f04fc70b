"""Display attributes for prediction results and service status.

Everything here is a pure lookup: no I/O and no shared mutable state, so the
same input always yields the same output.
"""

from .models import HealthBadge, HealthStatus, IssueClassification, SubmitButton

ICON_ALERT = "alert-circle"
ICON_CHECK = "check-circle"
ICON_ACTIVITY = "activity"

# token -> (color class, icon, description)
_ISSUE_TYPES: dict[str, tuple[str, str, str]] = {
    "device_failure": (
        "text-red-400 bg-red-500/20 border-red-500/30",
        ICON_ALERT,
        "Critical hardware or device malfunction detected",
    ),
    "packet_loss": (
        "text-yellow-400 bg-yellow-500/20 border-yellow-500/30",
        ICON_ALERT,
        "Network packets are being dropped during transmission",
    ),
    "latency_spike": (
        "text-orange-400 bg-orange-500/20 border-orange-500/30",
        ICON_ALERT,
        "Unusual delay in network response times detected",
    ),
    "none": (
        "text-green-400 bg-green-500/20 border-green-500/30",
        ICON_CHECK,
        "Network is operating within normal parameters",
    ),
}

_UNKNOWN_ISSUE = (
    "text-blue-400 bg-blue-500/20 border-blue-500/30",
    ICON_ACTIVITY,
    "Unknown prediction result",
)

KNOWN_ISSUE_TYPES = frozenset(_ISSUE_TYPES)

_HEALTH_BADGES: dict[HealthStatus, HealthBadge] = {
    HealthStatus.HEALTHY: HealthBadge("Online", "text-green-400 bg-green-500/20 border-green-500/30", True),
    HealthStatus.UNHEALTHY: HealthBadge("Offline", "text-red-400 bg-red-500/20 border-red-500/30", False),
    HealthStatus.UNKNOWN: HealthBadge("Checking...", "text-gray-400 bg-gray-500/20 border-gray-500/30", False),
}


def issue_label(issue_type: str) -> str:
    return issue_type.replace("_", " ").upper()


def classify(issue_type: str) -> IssueClassification:
    """Map a predicted issue type to its display attributes.

    Matching is case-insensitive; unrecognized tokens get the neutral
    "unknown prediction result" entry.
    """
    color_class, icon, description = _ISSUE_TYPES.get(issue_type.lower(), _UNKNOWN_ISSUE)
    return IssueClassification(
        label=issue_label(issue_type),
        color_class=color_class,
        icon=icon,
        description=description,
    )


def health_badge(status: HealthStatus) -> HealthBadge:
    return _HEALTH_BADGES[HealthStatus(status)]


def submit_button(can_submit: bool, pending: bool) -> SubmitButton:
    if pending:
        return SubmitButton("Analyzing Network Data...", True)
    return SubmitButton("Predict Network Status", not can_submit)
