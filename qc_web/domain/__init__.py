from .errors import CheckAlreadyRunning, ConfigurationError, QualityCheckError, RemoteCallFailure
from .models import (
    AccessibilityIssue,
    CheckOutcome,
    CheckReport,
    ContentEntry,
    TextSpanError,
    WidgetState,
)

__all__ = [
    "AccessibilityIssue",
    "CheckAlreadyRunning",
    "CheckOutcome",
    "CheckReport",
    "ConfigurationError",
    "ContentEntry",
    "QualityCheckError",
    "RemoteCallFailure",
    "TextSpanError",
    "WidgetState",
]
