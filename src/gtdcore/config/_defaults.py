"""Default configuration values."""

from typing import Any, Final

DEFAULT_CONFIG: Final[dict[str, Any]] = {  # pyright: ignore[reportExplicitAny]
    "logging": {
        "level": "warning",
        "format": "json",
        "file": "",
    },
    "review": {
        "interval_days": 7,
        "missing_review_days": 14,
        "inbox_backlog_threshold": 10,
        "window_days": 7,
        "overdue_warning_threshold": 5,
    },
}
