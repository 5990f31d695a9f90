import logging
import re
from collections.abc import Iterable
from datetime import timedelta

from app.services.parsing.errors import EmptyWindowError
from app.services.parsing.types import ChatMessage

logger = logging.getLogger(__name__)

DATE_SEPARATOR_RE = re.compile(r"===\s*(\d{2}/\d{2}/\d{2})")
DEFAULT_WINDOW_DAYS = 7


def group_recent(messages: Iterable[ChatMessage], window_days: int = DEFAULT_WINDOW_DAYS) -> str:
    """Render the trailing window of a transcript as date-delimited blocks.

    The window ends at the newest message date, not today, and includes the day
    exactly ``window_days`` before it. Groups appear in the order their date is first
    seen among the kept messages; messages keep their relative order inside a group.
    """
    dated = [(message.day, message) for message in messages]
    if not dated:
        raise EmptyWindowError(window_days)

    most_recent = max(day for day, _ in dated)
    window_start = most_recent - timedelta(days=window_days)
    recent = [message for day, message in dated if day >= window_start]

    logger.info(
        "recent_window_selected",
        extra={
            "window_start": window_start.isoformat(),
            "window_end": most_recent.isoformat(),
            "message_count": len(dated),
            "retained_count": len(recent),
        },
    )
    if not recent:
        raise EmptyWindowError(window_days)

    groups: dict[str, list[str]] = {}
    for message in recent:
        groups.setdefault(message.date, []).append(message.render())

    return "".join(f"\n=== {date_key} ===\n" + "\n".join(lines) + "\n" for date_key, lines in groups.items())


def describe_date_range(grouped_text: str, fallback: str = "for the last 7 days") -> str:
    dates = DATE_SEPARATOR_RE.findall(grouped_text)
    if len(dates) >= 2:
        return f"from {dates[0]} to {dates[-1]}"
    return fallback
