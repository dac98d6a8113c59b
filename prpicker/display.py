"""Display fields for the chooser columns: relative age and coloured status/title."""

from datetime import UTC, datetime

ANSI_RESET = "\x1b[0m"
ANSI_DIM = "\x1b[2m"
ANSI_RED = "\x1b[31m"
ANSI_GREEN = "\x1b[32m"
ANSI_BLUE = "\x1b[34m"

STATUS_COLORS = {
    "OPEN": ANSI_GREEN,
    "CLOSED": ANSI_RED,
    "DRAFT": ANSI_DIM,
}


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'} ago"


def relative_age(updated_at: datetime, now: datetime | None = None) -> str:
    """Human phrase for how long ago updated_at was.

    Buckets: minutes (< 1 hour), hours (< 1 day), days (< 1 week), weeks.
    Each bucket floors; there is no month or year bucket.
    """
    now = now or datetime.now(UTC)
    seconds = max(0, int((now - updated_at).total_seconds()))
    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24
    if days < 1:
        if hours < 1:
            return _plural(minutes, "minute")
        return _plural(hours, "hour")
    if days < 7:
        return _plural(days, "day")
    return _plural(days // 7, "week")


def colorize(text: str, code: str, color: bool = True) -> str:
    """Wrap text in an ANSI escape; plain text when color is off."""
    if not color or not code:
        return text
    return f"{code}{text}{ANSI_RESET}"


def colored_status(label: str, color: bool = True) -> str:
    return colorize(label, STATUS_COLORS.get(label, ""), color)


def colored_title(title: str, color: bool = True) -> str:
    return colorize(title, ANSI_BLUE, color)
