from datetime import datetime, timedelta, timezone

from quiz_portal.enums import QuizPhase


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def phase(now: datetime, start_time: datetime, end_time: datetime) -> QuizPhase:
    """
    Place ``now`` in a quiz window.

    The window is inclusive on both ends:
    (-inf, start) -> UPCOMING, [start, end] -> ACTIVE, (end, +inf) -> EXPIRED.
    Naive and aware instants can be mixed; naive ones are read as UTC.
    """
    now = as_utc(now)
    if now < as_utc(start_time):
        return QuizPhase.UPCOMING
    if now > as_utc(end_time):
        return QuizPhase.EXPIRED
    return QuizPhase.ACTIVE


def time_until_start(now: datetime, start_time: datetime) -> timedelta:
    return max(as_utc(start_time) - as_utc(now), timedelta(0))


def format_countdown(remaining: timedelta) -> str:
    """
    Render a countdown like ``2d 3h 4m 5s``.
    Leading zero units are dropped, seconds are always shown.
    """
    if remaining <= timedelta(0):
        return "Starting now..."

    total_seconds = int(remaining.total_seconds())
    days, rest = divmod(total_seconds, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)

    parts = []
    if days > 0:
        parts.append(f"{days}d")
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    parts.append(f"{seconds}s")
    return " ".join(parts)
