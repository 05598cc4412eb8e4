"""Display helpers for mission statistics."""

MINUTES_PER_HOUR = 60


def format_duration(minutes: float) -> str:
    """Render a duration in minutes as ``"1h 5m"`` or ``"42m"``.

    Partial minutes are truncated, not rounded.
    """
    whole_minutes = int(max(minutes, 0.0))
    hours, remainder = divmod(whole_minutes, MINUTES_PER_HOUR)
    if hours > 0:
        return f"{hours}h {remainder}m"
    return f"{remainder}m"


def format_percent(value: float) -> str:
    """Render a percentage with no decimals, e.g. ``"38%"``."""
    return f"{value:.0f}%"
