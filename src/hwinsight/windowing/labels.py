"""
Adaptive label formatting for bucket boundaries.

The longer the displayed span, the coarser the label: short spans show only
the time of day, medium spans add the date, long spans add the year and drop
the time. Seconds are never shown.
"""

from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from typing import Optional

# Span thresholds in minutes.
YEAR_FROM_MINUTES = 1440
DATE_FROM_MINUTES = 180
TIME_BELOW_MINUTES = 10080


@dataclass(frozen=True)
class LabelProfile:
    """Which date/time parts a label contains."""

    show_year: bool
    show_month_day: bool
    show_time: bool


def label_profile(period_minutes: float) -> LabelProfile:
    """
    Choose the label parts for a span of ``period_minutes``.

    The three rules are independent: a two week span gets year and date but
    no time, a 12 hour span gets date and time, one hour gets time only.
    """
    return LabelProfile(
        show_year=period_minutes >= YEAR_FROM_MINUTES,
        show_month_day=period_minutes >= DATE_FROM_MINUTES,
        show_time=period_minutes < TIME_BELOW_MINUTES,
    )


class LabelFormatter:
    """
    Formats epoch-millisecond bucket boundaries for one display span.

    Labels use a fixed numeric layout (``2024/1/05 13:07``) so that output
    depends only on the span and the timezone.
    """

    def __init__(self, period_minutes: float, tz: Optional[tzinfo] = None):
        """
        Args:
            period_minutes: Length of the displayed span in minutes
            tz: Timezone for labels; None uses the host's local zone
        """
        self.period_minutes = period_minutes
        self.tz = tz
        self.profile = label_profile(period_minutes)

    def _to_datetime(self, ms: int) -> datetime:
        utc = datetime.fromtimestamp(ms / 1000, tz=timezone.utc)
        return utc.astimezone(self.tz) if self.tz is not None else utc.astimezone()

    def format(self, ms: int) -> str:
        dt = self._to_datetime(ms)
        profile = self.profile

        parts = []
        if profile.show_month_day:
            month_day = f"{dt.month}/{dt.day:02d}"
            parts.append(f"{dt.year}/{month_day}" if profile.show_year else month_day)
        elif profile.show_year:
            parts.append(f"{dt.year}")
        if profile.show_time:
            parts.append(f"{dt.hour:02d}:{dt.minute:02d}")
        return " ".join(parts)

    __call__ = format
