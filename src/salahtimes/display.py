"""Local-time presentation of computed instants (pytz)."""

from datetime import datetime

from pytz import timezone

from salahtimes.i18n import t
from salahtimes.models import DayReport


def localize(dt: datetime, timezone_name: str) -> datetime:
    """Convert an aware UTC instant to wall-clock time in ``timezone_name``."""
    return dt.astimezone(timezone(timezone_name))


def format_clock(dt: datetime, format_24h: bool = False) -> str:
    """Format as 13:05 in 24h mode, 1:05 PM otherwise."""
    if format_24h:
        return dt.strftime("%H:%M")
    return dt.strftime("%I:%M %p").lstrip("0")


def format_bearing(degrees: float) -> str:
    return f"{degrees:.1f}°"


def timetable_rows(
    report: DayReport, lang: str = "en", format_24h: bool = False
) -> list[tuple[str, str]]:
    """(label, local time) pairs for the six prayers, then the Sunnah times if any."""
    tz_name = report.context.timezone_name
    rows = [
        (t(instant.prayer.value, lang), format_clock(localize(instant.time, tz_name), format_24h))
        for instant in report.schedule.prayers
    ]
    if report.sunnah is not None:
        rows.append(
            (
                t("middle_of_the_night", lang),
                format_clock(localize(report.sunnah.middle_of_the_night, tz_name), format_24h),
            )
        )
        rows.append(
            (
                t("last_third_of_the_night", lang),
                format_clock(localize(report.sunnah.last_third_of_the_night, tz_name), format_24h),
            )
        )
    return rows
