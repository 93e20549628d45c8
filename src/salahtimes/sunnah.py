"""Night reference times derived from two consecutive days' prayers."""

from salahtimes.models import Prayer, PrayerSchedule, Rounding, SunnahTimes
from salahtimes.prayers import adjacent_schedule, round_to_minute


def compute_sunnah_times(schedule: PrayerSchedule) -> SunnahTimes:
    """Middle and last third of the night between maghrib and tomorrow's fajr.

    Raises:
        PrayerTimesError: If tomorrow's schedule cannot be computed.
    """
    tomorrow = adjacent_schedule(schedule, 1)
    maghrib = schedule.time_for(Prayer.MAGHRIB)
    night = tomorrow.time_for(Prayer.FAJR) - maghrib
    return SunnahTimes(
        middle_of_the_night=round_to_minute(maghrib + night / 2, Rounding.NEAREST),
        last_third_of_the_night=round_to_minute(maghrib + night * 2 / 3, Rounding.NEAREST),
    )
