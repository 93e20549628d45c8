"""Prayer assembly: turns solar events into six prayer instants.

Fajr and isha are computed as a candidate that is then bounded by a safe
value; every prayer then receives its manual offset, its method offset,
and minute rounding, in that order.
"""

import logging
from datetime import datetime, timedelta

from pytz import utc

from salahtimes.errors import (
    IncompleteScheduleError,
    InvalidCoordinatesError,
    InvalidDateError,
    UnsolvableGeometryError,
)
from salahtimes.models import (
    CalculationParameters,
    CalendarDay,
    Coordinates,
    HighLatitudeRule,
    IshaInterval,
    Prayer,
    PrayerInstant,
    PrayerSchedule,
    Rounding,
)
from salahtimes.seasonal import (
    season_adjusted_evening_twilight,
    season_adjusted_morning_twilight,
)
from salahtimes.solar import SolarDay

logger = logging.getLogger(__name__)

MOONSIGHTING_SEVENTH_LATITUDE = 55.0
SEVENTH_OF_THE_NIGHT_LATITUDE = 48.0


def recommended_high_latitude_rule(coordinates: Coordinates) -> HighLatitudeRule:
    if abs(coordinates.latitude) > SEVENTH_OF_THE_NIGHT_LATITUDE:
        return HighLatitudeRule.SEVENTH_OF_THE_NIGHT
    return HighLatitudeRule.MIDDLE_OF_THE_NIGHT


def night_portions(
    parameters: CalculationParameters, coordinates: Coordinates
) -> tuple[float, float]:
    """Fractions of the night used for the (fajr, isha) safe bounds."""
    rule = parameters.high_latitude_rule or recommended_high_latitude_rule(coordinates)
    if rule is HighLatitudeRule.MIDDLE_OF_THE_NIGHT:
        return 1 / 2, 1 / 2
    if rule is HighLatitudeRule.SEVENTH_OF_THE_NIGHT:
        return 1 / 7, 1 / 7
    return parameters.fajr_angle / 60, parameters.isha_angle / 60


def round_to_minute(value: datetime, rounding: Rounding) -> datetime:
    """Round to a whole minute. Sub-second precision is ignored."""
    if rounding is Rounding.NONE:
        return value
    floored = value.replace(second=0, microsecond=0)
    if rounding is Rounding.NEAREST:
        carry = value.second >= 30
    else:
        carry = value.second > 0
    return floored + timedelta(minutes=1) if carry else floored


def _angle_candidate(solar: SolarDay, angle: float, after_transit: bool) -> datetime | None:
    try:
        return solar.time_for_solar_angle(angle, after_transit)
    except UnsolvableGeometryError:
        return None


def _assemble(
    coordinates: Coordinates,
    day: CalendarDay,
    parameters: CalculationParameters,
) -> list[PrayerInstant]:
    today = day.to_date()
    tomorrow = day.next_day().to_date()
    day_of_year = day.day_of_year

    try:
        solar = SolarDay(today, coordinates)
        tomorrow_sunrise = SolarDay(tomorrow, coordinates).sunrise
    except UnsolvableGeometryError:
        logger.debug("No sunrise/sunset at %s on %s", coordinates, today)
        raise

    sunrise = solar.sunrise
    sunset = solar.sunset
    dhuhr = solar.transit
    try:
        asr = solar.afternoon_shadow(parameters.madhab.shadow_length)
    except UnsolvableGeometryError as e:
        raise IncompleteScheduleError(f"No asr at {coordinates} on {today}") from e

    night = tomorrow_sunrise - sunset
    fajr_portion, isha_portion = night_portions(parameters, coordinates)
    seventh_override = (
        parameters.moonsighting_committee
        and abs(coordinates.latitude) >= MOONSIGHTING_SEVENTH_LATITUDE
    )

    fajr = _angle_candidate(solar, -parameters.fajr_angle, after_transit=False)
    if seventh_override:
        fajr = sunrise - night / 7
    if parameters.moonsighting_committee:
        safe_fajr = season_adjusted_morning_twilight(
            coordinates.latitude, day_of_year, today.year, sunrise
        )
    else:
        safe_fajr = sunrise - night * fajr_portion
    if fajr is None or fajr < safe_fajr:
        logger.debug("Fajr bounded by safe value %s (candidate %s)", safe_fajr, fajr)
        fajr = safe_fajr

    maghrib = sunset
    if isinstance(parameters.isha_rule, IshaInterval):
        isha = maghrib + timedelta(minutes=parameters.isha_interval)
    else:
        isha = _angle_candidate(solar, -parameters.isha_angle, after_transit=True)
        if seventh_override:
            isha = sunset + night / 7
        if parameters.moonsighting_committee:
            safe_isha = season_adjusted_evening_twilight(
                coordinates.latitude, day_of_year, today.year, sunset, parameters.shafaq
            )
        else:
            safe_isha = sunset + night * isha_portion
        if isha is None or isha > safe_isha:
            logger.debug("Isha bounded by safe value %s (candidate %s)", safe_isha, isha)
            isha = safe_isha

    if parameters.maghrib_angle is not None:
        candidate = _angle_candidate(solar, -parameters.maghrib_angle, after_transit=True)
        # Only between sunset and isha
        if candidate is not None and sunset < candidate < isha:
            maghrib = candidate

    raw = {
        Prayer.FAJR: fajr,
        Prayer.SUNRISE: sunrise,
        Prayer.DHUHR: dhuhr,
        Prayer.ASR: asr,
        Prayer.MAGHRIB: maghrib,
        Prayer.ISHA: isha,
    }
    prayers = []
    for prayer, value in raw.items():
        minutes = (
            parameters.adjustments.for_prayer(prayer)
            + parameters.method_adjustments.for_prayer(prayer)
        )
        adjusted = round_to_minute(value + timedelta(minutes=minutes), parameters.rounding)
        prayers.append(PrayerInstant(prayer=prayer, time=adjusted))
    return prayers


def compute_prayer_times(
    coordinates: Coordinates,
    day: CalendarDay,
    parameters: CalculationParameters,
) -> PrayerSchedule:
    """Compute the six prayer instants for one day.

    Args:
        coordinates: Observer position.
        day: UTC calendar day.
        parameters: Convention, usually from ``methods.parameters_for``.

    Returns:
        PrayerSchedule with UTC instants in canonical, strictly increasing order.

    Raises:
        InvalidDateError: Day is unset or impossible, or an instant falls
            outside years 1..9999.
        InvalidCoordinatesError: Latitude/longitude out of range.
        UnsolvableGeometryError: No sunrise, sunset, or transit on this day.
        IncompleteScheduleError: A prayer could not be determined, or the
            finalized prayers are out of order.
    """
    if not coordinates.is_valid():
        raise InvalidCoordinatesError(f"Coordinates out of range: {coordinates}")
    try:
        prayers = _assemble(coordinates, day, parameters)
    except OverflowError as e:
        raise InvalidDateError(f"Prayer times for {day} fall outside years 1..9999") from e

    # Near the polar circles a single refinement can misplace asr or isha
    for earlier, later in zip(prayers, prayers[1:]):
        if later.time <= earlier.time:
            raise IncompleteScheduleError(
                f"{later.prayer.value} ({later.time}) does not follow "
                f"{earlier.prayer.value} ({earlier.time}) at {coordinates} on {day}"
            )

    return PrayerSchedule(
        prayers=tuple(prayers),
        coordinates=coordinates,
        parameters=parameters,
        day=day,
    )


def adjacent_schedule(schedule: PrayerSchedule, days: int) -> PrayerSchedule:
    """Recompute the schedule ``days`` away (+1 tomorrow, -1 yesterday) from retained inputs."""
    step = CalendarDay.next_day if days > 0 else CalendarDay.previous_day
    day = schedule.day
    for _ in range(abs(days)):
        day = step(day)
    return compute_prayer_times(schedule.coordinates, day, schedule.parameters)


def current_prayer(
    schedule: PrayerSchedule, at: datetime, include_previous_day: bool = False
) -> PrayerInstant | None:
    """The last prayer whose instant is at or before ``at``.

    Before today's fajr this returns None, unless ``include_previous_day``
    is set, in which case the previous day's isha is returned.
    """
    current = None
    for instant in schedule.prayers:
        if instant.time <= at:
            current = instant
    if current is None and include_previous_day:
        return adjacent_schedule(schedule, -1)[Prayer.ISHA]
    return current


def next_prayer(schedule: PrayerSchedule, at: datetime) -> PrayerInstant:
    """The first prayer strictly after ``at``; tomorrow's fajr once today is over."""
    for instant in schedule.prayers:
        if instant.time > at:
            return instant
    return adjacent_schedule(schedule, 1)[Prayer.FAJR]


def now_utc() -> datetime:
    """Current instant, for callers at the application edge."""
    return datetime.now(utc)
