"""Solar events for one UTC calendar day at one observer position."""

import math
from datetime import date, datetime, timedelta

from pytz import utc

from salahtimes.astronomy import (
    approximate_transit,
    corrected_hour_angle,
    corrected_transit,
    julian_day,
    solar_window,
)
from salahtimes.errors import InvalidDateError, UnsolvableGeometryError
from salahtimes.models import Coordinates, SolarCoordinates, SolarWindow

# Sunrise/sunset altitude: 34' refraction + 16' solar semi-diameter
SUNRISE_ALTITUDE = -50.0 / 60.0


def hours_to_datetime(day: date, hours: float) -> datetime:
    """Convert hours from 0h UTC of ``day`` into an aware UTC datetime.

    Whole hours, minutes, and seconds are each floored; sub-second precision
    is dropped. Values outside [0, 24) land on the neighbouring day.

    Raises:
        UnsolvableGeometryError: If ``hours`` is not a finite number.
        InvalidDateError: If the instant falls outside years 1..9999.
    """
    if not math.isfinite(hours):
        raise UnsolvableGeometryError(f"Non-finite solar time: {hours}")
    whole_hours = math.floor(hours)
    minutes = math.floor((hours - whole_hours) * 60)
    seconds = math.floor((hours - (whole_hours + minutes / 60.0)) * 3600)
    midnight = datetime(day.year, day.month, day.day, tzinfo=utc)
    try:
        return midnight + timedelta(hours=whole_hours, minutes=minutes, seconds=seconds)
    except OverflowError as e:
        raise InvalidDateError(f"Solar time {hours:.4f}h on {day} is out of range") from e


class SolarDay:
    """Transit, sunrise, and sunset, plus arbitrary-altitude queries.

    Construction raises ``UnsolvableGeometryError`` when the sun does not
    rise or set on this day (polar day or night).
    """

    def __init__(self, day: date, coordinates: Coordinates):
        self.day = day
        self.coordinates = coordinates

        self._window: SolarWindow = solar_window(julian_day(day.year, day.month, day.day))
        current = self._window.current
        self._m0 = approximate_transit(
            coordinates.longitude, current.apparent_sidereal_time, current.right_ascension
        )

        self.transit = hours_to_datetime(
            day, corrected_transit(self._m0, coordinates.longitude, self._window)
        )
        self.sunrise = self.time_for_solar_angle(SUNRISE_ALTITUDE, after_transit=False)
        self.sunset = self.time_for_solar_angle(SUNRISE_ALTITUDE, after_transit=True)

    @property
    def solar(self) -> SolarCoordinates:
        return self._window.current

    def time_for_solar_angle(self, angle: float, after_transit: bool) -> datetime:
        """UTC instant at which the sun reaches ``angle`` degrees of altitude."""
        hours = corrected_hour_angle(
            self._m0, angle, self.coordinates, after_transit, self._window
        )
        return hours_to_datetime(self.day, hours)

    def afternoon_shadow(self, shadow_length: float) -> datetime:
        """UTC instant at which a shadow is its noon length plus ``shadow_length``."""
        tangent = abs(self.coordinates.latitude - self.solar.declination)
        inverse = shadow_length + math.tan(math.radians(tangent))
        angle = math.degrees(math.atan(1.0 / inverse))
        return self.time_for_solar_angle(angle, after_transit=True)
