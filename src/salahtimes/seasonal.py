"""Moonsighting Committee seasonal twilight.

Twilight length is interpolated linearly between four seasonal values
(a: winter solstice, b: equinox, c: mid-season, d: summer solstice),
each proportional to the absolute latitude.
"""

import calendar
import math
from datetime import datetime, timedelta

from salahtimes.models import Shafaq


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


def days_since_solstice(day_of_year: int, year: int, latitude: float) -> int:
    """Days since the most recent winter solstice of the observer's hemisphere."""
    leap = calendar.isleap(year)
    days_in_year = 366 if leap else 365
    if latitude >= 0:
        days = day_of_year + 10
        if days >= days_in_year:
            days -= days_in_year
    else:
        days = day_of_year - (173 if leap else 172)
        if days < 0:
            days += days_in_year
    return days


def _seasonal_minutes(a: float, b: float, c: float, d: float, dyy: int) -> float:
    if dyy < 91:
        return a + (b - a) / 91.0 * dyy
    if dyy < 137:
        return b + (c - b) / 46.0 * (dyy - 91)
    if dyy < 183:
        return c + (d - c) / 46.0 * (dyy - 137)
    if dyy < 229:
        return d + (c - d) / 46.0 * (dyy - 183)
    if dyy < 275:
        return c + (b - c) / 46.0 * (dyy - 229)
    return b + (a - b) / 91.0 * (dyy - 275)


def morning_twilight_minutes(latitude: float, day_of_year: int, year: int) -> float:
    lat = abs(latitude)
    a = 75 + (28.65 / 55.0) * lat
    b = 75 + (19.44 / 55.0) * lat
    c = 75 + (32.74 / 55.0) * lat
    d = 75 + (48.10 / 55.0) * lat
    return _seasonal_minutes(a, b, c, d, days_since_solstice(day_of_year, year, latitude))


def evening_twilight_minutes(
    latitude: float, day_of_year: int, year: int, shafaq: Shafaq = Shafaq.GENERAL
) -> float:
    lat = abs(latitude)
    if shafaq is Shafaq.AHMER:
        a = 62 + (17.40 / 55.0) * lat
        b = 62 - (7.16 / 55.0) * lat
        c = 62 + (5.12 / 55.0) * lat
        d = 62 + (19.44 / 55.0) * lat
    elif shafaq is Shafaq.ABYAD:
        a = 75 + (25.60 / 55.0) * lat
        b = 75 + (7.16 / 55.0) * lat
        c = 75 + (36.84 / 55.0) * lat
        d = 75 + (81.84 / 55.0) * lat
    else:
        a = 75 + (25.60 / 55.0) * lat
        b = 75 + (2.05 / 55.0) * lat
        c = 75 - (9.21 / 55.0) * lat
        d = 75 + (6.14 / 55.0) * lat
    return _seasonal_minutes(a, b, c, d, days_since_solstice(day_of_year, year, latitude))


def season_adjusted_morning_twilight(
    latitude: float, day_of_year: int, year: int, sunrise: datetime
) -> datetime:
    """Fajr bound: sunrise minus the seasonal morning twilight."""
    minutes = morning_twilight_minutes(latitude, day_of_year, year)
    return sunrise + timedelta(seconds=_round_half_away(minutes * -60.0))


def season_adjusted_evening_twilight(
    latitude: float,
    day_of_year: int,
    year: int,
    sunset: datetime,
    shafaq: Shafaq = Shafaq.GENERAL,
) -> datetime:
    """Isha bound: sunset plus the seasonal evening twilight for ``shafaq``."""
    minutes = evening_twilight_minutes(latitude, day_of_year, year, shafaq)
    return sunset + timedelta(seconds=_round_half_away(minutes * 60.0))
