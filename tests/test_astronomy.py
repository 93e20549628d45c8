"""Tests for the Meeus solar position and transit solver.

Reference values are the worked examples from Meeus, *Astronomical Algorithms*.
"""

import math

import pytest

from salahtimes.astronomy import (
    apparent_obliquity_of_the_ecliptic,
    apparent_solar_longitude,
    approximate_transit,
    corrected_hour_angle,
    corrected_transit,
    interpolate,
    interpolate_angles,
    julian_century,
    julian_day,
    mean_obliquity_of_the_ecliptic,
    mean_sidereal_time,
    mean_solar_longitude,
    quadrant_shift_angle,
    solar_coordinates,
    solar_window,
    unwind_angle,
)
from salahtimes.errors import UnsolvableGeometryError
from salahtimes.models import Coordinates, SolarCoordinates, SolarWindow


class TestAngles:
    def test_unwind_angle(self):
        assert unwind_angle(-45.0) == pytest.approx(315.0)
        assert unwind_angle(361.0) == pytest.approx(1.0)
        assert unwind_angle(360.0) == pytest.approx(0.0)
        assert unwind_angle(259.0) == pytest.approx(259.0)
        assert unwind_angle(2592.0) == pytest.approx(72.0)

    def test_quadrant_shift_angle(self):
        assert quadrant_shift_angle(360.0) == pytest.approx(0.0)
        assert quadrant_shift_angle(361.0) == pytest.approx(1.0)
        assert quadrant_shift_angle(1.0) == pytest.approx(1.0)
        assert quadrant_shift_angle(-1.0) == pytest.approx(-1.0)
        assert quadrant_shift_angle(-181.0) == pytest.approx(179.0)
        assert quadrant_shift_angle(180.0) == pytest.approx(180.0)
        assert quadrant_shift_angle(359.0) == pytest.approx(-1.0)
        assert quadrant_shift_angle(-359.0) == pytest.approx(1.0)
        assert quadrant_shift_angle(1261.0) == pytest.approx(-179.0)


class TestJulianDay:
    def test_calendar_days(self):
        assert julian_day(2010, 1, 2) == 2455198.5
        assert julian_day(2011, 2, 4) == 2455596.5
        assert julian_day(2012, 3, 6) == 2455992.5
        assert julian_day(2013, 4, 8) == 2456390.5
        assert julian_day(2014, 5, 10) == 2456787.5

    def test_j2000_epoch(self):
        assert julian_day(2000, 1, 1, 12.0) == 2451545.0
        assert julian_century(2451545.0) == 0.0

    def test_fractional_day(self):
        """Meeus example 7.a: 1957 October 4.81."""
        assert julian_day(1957, 10, 4, 0.81 * 24) == pytest.approx(2436116.31, abs=1e-6)

    def test_matches_datetime_ordinal(self):
        """Whole-day Julian days follow the proleptic Gregorian ordinal."""
        from datetime import date

        for d in (date(1900, 3, 1), date(2024, 2, 29), date(2100, 12, 31)):
            assert julian_day(d.year, d.month, d.day) == d.toordinal() + 1721424.5


class TestSolarCoordinates:
    def test_meeus_example_25a(self):
        """Apparent solar position on 1992 October 13 at 0h TD."""
        jd = julian_day(1992, 10, 13)
        assert jd == 2448908.5
        t = julian_century(jd)
        assert t == pytest.approx(-0.072183436, abs=1e-8)

        l0 = mean_solar_longitude(t)
        assert l0 == pytest.approx(201.80720, abs=1e-5)
        epsilon0 = mean_obliquity_of_the_ecliptic(t)
        assert epsilon0 == pytest.approx(23.44023, abs=1e-5)
        assert apparent_obliquity_of_the_ecliptic(t, epsilon0) == pytest.approx(23.43999, abs=1e-5)
        assert apparent_solar_longitude(t, l0) == pytest.approx(199.90895, abs=2e-5)

        solar = solar_coordinates(jd)
        assert solar.declination == pytest.approx(-7.78507, abs=1e-5)
        assert solar.right_ascension == pytest.approx(198.38083, abs=1e-5)

    def test_meeus_example_12a(self):
        """Mean and apparent sidereal time on 1987 April 10 at 0h UT."""
        jd = julian_day(1987, 4, 10)
        assert mean_sidereal_time(julian_century(jd)) == pytest.approx(197.693195, abs=1e-6)
        assert solar_coordinates(jd).apparent_sidereal_time == pytest.approx(
            197.6922295833, abs=1e-4
        )

    def test_sidereal_time_matches_skyfield(self):
        """Apparent sidereal time agrees with skyfield's GAST."""
        skyfield_api = pytest.importorskip("skyfield.api")
        ts = skyfield_api.load.timescale(builtin=True)
        for year, month, day in ((1987, 4, 10), (2015, 7, 12), (2021, 11, 1)):
            expected = ts.utc(year, month, day).gast * 15.0
            actual = solar_coordinates(julian_day(year, month, day)).apparent_sidereal_time
            assert unwind_angle(actual - expected + 180.0) - 180.0 == pytest.approx(0.0, abs=0.01)

    def test_right_ascension_range(self):
        for offset in range(0, 366, 7):
            solar = solar_coordinates(2451545.0 + offset)
            assert 0.0 <= solar.right_ascension < 360.0
            assert abs(solar.declination) < 23.5

    def test_window_is_centred(self):
        jd = julian_day(2020, 6, 15)
        window = solar_window(jd)
        assert window.current == solar_coordinates(jd)
        assert window.previous == solar_coordinates(jd - 1)
        assert window.next == solar_coordinates(jd + 1)


class TestInterpolation:
    def test_interpolate(self):
        """Meeus example 3.a."""
        assert interpolate(0.877366, 0.884226, 0.870531, 4.35 / 24) == pytest.approx(
            0.876125, abs=1e-6
        )
        assert interpolate(1.0, 0.0, 2.0, 0.0) == 1.0

    def test_interpolate_angles_across_zero(self):
        assert unwind_angle(interpolate_angles(1.0, 359.0, 3.0, -1.0)) == pytest.approx(359.0)
        assert interpolate_angles(1.0, 359.0, 3.0, 1.0) == pytest.approx(3.0)


def _meeus_15a_window() -> SolarWindow:
    """Venus at Boston, Meeus example 15.a."""
    theta = 177.74208
    return SolarWindow(
        previous=SolarCoordinates(
            declination=18.04761, right_ascension=40.68021, apparent_sidereal_time=theta
        ),
        current=SolarCoordinates(
            declination=18.44092, right_ascension=41.73129, apparent_sidereal_time=theta
        ),
        next=SolarCoordinates(
            declination=18.82742, right_ascension=42.78204, apparent_sidereal_time=theta
        ),
    )


class TestTransit:
    coordinates = Coordinates(latitude=42.3333, longitude=-71.0833)

    def test_meeus_example_15a(self):
        window = _meeus_15a_window()
        m0 = approximate_transit(
            self.coordinates.longitude,
            window.current.apparent_sidereal_time,
            window.current.right_ascension,
        )
        assert m0 == pytest.approx(0.81965, abs=1e-5)

        transit = corrected_transit(m0, self.coordinates.longitude, window) / 24
        assert transit == pytest.approx(0.81980, abs=1e-5)

        rise = corrected_hour_angle(m0, -0.5667, self.coordinates, False, window) / 24
        assert rise == pytest.approx(0.51766, abs=1e-5)

    def test_approximate_transit_range(self):
        for longitude in (-180.0, -71.0, 0.0, 73.0, 180.0):
            m0 = approximate_transit(longitude, 100.0, 250.0)
            assert 0.0 <= m0 < 1.0

    def test_unreachable_altitude_raises(self):
        window = _meeus_15a_window()
        polar = Coordinates(latitude=85.0, longitude=0.0)
        with pytest.raises(UnsolvableGeometryError):
            corrected_hour_angle(0.5, -18.0, polar, True, window)

    def test_pole_has_no_hour_angle(self):
        window = _meeus_15a_window()
        with pytest.raises(UnsolvableGeometryError):
            corrected_hour_angle(0.5, -0.8333, Coordinates(latitude=90.0, longitude=0.0), True, window)

    def test_evening_follows_morning(self):
        window = _meeus_15a_window()
        m0 = approximate_transit(self.coordinates.longitude, 177.74208, 41.73129)
        rise = corrected_hour_angle(m0, -0.5667, self.coordinates, False, window)
        set_ = corrected_hour_angle(m0, -0.5667, self.coordinates, True, window)
        assert rise < m0 * 24 < set_
        assert not math.isnan(set_)
