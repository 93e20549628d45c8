"""Solar position and transit solving with truncated series from Meeus, *Astronomical Algorithms*.

All angles are in degrees. Times returned by the transit solver are hours
from 0h UTC of the day whose Julian day seeded the ``SolarWindow``.
"""

import math

from salahtimes.errors import UnsolvableGeometryError
from salahtimes.models import Coordinates, SolarCoordinates, SolarWindow

J2000 = 2451545.0


def unwind_angle(angle: float) -> float:
    """Normalize an angle into [0, 360)."""
    return angle - 360.0 * math.floor(angle / 360.0)


def quadrant_shift_angle(angle: float) -> float:
    """Shift an angle into [-180, 180]."""
    if -180.0 <= angle <= 180.0:
        return angle
    return angle - 360.0 * math.floor(angle / 360.0 + 0.5)


def julian_day(year: int, month: int, day: int, hours: float = 0.0) -> float:
    """Julian day for a proleptic Gregorian date (Meeus ch. 7)."""
    y = year if month > 2 else year - 1
    m = month if month > 2 else month + 12
    d = day + hours / 24.0
    a = math.trunc(y / 100)
    b = math.trunc(2 - a + math.trunc(a / 4))
    i0 = math.trunc(365.25 * (y + 4716))
    i1 = math.trunc(30.6001 * (m + 1))
    return i0 + i1 + d + b - 1524.5


def julian_century(jd: float) -> float:
    return (jd - J2000) / 36525.0


def mean_solar_longitude(t: float) -> float:
    return unwind_angle(280.4664567 + 36000.76983 * t + 0.0003032 * t**2)


def mean_lunar_longitude(t: float) -> float:
    return unwind_angle(218.3165 + 481267.8813 * t)


def ascending_lunar_node_longitude(t: float) -> float:
    return unwind_angle(125.04452 - 1934.136261 * t + 0.0020708 * t**2 + t**3 / 450000.0)


def mean_solar_anomaly(t: float) -> float:
    return unwind_angle(357.52911 + 35999.05029 * t - 0.0001537 * t**2)


def solar_equation_of_the_center(t: float, mean_anomaly: float) -> float:
    m = math.radians(mean_anomaly)
    term1 = (1.914602 - 0.004817 * t - 0.000014 * t**2) * math.sin(m)
    term2 = (0.019993 - 0.000101 * t) * math.sin(2 * m)
    term3 = 0.000289 * math.sin(3 * m)
    return term1 + term2 + term3


def apparent_solar_longitude(t: float, mean_longitude: float) -> float:
    """True longitude corrected for nutation and aberration."""
    longitude = mean_longitude + solar_equation_of_the_center(t, mean_solar_anomaly(t))
    omega = 125.04 - 1934.136 * t
    return unwind_angle(longitude - 0.00569 - 0.00478 * math.sin(math.radians(omega)))


def mean_obliquity_of_the_ecliptic(t: float) -> float:
    return 23.439291 - 0.013004167 * t - 0.0000001639 * t**2 + 0.0000005036 * t**3


def apparent_obliquity_of_the_ecliptic(t: float, mean_obliquity: float) -> float:
    omega = 125.04 - 1934.136 * t
    return mean_obliquity + 0.00256 * math.cos(math.radians(omega))


def mean_sidereal_time(t: float) -> float:
    """Mean sidereal time at Greenwich for the instant ``t`` (Meeus eq. 12.4)."""
    jd = t * 36525.0 + J2000
    theta = (
        280.46061837
        + 360.98564736629 * (jd - J2000)
        + 0.000387933 * t**2
        - t**3 / 38710000.0
    )
    return unwind_angle(theta)


def nutation_in_longitude(
    solar_longitude: float, lunar_longitude: float, ascending_node: float
) -> float:
    """Δψ in degrees, low-precision series (Meeus ch. 22)."""
    term1 = (-17.2 / 3600.0) * math.sin(math.radians(ascending_node))
    term2 = (1.32 / 3600.0) * math.sin(2 * math.radians(solar_longitude))
    term3 = (0.23 / 3600.0) * math.sin(2 * math.radians(lunar_longitude))
    term4 = (0.21 / 3600.0) * math.sin(2 * math.radians(ascending_node))
    return term1 - term2 - term3 + term4


def nutation_in_obliquity(
    solar_longitude: float, lunar_longitude: float, ascending_node: float
) -> float:
    """Δε in degrees, low-precision series (Meeus ch. 22)."""
    term1 = (9.2 / 3600.0) * math.cos(math.radians(ascending_node))
    term2 = (0.57 / 3600.0) * math.cos(2 * math.radians(solar_longitude))
    term3 = (0.10 / 3600.0) * math.cos(2 * math.radians(lunar_longitude))
    term4 = (0.09 / 3600.0) * math.cos(2 * math.radians(ascending_node))
    return term1 + term2 + term3 - term4


def altitude_of_celestial_body(latitude: float, declination: float, hour_angle: float) -> float:
    phi = math.radians(latitude)
    delta = math.radians(declination)
    h = math.radians(hour_angle)
    return math.degrees(
        math.asin(math.sin(phi) * math.sin(delta) + math.cos(phi) * math.cos(delta) * math.cos(h))
    )


def solar_coordinates(jd: float) -> SolarCoordinates:
    """Apparent declination, right ascension, and sidereal time for a Julian day.

    Args:
        jd: Julian day, fractional allowed.

    Returns:
        SolarCoordinates in degrees. Total over real input; never raises.
    """
    t = julian_century(jd)
    l0 = mean_solar_longitude(t)
    lp = mean_lunar_longitude(t)
    omega = ascending_lunar_node_longitude(t)
    lam = math.radians(apparent_solar_longitude(t, l0))

    theta0 = mean_sidereal_time(t)
    d_psi = nutation_in_longitude(l0, lp, omega)
    d_epsilon = nutation_in_obliquity(l0, lp, omega)

    epsilon0 = mean_obliquity_of_the_ecliptic(t)
    epsilon_apparent = math.radians(apparent_obliquity_of_the_ecliptic(t, epsilon0))

    declination = math.degrees(math.asin(math.sin(epsilon_apparent) * math.sin(lam)))
    right_ascension = unwind_angle(
        math.degrees(math.atan2(math.cos(epsilon_apparent) * math.sin(lam), math.cos(lam)))
    )
    apparent_sidereal_time = theta0 + d_psi * math.cos(math.radians(epsilon0 + d_epsilon))

    return SolarCoordinates(
        declination=declination,
        right_ascension=right_ascension,
        apparent_sidereal_time=apparent_sidereal_time,
    )


def solar_window(jd: float) -> SolarWindow:
    """Solar coordinates for ``jd - 1``, ``jd``, and ``jd + 1``."""
    return SolarWindow(
        previous=solar_coordinates(jd - 1),
        current=solar_coordinates(jd),
        next=solar_coordinates(jd + 1),
    )


def interpolate(y2: float, y1: float, y3: float, n: float) -> float:
    """Interpolate a value at fraction ``n`` of a day (Meeus eq. 3.3).

    ``y1``, ``y2``, ``y3`` are yesterday's, today's, and tomorrow's values.
    """
    a = y2 - y1
    b = y3 - y2
    c = b - a
    return y2 + (n / 2.0) * (a + b + n * c)


def interpolate_angles(y2: float, y1: float, y3: float, n: float) -> float:
    """Like ``interpolate``, with day-to-day differences unwound across 360°."""
    a = unwind_angle(y2 - y1)
    b = unwind_angle(y3 - y2)
    c = b - a
    return y2 + (n / 2.0) * (a + b + n * c)


def approximate_transit(longitude: float, sidereal_time: float, right_ascension: float) -> float:
    """Fraction of the day in [0, 1) at which the sun crosses the meridian."""
    lw = -longitude
    m0 = (right_ascension + lw - sidereal_time) / 360.0
    return m0 - math.floor(m0)


def corrected_transit(m0: float, longitude: float, window: SolarWindow) -> float:
    """Refine the approximate transit once. Returns hours from 0h UTC."""
    lw = -longitude
    theta = unwind_angle(window.current.apparent_sidereal_time + 360.985647 * m0)
    a = unwind_angle(
        interpolate_angles(
            window.current.right_ascension,
            window.previous.right_ascension,
            window.next.right_ascension,
            m0,
        )
    )
    h = quadrant_shift_angle(theta - lw - a)
    dm = h / -360.0
    return (m0 + dm) * 24.0


def corrected_hour_angle(
    m0: float,
    angle: float,
    coordinates: Coordinates,
    after_transit: bool,
    window: SolarWindow,
) -> float:
    """Time at which the sun's altitude equals ``angle``, refined once.

    Args:
        m0: Approximate transit as a fraction of the day.
        angle: Target altitude in degrees (negative below the horizon).
        coordinates: Observer position.
        after_transit: True for the evening side, False for the morning side.
        window: Solar coordinates around the day.

    Returns:
        Hours from 0h UTC. May be negative or exceed 24 when the event
        falls on the neighbouring UTC day.

    Raises:
        UnsolvableGeometryError: If the sun never reaches ``angle``.
    """
    lw = -coordinates.longitude
    phi = math.radians(coordinates.latitude)
    d2 = window.current.declination

    term1 = math.sin(math.radians(angle)) - math.sin(phi) * math.sin(math.radians(d2))
    term2 = math.cos(phi) * math.cos(math.radians(d2))
    if term2 == 0.0:
        raise UnsolvableGeometryError(f"No hour angle at latitude {coordinates.latitude}")
    cos_h0 = term1 / term2
    if not -1.0 <= cos_h0 <= 1.0:
        raise UnsolvableGeometryError(
            f"Sun never reaches {angle:.4f}° at latitude {coordinates.latitude} "
            f"(declination {d2:.4f}°)"
        )
    h0 = math.degrees(math.acos(cos_h0))

    m = m0 + h0 / 360.0 if after_transit else m0 - h0 / 360.0
    theta = unwind_angle(window.current.apparent_sidereal_time + 360.985647 * m)
    a = unwind_angle(
        interpolate_angles(
            window.current.right_ascension,
            window.previous.right_ascension,
            window.next.right_ascension,
            m,
        )
    )
    delta = interpolate(
        window.current.declination,
        window.previous.declination,
        window.next.declination,
        m,
    )
    h = theta - lw - a
    altitude = altitude_of_celestial_body(coordinates.latitude, delta, h)
    term3 = altitude - angle
    term4 = 360.0 * math.cos(math.radians(delta)) * math.cos(phi) * math.sin(math.radians(h))
    if term4 == 0.0:
        raise UnsolvableGeometryError(f"Degenerate hour angle for {angle:.4f}°")
    dm = term3 / term4
    return (m + dm) * 24.0
