"""Application edge: geocoding, timezone lookup, and the full day report."""

import logging
from datetime import datetime

import httpx
from timezonefinder import TimezoneFinder

from salahtimes.config import AppConfig
from salahtimes.errors import PrayerTimesError
from salahtimes.models import (
    CalendarDay,
    Coordinates,
    DayReport,
    ObserverContext,
    QueryInput,
)
from salahtimes.prayers import compute_prayer_times
from salahtimes.qibla import qibla_direction
from salahtimes.sunnah import compute_sunnah_times

logger = logging.getLogger(__name__)

_tf = TimezoneFinder()


class GeocodingError(Exception):
    """Geocoder call failure."""


def _geocode_nominatim(
    address: str, user_agent: str, timeout: float
) -> tuple[float, float, str] | None:
    """Nominatim (OpenStreetMap) geocoder. Returns (lat, lng, display_name) or None."""
    params = {"q": address, "format": "json", "limit": 1}
    headers = {"User-Agent": user_agent}
    resp = httpx.get(
        "https://nominatim.openstreetmap.org/search",
        params=params,
        headers=headers,
        timeout=timeout,
    )
    resp.raise_for_status()
    results = resp.json()
    if not results:
        return None
    r = results[0]
    return float(r["lat"]), float(r["lon"]), r["display_name"]


def parse_day(when: str) -> CalendarDay:
    """Parse "YYYY-MM-DD" into a CalendarDay. Validity is checked at computation time."""
    dt = datetime.strptime(when.strip(), "%Y-%m-%d")
    return CalendarDay(year=dt.year, month=dt.month, day=dt.day)


def timezone_for(coordinates: Coordinates) -> str:
    """IANA timezone name at the given position.

    Raises:
        GeocodingError: When the position maps to no timezone.
    """
    tz_str = _tf.timezone_at(lat=coordinates.latitude, lng=coordinates.longitude)
    if tz_str is None:
        raise GeocodingError(
            f"Timezone not found: lat={coordinates.latitude}, lng={coordinates.longitude}"
        )
    return tz_str


def geocode_address(
    address: str, when: str, user_agent: str, timeout: float = 10.0
) -> ObserverContext:
    """Resolve an address string and date string to an ObserverContext.

    Args:
        address: Address string in any language.
        when: Date string in "YYYY-MM-DD" format.
        user_agent: Identifying User-Agent sent to Nominatim.
        timeout: HTTP timeout in seconds.

    Returns:
        ObserverContext containing coordinates, timezone, day, and normalized address.

    Raises:
        GeocodingError: On API error, when the address cannot be found,
            or when ``when`` is not a date.
    """
    try:
        day = parse_day(when)
    except ValueError as e:
        raise GeocodingError(f"Invalid date: {when}") from e

    try:
        result = _geocode_nominatim(address, user_agent, timeout)
    except httpx.HTTPError as e:
        logger.warning("Nominatim request failed for %r: %s", address, e)
        raise GeocodingError(f"Geocoder unavailable: {e}") from e
    if result is None:
        raise GeocodingError(f"Address not found: {address}")
    lat, lng, address_display = result

    coordinates = Coordinates(latitude=lat, longitude=lng)
    return ObserverContext(
        coordinates=coordinates,
        timezone_name=timezone_for(coordinates),
        day=day,
        address_display=address_display,
    )


def build_report(context: ObserverContext, config: AppConfig) -> DayReport:
    """Compute schedule, Sunnah times, and Qibla for an already-resolved context.

    Raises:
        PrayerTimesError: When the day itself has no schedule.
    """
    schedule = compute_prayer_times(context.coordinates, context.day, config.parameters())
    try:
        sunnah = compute_sunnah_times(schedule)
    except PrayerTimesError as e:
        logger.info("No Sunnah times for %s: %s", context.day, e)
        sunnah = None
    return DayReport(
        context=context,
        schedule=schedule,
        sunnah=sunnah,
        qibla=qibla_direction(context.coordinates),
    )


def run(query: QueryInput, config: AppConfig) -> DayReport:
    """Top-level entry point: takes a QueryInput and returns a DayReport.

    Args:
        query: User input (address, date string).
        config: Method, madhab, and HTTP settings.

    Returns:
        Fully computed DayReport.
    """
    context = geocode_address(
        query.address, query.when, user_agent=config.user_agent, timeout=config.http_timeout
    )
    return build_report(context, config)
