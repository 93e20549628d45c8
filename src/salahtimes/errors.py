"""Failure taxonomy for prayer-time computation.

Every error is terminal for the computation that raised it: no partial
schedule is ever returned, and retrying with the same inputs fails the same way.
"""


class PrayerTimesError(Exception):
    """Base class for all computation failures."""


class InvalidDateError(PrayerTimesError):
    """Calendar day is unset or does not exist."""


class InvalidCoordinatesError(PrayerTimesError):
    """Latitude or longitude outside the valid range."""


class UnsolvableGeometryError(PrayerTimesError):
    """The sun never reaches the requested altitude at this latitude and date."""


class IncompleteScheduleError(PrayerTimesError):
    """A prayer could not be determined even after applying fallbacks."""
