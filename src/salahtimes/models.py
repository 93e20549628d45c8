"""Data model definitions — boundaries between input, solar, prayer, and display layers."""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum

from salahtimes.errors import InvalidDateError


@dataclass(frozen=True)
class Coordinates:
    """Observer position. Range is checked when a computation runs, not here."""

    latitude: float  # Decimal degrees, north positive
    longitude: float  # Decimal degrees, east positive

    def is_valid(self) -> bool:
        return -90.0 <= self.latitude <= 90.0 and -180.0 <= self.longitude <= 180.0


@dataclass(frozen=True)
class CalendarDay:
    """Proleptic Gregorian day in UTC. Components may be unset."""

    year: int | None = None
    month: int | None = None
    day: int | None = None

    def to_date(self) -> date:
        """Return the matching ``datetime.date``.

        Raises:
            InvalidDateError: If a component is unset or the day does not exist.
        """
        if self.year is None or self.month is None or self.day is None:
            raise InvalidDateError(f"Incomplete calendar day: {self}")
        try:
            return date(self.year, self.month, self.day)
        except (TypeError, ValueError) as e:
            raise InvalidDateError(f"Invalid calendar day: {self}") from e

    @property
    def day_of_year(self) -> int:
        return self.to_date().timetuple().tm_yday

    def next_day(self) -> "CalendarDay":
        return CalendarDay.from_date(self._shifted(1))

    def previous_day(self) -> "CalendarDay":
        return CalendarDay.from_date(self._shifted(-1))

    def _shifted(self, days: int) -> date:
        try:
            return self.to_date() + timedelta(days=days)
        except OverflowError as e:
            raise InvalidDateError(f"No adjacent day for {self}") from e

    @classmethod
    def from_date(cls, value: date) -> "CalendarDay":
        return cls(year=value.year, month=value.month, day=value.day)


@dataclass(frozen=True)
class SolarCoordinates:
    """Apparent solar position for one Julian day. All angles in degrees."""

    declination: float
    right_ascension: float  # [0, 360)
    apparent_sidereal_time: float


@dataclass(frozen=True)
class SolarWindow:
    """Solar coordinates for yesterday, today, and tomorrow at 0h UTC.

    Interpolation across this window corrects for the sun's daily drift.
    """

    previous: SolarCoordinates
    current: SolarCoordinates
    next: SolarCoordinates


class Madhab(Enum):
    SHAFI = "shafi"
    HANAFI = "hanafi"

    @property
    def shadow_length(self) -> float:
        """Shadow multiplier for asr (object length units)."""
        return 2.0 if self is Madhab.HANAFI else 1.0


class HighLatitudeRule(Enum):
    MIDDLE_OF_THE_NIGHT = "middle_of_the_night"
    SEVENTH_OF_THE_NIGHT = "seventh_of_the_night"
    TWILIGHT_ANGLE = "twilight_angle"


class Rounding(Enum):
    NEAREST = "nearest"
    UP = "up"
    NONE = "none"


class Shafaq(Enum):
    """Evening twilight colour used by the moonsighting committee tables."""

    GENERAL = "general"
    AHMER = "ahmer"  # red
    ABYAD = "abyad"  # white


class Prayer(Enum):
    FAJR = "fajr"
    SUNRISE = "sunrise"
    DHUHR = "dhuhr"
    ASR = "asr"
    MAGHRIB = "maghrib"
    ISHA = "isha"


@dataclass(frozen=True)
class IshaAngle:
    """Isha at a solar depression angle (degrees below the horizon)."""

    degrees: float


@dataclass(frozen=True)
class IshaInterval:
    """Isha at a fixed number of minutes after maghrib."""

    minutes: int


IshaRule = IshaAngle | IshaInterval


@dataclass(frozen=True)
class PrayerAdjustments:
    """Per-prayer minute offsets."""

    fajr: int = 0
    sunrise: int = 0
    dhuhr: int = 0
    asr: int = 0
    maghrib: int = 0
    isha: int = 0

    def for_prayer(self, prayer: Prayer) -> int:
        return getattr(self, prayer.value)


@dataclass(frozen=True)
class CalculationParameters:
    """Everything a convention contributes to one computation.

    Use ``dataclasses.replace`` to vary madhab, high-latitude rule, shafaq,
    or manual adjustments per call.
    """

    fajr_angle: float
    isha_rule: IshaRule
    maghrib_angle: float | None = None
    madhab: Madhab = Madhab.SHAFI
    high_latitude_rule: HighLatitudeRule | None = None  # None = derive from latitude
    adjustments: PrayerAdjustments = field(default_factory=PrayerAdjustments)
    method_adjustments: PrayerAdjustments = field(default_factory=PrayerAdjustments)
    rounding: Rounding = Rounding.NEAREST
    shafaq: Shafaq = Shafaq.GENERAL
    moonsighting_committee: bool = False

    @property
    def isha_angle(self) -> float:
        return self.isha_rule.degrees if isinstance(self.isha_rule, IshaAngle) else 0.0

    @property
    def isha_interval(self) -> int:
        return self.isha_rule.minutes if isinstance(self.isha_rule, IshaInterval) else 0


@dataclass(frozen=True)
class PrayerInstant:
    """A single named event and its UTC instant."""

    prayer: Prayer
    time: datetime  # tz-aware, UTC


@dataclass(frozen=True)
class PrayerSchedule:
    """One day's six prayers plus the inputs needed to recompute adjacent days."""

    prayers: tuple[PrayerInstant, ...]  # Canonical order: fajr .. isha
    coordinates: Coordinates
    parameters: CalculationParameters
    day: CalendarDay

    def __getitem__(self, prayer: Prayer) -> PrayerInstant:
        for instant in self.prayers:
            if instant.prayer is prayer:
                return instant
        raise KeyError(prayer)

    def time_for(self, prayer: Prayer) -> datetime:
        return self[prayer].time


@dataclass(frozen=True)
class SunnahTimes:
    """Night reference times between maghrib and the next day's fajr (UTC)."""

    middle_of_the_night: datetime
    last_third_of_the_night: datetime


@dataclass(frozen=True)
class QueryInput:
    """Raw user input. Not yet validated."""

    address: str  # Free-form address ("Raleigh, NC")
    when: str  # "YYYY-MM-DD" format string


@dataclass(frozen=True)
class ObserverContext:
    """Result of geocoding + timezone lookup. Input to the prayer computation."""

    coordinates: Coordinates
    timezone_name: str  # IANA name, used only for display
    day: CalendarDay
    address_display: str  # Normalized address returned by geocoder (for display)


@dataclass(frozen=True)
class DayReport:
    """The sole input to display. Fully computed state."""

    context: ObserverContext
    schedule: PrayerSchedule
    sunnah: SunnahTimes | None  # None when the next day has no schedule
    qibla: float  # Degrees clockwise from true north
