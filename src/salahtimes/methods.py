"""Preset calculation conventions."""

from dataclasses import replace
from enum import Enum

from salahtimes.models import (
    CalculationParameters,
    IshaAngle,
    IshaInterval,
    Madhab,
    PrayerAdjustments,
    Rounding,
)


class CalculationMethod(Enum):
    MUSLIM_WORLD_LEAGUE = "muslim_world_league"
    EGYPTIAN = "egyptian"
    KARACHI = "karachi"
    UMM_AL_QURA = "umm_al_qura"
    DUBAI = "dubai"
    MOONSIGHTING_COMMITTEE = "moonsighting_committee"
    NORTH_AMERICA = "north_america"
    KUWAIT = "kuwait"
    QATAR = "qatar"
    SINGAPORE = "singapore"
    TEHRAN = "tehran"
    TURKEY = "turkey"


# Umm al-Qura: add +30 min to isha manually during Ramadan.
# Moonsighting Committee: seasonal twilight, 1/7 of the night above 55°.
# Tehran: maghrib when the sun is 4.5° below the horizon.
# Turkey: approximation of Diyanet, less accurate outside Turkey.
_PRESETS: dict[CalculationMethod, CalculationParameters] = {
    CalculationMethod.MUSLIM_WORLD_LEAGUE: CalculationParameters(
        fajr_angle=18,
        isha_rule=IshaAngle(17),
        method_adjustments=PrayerAdjustments(dhuhr=1),
    ),
    CalculationMethod.EGYPTIAN: CalculationParameters(
        fajr_angle=19.5,
        isha_rule=IshaAngle(17.5),
        method_adjustments=PrayerAdjustments(dhuhr=1),
    ),
    CalculationMethod.KARACHI: CalculationParameters(
        fajr_angle=18,
        isha_rule=IshaAngle(18),
        method_adjustments=PrayerAdjustments(dhuhr=1),
    ),
    CalculationMethod.UMM_AL_QURA: CalculationParameters(
        fajr_angle=18.5,
        isha_rule=IshaInterval(90),
    ),
    CalculationMethod.DUBAI: CalculationParameters(
        fajr_angle=18.2,
        isha_rule=IshaAngle(18.2),
        method_adjustments=PrayerAdjustments(sunrise=-3, dhuhr=3, asr=3, maghrib=3),
    ),
    CalculationMethod.MOONSIGHTING_COMMITTEE: CalculationParameters(
        fajr_angle=18,
        isha_rule=IshaAngle(18),
        method_adjustments=PrayerAdjustments(dhuhr=5, maghrib=3),
        moonsighting_committee=True,
    ),
    CalculationMethod.NORTH_AMERICA: CalculationParameters(
        fajr_angle=15,
        isha_rule=IshaAngle(15),
        method_adjustments=PrayerAdjustments(dhuhr=1),
    ),
    CalculationMethod.KUWAIT: CalculationParameters(
        fajr_angle=18,
        isha_rule=IshaAngle(17.5),
    ),
    CalculationMethod.QATAR: CalculationParameters(
        fajr_angle=18,
        isha_rule=IshaInterval(90),
    ),
    CalculationMethod.SINGAPORE: CalculationParameters(
        fajr_angle=20,
        isha_rule=IshaAngle(18),
        method_adjustments=PrayerAdjustments(dhuhr=1),
        rounding=Rounding.UP,
    ),
    CalculationMethod.TEHRAN: CalculationParameters(
        fajr_angle=17.7,
        isha_rule=IshaAngle(14),
        maghrib_angle=4.5,
    ),
    CalculationMethod.TURKEY: CalculationParameters(
        fajr_angle=18,
        isha_rule=IshaAngle(17),
        method_adjustments=PrayerAdjustments(sunrise=-7, dhuhr=5, asr=4, maghrib=7),
    ),
}


def parameters_for(
    method: CalculationMethod, madhab: Madhab = Madhab.SHAFI
) -> CalculationParameters:
    """Parameters for a preset convention with the given madhab."""
    return replace(_PRESETS[method], madhab=madhab)
