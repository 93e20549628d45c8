"""Great-circle bearing to the Kaaba."""

import math

from salahtimes.models import Coordinates

MAKKAH = Coordinates(latitude=21.4225241, longitude=39.8261818)


def qibla_direction(coordinates: Coordinates) -> float:
    """Bearing from true north in [0, 360), clockwise.

    Equation from "Spherical Trigonometry For the use of colleges and schools", p. 50.
    """
    phi = math.radians(coordinates.latitude)
    d_lambda = math.radians(MAKKAH.longitude - coordinates.longitude)
    term1 = math.sin(d_lambda)
    term2 = math.cos(phi) * math.tan(math.radians(MAKKAH.latitude))
    term3 = math.sin(phi) * math.cos(d_lambda)
    return math.degrees(math.atan2(term1, term2 - term3)) % 360.0
