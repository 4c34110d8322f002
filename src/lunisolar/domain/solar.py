# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Analytical solar ephemeris.

Low-precision Sun position using Meeus "Astronomical Algorithms" Ch. 25 /
Vallado simplified algorithm. Accuracy ~1 arcminute in position, which
moves sunrise/sunset by a few seconds at mid latitudes. Used whenever no
full ephemeris is loaded.

"""
from dataclasses import dataclass

import numpy as np

from lunisolar.domain.bodies import BodyConstants
from lunisolar.domain.time_coordinates import J2000_JD, normalize_degrees

# Mean obliquity of the ecliptic at J2000 and its secular rate (deg, deg/century)
OBLIQUITY_J2000_DEG: float = 23.4393
_OBLIQUITY_RATE_DEG: float = -0.01300


@dataclass(frozen=True)
class SunPosition:
    """Geocentric Sun position at a given Julian Day."""
    right_ascension_deg: float
    declination_deg: float
    ecliptic_longitude_deg: float
    distance_km: float


def julian_centuries_j2000(jd: float) -> float:
    """Julian centuries since J2000.0 (JD 2451545.0)."""
    return (jd - J2000_JD) / 36525.0


def obliquity_deg(jd: float) -> float:
    """Mean obliquity of the ecliptic in degrees (linear in T)."""
    return OBLIQUITY_J2000_DEG + _OBLIQUITY_RATE_DEG * julian_centuries_j2000(jd)


def sun_position(jd: float) -> SunPosition:
    """Low-precision analytical solar ephemeris.

    Args:
        jd: Julian Day (UT).

    Returns:
        SunPosition with RA/Dec in degrees, ecliptic longitude, and
        Earth-Sun distance in km.
    """
    T = julian_centuries_j2000(jd)

    # Mean anomaly (degrees)
    M_deg = (357.5291 + 35999.0503 * T) % 360.0
    M_rad = float(np.radians(M_deg))

    # Ecliptic longitude (degrees)
    L_deg = normalize_degrees(
        280.4665 + 36000.7698 * T
        + 1.9146 * float(np.sin(M_rad))
        + 0.0200 * float(np.sin(2.0 * M_rad))
    )
    L_rad = float(np.radians(L_deg))

    eps_rad = float(np.radians(obliquity_deg(jd)))

    ra_rad = float(np.arctan2(np.cos(eps_rad) * np.sin(L_rad), np.cos(L_rad)))
    sin_dec = float(np.clip(np.sin(eps_rad) * np.sin(L_rad), -1.0, 1.0))
    dec_rad = float(np.arcsin(sin_dec))

    # Distance in AU
    r_au = 1.00014 - 0.01671 * float(np.cos(M_rad)) - 0.00014 * float(np.cos(2.0 * M_rad))

    return SunPosition(
        right_ascension_deg=normalize_degrees(float(np.degrees(ra_rad))),
        declination_deg=float(np.degrees(dec_rad)),
        ecliptic_longitude_deg=L_deg,
        distance_km=r_au * BodyConstants.AU_KM,
    )


def solar_declination_deg(jd: float) -> float:
    """Solar declination at given Julian Day. Convenience wrapper."""
    return sun_position(jd).declination_deg
