# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Lunar ephemeris and phase.

Analytical lunar position (Meeus Ch. 47 simplified, truncated series in the
fundamental arguments L', D, M, M', F) plus phase, illumination and the
conventional phase names.

"""
import math
from dataclasses import dataclass

import numpy as np

from lunisolar.domain.solar import julian_centuries_j2000, obliquity_deg
from lunisolar.domain.time_coordinates import normalize_degrees


@dataclass(frozen=True)
class MoonPosition:
    """Geocentric Moon position at a given Julian Day."""
    right_ascension_deg: float
    declination_deg: float
    ecliptic_longitude_deg: float
    ecliptic_latitude_deg: float
    distance_km: float


# Upper phase bound (exclusive) → name. Phase 0 is new moon, 0.5 full.
PHASE_NAMES: tuple[tuple[float, str], ...] = (
    (0.03, "New Moon"),
    (0.22, "Waxing Crescent"),
    (0.28, "First Quarter"),
    (0.47, "Waxing Gibbous"),
    (0.53, "Full Moon"),
    (0.72, "Waning Gibbous"),
    (0.78, "Last Quarter"),
    (0.97, "Waning Crescent"),
)


def moon_position(jd: float) -> MoonPosition:
    """Analytical lunar ephemeris (Meeus Ch. 47 simplified).

    Computes geocentric ecliptic coordinates of the Moon, then converts
    to equatorial. Accuracy ~0.2° in longitude and ~100 km in distance.

    Args:
        jd: Julian Day (UT).

    Returns:
        MoonPosition with RA/Dec, ecliptic coordinates, and distance in km.
    """
    T = julian_centuries_j2000(jd)

    # Fundamental arguments (degrees)
    L_prime = (218.3165 + 481267.8813 * T) % 360.0    # mean longitude
    D = (297.8502 + 445267.1115 * T) % 360.0          # mean elongation
    M = (357.5291 + 35999.0503 * T) % 360.0           # Sun mean anomaly
    M_prime = (134.9634 + 477198.8676 * T) % 360.0    # Moon mean anomaly
    F = (93.2721 + 483202.0175 * T) % 360.0           # argument of latitude

    D_r = float(np.radians(D))
    M_r = float(np.radians(M))
    Mp_r = float(np.radians(M_prime))
    F_r = float(np.radians(F))

    lam = normalize_degrees(L_prime + float(
        6.289 * np.sin(Mp_r)
        + 1.274 * np.sin(2 * D_r - Mp_r)      # evection
        + 0.658 * np.sin(2 * D_r)             # variation
        + 0.214 * np.sin(2 * Mp_r)
        - 0.186 * np.sin(M_r)                 # annual equation
        - 0.114 * np.sin(2 * F_r)
        + 0.059 * np.sin(2 * D_r - 2 * Mp_r)
        + 0.057 * np.sin(2 * D_r - M_r - Mp_r)
        + 0.053 * np.sin(2 * D_r + Mp_r)
        + 0.046 * np.sin(2 * D_r - M_r)
        - 0.041 * np.sin(M_r - Mp_r)
        - 0.035 * np.sin(D_r)                 # parallactic inequality
        - 0.030 * np.sin(M_r + Mp_r)
    ))

    beta = float(
        5.128 * np.sin(F_r)
        + 0.281 * np.sin(Mp_r + F_r)
        + 0.278 * np.sin(Mp_r - F_r)
        + 0.173 * np.sin(2 * D_r - F_r)
        + 0.055 * np.sin(2 * D_r - Mp_r + F_r)
        + 0.046 * np.sin(2 * D_r - Mp_r - F_r)
        + 0.033 * np.sin(2 * D_r + F_r)
    )

    r_km = float(
        385000.56
        - 20905.36 * np.cos(Mp_r)
        - 3699.11 * np.cos(2 * D_r - Mp_r)
        - 2955.97 * np.cos(2 * D_r)
        - 569.93 * np.cos(2 * Mp_r)
        + 246.16 * np.cos(2 * D_r - 2 * Mp_r)
        - 204.59 * np.cos(2 * D_r - M_r)
        - 170.73 * np.cos(2 * D_r + Mp_r)
    )

    # Ecliptic → equatorial
    lam_r = float(np.radians(lam))
    beta_r = float(np.radians(beta))
    eps_r = float(np.radians(obliquity_deg(jd)))

    ra_rad = float(np.arctan2(
        np.sin(lam_r) * np.cos(eps_r) - np.tan(beta_r) * np.sin(eps_r),
        np.cos(lam_r),
    ))
    sin_dec = (np.sin(beta_r) * np.cos(eps_r)
               + np.cos(beta_r) * np.sin(eps_r) * np.sin(lam_r))
    dec_rad = float(np.arcsin(np.clip(sin_dec, -1.0, 1.0)))

    return MoonPosition(
        right_ascension_deg=normalize_degrees(float(np.degrees(ra_rad))),
        declination_deg=float(np.degrees(dec_rad)),
        ecliptic_longitude_deg=lam,
        ecliptic_latitude_deg=beta,
        distance_km=r_km,
    )


def phase_from_longitudes(moon_ecliptic_lon_deg: float, sun_ecliptic_lon_deg: float) -> float:
    """Lunar phase in [0, 1) from the Moon-Sun ecliptic elongation.

    0 is new moon, 0.25 first quarter, 0.5 full, 0.75 last quarter.
    A negative elongation wraps: -10° → 350/360.
    """
    phase = normalize_degrees(moon_ecliptic_lon_deg - sun_ecliptic_lon_deg) / 360.0
    return 0.0 if phase >= 1.0 else phase


def illumination_percent(phase: float) -> int:
    """Illuminated fraction of the disk as a whole percentage (half rounds up)."""
    fraction = (1.0 - math.cos(2.0 * math.pi * phase)) / 2.0
    return int(math.floor(fraction * 100.0 + 0.5))


def phase_name(phase: float) -> str:
    """Conventional name of a lunar phase in [0, 1)."""
    for upper, name in PHASE_NAMES:
        if phase < upper:
            return name
    return "New Moon"
