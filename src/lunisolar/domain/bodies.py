# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Bodies, physical constants, and the raw equatorial ephemeris record.

No external dependencies, only stdlib dataclasses/enum.
"""
from dataclasses import dataclass
from enum import Enum


class Body(Enum):
    SUN = "sun"
    MOON = "moon"


class Accuracy(Enum):
    """Which path produced a position: full ephemeris or closed-form fallback."""
    EPHEMERIS = "ephemeris"
    APPROXIMATE = "approximate"


@dataclass(frozen=True)
class _BodyConstants:
    """Radii and distances used by the geometry (km)."""
    R_SUN_KM: float = 696_000.0
    R_MOON_KM: float = 1_737.4
    R_EARTH_KM: float = 6_371.0                 # mean radius
    R_EARTH_EQUATORIAL_KM: float = 6_378.137    # WGS84 semi-major axis
    AU_KM: float = 149_597_870.7
    MEAN_MOON_DISTANCE_KM: float = 384_400.0


BodyConstants: _BodyConstants = _BodyConstants()


@dataclass(frozen=True)
class EquatorialPosition:
    """Geocentric apparent position of one body at one instant."""
    right_ascension_deg: float
    declination_deg: float
    distance_km: float
    ecliptic_longitude_deg: float

    @property
    def distance_au(self) -> float:
        return self.distance_km / BodyConstants.AU_KM
