# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Time and coordinate utilities.

Julian Day, Greenwich Mean Sidereal Time, and the projection of an
equatorial position onto the rotating Earth (the sub-point).

The Julian Day here is the Unix-epoch convention
    JD = unix_ms / 86400000 + 2440587.5
which is the reference every fallback computation is built on. Providers
with a better time scale (UT1) override it, never this function.

No external dependencies, only stdlib math/dataclasses/datetime.
"""
import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)

UNIX_EPOCH_JD: float = 2440587.5
J2000_JD: float = 2451545.0
MS_PER_DAY: float = 86_400_000.0


@dataclass(frozen=True)
class GeographicPoint:
    """Point on the Earth's surface. Longitude is east-positive, (-180, 180]."""
    lat_deg: float
    lon_deg: float


def as_utc(dt: datetime) -> datetime:
    """Ensure datetime is timezone-aware (treat naive as UTC)."""
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


def julian_day(when: datetime) -> float:
    """Julian Day of a UTC instant, Unix-epoch convention.

    1970-01-01T00:00:00Z maps to exactly 2440587.5.
    """
    unix_ms = (as_utc(when) - _UNIX_EPOCH) / _ONE_MS
    return unix_ms / MS_PER_DAY + UNIX_EPOCH_JD


def datetime_from_julian_day(jd: float) -> datetime:
    """Inverse of julian_day (UTC, microsecond resolution)."""
    unix_ms = (jd - UNIX_EPOCH_JD) * MS_PER_DAY
    return _UNIX_EPOCH + timedelta(milliseconds=unix_ms)


def gmst_deg(jd: float) -> float:
    """
    Greenwich Mean Sidereal Time in degrees, [0, 360).

        GMST = 280.46061837 + 360.98564736629 * D + 0.000387933 * T²
        D = JD - 2451545.0, T = D / 36525
    """
    d = jd - J2000_JD
    t = d / 36525.0
    return normalize_degrees(280.46061837 + 360.98564736629 * d + 0.000387933 * t * t)


def normalize_degrees(angle_deg: float) -> float:
    """Wrap an angle into [0, 360)."""
    wrapped = angle_deg % 360.0
    # x % 360.0 rounds to 360.0 for tiny negative x
    return 0.0 if wrapped >= 360.0 else wrapped


def normalize_longitude(lon_deg: float) -> float:
    """Wrap a longitude into (-180, 180]."""
    wrapped = (lon_deg + 180.0) % 360.0 - 180.0
    return 180.0 if wrapped <= -180.0 else wrapped


def clamp_latitude(lat_deg: float) -> float:
    """Clamp a latitude into [-90, 90].

    Raises:
        ValueError: If the latitude is NaN or infinite.
    """
    if not math.isfinite(lat_deg):
        raise ValueError(f"Latitude must be finite, got {lat_deg}")
    return max(-90.0, min(90.0, lat_deg))


def geographic_point(lat_deg: float, lon_deg: float) -> GeographicPoint:
    """Build a GeographicPoint with latitude clamped and longitude wrapped.

    Raises:
        ValueError: If either coordinate is NaN or infinite.
    """
    if not math.isfinite(lon_deg):
        raise ValueError(f"Longitude must be finite, got {lon_deg}")
    return GeographicPoint(
        lat_deg=clamp_latitude(lat_deg),
        lon_deg=normalize_longitude(lon_deg),
    )


def sub_point_from_equatorial(
    ra_deg: float,
    dec_deg: float,
    gmst_angle_deg: float,
) -> GeographicPoint:
    """
    Geographic point directly beneath a body (where it stands at the zenith).

    Args:
        ra_deg: Right ascension in degrees.
        dec_deg: Declination in degrees.
        gmst_angle_deg: Greenwich Mean Sidereal Time in degrees.

    Returns:
        GeographicPoint with lat = dec and lon = ra - gmst wrapped to (-180, 180].
    """
    return geographic_point(dec_deg, ra_deg - gmst_angle_deg)
