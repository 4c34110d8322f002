# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Solar eclipse geometry.

Conical shadow model of the Moon: umbra, penumbra and antumbra cones from
the real Sun/Moon radii and the instantaneous Earth-Moon and Earth-Sun
distances (similar triangles along the Sun-Moon axis), plus the exact
fraction of the solar disk covered by the lunar disk.

"""
import math
from dataclasses import dataclass
from datetime import datetime

import numpy as np

from lunisolar.domain.bodies import Body, BodyConstants
from lunisolar.domain.body_position import BodyPositionResolver
from lunisolar.domain.observation import HorizontalPosition, alt_az, angular_separation_deg
from lunisolar.domain.time_coordinates import as_utc, geographic_point

_R_SUN = BodyConstants.R_SUN_KM
_R_MOON = BodyConstants.R_MOON_KM


@dataclass(frozen=True)
class EclipseConeGeometry:
    """Shadow cones cast by the Moon at one instant (km, radians)."""
    umbra_half_angle_rad: float
    umbra_length_km: float          # Moon to umbra apex
    umbra_base_radius_km: float     # cone radius at the Moon
    penumbra_half_angle_rad: float
    penumbra_apex_distance_km: float  # Moon to penumbra apex, sunward
    penumbra_length_km: float       # penumbra apex to the Earth's centre
    penumbra_radius_at_earth_km: float
    umbra_reaches_earth: bool
    antumbra_half_angle_rad: float
    umbra_radius_at_earth_km: float     # negative past the apex
    antumbra_radius_at_earth_km: float  # 0.0 while the umbra reaches Earth


def eclipse_cones(moon_distance_km: float, sun_distance_km: float) -> EclipseConeGeometry:
    """
    Umbra, penumbra and antumbra cones of the Moon's shadow.

        umbra:    tan(a_u) = (R_sun - R_moon) / D,  L_u = R_moon / tan(a_u)
        penumbra: tan(a_p) = (R_sun + R_moon) / D,  L_p = R_moon / tan(a_p)

    with D = sun_distance - moon_distance. The umbra reaches the Earth
    (total eclipse possible) when L_u > moon_distance; otherwise the
    antumbra (annular eclipse) diverges from the umbra apex with the same
    half-angle.

    Args:
        moon_distance_km: Earth-Moon distance.
        sun_distance_km: Earth-Sun distance.

    Returns:
        EclipseConeGeometry.

    Raises:
        ValueError: If distances are not positive or the Moon is not
            closer than the Sun.
    """
    if not (moon_distance_km > 0 and sun_distance_km > moon_distance_km):
        raise ValueError(
            f"Need 0 < moon distance < sun distance, got {moon_distance_km}, {sun_distance_km}"
        )

    moon_sun_dist = sun_distance_km - moon_distance_km

    umbra_half_angle = math.atan((_R_SUN - _R_MOON) / moon_sun_dist)
    umbra_length = _R_MOON / math.tan(umbra_half_angle)

    penumbra_half_angle = math.atan((_R_SUN + _R_MOON) / moon_sun_dist)
    penumbra_apex_dist = _R_MOON / math.tan(penumbra_half_angle)
    penumbra_radius_at_earth = _R_MOON + moon_distance_km * math.tan(penumbra_half_angle)

    umbra_radius_at_earth = _R_MOON - moon_distance_km * math.tan(umbra_half_angle)
    reaches = umbra_length > moon_distance_km

    return EclipseConeGeometry(
        umbra_half_angle_rad=umbra_half_angle,
        umbra_length_km=umbra_length,
        umbra_base_radius_km=_R_MOON,
        penumbra_half_angle_rad=penumbra_half_angle,
        penumbra_apex_distance_km=penumbra_apex_dist,
        penumbra_length_km=penumbra_apex_dist + moon_distance_km,
        penumbra_radius_at_earth_km=penumbra_radius_at_earth,
        umbra_reaches_earth=reaches,
        antumbra_half_angle_rad=umbra_half_angle,
        umbra_radius_at_earth_km=umbra_radius_at_earth,
        antumbra_radius_at_earth_km=0.0 if reaches else -umbra_radius_at_earth,
    )


def critical_moon_distance_km(sun_distance_km: float) -> float:
    """Moon distance at which the umbra apex just touches the Earth's centre.

    From L_u = d: R_moon * (S - d) = d * (R_sun - R_moon), so d = R_moon * S / R_sun.
    Closer Moons give total eclipses, farther ones annular.
    """
    return _R_MOON * sun_distance_km / _R_SUN


def eclipse_cones_at(resolver: BodyPositionResolver, when: datetime) -> EclipseConeGeometry:
    """Shadow cones from the resolver's Sun and Moon distances at an instant."""
    when = as_utc(when)
    return eclipse_cones(
        resolver.distance_of(Body.MOON, when),
        resolver.distance_of(Body.SUN, when),
    )


def angular_radius_deg(radius_km: float, distance_km: float) -> float:
    """Apparent angular radius of a sphere seen from distance_km."""
    return math.degrees(math.atan(radius_km / distance_km))


def disk_overlap_fraction(
    separation_deg: float,
    sun_radius_deg: float,
    moon_radius_deg: float,
) -> float:
    """
    Fraction of the solar disk area covered by the lunar disk.

    Exact circle-circle intersection:
        d >= r_s + r_m        no overlap → 0.0
        d <= |r_s - r_m|      one disk inside the other → 1.0 (Moon larger)
                              or (r_m / r_s)² (annular)
        otherwise             lens area / (pi r_s²)

    Args:
        separation_deg: Angular distance between disk centres.
        sun_radius_deg: Angular radius of the Sun.
        moon_radius_deg: Angular radius of the Moon.

    Returns:
        Covered fraction in [0, 1].

    Raises:
        ValueError: If a radius is not positive.
    """
    r_s = sun_radius_deg
    r_m = moon_radius_deg
    if not (r_s > 0 and r_m > 0):
        raise ValueError(f"Radii must be positive, got {r_s}, {r_m}")

    d = abs(separation_deg)
    if d >= r_s + r_m:
        return 0.0
    if d <= abs(r_s - r_m):
        return 1.0 if r_m >= r_s else (r_m / r_s) ** 2

    cos_s = float(np.clip((d * d + r_s * r_s - r_m * r_m) / (2.0 * d * r_s), -1.0, 1.0))
    cos_m = float(np.clip((d * d + r_m * r_m - r_s * r_s) / (2.0 * d * r_m), -1.0, 1.0))
    kite = (-d + r_s + r_m) * (d + r_s - r_m) * (d - r_s + r_m) * (d + r_s + r_m)

    lens = (
        r_s * r_s * math.acos(cos_s)
        + r_m * r_m * math.acos(cos_m)
        - 0.5 * math.sqrt(max(kite, 0.0))
    )
    return float(np.clip(lens / (math.pi * r_s * r_s), 0.0, 1.0))


def solar_obscuration(
    resolver: BodyPositionResolver,
    lat_deg: float,
    lon_deg: float,
    when: datetime,
) -> float:
    """
    Fraction of the Sun's disk hidden by the Moon for a surface observer.

    The Moon's altitude is lowered by its parallax in altitude,
    asin(R_earth / d * cos(alt)); at lunar distance this shifts it by up
    to ~1°, which decides whether an eclipse is seen at all.

    Returns:
        Covered fraction in [0, 1] (0 when the disks do not touch).
    """
    when = as_utc(when)
    observer = geographic_point(lat_deg, lon_deg)
    sun = resolver.position_of(Body.SUN, when)
    moon = resolver.position_of(Body.MOON, when)

    sun_hz = alt_az(observer.lat_deg, observer.lon_deg, sun.lat_deg, sun.lon_deg)
    moon_geo = alt_az(observer.lat_deg, observer.lon_deg, moon.lat_deg, moon.lon_deg)

    sin_p = BodyConstants.R_EARTH_KM / moon.distance_km * math.cos(math.radians(moon_geo.altitude_deg))
    parallax_deg = math.degrees(math.asin(max(-1.0, min(1.0, sin_p))))
    moon_hz = HorizontalPosition(
        altitude_deg=moon_geo.altitude_deg - parallax_deg,
        azimuth_deg=moon_geo.azimuth_deg,
    )

    return disk_overlap_fraction(
        angular_separation_deg(sun_hz, moon_hz),
        angular_radius_deg(_R_SUN, sun.distance_km),
        angular_radius_deg(_R_MOON, moon.distance_km),
    )
