# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Horizon threshold model.

Geometric altitude of a body's centre at the moment its upper limb touches
the apparent horizon. Rise and set are crossings of this altitude.

Sun: standard refraction (34') plus mean semi-diameter (16'), constant.
Moon: refraction minus semi-diameter plus horizontal parallax, all of
which depend on distance, so the threshold is evaluated per sample.
"""
import math

from lunisolar.domain.bodies import Body, BodyConstants

SUN_HORIZON_DEG: float = -0.833
REFRACTION_DEG: float = -0.566


def lunar_semi_diameter_deg(distance_km: float) -> float:
    """Apparent angular radius of the Moon in degrees."""
    return math.degrees(math.atan(BodyConstants.R_MOON_KM / distance_km))


def lunar_horizontal_parallax_deg(distance_km: float) -> float:
    """Equatorial horizontal parallax of the Moon in degrees."""
    return math.degrees(math.atan(BodyConstants.R_EARTH_EQUATORIAL_KM / distance_km))


def horizon_threshold(body: Body, distance_km: float | None = None) -> float:
    """
    Altitude (degrees, possibly negative) of the body's centre at rise/set.

    Args:
        body: Body.SUN or Body.MOON.
        distance_km: Geocentric distance. Ignored for the Sun; defaults to
            the mean Earth-Moon distance for the Moon.

    Returns:
        Threshold altitude in degrees.

    Raises:
        ValueError: If distance_km is not positive.
    """
    if body is Body.SUN:
        return SUN_HORIZON_DEG
    if body is not Body.MOON:
        raise ValueError(f"Unsupported body: {body!r}")

    d = BodyConstants.MEAN_MOON_DISTANCE_KM if distance_km is None else distance_km
    if not d > 0:
        raise ValueError(f"Distance must be positive, got {distance_km}")
    return REFRACTION_DEG - lunar_semi_diameter_deg(d) + lunar_horizontal_parallax_deg(d)
