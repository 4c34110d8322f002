# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Topocentric observation geometry.

Computes altitude and azimuth of a body, given its geographic sub-point,
as seen by an observer on the surface. The body is treated as infinitely
far away (geocentric direction); lunar parallax is handled by the horizon
threshold and by the eclipse obscuration code.

"""
from dataclasses import dataclass

import numpy as np

_DEGENERATE_EPS = 1e-12


@dataclass(frozen=True)
class HorizontalPosition:
    """Altitude above the horizon and azimuth from north through east."""
    altitude_deg: float
    azimuth_deg: float

    @property
    def is_above_horizon(self) -> bool:
        return self.altitude_deg > 0.0

    @property
    def compass_direction(self) -> str:
        directions = ["N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
                      "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW"]
        return directions[round(self.azimuth_deg / 22.5) % 16]


def _clip_unit(x: float) -> float:
    return float(np.clip(x, -1.0, 1.0))


def alt_az(
    observer_lat_deg: float,
    observer_lon_deg: float,
    body_lat_deg: float,
    body_lon_deg: float,
) -> HorizontalPosition:
    """
    Altitude and azimuth of a body from its sub-point.

    The body's sub-point latitude is its declination and the longitude
    difference is its local hour angle:

        ha = observer_lon - body_lon
        sin(alt) = sin(phi) sin(dec) + cos(phi) cos(dec) cos(ha)
        cos(az)  = (sin(dec) - sin(alt) sin(phi)) / (cos(alt) cos(phi))

    with az = 360 - acos(...) when sin(ha) > 0 (body west of the meridian).

    Args:
        observer_lat_deg: Observer latitude in degrees.
        observer_lon_deg: Observer longitude in degrees, east positive.
        body_lat_deg: Sub-point latitude (declination) in degrees.
        body_lon_deg: Sub-point longitude in degrees.

    Returns:
        HorizontalPosition with altitude [-90, 90] and azimuth [0, 360).
        At the zenith, the nadir, or for an observer at a pole the azimuth
        is undefined and reported as 0.0.
    """
    phi = float(np.radians(observer_lat_deg))
    dec = float(np.radians(body_lat_deg))
    ha = float(np.radians(observer_lon_deg - body_lon_deg))

    sin_alt = _clip_unit(
        np.sin(phi) * np.sin(dec) + np.cos(phi) * np.cos(dec) * np.cos(ha)
    )
    alt = float(np.arcsin(sin_alt))

    denom = float(np.cos(alt) * np.cos(phi))
    if abs(denom) < _DEGENERATE_EPS:
        return HorizontalPosition(altitude_deg=float(np.degrees(alt)), azimuth_deg=0.0)

    cos_az = _clip_unit((np.sin(dec) - sin_alt * np.sin(phi)) / denom)
    az_deg = float(np.degrees(np.arccos(cos_az)))
    if float(np.sin(ha)) > 0.0:
        az_deg = 360.0 - az_deg
    if az_deg >= 360.0:
        az_deg = 0.0

    return HorizontalPosition(altitude_deg=float(np.degrees(alt)), azimuth_deg=az_deg)


def angular_separation_deg(a: HorizontalPosition, b: HorizontalPosition) -> float:
    """Great-circle angle between two alt/az directions (degrees)."""
    alt1 = float(np.radians(a.altitude_deg))
    alt2 = float(np.radians(b.altitude_deg))
    daz = float(np.radians(a.azimuth_deg - b.azimuth_deg))

    # Haversine form: well conditioned at small separations
    h = (np.sin((alt2 - alt1) / 2.0) ** 2
         + np.cos(alt1) * np.cos(alt2) * np.sin(daz / 2.0) ** 2)
    return float(np.degrees(2.0 * np.arcsin(np.sqrt(np.clip(h, 0.0, 1.0)))))
