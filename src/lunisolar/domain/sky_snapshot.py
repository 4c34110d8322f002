# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Everything the scene and the readouts need for one instant and observer.

Bundles sub-points, alt/az, lunar phase readouts, distances and shadow
cones computed from a single resolver, so a frame never mixes providers.
"""
from dataclasses import dataclass
from datetime import datetime

from lunisolar.domain.bodies import Accuracy, Body
from lunisolar.domain.body_position import BodyGeoPosition, BodyPositionResolver
from lunisolar.domain.eclipse import EclipseConeGeometry, eclipse_cones, solar_obscuration
from lunisolar.domain.lunar import illumination_percent, phase_name
from lunisolar.domain.observation import HorizontalPosition, alt_az
from lunisolar.domain.time_coordinates import as_utc, geographic_point


@dataclass(frozen=True)
class SkySnapshot:
    """Sun and Moon state seen from one observer at one instant."""
    time: datetime
    lat_deg: float
    lon_deg: float
    sun: BodyGeoPosition
    moon: BodyGeoPosition
    sun_horizontal: HorizontalPosition
    moon_horizontal: HorizontalPosition
    moon_illumination_percent: int
    moon_phase_name: str
    cones: EclipseConeGeometry
    solar_obscuration: float

    @property
    def accuracy(self) -> Accuracy:
        return self.sun.accuracy

    @property
    def sun_distance_million_km(self) -> float:
        return self.sun.distance_km / 1e6


def sky_snapshot(
    resolver: BodyPositionResolver,
    lat_deg: float,
    lon_deg: float,
    when: datetime,
) -> SkySnapshot:
    """Compute a SkySnapshot for an observer at an instant."""
    when = as_utc(when)
    observer = geographic_point(lat_deg, lon_deg)
    sun = resolver.position_of(Body.SUN, when)
    moon = resolver.position_of(Body.MOON, when)

    return SkySnapshot(
        time=when,
        lat_deg=observer.lat_deg,
        lon_deg=observer.lon_deg,
        sun=sun,
        moon=moon,
        sun_horizontal=alt_az(observer.lat_deg, observer.lon_deg, sun.lat_deg, sun.lon_deg),
        moon_horizontal=alt_az(observer.lat_deg, observer.lon_deg, moon.lat_deg, moon.lon_deg),
        moon_illumination_percent=illumination_percent(moon.phase),
        moon_phase_name=phase_name(moon.phase),
        cones=eclipse_cones(moon.distance_km, sun.distance_km),
        solar_obscuration=solar_obscuration(resolver, observer.lat_deg, observer.lon_deg, when),
    )
